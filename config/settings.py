# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for the embedding provider, similarity store, search policy, and re-indexing.

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmbedderSettings(BaseModel):
    """Settings describing which embedder implementation to use and how to reach it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="openai", description="Identifier of the embedder implementation.")
    model_name: str = Field(default="text-embedding-3-small", description="Embedding model requested from the provider.")
    dim: int = Field(default=1536, description="Expected embedding dimensionality.")
    api_key: Optional[str] = Field(default=None, description="Bearer credential for the embedding provider.")
    endpoint: str = Field(default="https://api.openai.com/v1/embeddings", description="Embeddings endpoint URL.")
    timeout_seconds: float = Field(default=12.0, description="Hard timeout for a single embedding call.")


class VectorStoreSettings(BaseModel):
    """Settings controlling similarity store selection and how it is reached."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="supabase", description="Identifier of the vector store implementation.")
    supabase_url: Optional[str] = Field(default=None, description="Base URL of the Supabase project.")
    service_key: Optional[str] = Field(default=None, description="Service role key used for admin access.")
    table: str = Field(default="property_semantic_index", description="Table holding one index entry per listing.")
    match_function: str = Field(default="match_property_semantic", description="Remote procedure answering similarity queries.")
    catalog_table: str = Field(default="properties", description="Table holding the canonical listing attributes.")
    timeout_seconds: float = Field(default=10.0, description="Timeout for a single store call.")
    index_path: Path = Field(default=Path("storage/indexes/semantic_index.json"), description="Persistence path for the memory store.")


class SearchSettings(BaseModel):
    """Policy tunables for semantic queries."""

    model_config = ConfigDict(frozen=True)

    min_query_length: int = Field(default=3, description="Shortest normalized query sent to the embedder.")
    default_limit: int = Field(default=60, description="Result cap used when the caller gives none.")
    max_limit: int = Field(default=120, description="Upper bound for the caller supplied result cap.")
    default_min_similarity: float = Field(default=0.43, description="Similarity threshold used when the caller gives none.")


class IndexingSettings(BaseModel):
    """Settings for single-listing and batch re-indexing."""

    model_config = ConfigDict(frozen=True)

    default_page_size: int = Field(default=80, description="Listings processed per batch page by default.")
    max_page_size: int = Field(default=200, description="Largest page a batch request may ask for.")
    write_path_timeout_seconds: float = Field(default=2.5, description="How long a listing write waits for its re-index.")

    def clamp_page_size(self, size: Optional[int]) -> int:
        """Bound a requested page size to ``[1, max_page_size]``; None means the default."""

        if size is None:
            return self.default_page_size
        return max(1, min(self.max_page_size, size))


class AppSettings(BaseModel):
    """Top-level application settings shared across services and interfaces."""

    model_config = ConfigDict(frozen=True)

    embedder: EmbedderSettings = Field(default_factory=EmbedderSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    indexing: IndexingSettings = Field(default_factory=IndexingSettings)
    semantic_search_enabled: bool = Field(default=False, description="Flag gating the public semantic search endpoint.")
    cron_secret: Optional[str] = Field(default=None, description="Shared secret authorizing administrative jobs.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """Instantiate settings from environment variables when available."""

        env = os.environ if environ is None else environ

        def first(*names: str) -> Optional[str]:
            for name in names:
                value = (env.get(name) or "").strip()
                if value:
                    return value
            return None

        def integer(name: str, default: int) -> int:
            try:
                return int(first(name) or default)
            except ValueError:
                return default

        embedder = EmbedderSettings(
            name=first("EMBEDDER") or "openai",
            model_name=first("OPENAI_EMBED_MODEL") or "text-embedding-3-small",
            dim=integer("OPENAI_EMBED_DIM", 1536),
            api_key=first("OPENAI_API_KEY"),
            endpoint=first("OPENAI_EMBEDDINGS_URL") or "https://api.openai.com/v1/embeddings",
        )
        vector_store = VectorStoreSettings(
            name=first("VECTOR_STORE") or "supabase",
            supabase_url=first("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
            service_key=first("SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_ADMIN_KEY", "SERVICE_ROLE_KEY"),
        )
        return cls(
            embedder=embedder,
            vector_store=vector_store,
            semantic_search_enabled=first("SEMANTIC_SEARCH_ENABLED") == "true",
            cron_secret=first("CRON_SECRET"),
            log_level=(first("LOG_LEVEL") or "INFO").upper(),
        )


__all__ = ["AppSettings", "EmbedderSettings", "IndexingSettings", "SearchSettings", "VectorStoreSettings"]
