# Path: core/vector_store/supabase_store.py
# Purpose: Persist and query listing embeddings in Supabase through its PostgREST interface.
# Layer: core/vector_store.
# Details: Upserts one row per listing id and calls a SQL function for nearest-neighbour queries.

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
import numpy as np

from config.settings import VectorStoreSettings
from core.models.domain import SemanticIndexEntry

from .base import StoreUnavailableError, VectorStore
from .codec import encode_vector

logger = logging.getLogger(__name__)


def supabase_headers(service_key: str) -> Dict[str, str]:
    """Return the headers PostgREST expects for service-role requests."""

    return {
        "apikey": service_key,
        "Authorization": f"Bearer {service_key}",
        "Content-Type": "application/json",
    }


def require_credentials(settings: VectorStoreSettings) -> tuple[str, str]:
    """Return ``(base_url, service_key)`` or raise when either is missing."""

    if not settings.supabase_url or not settings.service_key:
        raise StoreUnavailableError("Missing Supabase admin credentials (SUPABASE_SERVICE_ROLE_KEY)")
    return settings.supabase_url.rstrip("/"), settings.service_key


class SupabaseStore(VectorStore):
    """Thin adapter over the ``property_semantic_index`` table and its match function."""

    def __init__(self, settings: VectorStoreSettings, dim: int) -> None:
        self.base_url, self._service_key = require_credentials(settings)
        self.name = "supabase"
        self.dim = dim
        self.table = settings.table
        self.match_function = settings.match_function
        self.timeout_seconds = settings.timeout_seconds

    async def upsert(self, entry: SemanticIndexEntry) -> bool:
        """Insert or replace the row for ``entry.listing_id`` (``on_conflict=property_id``)."""

        if len(entry.embedding) != self.dim:
            logger.warning(
                "Refusing entry for listing %s: dimension %d, expected %d",
                entry.listing_id,
                len(entry.embedding),
                self.dim,
            )
            return False

        row = {
            "property_id": entry.listing_id,
            "property_ref": entry.listing_ref,
            "text_content": entry.canonical_text,
            "embedding": encode_vector(entry.embedding),
            "updated_at": entry.updated_at.isoformat(),
        }
        headers = supabase_headers(self._service_key)
        headers["Prefer"] = "resolution=merge-duplicates,return=minimal"
        url = f"{self.base_url}/rest/v1/{self.table}"

        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)) as session:
                async with session.post(url, params={"on_conflict": "property_id"}, json=row, headers=headers) as resp:
                    if resp.status >= 300:
                        logger.warning(
                            "Upsert for listing %s failed with status %d: %s",
                            entry.listing_id,
                            resp.status,
                            await resp.text(),
                        )
                        return False
        except asyncio.TimeoutError:
            logger.warning("Upsert for listing %s timed out", entry.listing_id)
            return False
        except aiohttp.ClientError as exc:
            logger.warning("Upsert for listing %s failed: %s", entry.listing_id, exc)
            return False
        return True

    async def query(self, embedding: np.ndarray, limit: int, min_similarity: float) -> Optional[List[Dict[str, Any]]]:
        """Call the match function; None when it is missing or the call fails."""

        body = {
            "query_embedding_text": encode_vector(embedding),
            "match_count": limit,
            "min_similarity": min_similarity,
        }
        url = f"{self.base_url}/rest/v1/rpc/{self.match_function}"

        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)) as session:
                async with session.post(url, json=body, headers=supabase_headers(self._service_key)) as resp:
                    if resp.status == 404:
                        logger.warning("Similarity function %s is not installed", self.match_function)
                        return None
                    if resp.status >= 300:
                        logger.warning("Similarity query failed with status %d: %s", resp.status, await resp.text())
                        return None
                    payload = await resp.json(content_type=None)
        except asyncio.TimeoutError:
            logger.warning("Similarity query timed out after %.1fs", self.timeout_seconds)
            return None
        except (aiohttp.ClientError, ValueError) as exc:
            logger.warning("Similarity query failed: %s", exc)
            return None

        if not isinstance(payload, list):
            return []
        return [row for row in payload if isinstance(row, dict)]
