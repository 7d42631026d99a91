# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses and reason codes used across embedding, search, and indexing layers.

from .domain import (
    EMBEDDING_UNAVAILABLE,
    EMPTY_QUERY,
    INVALID_JSON,
    PAUSED_BY_CONFIG,
    QUERY_TOO_SHORT,
    RPC_UNAVAILABLE,
    STORE_UNAVAILABLE,
    ListingAttributes,
    ReindexPageResult,
    SearchResponse,
    SearchResult,
    SemanticIndexEntry,
)

__all__ = [
    "EMBEDDING_UNAVAILABLE",
    "EMPTY_QUERY",
    "INVALID_JSON",
    "PAUSED_BY_CONFIG",
    "QUERY_TOO_SHORT",
    "RPC_UNAVAILABLE",
    "STORE_UNAVAILABLE",
    "ListingAttributes",
    "ReindexPageResult",
    "SearchResponse",
    "SearchResult",
    "SemanticIndexEntry",
]
