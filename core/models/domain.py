# Path: core/models/domain.py
# Purpose: Define domain models shared across embedding, search, and indexing workflows.
# Layer: core/models.
# Details: Lightweight dataclasses simplify serialization between API, scripts, and core services.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

QUERY_TOO_SHORT = "query_too_short"
EMBEDDING_UNAVAILABLE = "embedding_unavailable"
STORE_UNAVAILABLE = "store_unavailable"
RPC_UNAVAILABLE = "rpc_unavailable"
PAUSED_BY_CONFIG = "paused_by_config"
INVALID_JSON = "invalid_json"
EMPTY_QUERY = "empty_query"


@dataclass
class ListingAttributes:
    """Canonical listing attributes read from the catalog owner."""

    listing_id: str
    ref: str
    title: Optional[str] = None
    transaction_type: Optional[str] = None
    location_type: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    beds: Optional[float] = None
    baths: Optional[float] = None
    area: Optional[float] = None
    amenities: Optional[List[str]] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ListingAttributes":
        """Build attributes from a catalog row using the storage column names."""

        amenities = row.get("amenities")
        return cls(
            listing_id=str(row.get("id") or ""),
            ref=str(row.get("ref") or ""),
            title=row.get("title"),
            transaction_type=row.get("type"),
            location_type=row.get("location_type"),
            category=row.get("category"),
            location=row.get("location"),
            description=row.get("description"),
            price=row.get("price"),
            beds=row.get("beds"),
            baths=row.get("baths"),
            area=row.get("area"),
            amenities=list(amenities) if isinstance(amenities, list) else None,
        )


@dataclass
class SemanticIndexEntry:
    """One similarity index entry, keyed by listing id."""

    listing_id: str
    listing_ref: str
    canonical_text: str
    embedding: np.ndarray
    updated_at: datetime


@dataclass
class SearchResult:
    """Search result item carrying the listing ref and its normalized similarity."""

    ref: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"ref": self.ref, "score": self.score}


@dataclass
class SearchResponse:
    """Outcome of a semantic query; ``enabled`` is False whenever a stage degraded."""

    enabled: bool
    reason: Optional[str] = None
    results: List[SearchResult] = field(default_factory=list)

    @classmethod
    def disabled(cls, reason: str) -> "SearchResponse":
        return cls(enabled=False, reason=reason, results=[])

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"enabled": self.enabled}
        if self.reason is not None:
            payload["reason"] = self.reason
        payload["results"] = [result.to_dict() for result in self.results]
        return payload


@dataclass
class ReindexPageResult:
    """Counters describing one processed catalog page."""

    processed: int = 0
    indexed: int = 0
    failed: int = 0
    next_offset: int = 0
    has_more: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processed": self.processed,
            "indexed": self.indexed,
            "failed": self.failed,
            "nextOffset": self.next_offset,
            "hasMore": self.has_more,
        }
