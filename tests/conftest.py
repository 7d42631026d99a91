"""Shared fixtures and stubs for the semantic search test suite."""

from typing import Any, Dict, List, Optional

import numpy as np

from core.embedders.base import Embedder
from core.models.domain import ListingAttributes, SemanticIndexEntry
from core.vector_store.base import VectorStore

DIM = 8


class StubEmbedder(Embedder):
    """Embedder returning a fixed vector (or None) and recording every call."""

    def __init__(self, vector: Optional[np.ndarray] = None, dim: int = DIM, available: bool = True):
        self.name = "stub"
        self.dim = dim
        self.available = available
        self.vector = vector if vector is not None else np.ones(dim) / np.sqrt(dim)
        self.calls: List[str] = []

    async def embed(self, text: str) -> Optional[np.ndarray]:
        self.calls.append(text)
        if not self.available:
            return None
        return self.vector


class StubStore(VectorStore):
    """Store returning canned rows and recording upserts and queries."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, upsert_ok: bool = True):
        self.name = "stub"
        self.rows = rows
        self.upsert_ok = upsert_ok
        self.upserts: List[SemanticIndexEntry] = []
        self.queries: List[Dict[str, Any]] = []

    async def upsert(self, entry: SemanticIndexEntry) -> bool:
        self.upserts.append(entry)
        return self.upsert_ok

    async def query(self, embedding, limit, min_similarity):
        self.queries.append({"limit": limit, "min_similarity": min_similarity})
        return self.rows


def make_listing(index: int, **overrides: Any) -> ListingAttributes:
    values: Dict[str, Any] = {
        "listing_id": f"id-{index}",
        "ref": f"REF-{index:04d}",
        "title": f"Appartement F{index % 5 + 1}",
        "location": "Oran",
        "beds": index % 4 + 1,
    }
    values.update(overrides)
    return ListingAttributes(**values)

