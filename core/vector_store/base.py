# Path: core/vector_store/base.py
# Purpose: Define the VectorStore interface for upserting and querying listing embeddings.
# Layer: core/vector_store.
# Details: Operations report failure through return values; only construction may raise.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import numpy as np

from core.models.domain import SemanticIndexEntry


class StoreUnavailableError(RuntimeError):
    """Raised when a store cannot be constructed, e.g. because credentials are missing."""


class VectorStore(ABC):
    """Abstract base class for pluggable similarity store backends."""

    name: str

    @abstractmethod
    async def upsert(self, entry: SemanticIndexEntry) -> bool:
        """Insert or fully replace the entry for ``entry.listing_id``; return True on success."""

    @abstractmethod
    async def query(self, embedding: np.ndarray, limit: int, min_similarity: float) -> Optional[List[Dict[str, Any]]]:
        """
        Return rows with ``ref`` and ``similarity`` at or above ``min_similarity``.

        Rows come back in descending similarity order, at most ``limit`` of them.
        None means the similarity operation is unavailable.
        """
