# Path: core/embedders/base.py
# Purpose: Define the Embedder interface for listing and query text embeddings.
# Layer: core/embedders.
# Details: Embedders return None instead of raising so callers can degrade gracefully.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class Embedder(ABC):
    """Abstract base class for all embedders used by indexing and search."""

    name: str
    dim: int

    @property
    def is_configured(self) -> bool:
        """Return True when the embedder has everything it needs to be called."""

        return True

    @abstractmethod
    async def embed(self, text: str) -> Optional[np.ndarray]:
        """Return an embedding of exactly ``dim`` values, or None when unavailable."""

    @staticmethod
    def _clean_text(text: Optional[str]) -> str:
        """Collapse whitespace so equivalent inputs embed identically."""

        return " ".join(str(text or "").split())

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        """Normalize embedding vectors to unit length to simplify similarity comparisons."""

        norm = np.linalg.norm(vector)
        if norm == 0:
            return vector.astype(np.float64)
        return (vector / norm).astype(np.float64)
