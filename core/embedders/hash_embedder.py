# Path: core/embedders/hash_embedder.py
# Purpose: Provide a deterministic offline embedder.
# Layer: core/embedders.
# Details: Uses SHA-256 hashing so local runs and tests get reproducible vectors without network access.

from __future__ import annotations

import hashlib
from typing import Optional

import numpy as np

from .base import Embedder


class HashEmbedder(Embedder):
    """Stub implementation producing unit vectors from a text digest."""

    def __init__(self, dim: int = 1536, name: str = "hash") -> None:
        self.dim = dim
        self.name = name

    async def embed(self, text: str) -> Optional[np.ndarray]:
        """Generate a deterministic text embedding based on hashing."""

        cleaned = self._clean_text(text)
        if not cleaned:
            return None

        hash_bytes = hashlib.sha256(cleaned.encode("utf-8")).digest()
        expanded = np.frombuffer(hash_bytes * (self.dim // len(hash_bytes) + 1), dtype=np.uint8)
        # Shift bytes into a zero-centred range.
        vector = expanded[: self.dim].astype(np.float64) - 127.5
        return self._normalize(vector)
