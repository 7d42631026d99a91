# Path: core/vector_store/memory_store.py
# Purpose: Provide an in-memory similarity store with optional JSON persistence.
# Layer: core/vector_store.
# Details: Keeps embeddings as vector literals like the remote store and ranks by cosine similarity with numpy.

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from core.models.domain import SemanticIndexEntry

from .base import VectorStore
from .codec import decode_vector, encode_vector

logger = logging.getLogger(__name__)


class MemoryStore(VectorStore):
    """Minimal similarity store compatible with the indexing and search services.

    Entries are keyed by listing id, so a second upsert replaces the first.
    """

    def __init__(self, dim: int, name: str = "memory") -> None:
        self.dim = dim
        self.name = name
        self._rows: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._rows)

    async def upsert(self, entry: SemanticIndexEntry) -> bool:
        """Store the entry, replacing any previous entry for the same listing."""

        if len(entry.embedding) != self.dim:
            logger.warning(
                "Refusing entry for listing %s: dimension %d, expected %d",
                entry.listing_id,
                len(entry.embedding),
                self.dim,
            )
            return False

        self._rows[entry.listing_id] = {
            "property_id": entry.listing_id,
            "property_ref": entry.listing_ref,
            "text_content": entry.canonical_text,
            "embedding": encode_vector(entry.embedding),
            "updated_at": entry.updated_at.isoformat(),
        }
        return True

    async def query(self, embedding: np.ndarray, limit: int, min_similarity: float) -> Optional[List[Dict[str, Any]]]:
        """Return the rows most similar to ``embedding`` by cosine similarity."""

        if not self._rows:
            return []
        if embedding.shape[0] != self.dim:
            logger.warning("Query dimension %d does not match store dimension %d", embedding.shape[0], self.dim)
            return None

        refs = [row["property_ref"] for row in self._rows.values()]
        matrix = np.vstack([decode_vector(row["embedding"]) for row in self._rows.values()])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(embedding)
        with np.errstate(divide="ignore", invalid="ignore"):
            similarities = np.where(norms > 0, matrix @ embedding / norms, 0.0)

        ranked = sorted(zip(refs, similarities.tolist()), key=lambda item: (-item[1], item[0]))
        return [
            {"ref": ref, "similarity": similarity}
            for ref, similarity in ranked
            if similarity >= min_similarity
        ][:limit]

    def get_entry(self, listing_id: str) -> Optional[SemanticIndexEntry]:
        """Return the stored entry for ``listing_id`` if present."""

        row = self._rows.get(listing_id)
        if row is None:
            return None
        return SemanticIndexEntry(
            listing_id=row["property_id"],
            listing_ref=row["property_ref"],
            canonical_text=row["text_content"],
            embedding=decode_vector(row["embedding"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def save(self, path: str) -> None:
        """Persist entries to disk as JSON."""

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps({"dim": self.dim, "rows": list(self._rows.values())}))

    def load(self, path: str) -> None:
        """Load entries previously saved by :meth:`save`."""

        target = Path(path)
        if not target.exists():
            raise FileNotFoundError(f"Missing vector store file {path}.")

        metadata = json.loads(target.read_text())
        if int(metadata.get("dim", self.dim)) != self.dim:
            raise ValueError(f"Stored dimension {metadata.get('dim')} does not match store dimension {self.dim}.")
        self._rows = {row["property_id"]: row for row in metadata.get("rows", [])}
