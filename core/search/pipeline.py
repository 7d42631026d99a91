# Path: core/search/pipeline.py
# Purpose: Answer free-text listing queries with similarity-ranked refs.
# Layer: core/search.
# Details: Validates the query, embeds it, queries the vector store, and reports why search is disabled when a stage degrades.

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from config.settings import SearchSettings
from core.embedders.base import Embedder
from core.indexing.text_builder import normalize_text
from core.models.domain import (
    EMBEDDING_UNAVAILABLE,
    QUERY_TOO_SHORT,
    RPC_UNAVAILABLE,
    STORE_UNAVAILABLE,
    SearchResponse,
    SearchResult,
)
from core.vector_store.base import VectorStore

logger = logging.getLogger(__name__)


def _clamp(value: Any, lower: float, upper: float, default: float) -> float:
    """Clamp a loosely typed number into ``[lower, upper]``; unusable input falls back to ``default``."""

    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return max(lower, min(upper, number))


def _similarity(row: Dict[str, Any]) -> float:
    for key in ("similarity", "score"):
        value = row.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    return math.nan


class SemanticSearchService:
    """High-level service bridging the API layer with the embedder and the vector store."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: Optional[VectorStore],
        settings: Optional[SearchSettings] = None,
    ) -> None:
        self.embedder = embedder
        self.vector_store = vector_store
        self.settings = settings or SearchSettings()

    async def search(
        self,
        query: str,
        limit: Optional[Any] = None,
        min_similarity: Optional[Any] = None,
    ) -> SearchResponse:
        """
        Execute a semantic query; never raises.

        External calls:
        - core/embedders/base.py::Embedder.embed - constructs the query embedding.
        - core/vector_store/base.py::VectorStore.query - retrieves nearest listings above the threshold.
        """

        normalized = normalize_text(query)
        if len(normalized) < self.settings.min_query_length:
            return SearchResponse.disabled(QUERY_TOO_SHORT)

        vector = await self.embedder.embed(normalized)
        if vector is None:
            return SearchResponse.disabled(EMBEDDING_UNAVAILABLE)

        if self.vector_store is None:
            return SearchResponse.disabled(STORE_UNAVAILABLE)

        match_count = int(_clamp(limit, 1, self.settings.max_limit, self.settings.default_limit))
        threshold = _clamp(min_similarity, 0.0, 1.0, self.settings.default_min_similarity)
        rows = await self.vector_store.query(vector, match_count, threshold)
        if rows is None:
            return SearchResponse.disabled(RPC_UNAVAILABLE)

        results = self._to_results(rows)
        logger.debug("Semantic query matched %d listings", len(results))
        return SearchResponse(enabled=True, results=results)

    @staticmethod
    def _to_results(rows: List[Dict[str, Any]]) -> List[SearchResult]:
        """Drop unusable rows, clamp scores into [0, 1], and order by descending score."""

        results: List[SearchResult] = []
        for row in rows:
            raw_ref = row.get("ref")
            ref = normalize_text(raw_ref) if isinstance(raw_ref, str) else ""
            similarity = _similarity(row)
            if not ref or not math.isfinite(similarity):
                continue
            results.append(SearchResult(ref=ref, score=max(0.0, min(1.0, similarity))))
        results.sort(key=lambda result: result.score, reverse=True)
        return results
