# Path: core/catalog/memory_catalog.py
# Purpose: Serve listing pages from an in-memory list or a JSON export.
# Layer: core/catalog.
# Details: The list order is the stable key; JSON files hold catalog rows using storage column names.

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from core.models.domain import ListingAttributes

from .base import CatalogError, ListingCatalog


class MemoryCatalog(ListingCatalog):
    """Catalog backed by a list kept in the order pages are served."""

    def __init__(self, listings: Iterable[ListingAttributes]) -> None:
        self._listings: List[ListingAttributes] = list(listings)

    def __len__(self) -> int:
        return len(self._listings)

    @classmethod
    def from_json(cls, path: Path) -> "MemoryCatalog":
        """Load catalog rows (``id``, ``ref``, ``title``, ...) from a JSON array file."""

        try:
            rows = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CatalogError(f"Cannot read listings from {path}: {exc}") from exc
        if not isinstance(rows, list):
            raise CatalogError(f"Expected a JSON array of listings in {path}.")
        return cls(ListingAttributes.from_row(row) for row in rows if isinstance(row, dict))

    async def fetch_page(self, offset: int, limit: int) -> List[ListingAttributes]:
        return self._listings[offset : offset + limit]
