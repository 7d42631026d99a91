# Path: core/catalog/base.py
# Purpose: Define the ListingCatalog interface used by batch re-indexing.
# Layer: core/catalog.
# Details: Catalogs return one page of listings ordered by a stable key, most recent first.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from core.models.domain import ListingAttributes


class CatalogError(RuntimeError):
    """Raised when a catalog page cannot be read."""


class CatalogUnavailableError(CatalogError):
    """Raised when a catalog cannot be constructed, e.g. because credentials are missing."""


class ListingCatalog(ABC):
    """Read-only source of canonical listing attributes."""

    @abstractmethod
    async def fetch_page(self, offset: int, limit: int) -> List[ListingAttributes]:
        """Return listings ``offset .. offset + limit - 1`` in stable order."""
