# Path: core/catalog/supabase_catalog.py
# Purpose: Read pages of listings from the Supabase ``properties`` table.
# Layer: core/catalog.
# Details: Orders by ``created_at`` descending so re-indexing can resume from any offset.

from __future__ import annotations

import asyncio
import logging
from typing import List

import aiohttp

from config.settings import VectorStoreSettings
from core.models.domain import ListingAttributes
from core.vector_store.base import StoreUnavailableError
from core.vector_store.supabase_store import require_credentials, supabase_headers

from .base import CatalogError, CatalogUnavailableError, ListingCatalog

logger = logging.getLogger(__name__)

LISTING_COLUMNS = "id,ref,title,type,location_type,category,location,description,price,beds,baths,area,amenities"


class SupabaseCatalog(ListingCatalog):
    """Paged reader over the listing table owned by the catalog service."""

    def __init__(self, settings: VectorStoreSettings) -> None:
        try:
            self.base_url, self._service_key = require_credentials(settings)
        except StoreUnavailableError as exc:
            raise CatalogUnavailableError(str(exc)) from exc
        self.table = settings.catalog_table
        self.timeout_seconds = settings.timeout_seconds

    async def fetch_page(self, offset: int, limit: int) -> List[ListingAttributes]:
        params = {
            "select": LISTING_COLUMNS,
            "order": "created_at.desc",
            "offset": str(offset),
            "limit": str(limit),
        }
        url = f"{self.base_url}/rest/v1/{self.table}"

        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)) as session:
                async with session.get(url, params=params, headers=supabase_headers(self._service_key)) as resp:
                    if resp.status >= 300:
                        raise CatalogError(f"Listing page request failed with status {resp.status}: {await resp.text()}")
                    rows = await resp.json(content_type=None)
        except asyncio.TimeoutError as exc:
            raise CatalogError("Listing page request timed out") from exc
        except (aiohttp.ClientError, ValueError) as exc:
            raise CatalogError(f"Listing page request failed: {exc}") from exc

        if not isinstance(rows, list):
            raise CatalogError("Listing page response is not a JSON array")
        logger.debug("Fetched %d listings at offset %d", len(rows), offset)
        return [ListingAttributes.from_row(row) for row in rows if isinstance(row, dict)]
