# Path: core/indexing/index_builder.py
# Purpose: Keep the similarity index in step with listing attributes.
# Layer: core/indexing.
# Details: Re-indexes single listings for the write path and pages of the catalog for batch jobs.

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Set

from tqdm import tqdm

from core.catalog.base import ListingCatalog
from core.embedders.base import Embedder
from core.models.domain import ListingAttributes, ReindexPageResult, SemanticIndexEntry
from core.vector_store.base import VectorStore

from .text_builder import build_canonical_text

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IndexMaintainer:
    """Embed listings and upsert their entries into the configured vector store."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: Optional[VectorStore],
        catalog: Optional[ListingCatalog] = None,
        write_path_timeout: float = 2.5,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.embedder = embedder
        self.vector_store = vector_store
        self.catalog = catalog
        self.write_path_timeout = write_path_timeout
        self._clock = clock
        self._background: Set[asyncio.Task] = set()

    async def reindex_one(self, listing: ListingAttributes) -> bool:
        """
        Re-index a single listing; every failure collapses to False.

        External calls:
        - core/embedders/base.py::Embedder.embed - embed the canonical text.
        - core/vector_store/base.py::VectorStore.upsert - replace the listing's entry.
        """

        try:
            return await self._reindex_one(listing)
        except Exception:
            logger.exception("Unexpected failure while re-indexing listing %s", listing.listing_id)
            return False

    async def _reindex_one(self, listing: ListingAttributes) -> bool:
        if not listing.listing_id or not listing.ref:
            return False

        text = build_canonical_text(listing)
        if not text:
            logger.debug("Listing %s has no indexable text", listing.listing_id)
            return False

        vector = await self.embedder.embed(text)
        if vector is None:
            logger.info("Embedding unavailable for listing %s", listing.listing_id)
            return False

        if self.vector_store is None:
            logger.info("No vector store configured; skipping listing %s", listing.listing_id)
            return False

        entry = SemanticIndexEntry(
            listing_id=listing.listing_id,
            listing_ref=listing.ref,
            canonical_text=text,
            embedding=vector,
            updated_at=self._clock(),
        )
        return await self.vector_store.upsert(entry)

    async def schedule_reindex(self, listing: ListingAttributes, timeout: Optional[float] = None) -> Optional[bool]:
        """
        Re-index after a listing write without holding the write up.

        Returns the result if it arrives within ``timeout`` (the write-path ceiling by
        default), otherwise None; the re-index keeps running in the background.
        """

        task = asyncio.ensure_future(self.reindex_one(listing))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

        ceiling = self.write_path_timeout if timeout is None else timeout
        done, _ = await asyncio.wait({task}, timeout=ceiling)
        if task in done:
            return task.result()
        logger.info("Re-index of listing %s still running after %.1fs", listing.listing_id, ceiling)
        return None

    async def wait_for_background(self) -> None:
        """Wait until every re-index started by :meth:`schedule_reindex` has finished."""

        if self._background:
            await asyncio.gather(*self._background)

    async def reindex_page(self, offset: int, limit: int) -> ReindexPageResult:
        """
        Re-index one catalog page, one listing at a time.

        External calls:
        - core/catalog/base.py::ListingCatalog.fetch_page - read the page (CatalogError propagates).

        Raises ValueError when ``limit`` is below 1.
        """

        if self.catalog is None:
            raise RuntimeError("IndexMaintainer has no catalog configured.")
        if limit < 1:
            raise ValueError(f"Page size must be at least 1, got {limit}.")

        # One lookahead row tells a full last page apart from a page with more behind it.
        fetched = await self.catalog.fetch_page(offset, limit + 1)
        listings = fetched[:limit]
        result = ReindexPageResult(processed=len(listings))
        for listing in listings:
            if await self.reindex_one(listing):
                result.indexed += 1
            else:
                result.failed += 1

        result.next_offset = offset + len(listings)
        result.has_more = len(fetched) > limit
        logger.info(
            "Re-indexed page at offset %d: %d processed, %d indexed, %d failed",
            offset,
            result.processed,
            result.indexed,
            result.failed,
        )
        return result

    async def reindex_all(self, page_size: int, start_offset: int = 0, show_progress: bool = True) -> ReindexPageResult:
        """Follow ``next_offset`` page by page until the catalog is exhausted; return the totals."""

        totals = ReindexPageResult(next_offset=start_offset, has_more=True)
        with tqdm(desc="Re-indexing listings", unit="listing", disable=not show_progress) as progress:
            while totals.has_more:
                page = await self.reindex_page(totals.next_offset, page_size)
                totals.processed += page.processed
                totals.indexed += page.indexed
                totals.failed += page.failed
                totals.next_offset = page.next_offset
                totals.has_more = page.has_more
                progress.update(page.processed)
                progress.set_postfix(indexed=totals.indexed, failed=totals.failed)
        return totals
