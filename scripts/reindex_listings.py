# Path: scripts/reindex_listings.py
# Purpose: CLI tool to rebuild the semantic index across the whole listing catalog.
# Layer: scripts.
# Details: Drives catalog pages in order until the last short page, one listing at a time.

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from config import AppSettings, configure_logging
from core.catalog import ListingCatalog, MemoryCatalog, build_catalog
from core.embedders import build_embedder
from core.indexing.index_builder import IndexMaintainer
from core.vector_store import MemoryStore, build_vector_store


async def run(args: argparse.Namespace, settings: AppSettings) -> int:
    """Re-index every listing and report the totals."""

    catalog: ListingCatalog
    if args.listings_file is not None:
        catalog = MemoryCatalog.from_json(args.listings_file)
    else:
        catalog = build_catalog(settings)

    embedder = build_embedder(settings.embedder)
    vector_store = build_vector_store(settings)
    maintainer = IndexMaintainer(embedder=embedder, vector_store=vector_store, catalog=catalog)

    page_size = settings.indexing.clamp_page_size(args.page_size)
    totals = await maintainer.reindex_all(page_size=page_size, start_offset=max(0, args.offset))

    if isinstance(vector_store, MemoryStore):
        vector_store.save(str(settings.vector_store.index_path))
    print(
        f"Processed {totals.processed} listings: {totals.indexed} indexed, {totals.failed} failed "
        f"(next offset {totals.next_offset})"
    )
    return 0 if totals.failed == 0 else 1


def main() -> None:
    """Run batch re-indexing over the listing catalog."""

    parser = argparse.ArgumentParser(description="Rebuild the listing semantic index")
    parser.add_argument("--page-size", type=int, default=None, help="Listings per catalog page (defaults to the configured page size)")
    parser.add_argument("--offset", type=int, default=0, help="Offset to resume from")
    parser.add_argument("--listings-file", type=Path, default=None, help="JSON export of listings to index instead of Supabase")
    parser.add_argument("--store", choices=["supabase", "memory"], default=None, help="Override the configured vector store")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    if args.store is not None:
        settings = settings.model_copy(update={"vector_store": settings.vector_store.model_copy(update={"name": args.store})})
    configure_logging(settings)

    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
