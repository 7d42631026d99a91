# Path: scripts/semantic_search_demo.py
# Purpose: Simple CLI to run a semantic query against the configured index.
# Layer: scripts.
# Details: Demonstrates query embedding, similarity lookup, and the degradation reasons.

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.embedders import build_embedder
from core.search.pipeline import SemanticSearchService
from core.vector_store import StoreUnavailableError, build_vector_store


def main() -> None:
    """Execute a quick semantic search from the command line."""

    parser = argparse.ArgumentParser(description="Run a quick semantic listing search")
    parser.add_argument("--text", type=str, required=True, help="Free-text query")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    parser.add_argument("--min-similarity", type=float, default=None, help="Similarity threshold in [0, 1]")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    configure_logging(settings)

    embedder = build_embedder(settings.embedder)
    try:
        vector_store = build_vector_store(settings)
    except StoreUnavailableError:
        vector_store = None

    service = SemanticSearchService(embedder=embedder, vector_store=vector_store, settings=settings.search)
    response = asyncio.run(service.search(args.text, limit=args.limit, min_similarity=args.min_similarity))

    if not response.enabled:
        print(f"Semantic search unavailable: {response.reason}")
        return
    for result in response.results:
        print(f"ref={result.ref} score={result.score:.4f}")


if __name__ == "__main__":
    main()
