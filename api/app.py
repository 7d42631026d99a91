# Path: api/app.py
# Purpose: Expose a FastAPI application for semantic listing search and re-indexing.
# Layer: api.
# Details: Provides health checks, the public query endpoint, and the administrative batch re-index endpoint.

import logging
from typing import Any, Dict, Mapping, Optional

from config import AppSettings
from core.catalog import CatalogError, CatalogUnavailableError, ListingCatalog, build_catalog
from core.embedders import build_embedder
from core.indexing.index_builder import IndexMaintainer
from core.models.domain import EMPTY_QUERY, INVALID_JSON, PAUSED_BY_CONFIG, SearchResponse
from core.search.pipeline import SemanticSearchService
from core.vector_store import StoreUnavailableError, VectorStore, build_vector_store

logger = logging.getLogger(__name__)

NO_STORE_HEADERS = {"Cache-Control": "no-store, max-age=0"}
CRON_HEADER_CANDIDATES = ("authorization", "x-cron-secret", "x-recommendations-secret")


def _bearer_token(value: str) -> str:
    token = value.strip()
    if token.lower().startswith("bearer "):
        return token[7:].strip()
    return token


def is_cron_secret_valid(headers: Mapping[str, str], expected: Optional[str]) -> bool:
    """Return True when one of the accepted headers carries the configured cron secret."""

    secret = (expected or "").strip()
    if not secret:
        return False
    for name in CRON_HEADER_CANDIDATES:
        raw = headers.get(name)
        if raw and _bearer_token(raw) == secret:
            return True
    return False


def _clamp_int(value: Any, lower: int, upper: Optional[int], default: int) -> int:
    try:
        number = int(float(value)) if value is not None and not isinstance(value, bool) else default
    except (TypeError, ValueError, OverflowError):
        number = default
    number = max(lower, number)
    return number if upper is None else min(upper, number)


def build_services(settings: AppSettings):
    """Wire embedder, store, and catalog from settings; missing backends become None."""

    embedder = build_embedder(settings.embedder)

    vector_store: Optional[VectorStore]
    try:
        vector_store = build_vector_store(settings)
    except StoreUnavailableError as exc:
        logger.warning("Vector store unavailable: %s", exc)
        vector_store = None

    catalog: Optional[ListingCatalog]
    try:
        catalog = build_catalog(settings)
    except CatalogUnavailableError as exc:
        logger.warning("Listing catalog unavailable: %s", exc)
        catalog = None

    search_service = SemanticSearchService(embedder, vector_store, settings.search)
    maintainer = IndexMaintainer(
        embedder,
        vector_store,
        catalog,
        write_path_timeout=settings.indexing.write_path_timeout_seconds,
    )
    return search_service, maintainer


def create_app(
    settings: Optional[AppSettings] = None,
    search_service: Optional[SemanticSearchService] = None,
    maintainer: Optional[IndexMaintainer] = None,
):  # type: ignore[override]
    """Create a FastAPI app instance configured with the provided services."""

    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse

    settings = settings or AppSettings.from_env()
    if search_service is None or maintainer is None:
        built_search, built_maintainer = build_services(settings)
        search_service = search_service or built_search
        maintainer = maintainer or built_maintainer

    app = FastAPI(title="Listing Semantic Search API", version="0.1.0")

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.post("/api/search/semantic")
    async def semantic_search(request: Request):
        """Rank listings by similarity to a free-text query, or say why that is unavailable."""

        if not settings.semantic_search_enabled:
            return JSONResponse(SearchResponse.disabled(PAUSED_BY_CONFIG).to_dict(), headers=NO_STORE_HEADERS)

        try:
            payload = await request.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            return JSONResponse(
                SearchResponse.disabled(INVALID_JSON).to_dict(),
                status_code=400,
                headers=NO_STORE_HEADERS,
            )

        raw_query = payload.get("query")
        query = ("" if raw_query is None else str(raw_query)).strip()
        if not query:
            return JSONResponse(SearchResponse.disabled(EMPTY_QUERY).to_dict(), headers=NO_STORE_HEADERS)

        response = await search_service.search(
            query,
            limit=payload.get("limit"),
            min_similarity=payload.get("minSimilarity"),
        )
        return JSONResponse(response.to_dict(), headers=NO_STORE_HEADERS)

    @app.post("/api/admin/search/semantic/reindex")
    async def reindex_page(request: Request):
        """Re-index one page of the catalog; callers advance ``offset`` until ``hasMore`` is false."""

        if not is_cron_secret_valid(request.headers, settings.cron_secret):
            return JSONResponse({"error": "Unauthorized"}, status_code=401)

        if not maintainer.embedder.is_configured:
            return JSONResponse({"error": "Embedding provider is not configured"}, status_code=400)

        try:
            payload = await request.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        indexing = settings.indexing
        limit = _clamp_int(payload.get("limit"), 1, indexing.max_page_size, indexing.default_page_size)
        offset = _clamp_int(payload.get("offset"), 0, None, 0)

        if maintainer.vector_store is None or maintainer.catalog is None:
            return JSONResponse({"error": "Vector store or listing catalog is not configured"}, status_code=500)

        try:
            result = await maintainer.reindex_page(offset, limit)
        except CatalogError as exc:
            return JSONResponse({"error": str(exc)}, status_code=400)

        return {"ok": True, "authSource": "secret", **result.to_dict()}

    return app
