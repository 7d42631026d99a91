import pytest
from fastapi.testclient import TestClient

from api import create_app
from config import AppSettings, EmbedderSettings
from core.catalog import MemoryCatalog
from core.indexing.index_builder import IndexMaintainer
from core.search.pipeline import SemanticSearchService

from .conftest import DIM, StubEmbedder, StubStore, make_listing

SECRET = "cron-secret"


class RefusingCatalog(MemoryCatalog):
    async def fetch_page(self, offset, limit):
        from core.catalog import CatalogError

        raise CatalogError("relation properties does not exist")


def make_client(enabled=True, rows=None, embedder=None, store="stub", catalog=None, cron_secret=SECRET):
    settings = AppSettings(
        embedder=EmbedderSettings(name="hash", dim=DIM),
        semantic_search_enabled=enabled,
        cron_secret=cron_secret,
    )
    embedder = embedder or StubEmbedder()
    vector_store = StubStore(rows=rows if rows is not None else []) if store == "stub" else store
    if catalog is None:
        catalog = MemoryCatalog(make_listing(i) for i in range(5))
    service = SemanticSearchService(embedder, vector_store, settings.search)
    maintainer = IndexMaintainer(embedder, vector_store, catalog)
    return TestClient(create_app(settings, search_service=service, maintainer=maintainer)), vector_store


def test_health():
    client, _ = make_client()

    assert client.get("/health").json() == {"status": "ok"}


class TestSemanticSearchEndpoint:
    def test_returns_ranked_results_without_caching(self):
        client, _ = make_client(rows=[{"ref": "B", "similarity": 0.62}, {"ref": "A", "similarity": 0.81}])

        response = client.post("/api/search/semantic", json={"query": "appartement vue mer", "limit": 60})

        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-store, max-age=0"
        assert response.json() == {"enabled": True, "results": [{"ref": "A", "score": 0.81}, {"ref": "B", "score": 0.62}]}

    def test_passes_limit_and_min_similarity(self):
        client, store = make_client()

        client.post("/api/search/semantic", json={"query": "villa piscine", "limit": 10, "minSimilarity": 0.5})

        assert store.queries == [{"limit": 10, "min_similarity": 0.5}]

    def test_paused_by_config(self):
        client, _ = make_client(enabled=False)

        response = client.post("/api/search/semantic", json={"query": "villa piscine"})

        assert response.status_code == 200
        assert response.json() == {"enabled": False, "reason": "paused_by_config", "results": []}

    @pytest.mark.parametrize("body", [b"{not json", b"", b"[1, 2]"])
    def test_malformed_body_is_400(self, body):
        client, _ = make_client()

        response = client.post("/api/search/semantic", content=body, headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"enabled": False, "reason": "invalid_json", "results": []}

    def test_numeric_query_is_text_not_empty(self):
        client, store = make_client()

        response = client.post("/api/search/semantic", json={"query": 0})

        assert response.json() == {"enabled": False, "reason": "query_too_short", "results": []}
        assert store.queries == []

    def test_empty_query(self):
        client, _ = make_client()

        response = client.post("/api/search/semantic", json={"query": "   "})

        assert response.json()["reason"] == "empty_query"

    def test_degraded_search_is_still_200(self):
        client, _ = make_client(embedder=StubEmbedder(available=False))

        response = client.post("/api/search/semantic", json={"query": "appartement vue mer"})

        assert response.status_code == 200
        assert response.json() == {"enabled": False, "reason": "embedding_unavailable", "results": []}


class TestReindexEndpoint:
    URL = "/api/admin/search/semantic/reindex"

    @pytest.mark.parametrize(
        "headers",
        [
            {"Authorization": f"Bearer {SECRET}"},
            {"x-cron-secret": SECRET},
            {"x-recommendations-secret": f"bearer {SECRET}"},
        ],
    )
    def test_processes_one_page(self, headers):
        client, store = make_client()

        response = client.post(self.URL, json={"limit": 2, "offset": 1}, headers=headers)

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "authSource": "secret",
            "processed": 2,
            "indexed": 2,
            "failed": 0,
            "nextOffset": 3,
            "hasMore": True,
        }
        assert [entry.listing_id for entry in store.upserts] == ["id-1", "id-2"]

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}])
    def test_rejects_missing_or_wrong_secret(self, headers):
        client, _ = make_client()

        assert client.post(self.URL, json={}, headers=headers).status_code == 401

    def test_rejects_when_no_secret_configured(self):
        client, _ = make_client(cron_secret=None)

        assert client.post(self.URL, json={}, headers={"Authorization": "Bearer anything"}).status_code == 401

    def test_unparsable_body_uses_defaults(self):
        client, _ = make_client()

        response = client.post(
            self.URL,
            content=b"oops",
            headers={"x-cron-secret": SECRET, "Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json()["processed"] == 5
        assert response.json()["hasMore"] is False

    def test_limit_is_clamped(self):
        client, _ = make_client()

        response = client.post(self.URL, json={"limit": 0, "offset": -4}, headers={"x-cron-secret": SECRET})

        assert response.json()["processed"] == 1
        assert response.json()["nextOffset"] == 1

    def test_missing_store_is_500(self):
        client, _ = make_client(store=None)

        assert client.post(self.URL, json={}, headers={"x-cron-secret": SECRET}).status_code == 500

    def test_catalog_error_is_400(self):
        client, _ = make_client(catalog=RefusingCatalog([]))

        response = client.post(self.URL, json={}, headers={"x-cron-secret": SECRET})

        assert response.status_code == 400
        assert "does not exist" in response.json()["error"]


class TestUnconfiguredEmbedder:
    def test_reindex_without_embedding_credentials_is_400(self):
        from core.embedders import OpenAIEmbedder

        client, _ = make_client(embedder=OpenAIEmbedder(EmbedderSettings(api_key=None, dim=DIM)))

        response = client.post(TestReindexEndpoint.URL, json={}, headers={"x-cron-secret": SECRET})

        assert response.status_code == 400


def test_create_app_wires_services_from_settings(tmp_path):
    from config import VectorStoreSettings

    settings = AppSettings(
        embedder=EmbedderSettings(name="hash", dim=DIM),
        vector_store=VectorStoreSettings(name="memory", index_path=tmp_path / "index.json"),
        semantic_search_enabled=True,
    )
    client = TestClient(create_app(settings))

    response = client.post("/api/search/semantic", json={"query": "appartement vue mer"})

    assert response.json() == {"enabled": True, "results": []}
