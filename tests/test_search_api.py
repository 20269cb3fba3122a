"""HTTP tests for POST /search and OPTIONS /search."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from repairhub.core.exceptions import ConfigurationFailure
from repairhub.deps import get_search_aggregator
from repairhub.main import app
from repairhub.services.search.aggregator import SearchAggregator
from repairhub.services.search.cache import SqlSearchCacheStore

from tests.conftest import FIXED_NOW, FakeCacheStore, StubAdapter, make_item

# ── Fixtures ───────────────────────────────────────────────────────


@pytest.fixture
def store() -> FakeCacheStore:
    return FakeCacheStore()


@pytest.fixture
def adapters() -> list[StubAdapter]:
    return [
        StubAdapter("guide-source", [make_item("Dishwasher pump replacement")]),
        StubAdapter("forum-source", [make_item("Dishwasher pump humming", "forum-source")]),
        StubAdapter("video-source", [make_item("How to Fix dishwasher pump", "video-source")]),
    ]


@pytest.fixture
def client(store, adapters):
    app.dependency_overrides[get_search_aggregator] = lambda: SearchAggregator(
        cache=store,
        adapters=adapters,
        clock=lambda: FIXED_NOW,
    )
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _assert_cors(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert response.headers["access-control-allow-headers"] == "Content-Type"


# ── POST /search ──────────────────────────────────────────────────


class TestSearchEndpoint:
    def test_fresh_search(self, client, adapters):
        response = client.post("/search", json={"query": "dishwasher pump"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["cached"] is False
        assert data["total"] == 3
        assert len(data["results"]) == 3
        first = data["results"][0]
        assert set(first) == {"title", "source_url", "image_url", "source_name", "description", "relevance_score"}
        assert [r["relevance_score"] for r in data["results"]] == sorted(
            (r["relevance_score"] for r in data["results"]), reverse=True
        )
        _assert_cors(response)

    def test_second_call_is_cached(self, client, adapters):
        first = client.post("/search", json={"query": "Dishwasher pump"}).json()
        second = client.post("/search", json={"query": "  dishwasher PUMP "}).json()

        assert second["cached"] is True
        assert second["results"] == first["results"]
        assert all(len(a.queries) == 1 for a in adapters)

    def test_cached_source_filter(self, client, store):
        until = FIXED_NOW + timedelta(hours=2)
        for name in ("guide-source", "forum-source", "video-source"):
            store.rows.append(("blender", make_item(f"{name} blender", name, score=40), until))

        response = client.post("/search", json={"query": "blender", "sources": ["forum-source"]})

        data = response.json()
        assert data["cached"] is True
        assert data["total"] == 1
        assert data["results"][0]["source_name"] == "forum-source"

    def test_sources_default_to_all(self, client, adapters):
        client.post("/search", json={"query": "dishwasher"})
        assert all(a.queries == ["dishwasher"] for a in adapters)

    @pytest.mark.parametrize("body", [{"query": "a"}, {"query": "   "}, {}, {"query": None}])
    def test_short_or_missing_query(self, client, adapters, body):
        response = client.post("/search", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Query must be at least 2 characters long"}
        assert all(a.queries == [] for a in adapters)
        _assert_cors(response)

    def test_malformed_body(self, client):
        response = client.post("/search", content=b"not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        _assert_cors(response)

    def test_request_id_header(self, client):
        response = client.post("/search", json={"query": "oven"}, headers={"x-request-id": "req-123"})
        assert response.headers["x-request-id"] == "req-123"


class TestSearchEndpointFailures:
    def test_missing_configuration_is_500(self, adapters):
        def unconfigured():
            raise ConfigurationFailure("Missing database configuration (DATABASE_URL)")

        app.dependency_overrides[get_search_aggregator] = lambda: SearchAggregator(
            cache=SqlSearchCacheStore(unconfigured),
            adapters=adapters,
        )
        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.post("/search", json={"query": "oven door"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Missing database configuration (DATABASE_URL)",
        }
        assert all(a.queries == [] for a in adapters)
        _assert_cors(response)

    def test_unexpected_error_is_500(self, adapters):
        class BrokenStore(FakeCacheStore):
            async def lookup(self, normalized_query, now):
                raise RuntimeError("boom")

        app.dependency_overrides[get_search_aggregator] = lambda: SearchAggregator(
            cache=BrokenStore(),
            adapters=adapters,
        )
        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.post("/search", json={"query": "oven door"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "boom"}

    def test_cache_write_failure_still_200(self, adapters):
        app.dependency_overrides[get_search_aggregator] = lambda: SearchAggregator(
            cache=FakeCacheStore(fail_writes=True),
            adapters=adapters,
        )
        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.post("/search", json={"query": "dishwasher"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["cached"] is False
        assert response.json()["total"] == 3


# ── OPTIONS /search and health ────────────────────────────────────


class TestPreflightAndHealth:
    def test_preflight(self, client):
        response = client.options("/search")

        assert response.status_code == 200
        assert response.content == b""
        _assert_cors(response)
        assert "OPTIONS" in response.headers["access-control-allow-methods"]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
