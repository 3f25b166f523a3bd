"""HTTP-level tests for the search and report endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.catalog import get_catalog
from app.errors import CatalogUnavailableError
from app.main import app, get_important_terms


@pytest.fixture
def client(catalog):
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_important_terms] = lambda: ["Cool", "Amazing", "Perfect", "Kids"]
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_search_returns_matching_items(client):
    response = client.get("/api/products/search", params={"query": "kids"})

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [2, 4]


def test_search_passes_quotes_through(client):
    response = client.get("/api/products/search", params={"query": '"Amazing"'})

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Amazing"]


def test_search_with_no_hits_is_an_empty_list(client):
    response = client.get("/api/products/search", params={"query": "toaster"})

    assert response.status_code == 200
    assert response.json() == []


def test_search_requires_query_parameter(client):
    assert client.get("/api/products/search").status_code == 422


def test_report_shape(client):
    response = client.get("/api/products/report")

    assert response.status_code == 200
    assert response.json() == {
        "productCount": 6,
        "searchTermHits": {"Cool": 1, "Amazing": 2, "Perfect": 1, "Kids": 2},
    }


def test_catalog_outage_is_503():
    broken = MagicMock()
    broken.list_all.side_effect = CatalogUnavailableError("down")
    broken.count.side_effect = CatalogUnavailableError("down")
    app.dependency_overrides[get_catalog] = lambda: broken
    app.dependency_overrides[get_important_terms] = lambda: ["Cool"]
    try:
        client = TestClient(app)
        assert client.get("/api/products/search", params={"query": "x"}).status_code == 503
        assert client.get("/api/products/report").status_code == 503
    finally:
        app.dependency_overrides.clear()


def test_health_reports_item_count(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["productCount"] == 6


def test_failed_term_search_is_500():
    flaky = MagicMock()
    flaky.count.return_value = 3
    flaky.list_all.side_effect = RuntimeError("corrupt document")
    app.dependency_overrides[get_catalog] = lambda: flaky
    app.dependency_overrides[get_important_terms] = lambda: ["Cool"]
    try:
        response = TestClient(app).get("/api/products/report")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert "Cool" in response.json()["detail"]


def test_reindex_needs_elasticsearch_backend(client):
    assert client.post("/reindex").status_code == 400
