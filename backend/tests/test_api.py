"""HTTP-level tests for the API routes."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jsonschema import validate

from pricehub.core.exceptions import PersistenceError
from pricehub.dependencies import get_factory, get_home_feed_service, get_listing_store
from pricehub.main import app
from pricehub.services.home_feed_service import HomeFeedService
from pricehub.services.listing_store import ListingStore


LISTING_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "platform", "name", "price", "image", "link"],
        "properties": {
            "id": {"type": "integer", "minimum": 1},
            "platform": {"type": "string"},
            "name": {"type": "string", "minLength": 1},
            "price": {"type": "number", "exclusiveMinimum": 0},
            "image": {"type": ["string", "null"]},
            "link": {"type": ["string", "null"]},
        },
        "additionalProperties": False,
    },
}

HOME_FEED_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["category", "platform", "products"],
        "properties": {
            "category": {"type": "string"},
            "platform": {"type": "string"},
            "products": {
                "type": "array",
                "maxItems": 5,
                "items": {
                    "type": "object",
                    "required": ["platform", "name", "price"],
                    "properties": {"price": {"type": "number", "exclusiveMinimum": 0}},
                },
            },
        },
    },
}

ERROR_SCHEMA = {
    "type": "object",
    "required": ["status", "error"],
    "properties": {
        "status": {"const": "error"},
        "error": {
            "type": "object",
            "required": ["code", "message"],
            "properties": {"code": {"type": "string"}, "message": {"type": "string"}},
        },
    },
}


@pytest_asyncio.fixture
async def client(store, factory):
    app.dependency_overrides[get_listing_store] = lambda: store
    app.dependency_overrides[get_factory] = lambda: factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class TestSearchEndpoint:
    """Tests for GET /api/search."""

    async def test_search_returns_interleaved_listings(self, client):
        response = await client.get("/api/search", params={"q": "iPhone 15", "platforms": "amazon,flipkart"})

        assert response.status_code == 200
        data = response.json()
        validate(instance=data, schema=LISTING_SCHEMA)
        assert [item["platform"] for item in data] == ["amazon", "flipkart", "amazon", "flipkart", "amazon"]
        assert [item["id"] for item in data] == [1, 2, 3, 4, 5]
        assert data[0]["price"] == 69900.0

    async def test_repeat_search_served_from_cache(self, client, calls):
        params = {"q": "iphone 15", "platforms": "amazon,flipkart"}
        first = await client.get("/api/search", params=params)
        calls.clear()

        second = await client.get("/api/search", params=params)

        assert second.status_code == 200
        assert calls == []
        assert second.json() == first.json()

    @pytest.mark.parametrize(
        "params",
        [
            {"platforms": "amazon,flipkart"},
            {"q": "iphone"},
            {"q": "", "platforms": "amazon,flipkart"},
            {"q": "x" * 201, "platforms": "amazon,flipkart"},
        ],
    )
    async def test_bad_request(self, client, params):
        response = await client.get("/api/search", params=params)

        assert response.status_code == 400
        body = response.json()
        validate(instance=body, schema=ERROR_SCHEMA)
        assert body["error"]["code"] == "invalid_request"

    async def test_unsupported_platforms_return_empty_list(self, client, calls):
        response = await client.get("/api/search", params={"q": "iphone", "platforms": "snapdeal,shopclues"})

        assert response.status_code == 200
        assert response.json() == []
        assert calls == []

    async def test_persistence_failure_is_500(self, client, factory):
        failing_store = AsyncMock(spec=ListingStore)
        failing_store.has_records_since.return_value = False
        failing_store.replace_scope.side_effect = PersistenceError("Failed to store listings: connection refused")
        app.dependency_overrides[get_listing_store] = lambda: failing_store

        response = await client.get("/api/search", params={"q": "iphone", "platforms": "amazon,flipkart"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "persistence_error"


class TestHomeProductsEndpoint:
    """Tests for GET /api/products/home."""

    async def test_home_feed(self, client, factory):
        app.dependency_overrides[get_home_feed_service] = lambda: HomeFeedService(
            factory, platforms=["flipkart"], categories=["smartphones", "headphones"], top_n=5
        )

        response = await client.get("/api/products/home")

        assert response.status_code == 200
        data = response.json()
        validate(instance=data, schema=HOME_FEED_SCHEMA)
        assert [s["category"] for s in data] == ["smartphones", "headphones"]
        assert data[0]["products"][0]["price"] == 65999.0

    async def test_home_feed_missing_adapter_is_500(self, client, factory):
        app.dependency_overrides[get_home_feed_service] = lambda: HomeFeedService(
            factory, platforms=["meesho"], categories=["bags"]
        )

        response = await client.get("/api/products/home")

        assert response.status_code == 500
        validate(instance=response.json(), schema=ERROR_SCHEMA)
        assert response.json()["error"]["code"] == "adapter_not_found"


class TestHistoryEndpoint:
    """Tests for GET /api/user/history."""

    async def test_history_lists_recent_queries(self, client):
        for query in ["iphone 15", "Running Shoes", "iphone 15"]:
            await client.get("/api/search", params={"q": query, "platforms": "amazon,flipkart"})

        response = await client.get("/api/user/history")

        assert response.status_code == 200
        assert sorted(response.json()) == ["iphone 15", "running shoes"]

    async def test_history_empty(self, client):
        response = await client.get("/api/user/history")

        assert response.status_code == 200
        assert response.json() == []


class TestHealthEndpoint:
    """Tests for GET /api/health and the root endpoint."""

    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "ok"
        assert sorted(body["platforms"]) == ["amazon", "flipkart"]

    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "PriceHub API"
