"""Tests for the mock API endpoints."""

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from restaurant_mock.config import Config
from restaurant_mock.server import STATS_ENDPOINTS, create_app
from restaurant_mock.services import RestaurantStore

VALID = {"title": "A", "address": "B", "city": "C"}

NOT_FOUND_HINT = ["POST /restaurants", "POST /restaurants/error", "GET /stats"]


@pytest.fixture
def store():
    """Create a fresh store for each test."""
    return RestaurantStore()


@pytest.fixture
def cfg(tmp_path):
    """Configuration with a static directory that does not exist."""
    return Config(static_dir=str(tmp_path / "missing"))


@pytest.fixture
def client(store, cfg):
    """Test client bound to an app owning the store fixture."""
    with TestClient(create_app(store=store, cfg=cfg)) as test_client:
        yield test_client


class TestCreateRestaurant:
    """Tests for POST /restaurants."""

    def test_valid_restaurant(self, client, store):
        """Test the basic create scenario."""
        response = client.post("/restaurants", json=VALID)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Restaurant data received successfully"
        assert body["total_received"] == 1
        assert body["data"] == {"title": "A", "city": "C", "status": "processed"}
        assert body["processed_at"].endswith("Z")

        assert store.count() == 1
        assert store.list_recent()[0].id == body["id"]

    def test_second_post_gets_new_id(self, client):
        first = client.post("/restaurants", json=VALID).json()
        second = client.post("/restaurants", json=VALID).json()

        assert second["total_received"] == 2
        assert first["id"] != second["id"]

    def test_extra_fields_stored_verbatim(self, client, store):
        payload = {**VALID, "ratings": 4.2, "images": ["a.jpg"], "nested": {"k": [1, 2]}}

        client.post("/restaurants", json=payload)

        record = store.list_recent()[0]
        assert record.field("ratings") == 4.2
        assert record.field("images") == ["a.jpg"]
        assert record.field("nested") == {"k": [1, 2]}

    def test_missing_fields(self, client, store):
        """Test that only missing fields are reported."""
        response = client.post("/restaurants", json={"title": "A"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required fields"
        assert body["missing"] == ["address", "city"]
        assert "timestamp" in body
        assert store.count() == 0

    def test_empty_values_are_missing(self, client, store):
        response = client.post("/restaurants", json={"title": "", "address": "B", "city": None})

        assert response.status_code == 400
        assert response.json()["missing"] == ["title", "city"]
        assert store.count() == 0

    def test_no_body(self, client, store):
        response = client.post("/restaurants")

        assert response.status_code == 400
        assert response.json()["missing"] == ["title", "address", "city"]
        assert store.count() == 0

    def test_invalid_json(self, client, store):
        response = client.post(
            "/restaurants",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON payload"
        assert store.count() == 0

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_json_constants_rejected(self, client, store, constant):
        """Test that NaN/Infinity are refused rather than stored altered."""
        response = client.post(
            "/restaurants",
            content=f'{{"title":"A","address":"B","city":"C","ratings":{constant}}}'.encode(),
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON payload"
        assert store.count() == 0
        assert client.get("/api/restaurants").json() == {"total": 0, "restaurants": []}

    def test_non_json_content_type_ignored(self, client, store):
        """Test that a body not sent as JSON is not parsed."""
        response = client.post(
            "/restaurants",
            content=b'{"title":"A","address":"B","city":"C"}',
            headers={"content-type": "text/plain"},
        )

        assert response.status_code == 400
        assert response.json()["missing"] == ["title", "address", "city"]
        assert store.count() == 0

    def test_json_content_type_with_charset(self, client, store):
        response = client.post(
            "/restaurants",
            content=b'{"title":"A","address":"B","city":"C"}',
            headers={"content-type": "application/json; charset=utf-8"},
        )

        assert response.status_code == 200
        assert store.count() == 1

    def test_array_body(self, client, store):
        response = client.post("/restaurants", json=[VALID])

        assert response.status_code == 400
        assert response.json()["missing"] == ["title", "address", "city"]
        assert store.count() == 0

    def test_internal_error_keeps_existing_records(self, client, store, monkeypatch):
        """Test that a processing failure returns 500 and leaves the store intact."""
        client.post("/restaurants", json=VALID)

        def broken_add(*_args, **_kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(store, "add", broken_add)
        response = client.post("/restaurants", json=VALID)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["message"] == "disk on fire"
        assert "timestamp" in body
        assert store.count() == 1

    def test_summary_logged(self, client, caplog):
        caplog.set_level(logging.INFO)

        client.post("/restaurants", json={**VALID, "price_range": "€€"})

        assert "📍 A - C" in caplog.text
        assert "💰 €€" in caplog.text


class TestSimulateError:
    """Tests for POST /restaurants/error."""

    @pytest.mark.parametrize("payload", [None, {}, VALID, ["anything"]])
    def test_always_fails(self, client, store, payload):
        response = client.post("/restaurants/error", json=payload)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Simulated server error"
        assert body["message"] == "This is a test error for workflow debugging"
        assert "timestamp" in body
        assert store.count() == 0

    def test_fails_with_records_stored(self, client):
        client.post("/restaurants", json=VALID)

        assert client.post("/restaurants/error").status_code == 500


class TestListRestaurants:
    """Tests for GET /api/restaurants."""

    def test_empty(self, client):
        response = client.get("/api/restaurants")

        assert response.status_code == 200
        assert response.json() == {"total": 0, "restaurants": []}

    def test_most_recent_first(self, client):
        for title in ("first", "second", "third"):
            client.post("/restaurants", json={**VALID, "title": title})

        body = client.get("/api/restaurants").json()

        assert body["total"] == 3
        assert [r["title"] for r in body["restaurants"]] == ["third", "second", "first"]
        assert all(r["id"].startswith("rest_") for r in body["restaurants"])
        assert all("received_at" in r for r in body["restaurants"])

    def test_listing_twice_keeps_order(self, client):
        """Test that reading the list does not reverse the stored order."""
        for title in ("first", "second", "third"):
            client.post("/restaurants", json={**VALID, "title": title})

        first = client.get("/api/restaurants").json()
        second = client.get("/api/restaurants").json()

        assert first["total"] == second["total"] == 3
        assert first["restaurants"] == second["restaurants"]

    def test_extra_fields_returned(self, client):
        client.post("/restaurants", json={**VALID, "website": "https://a.example"})

        restaurant = client.get("/api/restaurants").json()["restaurants"][0]

        assert restaurant["website"] == "https://a.example"


class TestStats:
    """Tests for GET /stats."""

    def test_stats(self, client):
        client.post("/restaurants", json=VALID)

        response = client.get("/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["server"] == "Test API for n8n workflow"
        assert body["total_restaurants_received"] == 1
        assert body["endpoints"] == STATS_ENDPOINTS
        assert body["uptime"] >= 0
        assert body["timestamp"].endswith("Z")

    def test_total_tracks_store(self, client, store):
        for expected in range(1, 4):
            client.post("/restaurants", json=VALID)
            assert client.get("/stats").json()["total_restaurants_received"] == store.count() == expected

    def test_uptime_non_decreasing(self, client):
        first = client.get("/stats").json()["uptime"]
        second = client.get("/stats").json()["uptime"]

        assert second >= first

    def test_server_name_from_config(self, store, tmp_path):
        cfg = Config(server_name="Staging mock", static_dir=str(tmp_path))
        with TestClient(create_app(store=store, cfg=cfg)) as test_client:
            assert test_client.get("/stats").json()["server"] == "Staging mock"


class TestNotFound:
    """Tests for the 404 fallback."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/unknown"),
            ("POST", "/api/restaurants"),
            ("GET", "/restaurants"),
            ("DELETE", "/stats"),
            ("GET", "/unknown?page=2"),
        ],
    )
    def test_unmatched_routes(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 404
        assert response.json() == {
            "error": "Endpoint not found",
            "available_endpoints": NOT_FOUND_HINT,
        }

    def test_logs_route(self, client, caplog):
        caplog.set_level(logging.INFO)

        client.get("/unknown?page=2")

        assert "Route not found: GET /unknown?page=2" in caplog.text


class TestStaticFiles:
    """Tests for serving the public directory."""

    @pytest.fixture
    def static_client(self, store, tmp_path):
        public = tmp_path / "public"
        public.mkdir()
        (public / "index.html").write_text("<h1>mock</h1>", encoding="utf-8")
        cfg = Config(static_dir=str(public))
        with TestClient(create_app(store=store, cfg=cfg)) as test_client:
            yield test_client

    def test_serves_index_at_root(self, static_client):
        response = static_client.get("/")

        assert response.status_code == 200
        assert "<h1>mock</h1>" in response.text

    def test_serves_file(self, static_client):
        response = static_client.get("/index.html")

        assert response.status_code == 200
        assert "<h1>mock</h1>" in response.text

    def test_api_routes_take_precedence(self, static_client):
        assert static_client.get("/stats").status_code == 200
        assert static_client.post("/restaurants", json=VALID).status_code == 200

    @pytest.mark.parametrize(
        ("method", "path"),
        [("GET", "/nope.html"), ("POST", "/unknown"), ("GET", "/restaurants")],
    )
    def test_unmatched_falls_back(self, static_client, method, path):
        response = static_client.request(method, path)

        assert response.status_code == 404
        assert response.json()["available_endpoints"] == NOT_FOUND_HINT


class TestLifespan:
    """Tests for the startup and shutdown banner."""

    def test_banner(self, store, cfg, caplog):
        caplog.set_level(logging.INFO)

        with TestClient(create_app(store=store, cfg=cfg)):
            pass

        assert "Restaurant mock API started" in caplog.text
        assert "Local: http://localhost:3000" in caplog.text
        assert "Network: NOT CONFIGURED" in caplog.text
        assert "Shutting down server" in caplog.text


async def test_create_and_list_over_asgi(store, cfg):
    """Test the app through httpx's ASGI transport."""
    app = create_app(store=store, cfg=cfg)
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        created = await ac.post("/restaurants", json=VALID)
        listed = await ac.get("/api/restaurants")

    assert created.status_code == 200
    assert listed.json()["restaurants"][0]["id"] == created.json()["id"]
