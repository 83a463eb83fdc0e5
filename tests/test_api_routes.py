"""Tests for the HTTP API."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docweave.api.routes import router


@pytest.fixture
def client():
    """Create a test client for the API."""
    app = FastAPI()
    app.include_router(router, prefix="/api")
    return TestClient(app)


@pytest.fixture
def documents() -> list[dict]:
    return [
        {
            "id": "a",
            "title": "Root",
            "content": "Intro {{x}} end",
            "is_composite": True,
            "components": {"x": "group:g:t2"},
        },
        {"id": "b", "title": "Variant B", "group_id": "g", "document_type": "t1", "content": "B"},
        {"id": "c", "title": "Variant C", "group_id": "g", "document_type": "t2", "content": "C"},
        {"id": "d", "title": "Replacement D", "content": "D"},
    ]


def test_routes_registered():
    """Test that all endpoints are registered."""
    route_paths = [route.path for route in router.routes]

    for path in [
        "/health",
        "/placeholders/scan",
        "/placeholders/cursor",
        "/placeholders/allocate-key",
        "/placeholders/roundtrip",
        "/compose/walk",
        "/compose/expand",
        "/compose/resolve",
        "/compose/suggest",
        "/presets/overrides",
    ]:
        assert path in route_paths


class TestHealthEndpoint:
    """Test the /api/health endpoint."""

    def test_health_check_returns_ok_status(self, client):
        """Test that health check returns status 'ok'."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "docweave"
        assert "autocomplete_limit" in data["config"]


class TestPlaceholderEndpoints:
    """Test placeholder endpoints."""

    def test_scan(self, client):
        """Test scanning text for placeholders."""
        response = client.post("/api/placeholders/scan", json={"text": "{{a}} and {{b}}"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [p["key"] for p in data["placeholders"]] == ["a", "b"]

    def test_cursor(self, client):
        """Test locating an incomplete placeholder."""
        response = client.post("/api/placeholders/cursor", json={"text": "{{ab", "cursor": 4})

        assert response.status_code == 200
        placeholder = response.json()["placeholder"]
        assert placeholder["key"] == "ab"
        assert placeholder["is_complete"] is False

    def test_cursor_none(self, client):
        """Test no placeholder under the cursor."""
        response = client.post("/api/placeholders/cursor", json={"text": "plain", "cursor": 2})

        assert response.json()["placeholder"] is None

    def test_allocate_key(self, client):
        """Test key allocation."""
        response = client.post(
            "/api/placeholders/allocate-key",
            json={"title": "My Cool Doc!", "existing_keys": ["my_cool_doc"]},
        )

        assert response.json()["key"] == "my_cool_doc_1"

    def test_roundtrip(self, client):
        """Test round-tripping text through units."""
        text = "Hi {{name}} {{}} {{open"
        response = client.post("/api/placeholders/roundtrip", json={"text": text})

        data = response.json()
        assert data["text"] == text
        assert data["segments"][1] == {
            "unit": {
                "key": "name",
                "resolved_content": None,
                "resolved_title": None,
                "is_expanded": False,
            }
        }


class TestComposeEndpoints:
    """Test composition endpoints."""

    def test_walk(self, client, documents):
        """Test walking with an override."""
        response = client.post(
            "/api/compose/walk",
            json={"documents": documents, "root_document_id": "a", "overrides": {"a.x": "d"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        record = data["records"][0]
        assert record["original_document_id"] == "c"
        assert record["override_document_id"] == "d"

    def test_walk_unknown_root(self, client, documents):
        """Test walking from a missing document answers 404."""
        response = client.post(
            "/api/compose/walk", json={"documents": documents, "root_document_id": "zzz"}
        )

        assert response.status_code == 404

    def test_expand(self, client, documents):
        """Test rendering composed content."""
        response = client.post(
            "/api/compose/expand", json={"documents": documents, "root_document_id": "a"}
        )

        assert response.status_code == 200
        assert response.json()["content"] == "Intro C end"

    def test_resolve(self, client, documents):
        """Test resolving a single key."""
        response = client.post(
            "/api/compose/resolve",
            json={"documents": documents, "document_id": "a", "key": "x"},
        )

        data = response.json()
        assert data["resolved"] is True
        assert data["document"]["id"] == "c"
        assert data["unresolved_keys"] == []

    def test_resolve_unmapped(self, client, documents):
        """Test an unmapped key is reported as unresolved."""
        response = client.post(
            "/api/compose/resolve",
            json={"documents": documents, "document_id": "a", "key": "missing"},
        )

        data = response.json()
        assert data["resolved"] is False
        assert data["document"] is None

    def test_suggest(self, client, documents):
        """Test reference suggestions."""
        response = client.post(
            "/api/compose/suggest",
            json={"documents": documents, "query": "replace", "current_document_id": "a"},
        )

        assert [s["id"] for s in response.json()["suggestions"]] == ["d"]

    def test_snapshot_limit(self, client, documents):
        """Test oversized snapshots are rejected."""
        with patch("docweave.api.routes.settings.max_snapshot_documents", 2):
            response = client.post(
                "/api/compose/walk", json={"documents": documents, "root_document_id": "a"}
            )

        assert response.status_code == 413


class TestPresetEndpoints:
    """Test preset override endpoints."""

    def test_preset_overrides(self, client, documents):
        """Test listing overridable placeholders for a preset."""
        response = client.post(
            "/api/presets/overrides",
            json={
                "documents": documents,
                "preset": {
                    "id": "p1",
                    "name": "variant-d",
                    "document_id": "a",
                    "component_overrides": {"x": "d"},
                },
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["records"][0]["override_document_title"] == "Replacement D"
        assert data["overrides"] == {"a.x": "d"}

    def test_preset_without_document(self, client):
        """Test a preset with no document has nothing to override."""
        response = client.post(
            "/api/presets/overrides",
            json={"documents": [], "preset": {"id": "p1", "name": "empty"}},
        )

        assert response.json() == {"preset_id": "p1", "records": [], "overrides": {}}


def test_create_app_serves_api():
    """Test the application factory mounts the router under /api."""
    from docweave.api import create_app

    with TestClient(create_app()) as app_client:
        response = app_client.get("/api/health")

    assert response.status_code == 200
    assert app_client.app.version == "0.1.0"


@pytest.mark.asyncio
async def test_route_handler_called_directly(documents):
    """Test a route coroutine can be awaited without the HTTP layer."""
    from docweave.api.routes import ComposeRequest, expand_composition

    request = ComposeRequest(documents=documents, root_document_id="a", overrides={"x": "d"})

    result = await expand_composition(request)

    assert result == {"root_document_id": "a", "content": "Intro D end"}
