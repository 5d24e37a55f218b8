from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from melodies_mcp import http_app
from melodies_mcp.config import Settings
from melodies_mcp.http_app import _compute_tools_hash, create_app
from melodies_mcp.tools import tool_names


@pytest.fixture
def app(client):
    return create_app(Settings(name="melodies-test"), client=client)


def test_health(app):
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "status": "healthy", "api_key_configured": True}


def test_health_reports_missing_api_key(unconfigured_client):
    app = create_app(Settings(), client=unconfigured_client)
    assert TestClient(app).get("/health").json()["api_key_configured"] is False


def test_discovery_lists_all_tools(app):
    body = TestClient(app).get("/mcp/discovery").json()
    assert body["server"] == "melodies-test"
    assert body["tool_count"] == 17
    assert [t["name"] for t in body["tools"]] == tool_names()
    assert body["tools_hash"] == _compute_tools_hash(tool_names())


def test_tools_hash_ignores_order():
    assert _compute_tools_hash(["b", "a"]) == _compute_tools_hash(["a", "b"])


def test_metrics_reflect_tool_calls(app):
    app.state.metrics.record("get_genres", 12.5, error=False)
    response = TestClient(app).get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "melodies_mcp_healthy 1" in response.text
    assert 'melodies_mcp_tool_calls_total{tool="get_genres"} 1.0' in response.text
    assert 'melodies_mcp_tool_errors_total{tool="get_genres"} 0.0' in response.text


def test_lifespan_leaves_injected_client_open(client):
    client.aclose = AsyncMock()
    app = create_app(Settings(), client=client)
    with TestClient(app):
        pass
    client.aclose.assert_not_awaited()


def test_lifespan_closes_client_it_built(client, monkeypatch):
    client.aclose = AsyncMock()
    monkeypatch.setattr(http_app, "build_client", lambda settings: client)
    app = http_app.create_app(Settings())
    with TestClient(app):
        pass
    client.aclose.assert_awaited_once()
