from __future__ import annotations

from fastapi.testclient import TestClient


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert isinstance(generated, str)

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None


def test_error_body_carries_request_id(client: TestClient, upstream):
    upstream.status_code = 404

    resp = client.get("/api/gamepasses/1/details", headers={"X-Request-ID": "req-404"})

    assert resp.status_code == 404
    assert resp.json()["request_id"] == "req-404"
    assert resp.headers.get("X-Request-ID") == "req-404"


def test_unhandled_error_keeps_cors_and_request_id(app):
    @app.get("/api/explode")
    async def explode():
        raise RuntimeError("secret internals")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get(
        "/api/explode",
        headers={"Origin": "https://example.com", "X-Request-ID": "req-500"},
    )

    assert resp.status_code == 500
    assert resp.headers.get("access-control-allow-origin") == "*"
    assert resp.headers.get("X-Request-ID") == "req-500"
    data = resp.json()
    assert data["error"] == "Internal server error"
    assert data["request_id"] == "req-500"
    assert "secret internals" not in resp.text
