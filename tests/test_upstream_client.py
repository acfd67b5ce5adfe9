"""Unit tests for the httpx-based Roblox API client."""

import asyncio

import httpx
import pytest

from app.adapters.roblox.httpx_client import (
    CREATOR_GAMEPASSES_ERROR,
    GAMEPASS_DETAILS_ERROR,
    RobloxAPIClient,
)
from app.core.config import UpstreamSettings
from app.core.errors import UpstreamAppError


def _client(handler, **overrides) -> RobloxAPIClient:
    upstream = UpstreamSettings(**overrides)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RobloxAPIClient(upstream, http_client=http_client)


def test_details_url_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 5})

    client = _client(handler, user_agent="Custom/2.0")

    assert asyncio.run(client.get_gamepass_details("5")) == {"id": 5}
    assert str(seen[0].url) == "https://apis.roblox.com/game-passes/v1/game-passes/5/details"
    assert seen[0].headers["User-Agent"] == "Custom/2.0"


def test_configurable_base_urls() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = _client(handler, creations_url="http://stub.local/creations")

    asyncio.run(client.get_user_creations("1", cursor="", limit=50))

    assert seen[0].url.host == "stub.local"
    assert seen[0].url.params["assetType"] == "34"


def test_http_status_error_keeps_status() -> None:
    client = _client(lambda request: httpx.Response(429, json={"errors": []}))

    with pytest.raises(UpstreamAppError) as exc_info:
        asyncio.run(client.get_user_creations("1", cursor="", limit=50))

    err = exc_info.value
    assert err.status_code == 429
    assert err.http_status == 429
    assert err.category == CREATOR_GAMEPASSES_ERROR
    assert "429" in err.message


def test_transport_error_has_no_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler)

    with pytest.raises(UpstreamAppError) as exc_info:
        asyncio.run(client.get_gamepass_details("1"))

    err = exc_info.value
    assert err.status_code is None
    assert err.http_status == 500
    assert err.category == GAMEPASS_DETAILS_ERROR
    assert err.message == "timed out"
    assert isinstance(err.__cause__, httpx.ReadTimeout)


def test_injected_http_client_is_not_closed() -> None:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    client = RobloxAPIClient(UpstreamSettings(), http_client=http_client)

    asyncio.run(client.aclose())

    assert http_client.is_closed is False


def test_owned_http_client_uses_configured_timeout() -> None:
    client = RobloxAPIClient(UpstreamSettings(timeout_seconds=2.5))

    assert client._http.timeout.read == 2.5
    asyncio.run(client.aclose())
    assert client._http.is_closed is True


def test_follows_upstream_redirects() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/details"):
            return httpx.Response(302, headers={"Location": "https://apis.roblox.com/final"})
        return httpx.Response(200, json={"id": 7})

    client = _client(handler)

    assert asyncio.run(client.get_gamepass_details("7")) == {"id": 7}
    assert [r.url.path for r in seen] == [
        "/game-passes/v1/game-passes/7/details",
        "/final",
    ]
