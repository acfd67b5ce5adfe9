"""Tests for query normalization and the proxy service."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.adapters.roblox.base import AbstractGamepassAPI
from app.services.proxy_service import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    GamepassProxyService,
    build_proxy_request,
    parse_limit,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, DEFAULT_LIMIT),
        ("", DEFAULT_LIMIT),
        ("abc", DEFAULT_LIMIT),
        ("0", DEFAULT_LIMIT),
        ("10", 10),
        ("10abc", 10),
        (" 30", 30),
        ("100", MAX_LIMIT),
        ("500", MAX_LIMIT),
        ("12.9", 12),
        ("\u0661\u0660", DEFAULT_LIMIT),
        ("1\u0660", 1),
    ],
)
def test_parse_limit(raw, expected) -> None:
    assert parse_limit(raw) == expected


def test_build_proxy_request_defaults() -> None:
    request = build_proxy_request("999")

    assert request.target_id == "999"
    assert request.cursor == ""
    assert request.limit == 50
    assert request.page is None


def test_build_proxy_request_keeps_page() -> None:
    request = build_proxy_request("999", cursor="abc123", limit="10", page="2")

    assert request.cursor == "abc123"
    assert request.limit == 10
    assert request.page == "2"


def test_inventory_does_not_forward_page() -> None:
    client = AsyncMock(spec=AbstractGamepassAPI)
    client.get_user_inventory.return_value = {"data": []}
    service = GamepassProxyService(client=client)

    result = asyncio.run(
        service.user_inventory(build_proxy_request("999", cursor="abc123", limit="10", page="7"))
    )

    assert result == {"data": []}
    client.get_user_inventory.assert_awaited_once_with("999", cursor="abc123", limit=10)


def test_creator_gamepasses_passes_normalized_values() -> None:
    client = AsyncMock(spec=AbstractGamepassAPI)
    client.get_user_creations.return_value = {"data": [1]}
    service = GamepassProxyService(client=client)

    result = asyncio.run(service.creator_gamepasses(build_proxy_request("42", limit="500")))

    assert result == {"data": [1]}
    client.get_user_creations.assert_awaited_once_with("42", cursor="", limit=100)


def test_gamepass_details_returns_payload_unchanged() -> None:
    payload = {"id": 123, "nested": {"a": [1, 2, None]}}
    client = AsyncMock(spec=AbstractGamepassAPI)
    client.get_gamepass_details.return_value = payload
    service = GamepassProxyService(client=client)

    assert asyncio.run(service.gamepass_details("123")) is payload
