"""Gamepass proxy service: query normalization and upstream relay.

Routes hand raw query values to this service; it applies the defaults and
clamps, builds a ``ProxyRequest`` and performs the single upstream call.
Upstream payloads are returned as-is.
"""

from __future__ import annotations

import re
from typing import Any

from app.adapters.roblox.base import AbstractGamepassAPI
from app.schemas.proxy import ProxyRequest

DEFAULT_LIMIT = 50
MAX_LIMIT = 100

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)", re.ASCII)


def parse_limit(raw: str | None) -> int:
    """Resolve the ``limit`` query parameter.

    Takes the leading integer of the value (``"10abc"`` -> 10). Missing,
    non-numeric and zero values fall back to the default; anything above the
    maximum is capped.

    Examples:
        >>> parse_limit(None)
        50
        >>> parse_limit("500")
        100
        >>> parse_limit("ten")
        50
    """
    if raw is None:
        return DEFAULT_LIMIT

    match = _LEADING_INT.match(raw)
    value = int(match.group(1)) if match else 0
    return min(value or DEFAULT_LIMIT, MAX_LIMIT)


def build_proxy_request(
    target_id: str,
    *,
    cursor: str | None = None,
    limit: str | None = None,
    page: str | None = None,
) -> ProxyRequest:
    return ProxyRequest(
        target_id=target_id,
        cursor=cursor or "",
        limit=parse_limit(limit),
        page=page,
    )


class GamepassProxyService:
    """Relay game pass lookups to the upstream API.

    Attributes:
        client: Upstream API client.
    """

    def __init__(self, client: AbstractGamepassAPI) -> None:
        self.client = client

    async def gamepass_details(self, gamepass_id: str) -> Any:
        return await self.client.get_gamepass_details(gamepass_id)

    async def user_inventory(self, request: ProxyRequest) -> Any:
        # request.page is intentionally not forwarded
        return await self.client.get_user_inventory(
            request.target_id,
            cursor=request.cursor,
            limit=request.limit,
        )

    async def creator_gamepasses(self, request: ProxyRequest) -> Any:
        return await self.client.get_user_creations(
            request.target_id,
            cursor=request.cursor,
            limit=request.limit,
        )
