"""Roblox API client built on httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.adapters.roblox.base import AbstractGamepassAPI
from app.core.config import UpstreamSettings
from app.core.errors import UpstreamAppError

logger = logging.getLogger(__name__)

GAMEPASS_DETAILS_ERROR = "Failed to fetch gamepass details"
USER_INVENTORY_ERROR = "Failed to fetch user inventory"
CREATOR_GAMEPASSES_ERROR = "Failed to fetch creator gamepasses"

INVENTORY_ASSET_TYPE = "GamePass"


class RobloxAPIClient(AbstractGamepassAPI):
    """Client relaying GET requests to the Roblox web APIs.

    A single ``httpx.AsyncClient`` is shared by all requests; it is created
    here unless one is injected (tests pass a client on ``httpx.MockTransport``).
    """

    def __init__(
        self,
        upstream: UpstreamSettings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            upstream: Resource templates, user agent and timeout.
            http_client: Optional pre-built client. Its lifetime is then owned
                by the caller.
        """
        self._upstream = upstream
        self._owns_client = http_client is None
        if http_client is None:
            kwargs: dict[str, Any] = {}
            if upstream.timeout_seconds is not None:
                kwargs["timeout"] = upstream.timeout_seconds
            http_client = httpx.AsyncClient(**kwargs)
        self._http = http_client
        self._headers = {"User-Agent": upstream.user_agent}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _get_json(
        self,
        url: str,
        *,
        category: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one GET and decode the JSON body.

        Args:
            url: Absolute upstream URL.
            category: Error label reported to the caller on failure.
            params: Query parameters.

        Returns:
            Decoded JSON body.

        Raises:
            UpstreamAppError: With the upstream status for non-2xx responses,
                without a status for transport errors or undecodable bodies.
        """
        logger.info(
            "upstream.request",
            extra={"url": url, "params": params or {}},
        )

        try:
            response = await self._http.get(
                url,
                params=params,
                headers=self._headers,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamAppError(
                code="upstream_http_error",
                message=str(exc),
                category=category,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            raise UpstreamAppError(
                code="upstream_unreachable",
                message=str(exc) or type(exc).__name__,
                category=category,
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamAppError(
                code="upstream_invalid_json",
                message=f"Upstream returned a non-JSON body: {exc}",
                category=category,
            ) from exc

    async def get_gamepass_details(self, gamepass_id: str) -> Any:
        url = self._upstream.gamepass_details_url.format(gamepass_id=gamepass_id)
        return await self._get_json(url, category=GAMEPASS_DETAILS_ERROR)

    async def get_user_inventory(self, user_id: str, *, cursor: str, limit: int) -> Any:
        url = self._upstream.inventory_url.format(user_id=user_id)
        params = {
            "assetType": INVENTORY_ASSET_TYPE,
            "limit": limit,
            "cursor": cursor,
        }
        return await self._get_json(url, category=USER_INVENTORY_ERROR, params=params)

    async def get_user_creations(self, user_id: str, *, cursor: str, limit: int) -> Any:
        params = {
            "userId": user_id,
            "assetType": self._upstream.gamepass_asset_type_id,
            "limit": limit,
            "cursor": cursor,
            "isArchived": "false",
        }
        return await self._get_json(
            self._upstream.creations_url,
            category=CREATOR_GAMEPASSES_ERROR,
            params=params,
        )
