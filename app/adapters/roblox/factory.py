"""Factory for the upstream API client."""

import httpx

from app.adapters.roblox.base import AbstractGamepassAPI
from app.adapters.roblox.httpx_client import RobloxAPIClient
from app.core.config import UpstreamSettings, settings


def create_roblox_client(
    upstream: UpstreamSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AbstractGamepassAPI:
    """Build the upstream client from configuration.

    Args:
        upstream: Upstream settings; defaults to the global settings.
        http_client: Optional transport-level client to reuse.

    Returns:
        AbstractGamepassAPI: Configured client instance.
    """
    return RobloxAPIClient(upstream or settings.upstream, http_client=http_client)
