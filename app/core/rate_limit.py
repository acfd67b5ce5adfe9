"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

- The limiter instance is owned by the application (``app.state.rate_limiter``),
  built by the app factory and shared by every request.
- Requests are keyed by the client's network address.
- Routes opt in with ``dependencies=[Depends(enforce_rate_limit)]``; the health
  descriptor does not.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.core.config import AppSettings, settings
from app.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)


def build_rate_limiter(app_settings: AppSettings | None = None) -> InMemorySlidingWindowRateLimiter:
    """Create the per-process limiter from configuration."""

    cfg = app_settings or settings.app
    return InMemorySlidingWindowRateLimiter(
        limit=cfg.rate_limit_requests,
        window_seconds=cfg.rate_limit_window_seconds,
    )


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    """Return the limiter owned by the running application."""

    return request.app.state.rate_limiter


def client_identifier(request: Request) -> str:
    """Identify the requester by source address."""

    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency admitting or rejecting the current request.

    Raises:
        RateLimitAppError: When the client exhausted its quota (handled as 429).
    """

    if not request.app.state.settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter(request)
    client_id = client_identifier(request)

    result = limiter.consume(client_id)
    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "client": client_id,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "client": client_id,
            "limit": result.limit,
            "path": request.url.path,
        },
    )
    raise RateLimitAppError()


async def run_idle_eviction(
    limiter: InMemorySlidingWindowRateLimiter,
    interval_seconds: float,
) -> None:
    """Periodically drop idle clients until cancelled."""

    while True:
        await asyncio.sleep(interval_seconds)
        removed = limiter.evict_idle()
        if removed:
            logger.info(
                "rate_limit.evicted_idle",
                extra={"removed": removed, "tracked": len(limiter)},
            )
