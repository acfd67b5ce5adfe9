"""Application factory for the FastAPI app.

Centralizes app construction (state, middleware, handlers, routers) so tests
can build isolated instances with their own limiter and upstream client.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.adapters.roblox.base import AbstractGamepassAPI
from app.adapters.roblox.factory import create_roblox_client
from app.api.routes import gamepasses_router, health_router
from app.core.config import Settings, settings as default_settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations
from app.core.rate_limit import build_rate_limiter, run_idle_eviction
from app.services.proxy_service import GamepassProxyService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the optional idle-client sweep and close the upstream client."""
    eviction_task: asyncio.Task | None = None
    interval = app.state.settings.app.rate_limit_eviction_interval_seconds
    limiter = app.state.rate_limiter

    if interval and isinstance(limiter, InMemorySlidingWindowRateLimiter):
        eviction_task = asyncio.create_task(run_idle_eviction(limiter, interval))

    yield

    if eviction_task is not None:
        eviction_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await eviction_task

    await app.state.proxy_service.client.aclose()
    logger.info("server.stopped")


def create_app(
    *,
    app_settings: Settings | None = None,
    rate_limiter: AbstractRateLimiter | None = None,
    gamepass_client: AbstractGamepassAPI | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        app_settings: Settings to use; defaults to the process-wide settings.
        rate_limiter: Limiter owning the per-client windows; built from
            settings when omitted.
        gamepass_client: Upstream client; built from settings when omitted.

    Returns:
        Configured FastAPI app with state, middleware, handlers and routers.
    """
    cfg = app_settings if app_settings is not None else default_settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    app = FastAPI(
        title="Roblox Gamepass Proxy API",
        description=(
            "Thin proxy in front of the Roblox game pass APIs. Relays upstream "
            "responses verbatim, adds CORS headers and a per-client rate limit."
        ),
        version="1.0.0",
        debug=cfg.app.debug,
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.rate_limiter = (
        rate_limiter if rate_limiter is not None else build_rate_limiter(cfg.app)
    )
    app.state.proxy_service = GamepassProxyService(
        client=(
            gamepass_client
            if gamepass_client is not None
            else create_roblox_client(cfg.upstream)
        )
    )

    # Middleware (last added runs first: CORS wraps request id)
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.app.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(gamepasses_router)

    apply_openapi_customizations(
        app,
        rate_limit_description=(
            f"Rate limited to {cfg.app.rate_limit_requests} requests per "
            f"{cfg.app.rate_limit_window_seconds:g} seconds per client address."
        ),
    )

    return app
