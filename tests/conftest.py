"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It sets TESTING so settings never read a .env file, and provides helpers to
build an app whose upstream calls are answered by ``httpx.MockTransport``.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Callable
from unittest.mock import Mock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.adapters.roblox.httpx_client import RobloxAPIClient
from app.core.app_factory import create_app
from app.core.config import settings


class UpstreamRecorder:
    """Mock transport handler that records outbound requests.

    Responds with ``status_code`` and ``json_body`` unless ``handler`` is set,
    in which case it is called with the request and must return a response.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: object = {"id": 123}
        self.handler: Callable[[httpx.Request], httpx.Response] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream() -> UpstreamRecorder:
    return UpstreamRecorder()


@pytest.fixture
def clock() -> Mock:
    """Controllable limiter clock (seconds)."""
    return Mock(return_value=1000.0)


@pytest.fixture
def limiter(clock: Mock) -> InMemorySlidingWindowRateLimiter:
    return InMemorySlidingWindowRateLimiter(limit=100, window_seconds=60, clock=clock)


@pytest.fixture
def app(upstream: UpstreamRecorder, limiter: InMemorySlidingWindowRateLimiter) -> FastAPI:
    """App wired to the mock upstream and a clock-controlled limiter."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return create_app(
        rate_limiter=limiter,
        gamepass_client=RobloxAPIClient(settings.upstream, http_client=http_client),
    )


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
