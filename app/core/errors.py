"""Application-level exception types.

This module defines domain errors raised by the rate limiter dependency and
the upstream client, enabling consistent error handling, logging, and API
responses.
"""

from __future__ import annotations

from dataclasses import dataclass


RATE_LIMIT_EXCEEDED_MESSAGE = "Rate limit exceeded"


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code (used in logs).
        message: Human-readable error message.
    """

    code: str
    message: str

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


@dataclass
class RateLimitAppError(AppError):
    """Raised when a client exhausted its quota within the trailing window."""

    code: str = "rate_limit_exceeded"
    message: str = RATE_LIMIT_EXCEEDED_MESSAGE


@dataclass
class UpstreamAppError(AppError):
    """Raised when the outbound call fails or returns a non-2xx status.

    Attributes:
        category: Fixed, per-route description of what failed
            (e.g. "Failed to fetch gamepass details").
        status_code: Upstream HTTP status when one was received, else None.
    """

    category: str = "Failed to fetch upstream resource"
    status_code: int | None = None

    @property
    def http_status(self) -> int:
        return self.status_code or 500
