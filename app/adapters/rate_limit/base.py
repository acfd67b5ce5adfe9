"""Rate limiter interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of an admission decision.

    Attributes:
        allowed: Whether the request is admitted.
        limit: Max admitted requests per trailing window.
        remaining: Requests still admissible right after this decision.
    """

    allowed: bool
    limit: int
    remaining: int


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str, *, now: float | None = None) -> RateLimitResult:
        """Evaluate and record one request for ``key``.

        Implementations must not suspend (no awaits) between reading and
        writing the key's state.

        Args:
            key: Client identifier (e.g. source address).
            now: Evaluation time in seconds; defaults to the limiter clock.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def admit(self, key: str, now: float | None = None) -> bool:
        """Shorthand for ``consume(key, now=now).allowed``."""
        return self.consume(key, now=now).allowed
