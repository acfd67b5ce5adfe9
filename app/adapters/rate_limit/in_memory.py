"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- State is lost on restart.
- Client entries are kept until ``evict_idle`` is called; nothing calls it
  unless APP_RATE_LIMIT_EVICTION_INTERVAL_SECONDS is configured.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting admitted requests in a trailing window per key.

    Each key owns an ordered deque of admission timestamps. On every call the
    timestamps that fell out of the window are pruned, then the request is
    admitted only if fewer than ``limit`` remain. Rejected requests are not
    recorded, so a client that keeps hammering regains capacity as soon as its
    oldest admitted request ages out.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum admitted requests within any trailing window.
            window_seconds: Window length in seconds.
            clock: Time source returning seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        # Guards against threadpool callers; the check itself never awaits.
        self._lock = threading.Lock()
        self._timestamps_by_key: dict[str, deque[float]] = {}

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __len__(self) -> int:
        return len(self._timestamps_by_key)

    def _prune(self, timestamps: deque[float], now: float) -> None:
        # A timestamp exactly one window old no longer counts.
        while timestamps and now - timestamps[0] >= self._window_seconds:
            timestamps.popleft()

    def consume(self, key: str, *, now: float | None = None) -> RateLimitResult:
        """Prune, decide and (when admitted) record a request for ``key``.

        Args:
            key: Client identifier.
            now: Evaluation time in seconds; defaults to the configured clock.

        Returns:
            RateLimitResult with the admission decision.
        """
        if now is None:
            now = self._clock()

        with self._lock:
            timestamps = self._timestamps_by_key.setdefault(key, deque())
            self._prune(timestamps, now)

            if len(timestamps) >= self._limit:
                return RateLimitResult(allowed=False, limit=self._limit, remaining=0)

            timestamps.append(now)
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=self._limit - len(timestamps),
            )

    def count(self, key: str, *, now: float | None = None) -> int:
        """Return how many admitted requests of ``key`` are inside the window."""
        if now is None:
            now = self._clock()

        with self._lock:
            timestamps = self._timestamps_by_key.get(key)
            if not timestamps:
                return 0
            return sum(1 for ts in timestamps if now - ts < self._window_seconds)

    def evict_idle(self, *, now: float | None = None) -> int:
        """Drop keys with no admitted request left inside the window.

        Returns:
            Number of keys removed.
        """
        if now is None:
            now = self._clock()

        with self._lock:
            idle = [
                key
                for key, timestamps in self._timestamps_by_key.items()
                if not timestamps or now - timestamps[-1] >= self._window_seconds
            ]
            for key in idle:
                del self._timestamps_by_key[key]
            return len(idle)
