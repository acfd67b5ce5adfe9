"""Rate limiting adapters.

The API layer depends on ``AbstractRateLimiter`` only, so the in-memory
sliding window can later be replaced by a shared store without touching routes.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemorySlidingWindowRateLimiter",
    "RateLimitResult",
]
