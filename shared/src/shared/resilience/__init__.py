"""
Resilience patterns shared by Facteur components.

- Rate Limiting: Token bucket rate limiter
"""

from shared.resilience.rate_limiter import (
    RateLimitConfig,
    RateLimiterRegistry,
    TokenBucket,
)

__all__ = [
    "RateLimitConfig",
    "RateLimiterRegistry",
    "TokenBucket",
]
