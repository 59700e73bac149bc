"""
Rate limiting infrastructure for Facteur.
"""

from facteur.infrastructure.rate_limiting.rate_limiter import RateLimiter

__all__ = ["RateLimiter"]
