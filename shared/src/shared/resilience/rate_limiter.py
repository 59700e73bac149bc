"""
Rate limiting using token bucket algorithm.

Protects the service from clients flooding it with inbound events.
"""

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiter."""

    tokens_per_second: float = 10.0
    """Rate at which tokens are added to the bucket (requests per second)"""

    burst_size: int = 20
    """Maximum number of tokens in the bucket (burst capacity)"""

    initial_tokens: Optional[int] = None
    """Initial number of tokens (defaults to burst_size)"""


class TokenBucket:
    """
    Token bucket rate limiter.

    Algorithm:
    - Bucket has a maximum capacity (burst_size)
    - Tokens are added at a constant rate (tokens_per_second)
    - Each request consumes tokens
    - If not enough tokens, request is rejected

    Example:
        limiter = TokenBucket(RateLimitConfig(tokens_per_second=2, burst_size=5))

        if limiter.try_acquire():
            handle_event()
        else:
            reject_event()
    """

    def __init__(self, config: Optional[RateLimitConfig] = None):
        self.config = config or RateLimitConfig()
        self._tokens = float(self._initial_tokens())
        self._last_update = time.monotonic()
        self._lock = Lock()

    def _initial_tokens(self) -> int:
        if self.config.initial_tokens is not None:
            return self.config.initial_tokens
        return self.config.burst_size

    def _refill_tokens(self) -> None:
        """Refill tokens based on elapsed time."""
        now = time.monotonic()
        elapsed = now - self._last_update

        new_tokens = elapsed * self.config.tokens_per_second
        self._tokens = min(self._tokens + new_tokens, float(self.config.burst_size))
        self._last_update = now

    def try_acquire(self, tokens: float = 1.0) -> bool:
        """
        Try to acquire tokens without blocking.

        Args:
            tokens: Number of tokens to acquire

        Returns:
            True if tokens acquired, False if rate limited
        """
        with self._lock:
            self._refill_tokens()

            if self._tokens >= tokens:
                self._tokens -= tokens
                return True

            logger.debug(
                f"Rate limit exceeded. "
                f"Requested: {tokens}, Available: {self._tokens:.2f}"
            )
            return False

    def seconds_until_available(self, tokens: float = 1.0) -> float:
        """Time in seconds until `tokens` can be acquired (0 if available now)."""
        with self._lock:
            self._refill_tokens()
            missing = tokens - self._tokens
            if missing <= 0:
                return 0.0
            return missing / self.config.tokens_per_second

    @property
    def available_tokens(self) -> float:
        """Get current number of available tokens."""
        with self._lock:
            self._refill_tokens()
            return self._tokens

    @property
    def tokens_per_second(self) -> float:
        """Get configured rate (tokens per second)."""
        return self.config.tokens_per_second

    def reset(self) -> None:
        """Reset the rate limiter to initial state."""
        with self._lock:
            self._tokens = float(self._initial_tokens())
            self._last_update = time.monotonic()


class RateLimiterRegistry:
    """
    Registry of token buckets keyed by an arbitrary identifier.

    Example:
        registry = RateLimiterRegistry(
            default_config=RateLimitConfig(tokens_per_second=5)
        )
        registry.get_limiter("user_123").try_acquire()
    """

    def __init__(self, default_config: Optional[RateLimitConfig] = None):
        self.default_config = default_config or RateLimitConfig()
        self._limiters: Dict[str, TokenBucket] = {}
        self._lock = Lock()

    def get_limiter(
        self, key: str, config: Optional[RateLimitConfig] = None
    ) -> TokenBucket:
        """
        Get or create rate limiter for key.

        Args:
            key: Identifier for the limiter (e.g., user_id)
            config: Config used only when the limiter is created

        Returns:
            TokenBucket instance for the key
        """
        with self._lock:
            limiter = self._limiters.get(key)
            if limiter is None:
                limiter = TokenBucket(config or self.default_config)
                self._limiters[key] = limiter
            return limiter

    def remove_limiter(self, key: str) -> bool:
        """Remove limiter for key. Returns True if it existed."""
        with self._lock:
            return self._limiters.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all limiters."""
        with self._lock:
            self._limiters.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._limiters)
