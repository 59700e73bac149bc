"""
Rate Limiter Adapter - wraps shared RateLimiterRegistry for inbound events.
"""

from typing import Any, Dict, Optional

from shared.resilience.rate_limiter import (
    RateLimitConfig,
    RateLimiterRegistry,
    TokenBucket,
)


class RateLimiter:
    """
    Per-user inbound event limiter.

    Each user gets one default bucket, plus one bucket per event type that
    has its own limit configured.

    Attributes:
        default_limit: Default events per window
        window_seconds: Time window in seconds
        per_type_limits: Per-event-type limits
    """

    def __init__(
        self,
        limit: int = 100,
        window_seconds: int = 60,
        per_type_limits: Optional[Dict[str, int]] = None,
    ):
        """
        Initialize adapter.

        Args:
            limit: Default maximum events allowed in window
            window_seconds: Time window in seconds
            per_type_limits: Optional per-event-type limits
                Example: {"sendMessage": 60, "sendFriendRequest": 10}
        """
        if limit <= 0 or window_seconds <= 0:
            raise ValueError("limit and window_seconds must be positive")

        self.default_limit = limit
        self.window_seconds = window_seconds
        self.per_type_limits = per_type_limits or {}

        self._registry = RateLimiterRegistry(
            default_config=self._config_for(limit)
        )

    def _config_for(self, limit: int) -> RateLimitConfig:
        return RateLimitConfig(
            tokens_per_second=limit / self.window_seconds,
            burst_size=limit,
        )

    def _get_limiter(
        self, identifier: str, message_type: Optional[str] = None
    ) -> TokenBucket:
        if message_type and message_type in self.per_type_limits:
            return self._registry.get_limiter(
                f"{identifier}:{message_type}",
                self._config_for(self.per_type_limits[message_type]),
            )
        return self._registry.get_limiter(identifier)

    async def check_rate_limit(
        self,
        identifier: str,
        message_type: Optional[str] = None,
    ) -> bool:
        """
        Check if identifier is within rate limit (consumes one token).

        Returns:
            True if allowed, False if rate limited
        """
        return self._get_limiter(identifier, message_type).try_acquire(tokens=1.0)

    def get_remaining(
        self,
        identifier: str,
        message_type: Optional[str] = None,
    ) -> int:
        """Get remaining events (approximate)."""
        return int(self._get_limiter(identifier, message_type).available_tokens)

    def get_retry_after_seconds(
        self,
        identifier: str,
        message_type: Optional[str] = None,
    ) -> int:
        """Get whole seconds until one more event is allowed."""
        seconds = self._get_limiter(identifier, message_type).seconds_until_available()
        if seconds <= 0:
            return 0
        return int(seconds) + 1

    def get_stats(self) -> Dict[str, Any]:
        return {
            "default_limit": self.default_limit,
            "window_seconds": self.window_seconds,
            "per_type_limits": dict(self.per_type_limits),
            "tracked_buckets": len(self._registry),
        }

    def reset(self, identifier: str) -> None:
        """Drop every bucket of an identifier (called on last disconnect)."""
        self._registry.remove_limiter(identifier)
        for message_type in self.per_type_limits:
            self._registry.remove_limiter(f"{identifier}:{message_type}")
