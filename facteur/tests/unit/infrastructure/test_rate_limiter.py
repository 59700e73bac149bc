"""
Unit tests for RateLimiter.

Usage:
    python facteur/tests/unit/infrastructure/test_rate_limiter.py
    pytest facteur/tests/unit/infrastructure/test_rate_limiter.py
"""

from shared.tests import LaborantTest

from facteur.infrastructure.rate_limiting import RateLimiter


class TestRateLimiter(LaborantTest):
    """Unit tests for inbound event rate limiting."""

    component_name = "facteur"
    test_category = "unit"

    async def test_allows_up_to_limit(self):
        """Test the burst equals the configured limit."""
        self.reporter.info("Testing default limit", context="Test")

        limiter = RateLimiter(limit=3, window_seconds=60)

        for _ in range(3):
            assert await limiter.check_rate_limit("1")
        assert not await limiter.check_rate_limit("1")
        assert limiter.get_retry_after_seconds("1") >= 1

    async def test_users_are_independent(self):
        limiter = RateLimiter(limit=1, window_seconds=60)

        assert await limiter.check_rate_limit("1")
        assert await limiter.check_rate_limit("2")
        assert not await limiter.check_rate_limit("1")

    async def test_per_type_limit(self):
        """Test a per-type bucket is separate from the default one."""
        limiter = RateLimiter(
            limit=10, window_seconds=60, per_type_limits={"sendFriendRequest": 1}
        )

        assert await limiter.check_rate_limit("1", "sendFriendRequest")
        assert not await limiter.check_rate_limit("1", "sendFriendRequest")
        assert await limiter.check_rate_limit("1", "sendMessage")
        assert limiter.get_remaining("1", "sendMessage") == 9

    async def test_reset(self):
        limiter = RateLimiter(
            limit=1, window_seconds=60, per_type_limits={"sendMessage": 1}
        )
        await limiter.check_rate_limit("1")
        await limiter.check_rate_limit("1", "sendMessage")

        limiter.reset("1")

        assert limiter.get_stats()["tracked_buckets"] == 0
        assert await limiter.check_rate_limit("1")
        assert limiter.get_retry_after_seconds("2") == 0

    def test_invalid_configuration(self):
        try:
            RateLimiter(limit=0)
            assert False, "Should have raised ValueError"
        except ValueError:
            pass


if __name__ == "__main__":
    TestRateLimiter.run_as_main()
