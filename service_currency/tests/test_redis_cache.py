"""
Unit tests for the Redis rate cache.
"""

import pytest
from unittest.mock import AsyncMock, patch

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_currency.app.cache.redis_cache import RateCache


class TestRateCache:
    """Test cases for RateCache."""

    @pytest.fixture
    def cache(self):
        """RateCache with a mocked Redis client."""
        cache = RateCache("redis://localhost:6379/0", ttl_seconds=900, timeout_seconds=1.5)
        cache.redis = AsyncMock()
        return cache

    @pytest.mark.asyncio
    async def test_get_rate_hit(self, cache):
        """A stored decimal string is returned as a float."""
        cache.redis.get.return_value = "0.92"

        assert await cache.get_rate("USD_EUR") == 0.92
        cache.redis.get.assert_awaited_once_with("USD_EUR")

    @pytest.mark.asyncio
    async def test_get_rate_miss(self, cache):
        """A missing key is a miss."""
        cache.redis.get.return_value = None

        assert await cache.get_rate("USD_EUR") is None

    @pytest.mark.asyncio
    async def test_get_rate_unparseable(self, cache):
        """A value that is not a float is treated as a miss."""
        cache.redis.get.return_value = "not-a-number"

        assert await cache.get_rate("USD_EUR") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["inf", "-inf", "nan"])
    async def test_get_rate_non_finite(self, cache, value):
        """Non-finite cached values are treated as a miss."""
        cache.redis.get.return_value = value

        assert await cache.get_rate("USD_EUR") is None

    @pytest.mark.asyncio
    async def test_get_rate_error(self, cache):
        """Redis errors are swallowed and reported as a miss."""
        cache.redis.get.side_effect = ConnectionError("redis down")

        assert await cache.get_rate("USD_EUR") is None

    @pytest.mark.asyncio
    async def test_get_rate_not_started(self):
        """Before start() every lookup is a miss."""
        cache = RateCache("redis://localhost:6379/0", ttl_seconds=900)

        assert await cache.get_rate("USD_EUR") is None
        assert await cache.set_rate("USD_EUR", 0.92) is False

    @pytest.mark.asyncio
    async def test_set_rate_uses_ttl(self, cache):
        """Rates are written with the configured expiry."""
        assert await cache.set_rate("USD_EUR", 0.92) is True
        cache.redis.set.assert_awaited_once_with("USD_EUR", "0.92", ex=900)

    @pytest.mark.asyncio
    async def test_set_rate_round_trips(self, cache):
        """The stored string parses back to the identical float."""
        rate = 1 / 3

        await cache.set_rate("USD_EUR", rate)
        stored = cache.redis.set.await_args.args[1]

        assert float(stored) == rate

    @pytest.mark.asyncio
    async def test_set_rate_error(self, cache):
        """Write failures return False instead of raising."""
        cache.redis.set.side_effect = TimeoutError("timed out")

        assert await cache.set_rate("USD_EUR", 0.92) is False

    @pytest.mark.asyncio
    async def test_start_builds_pooled_client(self):
        """start() configures timeouts and pings the server."""
        cache = RateCache("redis://cache:6379", ttl_seconds=900, timeout_seconds=1.5)
        client = AsyncMock()

        with patch("service_currency.app.cache.redis_cache.redis.from_url", return_value=client) as from_url:
            await cache.start()

        from_url.assert_called_once()
        assert from_url.call_args.args == ("redis://cache:6379",)
        assert from_url.call_args.kwargs["socket_timeout"] == 1.5
        assert from_url.call_args.kwargs["socket_connect_timeout"] == 1.5
        assert from_url.call_args.kwargs["decode_responses"] is True
        client.ping.assert_awaited_once()
        assert cache.redis is client

    @pytest.mark.asyncio
    async def test_start_tolerates_unreachable_server(self):
        """An unreachable server does not prevent startup."""
        cache = RateCache("redis://cache:6379", ttl_seconds=900)
        client = AsyncMock()
        client.ping.side_effect = ConnectionError("refused")

        with patch("service_currency.app.cache.redis_cache.redis.from_url", return_value=client):
            await cache.start()

        assert cache.redis is client
        assert await cache.health_check() is False

    @pytest.mark.asyncio
    async def test_stop_closes_client(self, cache):
        """stop() closes the connection pool."""
        client = cache.redis

        await cache.stop()

        client.aclose.assert_awaited_once()
        assert cache.redis is None

    @pytest.mark.asyncio
    async def test_health_check(self, cache):
        """Health check pings Redis."""
        assert await cache.health_check() is True
        cache.redis.ping.assert_awaited_once()
