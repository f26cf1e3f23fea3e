"""
Redis caching layer for the Currency Service.
"""

import math
from typing import Optional

import redis.asyncio as redis

from shared.logging import get_logger


class RateCache:
    """Redis cache of conversion rates keyed by pair key."""

    def __init__(self, redis_url: str, ttl_seconds: int, timeout_seconds: float = 2.0):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds
        self.logger = get_logger("currency.cache.redis")
        self.redis: Optional[redis.Redis] = None

    async def start(self):
        """Start the Redis cache.

        An unreachable server is not fatal: the service keeps answering from
        the provider and lookups are treated as misses.
        """
        self.redis = redis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=self.timeout_seconds,
            socket_timeout=self.timeout_seconds,
            health_check_interval=30
        )

        try:
            await self.redis.ping()
            self.logger.info("Redis cache started", redis_url=self.redis_url, ttl=self.ttl_seconds)
        except Exception as e:
            self.logger.warning("Redis cache unreachable at startup", redis_url=self.redis_url, error=str(e))

    async def stop(self):
        """Stop the Redis cache."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self.logger.info("Redis cache stopped")

    async def get_rate(self, pair_key: str) -> Optional[float]:
        """Get a cached rate, or None on a miss."""
        if self.redis is None:
            return None

        try:
            cached_value = await self.redis.get(pair_key)
        except Exception as e:
            self.logger.error("Error reading cached rate", key=pair_key, error=str(e))
            return None

        if cached_value is None:
            return None

        try:
            rate = float(cached_value)
        except (TypeError, ValueError):
            self.logger.warning("Ignoring unparseable cached rate", key=pair_key, value=cached_value)
            return None

        if not math.isfinite(rate):
            self.logger.warning("Ignoring non-finite cached rate", key=pair_key, value=cached_value)
            return None

        return rate

    async def set_rate(self, pair_key: str, rate: float) -> bool:
        """Cache a rate for the configured TTL."""
        if self.redis is None:
            return False

        try:
            # repr() is the shortest string that round-trips to the same float
            await self.redis.set(pair_key, repr(rate), ex=self.ttl_seconds)
            self.logger.debug("Cached rate", key=pair_key, ttl=self.ttl_seconds)
            return True
        except Exception as e:
            self.logger.error("Error caching rate", key=pair_key, error=str(e))
            return False

    async def health_check(self) -> bool:
        """Check Redis health."""
        if self.redis is None:
            return False
        try:
            await self.redis.ping()
            return True
        except Exception:
            return False
