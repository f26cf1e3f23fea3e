"""
Rate cache package.

Holds the Redis-backed store of recently fetched conversion rates. Entries
expire on their own; nothing is explicitly invalidated.
"""

from .redis_cache import RateCache

__all__ = ["RateCache"]
