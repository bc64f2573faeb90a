"""Cache feature for neo-quotas.

Provides the cache protocol plus in-memory and Redis backends used to
cache effective quota limits.
"""

from typing import Optional

from .entities import Cache, CacheBackendAdapter
from .adapters import MemoryCacheAdapter, MemoryCacheEntry, RedisAdapter


def create_cache(
    redis_url: Optional[str] = None,
    key_prefix: str = "",
    default_ttl: Optional[int] = None,
) -> CacheBackendAdapter:
    """Create a Redis cache when a URL is configured, else an in-memory one."""
    if redis_url:
        return RedisAdapter(redis_url, key_prefix=key_prefix, default_ttl=default_ttl)
    return MemoryCacheAdapter(key_prefix=key_prefix, default_ttl=default_ttl)


__all__ = [
    "Cache",
    "CacheBackendAdapter",
    "MemoryCacheAdapter",
    "MemoryCacheEntry",
    "RedisAdapter",
    "create_cache",
]
