"""Cache backend adapters."""

from .memory_adapter import MemoryCacheAdapter, MemoryCacheEntry
from .redis_adapter import RedisAdapter

__all__ = ["MemoryCacheAdapter", "MemoryCacheEntry", "RedisAdapter"]
