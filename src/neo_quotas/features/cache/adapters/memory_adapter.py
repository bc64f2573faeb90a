"""Memory cache backend adapter for neo-quotas."""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ....core.exceptions import CacheSerializationError

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with metadata."""
    value: bytes
    created_at: float
    expires_at: Optional[float] = None
    access_count: int = 0
    last_accessed: float = field(default_factory=time.monotonic)

    @property
    def is_expired(self) -> bool:
        """Check if entry is expired."""
        if self.expires_at is None:
            return False
        return time.monotonic() > self.expires_at

    def access(self) -> None:
        """Record access to this entry."""
        self.access_count += 1
        self.last_accessed = time.monotonic()


class MemoryCacheAdapter:
    """In-process cache with per-entry TTL.

    Values are stored JSON-encoded so callers get copies, never shared
    mutable objects, matching the Redis adapter's behavior.
    """

    def __init__(self, key_prefix: str = "", default_ttl: Optional[int] = None, max_size: int = 10000):
        self._store: Dict[str, MemoryCacheEntry] = {}
        self._key_prefix = key_prefix
        self._default_ttl = default_ttl
        self._max_size = max_size
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    def _make_key(self, key: str) -> str:
        return f"{self._key_prefix}:{key}" if self._key_prefix else key

    async def connect(self) -> None:
        """Nothing to connect for the memory backend."""
        logger.debug("Memory cache ready")

    async def disconnect(self) -> None:
        """Drop all entries."""
        await self.clear()

    async def get(self, key: str) -> Optional[Any]:
        """Get value by key, None on miss or expiry."""
        cache_key = self._make_key(key)
        async with self._lock:
            entry = self._store.get(cache_key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired:
                del self._store[cache_key]
                self._misses += 1
                return None
            entry.access()
            self._hits += 1
            raw = entry.value

        try:
            return json.loads(raw)
        except ValueError as e:
            raise CacheSerializationError(f"Failed to deserialize cache key {key}: {e}")

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value with optional TTL in seconds."""
        try:
            raw = json.dumps(value).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to serialize cache key {key}: {e}")

        effective_ttl = ttl if ttl is not None else self._default_ttl
        now = time.monotonic()
        expires_at = now + effective_ttl if effective_ttl and effective_ttl > 0 else None

        async with self._lock:
            if len(self._store) >= self._max_size and self._make_key(key) not in self._store:
                self._evict_one()
            self._store[self._make_key(key)] = MemoryCacheEntry(
                value=raw,
                created_at=now,
                expires_at=expires_at,
            )

    def _evict_one(self) -> None:
        """Evict expired entries, else the least recently used one.

        Entries with a TTL go first so counters outlive the values they version.
        """
        expired = [k for k, entry in self._store.items() if entry.is_expired]
        if expired:
            for k in expired:
                del self._store[k]
            return
        candidates = [k for k, entry in self._store.items() if entry.expires_at is not None] or list(self._store)
        lru_key = min(candidates, key=lambda k: self._store[k].last_accessed)
        del self._store[lru_key]

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        async with self._lock:
            return self._store.pop(self._make_key(key), None) is not None

    async def increment(self, key: str) -> int:
        """Increment an integer counter. Counters never expire."""
        cache_key = self._make_key(key)
        async with self._lock:
            entry = self._store.get(cache_key)
            current = 0
            if entry is not None and not entry.is_expired:
                try:
                    current = int(json.loads(entry.value))
                except (TypeError, ValueError) as e:
                    raise CacheSerializationError(f"Cache key {key} does not hold a counter: {e}")
            elif len(self._store) >= self._max_size and cache_key not in self._store:
                self._evict_one()

            value = current + 1
            self._store[cache_key] = MemoryCacheEntry(
                value=json.dumps(value).encode("utf-8"),
                created_at=time.monotonic(),
            )
            return value

    async def exists(self, key: str) -> bool:
        """Check if a non-expired key exists."""
        async with self._lock:
            entry = self._store.get(self._make_key(key))
            return entry is not None and not entry.is_expired

    async def clear(self) -> None:
        """Clear all entries."""
        async with self._lock:
            self._store.clear()

    async def health_check(self) -> bool:
        """The memory backend is always healthy."""
        return True

    async def info(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        return {
            "backend": "memory",
            "size": len(self._store),
            "max_size": self._max_size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 4) if total else 0.0,
        }
