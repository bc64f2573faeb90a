"""Redis cache backend adapter for neo-quotas."""

import json
import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError, ConnectionError as RedisConnectionError

from ....core.exceptions import (
    CacheError,
    CacheConnectionError,
    CacheSerializationError,
)

logger = logging.getLogger(__name__)


class RedisAdapter:
    """Redis cache backend adapter storing JSON-encoded values."""

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "",
        default_ttl: Optional[int] = None,
        socket_timeout: float = 2.0,
        client: Optional[Redis] = None,
    ):
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl
        self.socket_timeout = socket_timeout
        self.redis_client: Optional[Redis] = client
        self._connected = client is not None

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._connected:
            return

        try:
            self.redis_client = redis.from_url(
                self.redis_url,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                retry_on_timeout=True,
            )
            await self.redis_client.ping()
            self._connected = True
            logger.info("Connected to Redis cache")
        except RedisConnectionError as e:
            raise CacheConnectionError(f"Failed to connect to Redis: {e}")
        except RedisError as e:
            raise CacheError(f"Redis error during connect: {e}")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def get(self, key: str) -> Optional[Any]:
        """Get value by key."""
        await self._ensure_connected()

        try:
            result = await self.redis_client.get(self._make_key(key))
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}")

        if result is None:
            return None
        try:
            return json.loads(result)
        except ValueError as e:
            raise CacheSerializationError(f"Failed to deserialize cache key {key}: {e}")

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set key-value pair with optional TTL."""
        await self._ensure_connected()

        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to serialize cache key {key}: {e}")

        effective_ttl = ttl if ttl is not None else self.default_ttl
        try:
            await self.redis_client.set(
                self._make_key(key),
                payload,
                ex=effective_ttl if effective_ttl and effective_ttl > 0 else None,
            )
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}")

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        await self._ensure_connected()

        try:
            result = await self.redis_client.delete(self._make_key(key))
            return result > 0
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}")

    async def increment(self, key: str) -> int:
        """Atomically increment a counter key with INCR."""
        await self._ensure_connected()

        try:
            return await self.redis_client.incr(self._make_key(key))
        except RedisError as e:
            raise CacheError(f"Redis incr error for key {key}: {e}")

    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        await self._ensure_connected()

        try:
            result = await self.redis_client.exists(self._make_key(key))
            return result > 0
        except RedisError as e:
            raise CacheError(f"Redis exists error for key {key}: {e}")

    async def clear(self) -> None:
        """Delete every key under this adapter's prefix."""
        await self._ensure_connected()

        pattern = f"{self.key_prefix}:*" if self.key_prefix else "*"
        try:
            async for cache_key in self.redis_client.scan_iter(match=pattern):
                await self.redis_client.delete(cache_key)
        except RedisError as e:
            raise CacheError(f"Redis clear error: {e}")

    async def info(self) -> Dict[str, Any]:
        """Get cache backend information."""
        await self._ensure_connected()

        try:
            info = await self.redis_client.info()
        except RedisError as e:
            raise CacheError(f"Redis info error: {e}")

        return {
            "backend": "redis",
            "key_prefix": self.key_prefix,
            "redis_version": info.get("redis_version"),
            "connected_clients": info.get("connected_clients"),
            "used_memory_human": info.get("used_memory_human"),
            "keyspace_hits": info.get("keyspace_hits", 0),
            "keyspace_misses": info.get("keyspace_misses", 0),
            "connected": self._connected,
        }

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            if not self._connected:
                return False
            await self.redis_client.ping()
            return True
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def _ensure_connected(self) -> None:
        """Ensure Redis connection is active."""
        if not self._connected:
            await self.connect()
