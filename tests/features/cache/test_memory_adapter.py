"""Tests for the in-memory cache adapter."""

import time

import pytest

from neo_quotas.core.exceptions import CacheSerializationError
from neo_quotas.features.cache import MemoryCacheAdapter, create_cache, RedisAdapter


class TestMemoryCacheAdapter:

    @pytest.mark.asyncio
    async def test_set_and_get_returns_copy(self):
        cache = MemoryCacheAdapter()
        limits = {"max_users": 10, "max_groups": None}

        await cache.set("quota_limits:org-1", limits)
        cached = await cache.get("quota_limits:org-1")
        cached["max_users"] = 99

        assert await cache.get("quota_limits:org-1") == {"max_users": 10, "max_groups": None}

    @pytest.mark.asyncio
    async def test_miss_returns_none(self):
        cache = MemoryCacheAdapter()

        assert await cache.get("missing") is None
        info = await cache.info()
        assert info["misses"] == 1
        assert info["hit_rate"] == 0.0

    @pytest.mark.asyncio
    async def test_expired_entry_is_dropped(self):
        cache = MemoryCacheAdapter(key_prefix="test")
        await cache.set("key", "value", ttl=60)
        cache._store["test:key"].expires_at = time.monotonic() - 1

        assert await cache.get("key") is None
        assert not await cache.exists("key")
        assert "test:key" not in cache._store

    @pytest.mark.asyncio
    async def test_entry_without_ttl_does_not_expire(self):
        cache = MemoryCacheAdapter()
        await cache.set("key", 1)

        assert cache._store["key"].expires_at is None
        assert await cache.exists("key")

    @pytest.mark.asyncio
    async def test_delete_reports_existence(self):
        cache = MemoryCacheAdapter()
        await cache.set("key", 1)

        assert await cache.delete("key") is True
        assert await cache.delete("key") is False

    @pytest.mark.asyncio
    async def test_unserializable_value_raises(self):
        cache = MemoryCacheAdapter()

        with pytest.raises(CacheSerializationError):
            await cache.set("key", object())

    @pytest.mark.asyncio
    async def test_evicts_least_recently_used_when_full(self):
        cache = MemoryCacheAdapter(max_size=2)
        await cache.set("a", 1)
        await cache.set("b", 2)
        cache._store["a"].last_accessed = 0.0

        await cache.set("c", 3)

        assert await cache.get("a") is None
        assert await cache.get("b") == 2
        assert await cache.get("c") == 3

    @pytest.mark.asyncio
    async def test_increment_counts_from_zero(self):
        cache = MemoryCacheAdapter(key_prefix="test")

        assert await cache.increment("quota_limits:gen:org-1") == 1
        assert await cache.increment("quota_limits:gen:org-1") == 2
        assert await cache.get("quota_limits:gen:org-1") == 2
        assert cache._store["test:quota_limits:gen:org-1"].expires_at is None

    @pytest.mark.asyncio
    async def test_increment_non_counter_raises(self):
        cache = MemoryCacheAdapter()
        await cache.set("key", {"max_users": 1})

        with pytest.raises(CacheSerializationError):
            await cache.increment("key")

    @pytest.mark.asyncio
    async def test_eviction_spares_counters(self):
        cache = MemoryCacheAdapter(max_size=2)
        await cache.increment("gen")
        await cache.set("limits", {"max_users": 1}, ttl=60)
        cache._store["gen"].last_accessed = 0.0

        await cache.set("other", 1, ttl=60)

        assert await cache.get("gen") == 1
        assert await cache.get("limits") is None

    @pytest.mark.asyncio
    async def test_clear(self):
        cache = MemoryCacheAdapter()
        await cache.set("a", 1)

        await cache.clear()

        assert (await cache.info())["size"] == 0
        assert await cache.health_check()


class TestCreateCache:

    def test_memory_without_url(self):
        assert isinstance(create_cache(None), MemoryCacheAdapter)

    def test_redis_with_url(self):
        cache = create_cache("redis://localhost:6379/0", key_prefix="neo_quotas")

        assert isinstance(cache, RedisAdapter)
        assert cache.key_prefix == "neo_quotas"
