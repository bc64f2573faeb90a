"""Tests for bootstrapping quota services from settings."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from neo_quotas.api import bootstrap_quota_services
from neo_quotas.config import QuotaSettings
from neo_quotas.core.exceptions import QuotaExceededError
from neo_quotas.core.value_objects import OrganizationId
from neo_quotas.features.cache import MemoryCacheAdapter


class TestBootstrapQuotaServices:

    @pytest.mark.asyncio
    async def test_memory_backend(self, clock):
        settings = QuotaSettings(quota_store_backend="memory", redis_url=None)

        services = await bootstrap_quota_services(settings, clock=clock)

        assert services.database is None
        assert isinstance(services.cache, MemoryCacheAdapter)
        assert "max_users" in services.catalog
        assert await services.health_check() == {"database": True, "cache": True}

        org_id = OrganizationId("org-1")
        await services.limit_store.set_limit(org_id, "max_users", 1)
        await services.guard.check_and_reserve(org_id, "max_users")
        with pytest.raises(QuotaExceededError):
            await services.guard.check_and_reserve(org_id, "max_users")

        await services.close()

    @pytest.mark.asyncio
    async def test_postgres_backend_creates_schema(self, mock_database):
        settings = QuotaSettings(quota_store_backend="postgres", redis_url=None, quota_seed_defaults=False)
        mock_database.create_pool = AsyncMock()
        mock_database.close_pool = AsyncMock()
        mock_database.fetch.return_value = [
            {"name": "max_users", "description": "Users", "default_limit": 100,
             "is_time_windowed": False, "window_seconds": None},
        ]
        cache = MagicMock()
        cache.connect = AsyncMock()
        cache.disconnect = AsyncMock()

        services = await bootstrap_quota_services(settings, database=mock_database, cache=cache)

        mock_database.create_pool.assert_awaited_once()
        assert "CREATE SCHEMA IF NOT EXISTS quotas" in mock_database.execute.call_args[0][0]
        assert services.catalog.list_types()[0].name == "max_users"
        assert len(services.catalog) == 1

        await services.close()
        mock_database.close_pool.assert_awaited_once()
        cache.disconnect.assert_awaited_once()
