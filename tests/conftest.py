"""Pytest configuration and fixtures for neo-quotas tests."""

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from neo_quotas.core.value_objects import OrganizationId
from neo_quotas.features.cache import MemoryCacheAdapter
from neo_quotas.features.quotas.repositories import (
    InMemoryQuotaLimitRepository,
    InMemoryQuotaTypeRepository,
    InMemoryUsageRepository,
)
from neo_quotas.features.quotas.services import (
    DEFAULT_QUOTA_TYPES,
    QuotaCatalog,
    QuotaGuard,
    QuotaLimitStore,
    UsageLedger,
)


class FrozenClock:
    """Clock returning a fixed instant that tests move explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def sample_now():
    """Fixed instant in the middle of a UTC day."""
    return datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(sample_now):
    return FrozenClock(sample_now)


@pytest.fixture
def org_id():
    """Sample organization ID for testing."""
    return OrganizationId("org-1")


@pytest.fixture
def other_org_id():
    return OrganizationId("org-2")


@pytest.fixture
def catalog():
    return QuotaCatalog(DEFAULT_QUOTA_TYPES)


@pytest.fixture
def quota_type_repository():
    return InMemoryQuotaTypeRepository()


@pytest.fixture
def limit_repository():
    return InMemoryQuotaLimitRepository()


@pytest.fixture
def usage_repository():
    return InMemoryUsageRepository(lock_timeout_ms=1000)


@pytest.fixture
def memory_cache():
    return MemoryCacheAdapter(key_prefix="test")


@pytest.fixture
def limit_store(catalog, limit_repository, memory_cache):
    return QuotaLimitStore(catalog, limit_repository, memory_cache, cache_ttl=60)


@pytest.fixture
def ledger(catalog, usage_repository):
    return UsageLedger(catalog, usage_repository)


@pytest.fixture
def guard(limit_store, ledger, clock):
    return QuotaGuard(limit_store, ledger, clock=clock)


@pytest.fixture
def mock_connection():
    """Mock asyncpg connection for testing."""
    connection = MagicMock()
    connection.fetchrow = AsyncMock(return_value=None)
    connection.fetch = AsyncMock(return_value=[])
    connection.execute = AsyncMock(return_value="OK")
    return connection


@pytest.fixture
def mock_database(mock_connection):
    """Mock DatabaseManager whose transactions yield ``mock_connection``."""
    database = MagicMock()
    database.fetchrow = AsyncMock(return_value=None)
    database.fetch = AsyncMock(return_value=[])
    database.execute = AsyncMock(return_value="OK")
    database.transaction_calls = []

    @asynccontextmanager
    async def transaction(**kwargs):
        database.transaction_calls.append(kwargs)
        yield mock_connection

    database.transaction = transaction
    return database
