"""Wiring of quota services from settings."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import QuotaSettings
from ..database import DatabaseManager
from ..features.cache import CacheBackendAdapter, create_cache
from ..features.quotas.repositories import (
    InMemoryQuotaLimitRepository,
    InMemoryQuotaTypeRepository,
    InMemoryUsageRepository,
    QuotaLimitDatabaseRepository,
    QuotaSchemaManager,
    QuotaTypeDatabaseRepository,
    UsageDatabaseRepository,
)
from ..features.quotas.services import (
    Clock,
    QuotaCatalog,
    QuotaGuard,
    QuotaLimitStore,
    UsageLedger,
    seed_defaults,
    utc_now,
)

logger = logging.getLogger(__name__)


@dataclass
class QuotaServices:
    """Configured quota services and the resources they hold."""

    catalog: QuotaCatalog
    limit_store: QuotaLimitStore
    ledger: UsageLedger
    guard: QuotaGuard
    cache: CacheBackendAdapter
    database: Optional[DatabaseManager] = None

    async def health_check(self) -> dict:
        database_ok = await self.database.health_check() if self.database else True
        return {"database": database_ok, "cache": await self.cache.health_check()}

    async def close(self) -> None:
        await self.cache.disconnect()
        if self.database:
            await self.database.close_pool()
        logger.info("Quota services stopped")


async def bootstrap_quota_services(
    settings: QuotaSettings,
    database: Optional[DatabaseManager] = None,
    cache: Optional[CacheBackendAdapter] = None,
    clock: Clock = utc_now,
) -> QuotaServices:
    """Create repositories, seed and load the catalog and build the services."""
    cache = cache or create_cache(
        settings.redis_url,
        key_prefix=settings.cache_key_prefix,
        default_ttl=settings.cache_ttl_quota_limits,
    )
    await cache.connect()

    if settings.quota_store_backend == "memory":
        database = None
        type_repository = InMemoryQuotaTypeRepository()
        limit_repository = InMemoryQuotaLimitRepository()
        usage_repository = InMemoryUsageRepository(lock_timeout_ms=settings.quota_lock_timeout_ms)
    else:
        database = database or DatabaseManager(settings.database_url, **settings.get_pool_config())
        await database.create_pool()
        await QuotaSchemaManager(database, settings.quota_schema).create_schema()
        type_repository = QuotaTypeDatabaseRepository(database, settings.quota_schema)
        limit_repository = QuotaLimitDatabaseRepository(database, settings.quota_schema)
        usage_repository = UsageDatabaseRepository(
            database,
            settings.quota_schema,
            lock_timeout_ms=settings.quota_lock_timeout_ms,
            statement_timeout_ms=settings.quota_statement_timeout_ms,
        )

    if settings.quota_seed_defaults:
        await seed_defaults(type_repository)

    catalog = await QuotaCatalog.load(type_repository)
    limit_store = QuotaLimitStore(catalog, limit_repository, cache, cache_ttl=settings.cache_ttl_quota_limits)
    ledger = UsageLedger(catalog, usage_repository)
    guard = QuotaGuard(limit_store, ledger, clock=clock)

    logger.info(
        f"Quota services ready (store={settings.quota_store_backend}, "
        f"cache={'redis' if settings.redis_url else 'memory'}, types={len(catalog)})"
    )
    return QuotaServices(
        catalog=catalog,
        limit_store=limit_store,
        ledger=ledger,
        guard=guard,
        cache=cache,
        database=database,
    )
