"""Quota repositories.

PostgreSQL implementations built on ``DatabaseManager`` and in-memory
implementations with the same protocols.
"""

from .quota_type_repository import QuotaTypeDatabaseRepository
from .quota_limit_repository import QuotaLimitDatabaseRepository
from .usage_repository import DatabaseUsageUnit, UsageDatabaseRepository, usage_lock_key
from .schema_manager import QuotaSchemaManager
from .memory import (
    InMemoryQuotaLimitRepository,
    InMemoryQuotaTypeRepository,
    InMemoryUsageRepository,
    MemoryUsageUnit,
)

__all__ = [
    "QuotaTypeDatabaseRepository",
    "QuotaLimitDatabaseRepository",
    "UsageDatabaseRepository",
    "DatabaseUsageUnit",
    "usage_lock_key",
    "QuotaSchemaManager",
    "InMemoryQuotaTypeRepository",
    "InMemoryQuotaLimitRepository",
    "InMemoryUsageRepository",
    "MemoryUsageUnit",
]
