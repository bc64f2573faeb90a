"""Quota feature for neo-quotas.

Per-organization quota enforcement:

- QuotaCatalog: registered quota types and their defaults
- QuotaLimitStore: per-organization overrides with cached lookups
- UsageLedger: concurrency-safe usage counters with window rollover
- QuotaGuard: check-and-reserve entry point for business features
"""

from .entities import (
    IncrementOutcome,
    IncrementResult,
    QuotaLimit,
    QuotaLimitRepository,
    QuotaStatus,
    QuotaType,
    QuotaTypeRepository,
    UsageRecord,
    UsageRepository,
    UsageUnit,
)
from .services import (
    DEFAULT_QUOTA_TYPES,
    QuotaCatalog,
    QuotaGuard,
    QuotaLimitStore,
    UsageLedger,
    seed_defaults,
)
from .routers import (
    get_limit_store,
    get_quota_guard,
    quota_admin_router,
    quota_router,
    require_quota_admin,
    require_quota_reader,
)

__all__ = [
    # Entities
    "QuotaType",
    "QuotaLimit",
    "UsageRecord",
    "IncrementOutcome",
    "IncrementResult",
    "QuotaStatus",

    # Protocols
    "QuotaTypeRepository",
    "QuotaLimitRepository",
    "UsageRepository",
    "UsageUnit",

    # Services
    "DEFAULT_QUOTA_TYPES",
    "QuotaCatalog",
    "seed_defaults",
    "QuotaLimitStore",
    "UsageLedger",
    "QuotaGuard",

    # Routers
    "quota_router",
    "quota_admin_router",
    "get_quota_guard",
    "get_limit_store",
    "require_quota_reader",
    "require_quota_admin",
]
