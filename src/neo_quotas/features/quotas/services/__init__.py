"""Quota services: catalog, limit store, usage ledger and guard."""

from .quota_catalog import DEFAULT_QUOTA_TYPES, QuotaCatalog, seed_defaults
from .limit_store import QuotaLimitStore
from .usage_ledger import UsageLedger
from .quota_guard import Clock, QuotaGuard, utc_now

__all__ = [
    "DEFAULT_QUOTA_TYPES",
    "QuotaCatalog",
    "seed_defaults",
    "QuotaLimitStore",
    "UsageLedger",
    "QuotaGuard",
    "Clock",
    "utc_now",
]
