"""Quota domain entities and protocols."""

from .quota_type import QuotaType
from .quota_limit import QuotaLimit
from .usage_record import IncrementOutcome, IncrementResult, UsageRecord
from .quota_status import QuotaStatus
from .protocols import (
    QuotaLimitRepository,
    QuotaTypeRepository,
    UsageRepository,
    UsageUnit,
)

__all__ = [
    "QuotaType",
    "QuotaLimit",
    "UsageRecord",
    "IncrementOutcome",
    "IncrementResult",
    "QuotaStatus",
    "QuotaTypeRepository",
    "QuotaLimitRepository",
    "UsageRepository",
    "UsageUnit",
]
