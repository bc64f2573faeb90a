"""Value objects module for neo-quotas."""

from .identifiers import OrganizationId, QuotaTypeName
from .limits import (
    UNBOUNDED,
    Unbounded,
    LimitValue,
    is_unbounded,
    is_valid_limit,
    limit_to_storage,
    limit_from_storage,
    exceeds,
)

__all__ = [
    "OrganizationId",
    "QuotaTypeName",
    "UNBOUNDED",
    "Unbounded",
    "LimitValue",
    "is_unbounded",
    "is_valid_limit",
    "limit_to_storage",
    "limit_from_storage",
    "exceeds",
]
