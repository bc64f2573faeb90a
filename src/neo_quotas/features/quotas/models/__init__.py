"""Quota API models."""

from .requests import UpdateQuotaLimitRequest
from .responses import OrganizationQuotasResponse, QuotaStatusResponse

__all__ = [
    "UpdateQuotaLimitRequest",
    "QuotaStatusResponse",
    "OrganizationQuotasResponse",
]
