"""Quota response models."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ....core.value_objects import limit_to_storage
from ..entities.quota_status import QuotaStatus


class QuotaStatusResponse(BaseModel):
    """Effective limit and current usage of one quota type.

    ``effective_limit`` is null when the quota is unbounded.
    """

    name: str = Field(..., description="Quota type name")
    description: str = Field(..., description="Quota type description")
    effective_limit: Optional[int] = Field(None, description="Effective limit, null when unbounded")
    current_usage: int = Field(..., description="Current usage in the active window")
    is_unbounded: bool = Field(..., description="Whether the quota has no limit")
    is_time_windowed: bool = Field(False, description="Whether usage resets every window")
    window_seconds: Optional[int] = Field(None, description="Window length in seconds")

    @classmethod
    def from_entity(cls, status: QuotaStatus) -> "QuotaStatusResponse":
        """Create response from quota status entity."""
        return cls(
            name=status.name,
            description=status.description,
            effective_limit=limit_to_storage(status.effective_limit),
            current_usage=status.current_usage,
            is_unbounded=status.is_unbounded,
            is_time_windowed=status.is_time_windowed,
            window_seconds=status.window_seconds,
        )


class OrganizationQuotasResponse(BaseModel):
    """All quota types of an organization."""

    organization_id: str = Field(..., description="Organization ID")
    quotas: List[QuotaStatusResponse] = Field(default_factory=list, description="Quota statuses")

    @classmethod
    def from_entities(cls, organization_id: str, statuses: List[QuotaStatus]) -> "OrganizationQuotasResponse":
        return cls(
            organization_id=organization_id,
            quotas=[QuotaStatusResponse.from_entity(status) for status in statuses],
        )
