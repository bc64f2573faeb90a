"""Quota request models."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ....core.value_objects import UNBOUNDED, LimitValue


class UpdateQuotaLimitRequest(BaseModel):
    """Request model for setting an organization's limit for one quota type.

    Exactly one of ``limit`` or ``unbounded=true`` must be given. Negative
    limits pass through here and are rejected by the limit store.
    """

    limit: Optional[int] = Field(None, description="New limit value (non-negative)")
    unbounded: bool = Field(False, description="Remove the limit entirely")

    @model_validator(mode="after")
    def check_limit_or_unbounded(self) -> "UpdateQuotaLimitRequest":
        if self.unbounded and self.limit is not None:
            raise ValueError("Provide either 'limit' or 'unbounded', not both")
        if not self.unbounded and self.limit is None:
            raise ValueError("Provide 'limit' or set 'unbounded' to true")
        return self

    def to_limit_value(self) -> LimitValue:
        return UNBOUNDED if self.unbounded else self.limit
