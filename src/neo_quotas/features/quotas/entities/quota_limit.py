"""Per-organization quota limit override entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ....core.value_objects import LimitValue, OrganizationId, is_unbounded


@dataclass(frozen=True)
class QuotaLimit:
    """Organization-specific override of a quota type's default limit.

    Absence of an override means the catalog default applies.
    """

    organization_id: OrganizationId
    quota_type: str
    limit_value: LimitValue
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_unbounded(self) -> bool:
        return is_unbounded(self.limit_value)
