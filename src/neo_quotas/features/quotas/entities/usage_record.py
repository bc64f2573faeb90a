"""Usage record entity and increment outcomes."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ....core.value_objects import LimitValue, OrganizationId


@dataclass
class UsageRecord:
    """Current consumption for one (organization, quota type) pair.

    ``period_start`` and ``period_end`` are set only for time-windowed
    quota types. ``period_end`` is the last valid instant of the window.
    """

    organization_id: OrganizationId
    quota_type: str
    current_usage: int = 0
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_time_windowed(self) -> bool:
        return self.period_end is not None

    def is_expired(self, now: datetime) -> bool:
        """A windowed record is expired once ``now`` is strictly after period_end."""
        return self.period_end is not None and now > self.period_end

    def usage_at(self, now: datetime) -> int:
        """Usage as observed at ``now``; expired windows count as zero."""
        return 0 if self.is_expired(now) else self.current_usage


class IncrementOutcome(str, Enum):
    """Outcome of an increment attempt."""
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class IncrementResult:
    """Result of ``UsageLedger.try_increment``.

    For REJECTED outcomes ``new_usage`` is the unchanged usage.
    """

    outcome: IncrementOutcome
    new_usage: int
    limit: LimitValue
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None

    @property
    def applied(self) -> bool:
        return self.outcome is IncrementOutcome.APPLIED
