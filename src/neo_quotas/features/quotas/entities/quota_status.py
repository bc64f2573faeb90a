"""Read model combining a quota type, its effective limit and usage."""

from dataclasses import dataclass
from typing import Optional

from ....core.value_objects import LimitValue, is_unbounded


@dataclass(frozen=True)
class QuotaStatus:
    """Effective limit and current usage of one quota type for an organization."""

    name: str
    description: str
    effective_limit: LimitValue
    current_usage: int
    is_time_windowed: bool = False
    window_seconds: Optional[int] = None

    @property
    def is_unbounded(self) -> bool:
        return is_unbounded(self.effective_limit)

    @property
    def is_limit_reached(self) -> bool:
        if self.is_unbounded:
            return False
        return self.current_usage >= self.effective_limit
