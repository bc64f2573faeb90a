"""Quota type domain entity.

A quota type names a category of limited resource and carries its
system-wide default limit and, for time-windowed types, the window size.
"""

from dataclasses import dataclass
from typing import Optional

from ....core.value_objects import LimitValue, QuotaTypeName, is_valid_limit


@dataclass(frozen=True)
class QuotaType:
    """Quota type catalog entry.

    Matches the quotas.quota_types table structure.
    """

    name: str
    description: str
    default_limit: LimitValue
    is_time_windowed: bool = False
    window_seconds: Optional[int] = None

    def __post_init__(self):
        """Post-initialization validation."""
        QuotaTypeName(self.name)

        if not is_valid_limit(self.default_limit):
            raise ValueError(
                f"Default limit for '{self.name}' must be a non-negative integer or UNBOUNDED"
            )

        if self.is_time_windowed:
            if not isinstance(self.window_seconds, int) or self.window_seconds <= 0:
                raise ValueError(f"Time-windowed quota type '{self.name}' needs a positive window_seconds")
        elif self.window_seconds is not None:
            raise ValueError(f"Quota type '{self.name}' is not time-windowed but has window_seconds")
