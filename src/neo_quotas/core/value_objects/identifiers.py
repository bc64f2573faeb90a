"""Value objects for identifiers in neo-quotas."""

import re
from dataclasses import dataclass


QUOTA_TYPE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]{0,99}$")


@dataclass(frozen=True)
class OrganizationId:
    """Organization identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Organization ID must be a non-empty string")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class QuotaTypeName:
    """Quota type name value object, e.g. ``max_messages_per_day``."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not QUOTA_TYPE_NAME_PATTERN.match(self.value):
            raise ValueError(
                "Quota type name must be lowercase snake_case, start with a letter "
                "and be at most 100 characters"
            )

    def __str__(self) -> str:
        return self.value
