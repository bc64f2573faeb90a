"""Quota limit values.

A limit is either a non-negative integer or the explicit ``UNBOUNDED``
sentinel. Negative numbers are never used to mean "no limit".
"""

from enum import Enum
from typing import Any, Optional, Union


class Unbounded(Enum):
    """Sentinel type for a limit that can never be reached."""
    UNBOUNDED = "unbounded"

    def __repr__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED = Unbounded.UNBOUNDED

LimitValue = Union[int, Unbounded]


def is_unbounded(limit: LimitValue) -> bool:
    """Check whether ``limit`` is the unbounded sentinel."""
    return limit is UNBOUNDED


def is_valid_limit(limit: Any) -> bool:
    """Check that ``limit`` is UNBOUNDED or a non-negative int (bools excluded)."""
    if limit is UNBOUNDED:
        return True
    return isinstance(limit, int) and not isinstance(limit, bool) and limit >= 0


def limit_to_storage(limit: LimitValue) -> Optional[int]:
    """Convert a limit to its persisted form (NULL means unbounded)."""
    return None if limit is UNBOUNDED else limit


def limit_from_storage(value: Optional[int]) -> LimitValue:
    """Convert a persisted limit back to a LimitValue."""
    return UNBOUNDED if value is None else int(value)


def exceeds(projected: int, limit: LimitValue) -> bool:
    """Check whether ``projected`` usage is strictly over ``limit``."""
    if limit is UNBOUNDED:
        return False
    return projected > limit
