"""Time window arithmetic for windowed quota types.

Windows are aligned to the UNIX epoch in UTC, so a daily window starts at
midnight UTC. ``period_end`` is the last representable instant of the
window: ``start + window - 1 microsecond``.
"""

from datetime import datetime, timedelta, timezone
from typing import Tuple

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Smallest step datetime (and PostgreSQL timestamptz) can represent
WINDOW_RESOLUTION = timedelta(microseconds=1)


def ensure_utc(now: datetime) -> datetime:
    """Return ``now`` as an aware UTC datetime. Naive values are taken as UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def floor_to_window(now: datetime, window_seconds: int) -> datetime:
    """Start of the window containing ``now``."""
    if window_seconds <= 0:
        raise ValueError("window_seconds must be positive")
    window = timedelta(seconds=window_seconds)
    elapsed = ensure_utc(now) - EPOCH
    return EPOCH + (elapsed // window) * window


def window_bounds(now: datetime, window_seconds: int) -> Tuple[datetime, datetime]:
    """Return ``(period_start, period_end)`` of the window containing ``now``."""
    start = floor_to_window(now, window_seconds)
    return start, start + timedelta(seconds=window_seconds) - WINDOW_RESOLUTION
