"""Tests for window arithmetic."""

from datetime import datetime, timedelta, timezone

import pytest

from neo_quotas.features.quotas.utils.windows import (
    WINDOW_RESOLUTION,
    ensure_utc,
    floor_to_window,
    window_bounds,
)

DAY = 24 * 60 * 60


class TestWindows:

    def test_daily_window_is_midnight_aligned(self):
        now = datetime(2024, 3, 10, 15, 30, 12, 345678, tzinfo=timezone.utc)

        start, end = window_bounds(now, DAY)

        assert start == datetime(2024, 3, 10, tzinfo=timezone.utc)
        assert end == datetime(2024, 3, 10, 23, 59, 59, 999999, tzinfo=timezone.utc)
        assert end - start == timedelta(seconds=DAY) - WINDOW_RESOLUTION

    def test_instant_on_boundary_starts_new_window(self):
        midnight = datetime(2024, 3, 11, tzinfo=timezone.utc)

        start, _ = window_bounds(midnight, DAY)

        assert start == midnight

    def test_last_instant_belongs_to_window(self):
        end = datetime(2024, 3, 10, 23, 59, 59, 999999, tzinfo=timezone.utc)

        start, period_end = window_bounds(end, DAY)

        assert start == datetime(2024, 3, 10, tzinfo=timezone.utc)
        assert period_end == end

    def test_hourly_window(self):
        now = datetime(2024, 3, 10, 15, 59, tzinfo=timezone.utc)

        assert floor_to_window(now, 3600) == datetime(2024, 3, 10, 15, tzinfo=timezone.utc)

    def test_other_timezones_are_normalized_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        now = datetime(2024, 3, 11, 1, 0, tzinfo=plus_two)  # 23:00 UTC on the 10th

        start, _ = window_bounds(now, DAY)

        assert start == datetime(2024, 3, 10, tzinfo=timezone.utc)

    def test_naive_datetimes_are_taken_as_utc(self):
        assert ensure_utc(datetime(2024, 3, 10, 12)) == datetime(2024, 3, 10, 12, tzinfo=timezone.utc)

    def test_non_positive_window_rejected(self):
        with pytest.raises(ValueError):
            floor_to_window(datetime.now(timezone.utc), 0)
