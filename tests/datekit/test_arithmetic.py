"""Tests for duration arithmetic."""

import pytest
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from sugarkit.datekit.arithmetic import plus, plus_months
from sugarkit.datekit.timestamp import ZonedTimestamp
from sugarkit.exceptions import DateRangeError

NEW_YORK = ZoneInfo("America/New_York")


def local(zone, *args, nanos=0):
    return ZonedTimestamp.from_local(datetime(*args), zone, nanos)


def wall(ts):
    dt = ts.to_datetime()
    return (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)


class TestFixedUnits:
    """Tests for nanosecond through day offsets."""

    @pytest.mark.parametrize("unit, nanos", [
        ("nanoseconds", 1),
        ("microseconds", 1_000),
        ("milliseconds", 1_000_000),
        ("seconds", 1_000_000_000),
        ("minutes", 60_000_000_000),
        ("hours", 3_600_000_000_000),
        ("days", 86_400_000_000_000),
    ])
    def test_unit_sizes(self, unit, nanos):
        """Each fixed unit should move the instant by its length."""
        start = ZonedTimestamp(0, timezone.utc)
        assert plus(start, 3, unit).epoch_nanos == 3 * nanos
        assert plus(start, -2, unit).epoch_nanos == -2 * nanos

    def test_days_are_fixed_across_dst(self):
        """A day should always be 24 hours, even across a DST change."""
        start = local(NEW_YORK, 2024, 3, 9, 12)
        assert wall(plus(start, 1, "days")) == (2024, 3, 10, 13, 0, 0)

    def test_fixed_units_commute(self):
        """Fixed offsets should commute and associate."""
        start = local(NEW_YORK, 2024, 3, 9, 22, 15)
        a = plus(plus(start, 3, "hours"), 2, "days")
        b = plus(plus(start, 2, "days"), 3, "hours")
        c = plus(start, 2 * 24 + 3, "hours")
        assert a == b == c

    def test_keeps_zone(self):
        """Offsets should keep the display zone."""
        start = local(NEW_YORK, 2024, 1, 1)
        assert plus(start, 5, "minutes").zone is NEW_YORK

    def test_unknown_unit(self):
        """An unknown unit should raise ValueError."""
        with pytest.raises(ValueError):
            plus(ZonedTimestamp(0, timezone.utc), 1, "fortnights")


class TestCalendarUnits:
    """Tests for month and year offsets."""

    def test_month_end_clamps_in_leap_year(self):
        """Jan 31 plus one month should be Feb 29 in a leap year."""
        start = local(timezone.utc, 2024, 1, 31)
        assert wall(plus(start, 1, "months")) == (2024, 2, 29, 0, 0, 0)

    def test_month_end_clamps_in_common_year(self):
        """Jan 31 plus one month should be Feb 28 in a common year."""
        start = local(timezone.utc, 2023, 1, 31)
        assert wall(plus(start, 1, "months")) == (2023, 2, 28, 0, 0, 0)

    def test_negative_months(self):
        """Subtracting months should clamp the same way."""
        start = local(timezone.utc, 2024, 3, 31, 8)
        assert wall(plus(start, -1, "months")) == (2024, 2, 29, 8, 0, 0)

    def test_months_cross_year(self):
        """Months should roll over into the next year."""
        start = local(timezone.utc, 2023, 11, 15)
        assert wall(plus(start, 3, "months")) == (2024, 2, 15, 0, 0, 0)

    def test_leap_day_plus_year(self):
        """Feb 29 plus one year should be Feb 28."""
        start = local(timezone.utc, 2024, 2, 29)
        assert wall(plus(start, 1, "years")) == (2025, 2, 28, 0, 0, 0)

    def test_years_subtract(self):
        """Negative years should move back whole years."""
        start = local(timezone.utc, 2024, 3, 20)
        assert wall(plus(start, -1, "years")) == (2023, 3, 20, 0, 0, 0)

    def test_months_keep_wall_clock_across_dst(self):
        """Calendar offsets should keep the local time of day."""
        start = local(NEW_YORK, 2024, 2, 10, 12)
        assert wall(plus(start, 1, "months")) == (2024, 3, 10, 12, 0, 0)

    def test_months_keep_nanos(self):
        """Sub-second digits should survive calendar offsets."""
        start = local(timezone.utc, 2024, 1, 31, nanos=123_456_789)
        assert plus(start, 1, "months").nano_of_second == 123_456_789

    def test_zero_months_is_identity(self):
        """Adding zero months should return the same value."""
        start = local(timezone.utc, 2024, 1, 31)
        assert plus_months(start, 0) is start

    def test_out_of_range(self):
        """Leaving years 1-9999 should raise DateRangeError."""
        start = local(timezone.utc, 9999, 12, 1)
        with pytest.raises(DateRangeError):
            plus(start, 1, "months")
