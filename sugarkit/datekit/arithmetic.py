"""Duration arithmetic on ZonedTimestamp values.

Nanoseconds through days are fixed durations added to the instant, so they
commute and associate freely. Months and years are calendar offsets: the
wall clock in the value's zone moves by whole months, the day of month is
clamped to the target month's length, and the result is resolved in the
same zone again.
"""

import calendar

from ..exceptions import DateRangeError
from .timestamp import NANOS_PER_MICRO, NANOS_PER_MILLI, NANOS_PER_SECOND, ZonedTimestamp

NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR

FIXED_UNITS = {
    "nanoseconds": 1,
    "microseconds": NANOS_PER_MICRO,
    "milliseconds": NANOS_PER_MILLI,
    "seconds": NANOS_PER_SECOND,
    "minutes": NANOS_PER_MINUTE,
    "hours": NANOS_PER_HOUR,
    "days": NANOS_PER_DAY,
}
CALENDAR_UNITS = {
    "months": 1,
    "years": 12,
}
UNITS = tuple(FIXED_UNITS) + tuple(CALENDAR_UNITS)


def plus_months(zdt: ZonedTimestamp, months: int) -> ZonedTimestamp:
    """Shift by calendar months, clamping the day to the target month.

    Raises:
        DateRangeError: If the result falls outside years 1-9999
    """
    if not months:
        return zdt
    local = zdt.to_datetime().replace(tzinfo=None, microsecond=0)
    year, month0 = divmod(local.year * 12 + local.month - 1 + months, 12)
    if not 1 <= year <= 9999:
        raise DateRangeError(
            f"Adding {months} months to {local.isoformat()} leaves the calendar range",
            {"value": zdt.epoch_nanos, "months": months}
        )
    day = min(local.day, calendar.monthrange(year, month0 + 1)[1])
    shifted = local.replace(year=year, month=month0 + 1, day=day)
    return ZonedTimestamp.from_local(shifted, zdt.zone, zdt.nano_of_second)


def plus(zdt: ZonedTimestamp, amount: int, unit: str) -> ZonedTimestamp:
    """Offset ``zdt`` by ``amount`` of ``unit``.

    Args:
        zdt: Starting value
        amount: Signed count of units
        unit: One of UNITS, e.g. 'hours' or 'months'

    Raises:
        ValueError: If ``unit`` is unknown
    """
    if unit in FIXED_UNITS:
        return zdt.plus_nanos(amount * FIXED_UNITS[unit])
    if unit in CALENDAR_UNITS:
        return plus_months(zdt, amount * CALENDAR_UNITS[unit])
    raise ValueError(f"Unknown time unit '{unit}', expected one of {', '.join(UNITS)}")
