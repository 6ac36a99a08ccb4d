"""ZonedTimestamp domain type.

A ZonedTimestamp is an instant on the UTC timeline paired with the zone it
is displayed in. The instant is held as integer nanoseconds since the Unix
epoch, so the value never overflows and fixed-duration offsets are exact.
A calendar view (``to_datetime``) is only built on demand.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import total_ordering

from ..exceptions import DateRangeError
from .zones import zone_id

NANOS_PER_MICRO = 1_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_SECOND = 1_000_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


def _epoch_seconds(dt: datetime) -> int:
    """Whole seconds between the epoch and an aware, microsecond-free datetime."""
    return (dt - EPOCH) // _ONE_SECOND


@total_ordering
@dataclass(frozen=True, eq=False)
class ZonedTimestamp:
    """An instant plus a display zone.

    Equality, hashing and ordering are defined on the instant alone; two
    values for the same instant in different zones compare equal.
    """

    epoch_nanos: int
    zone: tzinfo

    @classmethod
    def from_epoch_millis(cls, ms: int, zone: tzinfo) -> "ZonedTimestamp":
        """Build from epoch milliseconds; total for any integer."""
        return cls(ms * NANOS_PER_MILLI, zone)

    @classmethod
    def from_local(
        cls,
        local: datetime,
        zone: tzinfo,
        nano_of_second: int = 0,
        fold: int = 0
    ) -> "ZonedTimestamp":
        """Resolve a wall-clock date-time in ``zone`` to an instant.

        Args:
            local: Naive wall-clock date-time; microseconds are ignored
            zone: Zone the wall clock belongs to
            nano_of_second: Sub-second part in nanoseconds
            fold: 1 selects the later of two ambiguous wall times

        With the default fold, ambiguous wall times resolve to the earlier
        offset and wall times in a gap resolve with the offset in force
        before the transition.
        """
        wall = local.replace(microsecond=0, tzinfo=zone, fold=fold)
        try:
            seconds = _epoch_seconds(wall)
        except OverflowError as e:
            raise DateRangeError(
                f"Local date-time {local.isoformat()} is out of range",
                {"value": local.isoformat()}
            ) from e
        return cls(seconds * NANOS_PER_SECOND + nano_of_second, zone)

    @classmethod
    def at_start_of_day(cls, day: date, zone: tzinfo) -> "ZonedTimestamp":
        """Local midnight of ``day`` in ``zone``."""
        return cls.from_local(datetime.combine(day, time()), zone)

    @classmethod
    def from_datetime(cls, dt: datetime, zone: tzinfo | None = None) -> "ZonedTimestamp":
        """Convert a datetime.

        Naive datetimes are read as wall-clock time in ``zone`` (required in
        that case). Aware datetimes keep their instant and are displayed in
        ``zone`` when given, else in their own tzinfo.
        """
        nanos = dt.microsecond * NANOS_PER_MICRO
        if dt.tzinfo is None or dt.utcoffset() is None:
            if zone is None:
                raise ValueError("A zone is required to convert a naive datetime")
            return cls.from_local(dt.replace(tzinfo=None), zone, nanos)
        seconds = _epoch_seconds(dt.replace(microsecond=0))
        return cls(seconds * NANOS_PER_SECOND + nanos, zone or dt.tzinfo)

    @property
    def epoch_millis(self) -> int:
        """Epoch milliseconds, flooring sub-millisecond digits."""
        return self.epoch_nanos // NANOS_PER_MILLI

    @property
    def epoch_seconds(self) -> int:
        return self.epoch_nanos // NANOS_PER_SECOND

    @property
    def nano_of_second(self) -> int:
        return self.epoch_nanos % NANOS_PER_SECOND

    @property
    def zone_id(self) -> str:
        return zone_id(self.zone)

    def with_zone(self, zone: tzinfo) -> "ZonedTimestamp":
        """Same instant, displayed in another zone."""
        return ZonedTimestamp(self.epoch_nanos, zone)

    def plus_nanos(self, nanos: int) -> "ZonedTimestamp":
        """Offset the instant by a fixed number of nanoseconds."""
        return ZonedTimestamp(self.epoch_nanos + nanos, self.zone)

    def to_datetime(self) -> datetime:
        """Aware datetime in the display zone, truncated to microseconds.

        Raises:
            DateRangeError: If the instant falls outside years 1-9999
        """
        try:
            utc = EPOCH + timedelta(
                seconds=self.epoch_seconds,
                microseconds=self.nano_of_second // NANOS_PER_MICRO
            )
            return utc.astimezone(self.zone)
        except OverflowError as e:
            raise DateRangeError(
                f"Instant {self.epoch_nanos}ns is outside the supported calendar range",
                {"value": self.epoch_nanos}
            ) from e

    def __eq__(self, other):
        if not isinstance(other, ZonedTimestamp):
            return NotImplemented
        return self.epoch_nanos == other.epoch_nanos

    def __lt__(self, other):
        if not isinstance(other, ZonedTimestamp):
            return NotImplemented
        return self.epoch_nanos < other.epoch_nanos

    def __hash__(self):
        return hash(self.epoch_nanos)

    def __repr__(self):
        return f"ZonedTimestamp(epoch_nanos={self.epoch_nanos}, zone={self.zone_id!r})"
