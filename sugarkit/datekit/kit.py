"""DateKit: conversions between epoch millis, zoned timestamps and strings.

NAMING CONVENTION:
- ``dt`` is a ZonedTimestamp, ``ts`` is epoch milliseconds (int) and
  ``str`` is a string rendered through a format pattern
- ``a_to_b`` converts a into b, ``x_plus_<unit>`` offsets a value
- Only the ``set_default_*`` methods change toolkit state

Every conversion funnels through four primitives:

    zoned_from_string        str -> dt
    string_from_zoned        dt -> str
    zoned_from_epoch_millis  ts -> dt
    epoch_millis_from_zoned  dt -> ts

``format`` and ``zone`` arguments are optional everywhere; omitted values are
read from the toolkit's configuration when the call is made.

Examples:
    >>> kit = DateKit()
    >>> kit.str_plus_years("2024-03-20", -1, "yyyy-MM-dd")
    '2023-03-20'
    >>> kit.parse("2022-02-02", "yyyy-MM-dd").to_plus_hours(3).to_str()
    '2022-02-02 03:00:00'
"""

import logging
import time
from datetime import datetime, tzinfo

from ..exceptions import MissingTimeFieldsError
from .arithmetic import plus
from .chain import DateChain
from .options import ConversionOptions, DateKitConfig
from .patterns import compile_pattern, render
from .timestamp import NANOS_PER_MILLI, ZonedTimestamp
from .zones import zone_id

logger = logging.getLogger(__name__)

Zone = str | tzinfo


class DateKit:
    """Stateful date/time conversion toolkit.

    Owns one DateKitConfig. Setters validate before replacing it and return
    the toolkit so they can be chained. Fluent sequences run on the
    immutable DateChain returned by ``parse``.

    Sharing one DateKit between threads is safe for conversions; concurrent
    setters race with calls that omit their zone or format.
    """

    def __init__(self, config: DateKitConfig | None = None):
        """Initialize the toolkit.

        Args:
            config: Default zone and format. Built from process settings
                    (SUGARKIT_* environment variables) when omitted.
        """
        self._config = config or DateKitConfig.from_settings()

    @property
    def config(self) -> DateKitConfig:
        return self._config

    @property
    def default_zone(self) -> tzinfo:
        return self._config.zone

    @property
    def default_format(self) -> str:
        return self._config.default_format

    # ========================================================================
    # Configuration
    # ========================================================================

    def set_default_zone(self, zone: str) -> "DateKit":
        """Replace the default zone.

        Raises:
            InvalidZoneError: If ``zone`` does not resolve (config unchanged)
        """
        self._config = self._config.with_zone(zone)
        logger.debug(f"Default zone set to {zone}")
        return self

    def set_default_format(self, pattern: str) -> "DateKit":
        """Replace the default format pattern.

        Raises:
            InvalidFormatError: If ``pattern`` is malformed (config unchanged)
        """
        self._config = self._config.with_format(pattern)
        logger.debug(f"Default format set to {pattern!r}")
        return self

    def _options(self, format: str | None, zone: Zone | None) -> tuple[str, tzinfo]:
        options = ConversionOptions(format=format, zone=zone)
        return options.format_for(self._config), options.zone_for(self._config)

    # ========================================================================
    # Primitive conversions
    # ========================================================================

    def zoned_from_epoch_millis(self, ms: int, zone: Zone | None = None) -> ZonedTimestamp:
        """Attach a zone to the instant ``ms`` milliseconds after the epoch."""
        _, tz = self._options(None, zone)
        return ZonedTimestamp.from_epoch_millis(ms, tz)

    def epoch_millis_from_zoned(self, zdt: ZonedTimestamp) -> int:
        """Extract epoch milliseconds; the zone is discarded."""
        return zdt.epoch_millis

    def string_from_zoned(
        self,
        zdt: ZonedTimestamp,
        format: str | None = None,
        zone: Zone | None = None
    ) -> str:
        """Render ``zdt`` displayed in ``zone`` using ``format``.

        Raises:
            InvalidFormatError: If the pattern is malformed or unsupported
            DateRangeError: If the instant has no calendar representation
        """
        pattern, tz = self._options(format, zone)
        return render(zdt, pattern, tz)

    def zoned_from_string(
        self,
        s: str,
        format: str | None = None,
        zone: Zone | None = None
    ) -> ZonedTimestamp:
        """Parse ``s`` against ``format``, interpreting wall time in ``zone``.

        A pattern without time-of-day fields cannot describe an instant on
        its own. Only that classified failure falls back to a date-only
        parse, placing the value at local midnight in ``zone``. Every other
        mismatch raises DateParseError.

        Raises:
            InvalidFormatError: If the pattern is malformed or unsupported
            DateParseError: If ``s`` does not match or describes an impossible date
        """
        pattern, tz = self._options(format, zone)
        fields = compile_pattern(pattern).parse(s)
        try:
            return fields.to_zoned(tz)
        except MissingTimeFieldsError:
            logger.debug(
                f"Pattern {pattern!r} has no time fields, "
                f"reading {s!r} as midnight in {zone_id(tz)}"
            )
            return ZonedTimestamp.at_start_of_day(fields.to_date(), fields.zone_or(tz))

    # ========================================================================
    # Conveniences
    # ========================================================================

    def now_dt(self, zone: Zone | None = None) -> ZonedTimestamp:
        """Current instant in ``zone``."""
        _, tz = self._options(None, zone)
        return ZonedTimestamp(time.time_ns(), tz)

    def now_ts(self) -> int:
        """Current epoch milliseconds."""
        return time.time_ns() // NANOS_PER_MILLI

    def now_str(self, format: str | None = None, zone: Zone | None = None) -> str:
        return self.string_from_zoned(self.now_dt(), format, zone)

    def dt_to_str(
        self,
        zdt: ZonedTimestamp,
        format: str | None = None,
        zone: Zone | None = None
    ) -> str:
        return self.string_from_zoned(zdt, format, zone)

    def dt_to_ts(self, zdt: ZonedTimestamp) -> int:
        return self.epoch_millis_from_zoned(zdt)

    def str_to_dt(self, s: str, format: str | None = None, zone: Zone | None = None) -> ZonedTimestamp:
        return self.zoned_from_string(s, format, zone)

    def str_to_ts(self, s: str, format: str | None = None, zone: Zone | None = None) -> int:
        return self.epoch_millis_from_zoned(self.zoned_from_string(s, format, zone))

    def str_to_str(
        self,
        s: str,
        src_format: str | None,
        dst_format: str | None,
        src_zone: Zone | None = None,
        dst_zone: Zone | None = None
    ) -> str:
        """Re-render a string from one pattern and zone into another.

        Example:
            >>> kit.str_to_str("2024-03-20 14:52:51", "yyyy-MM-dd HH:mm:ss",
            ...                "yyyy-MM-dd HH:mm", "UTC+8", "UTC+7")
            '2024-03-20 13:52'
        """
        zdt = self.zoned_from_string(s, src_format, src_zone)
        return self.string_from_zoned(zdt, dst_format, dst_zone)

    def ts_to_dt(self, ms: int, zone: Zone | None = None) -> ZonedTimestamp:
        return self.zoned_from_epoch_millis(ms, zone)

    def ts_to_str(self, ms: int, format: str | None = None, zone: Zone | None = None) -> str:
        return self.string_from_zoned(self.zoned_from_epoch_millis(ms, zone), format, zone)

    def to_zoned(
        self,
        value: "str | int | datetime | ZonedTimestamp",
        format: str | None = None,
        zone: Zone | None = None
    ) -> ZonedTimestamp:
        """Coerce any supported value into a ZonedTimestamp.

        Accepts a string (parsed with ``format``/``zone``), epoch millis, a
        ZonedTimestamp (returned as is), or a datetime. Naive datetimes are
        wall time in ``zone``; aware datetimes keep their instant.

        Raises:
            TypeError: If ``value`` has an unsupported type
        """
        if isinstance(value, ZonedTimestamp):
            return value
        if isinstance(value, str):
            return self.zoned_from_string(value, format, zone)
        if isinstance(value, bool):
            raise TypeError("Cannot parse a bool as a date")
        if isinstance(value, int):
            return self.zoned_from_epoch_millis(value, zone)
        if isinstance(value, datetime):
            if value.tzinfo is not None and zone is None:
                return ZonedTimestamp.from_datetime(value)
            _, tz = self._options(None, zone)
            return ZonedTimestamp.from_datetime(value, tz)
        raise TypeError(f"Cannot parse {type(value).__name__} as a date")

    # ========================================================================
    # Chained calls
    # ========================================================================

    def chain(self) -> DateChain:
        """An empty chain bound to this toolkit."""
        return DateChain(self)

    def parse(
        self,
        value: "str | int | datetime | ZonedTimestamp",
        format: str | None = None,
        zone: Zone | None = None
    ) -> DateChain:
        """Start a chained sequence from ``value`` (see ``to_zoned``)."""
        return DateChain(self, self.to_zoned(value, format, zone))

    # ========================================================================
    # Arithmetic on ZonedTimestamp values
    # ========================================================================

    def dt_plus(self, zdt: ZonedTimestamp, amount: int, unit: str) -> ZonedTimestamp:
        return plus(zdt, amount, unit)

    def dt_plus_nanoseconds(self, zdt: ZonedTimestamp, nanoseconds: int) -> ZonedTimestamp:
        return plus(zdt, nanoseconds, "nanoseconds")

    def dt_plus_microseconds(self, zdt: ZonedTimestamp, microseconds: int) -> ZonedTimestamp:
        return plus(zdt, microseconds, "microseconds")

    def dt_plus_milliseconds(self, zdt: ZonedTimestamp, milliseconds: int) -> ZonedTimestamp:
        return plus(zdt, milliseconds, "milliseconds")

    def dt_plus_seconds(self, zdt: ZonedTimestamp, seconds: int) -> ZonedTimestamp:
        return plus(zdt, seconds, "seconds")

    def dt_plus_minutes(self, zdt: ZonedTimestamp, minutes: int) -> ZonedTimestamp:
        return plus(zdt, minutes, "minutes")

    def dt_plus_hours(self, zdt: ZonedTimestamp, hours: int) -> ZonedTimestamp:
        return plus(zdt, hours, "hours")

    def dt_plus_days(self, zdt: ZonedTimestamp, days: int) -> ZonedTimestamp:
        return plus(zdt, days, "days")

    def dt_plus_months(self, zdt: ZonedTimestamp, months: int) -> ZonedTimestamp:
        return plus(zdt, months, "months")

    def dt_plus_years(self, zdt: ZonedTimestamp, years: int) -> ZonedTimestamp:
        return plus(zdt, years, "years")

    # ========================================================================
    # Arithmetic on strings (parse, offset, render with the same pattern)
    # ========================================================================

    def str_plus(self, s: str, amount: int, unit: str, format: str | None = None) -> str:
        """Offset a formatted string, rendering it back in the same pattern.

        Wall time is read and written in the default zone.
        """
        zdt = self.zoned_from_string(s, format)
        return self.string_from_zoned(plus(zdt, amount, unit), format)

    def str_plus_nanoseconds(self, s: str, nanoseconds: int, format: str | None = None) -> str:
        return self.str_plus(s, nanoseconds, "nanoseconds", format)

    def str_plus_microseconds(self, s: str, microseconds: int, format: str | None = None) -> str:
        return self.str_plus(s, microseconds, "microseconds", format)

    def str_plus_milliseconds(self, s: str, milliseconds: int, format: str | None = None) -> str:
        return self.str_plus(s, milliseconds, "milliseconds", format)

    def str_plus_seconds(self, s: str, seconds: int, format: str | None = None) -> str:
        return self.str_plus(s, seconds, "seconds", format)

    def str_plus_minutes(self, s: str, minutes: int, format: str | None = None) -> str:
        return self.str_plus(s, minutes, "minutes", format)

    def str_plus_hours(self, s: str, hours: int, format: str | None = None) -> str:
        return self.str_plus(s, hours, "hours", format)

    def str_plus_days(self, s: str, days: int, format: str | None = None) -> str:
        return self.str_plus(s, days, "days", format)

    def str_plus_months(self, s: str, months: int, format: str | None = None) -> str:
        return self.str_plus(s, months, "months", format)

    def str_plus_years(self, s: str, years: int, format: str | None = None) -> str:
        return self.str_plus(s, years, "years", format)

    def __repr__(self):
        return (
            f"DateKit(default_zone={self._config.default_zone!r}, "
            f"default_format={self._config.default_format!r})"
        )
