"""Fluent surface over DateKit.

A DateChain holds the current value of a chained sequence. It is immutable:
``to_plus_*`` returns a new chain, so chains can be shared freely and a
toolkit can serve any number of sequences at once.

    kit.parse("2022-02-02", "yyyy-MM-dd").to_plus_hours(3).to_str()

Chains keep a reference to their toolkit, so omitted zone/format arguments
use the toolkit's configuration at the time of the call.
"""

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from ..exceptions import NoCurrentValueError
from .arithmetic import plus
from .timestamp import ZonedTimestamp

if TYPE_CHECKING:
    from .kit import DateKit


class DateChain:
    """Current value of a chained sequence, bound to a DateKit."""

    __slots__ = ("_kit", "_value")

    def __init__(self, kit: "DateKit", value: ZonedTimestamp | None = None):
        self._kit = kit
        self._value = value

    @property
    def kit(self) -> "DateKit":
        return self._kit

    @property
    def is_empty(self) -> bool:
        return self._value is None

    def _current(self) -> ZonedTimestamp:
        if self._value is None:
            raise NoCurrentValueError(
                "No current value: call parse() before chaining conversions"
            )
        return self._value

    def parse(
        self,
        value: "str | int | datetime | ZonedTimestamp",
        format: str | None = None,
        zone: str | tzinfo | None = None
    ) -> "DateChain":
        """Start a new chain from ``value`` on the same toolkit."""
        return self._kit.parse(value, format, zone)

    def to_str(self, format: str | None = None, zone: str | tzinfo | None = None) -> str:
        return self._kit.string_from_zoned(self._current(), format, zone)

    def to_ts(self) -> int:
        return self._kit.epoch_millis_from_zoned(self._current())

    def to_dt(self) -> ZonedTimestamp:
        return self._current()

    def to_datetime(self) -> datetime:
        return self._current().to_datetime()

    def to_plus(self, amount: int, unit: str) -> "DateChain":
        return DateChain(self._kit, plus(self._current(), amount, unit))

    def to_plus_nanoseconds(self, nanoseconds: int) -> "DateChain":
        return self.to_plus(nanoseconds, "nanoseconds")

    def to_plus_microseconds(self, microseconds: int) -> "DateChain":
        return self.to_plus(microseconds, "microseconds")

    def to_plus_milliseconds(self, milliseconds: int) -> "DateChain":
        return self.to_plus(milliseconds, "milliseconds")

    def to_plus_seconds(self, seconds: int) -> "DateChain":
        return self.to_plus(seconds, "seconds")

    def to_plus_minutes(self, minutes: int) -> "DateChain":
        return self.to_plus(minutes, "minutes")

    def to_plus_hours(self, hours: int) -> "DateChain":
        return self.to_plus(hours, "hours")

    def to_plus_days(self, days: int) -> "DateChain":
        return self.to_plus(days, "days")

    def to_plus_months(self, months: int) -> "DateChain":
        return self.to_plus(months, "months")

    def to_plus_years(self, years: int) -> "DateChain":
        return self.to_plus(years, "years")

    def __repr__(self):
        return f"DateChain({self._value!r})"
