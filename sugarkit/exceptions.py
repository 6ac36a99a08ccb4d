"""Custom exceptions for SugarKit.

Every error raised by the library derives from SugarKitError, which carries
a human-readable message and a details dict with the offending input.
"""


class SugarKitError(Exception):
    """Base exception for all SugarKit errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidZoneError(SugarKitError):
    """Zone identifier does not resolve to a known zone or offset."""


class InvalidFormatError(SugarKitError):
    """Format pattern is malformed or uses unsupported letters."""


class DateParseError(SugarKitError):
    """String does not match its pattern or describes an impossible date."""


class MissingTimeFieldsError(DateParseError):
    """Pattern carries no time-of-day fields, so no instant can be built.

    Raised inside the parse path to classify the one failure that the
    date-only fallback recovers from.
    """


class DateRangeError(SugarKitError):
    """Instant falls outside the calendar range supported by the host."""


class NoCurrentValueError(SugarKitError):
    """Chained accessor was called before any value was parsed."""
