"""Tests for custom exceptions."""

from sugarkit.exceptions import (
    DateParseError,
    DateRangeError,
    InvalidFormatError,
    InvalidZoneError,
    MissingTimeFieldsError,
    NoCurrentValueError,
    SugarKitError,
)


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_base_error_with_message(self):
        """Base exception should accept message."""
        error = SugarKitError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"

    def test_base_error_with_details(self):
        """Base exception should accept details dict."""
        details = {"zone": "Mars/Olympus"}
        error = SugarKitError("Unknown zone", details=details)
        assert error.details == details

    def test_base_error_without_details(self):
        """Base exception should have empty details dict by default."""
        error = SugarKitError("Test")
        assert error.details == {}

    def test_taxonomy_inherits_base(self):
        """Every library error should inherit from SugarKitError."""
        for cls in (
            InvalidZoneError,
            InvalidFormatError,
            DateParseError,
            DateRangeError,
            NoCurrentValueError,
        ):
            assert issubclass(cls, SugarKitError)

    def test_missing_time_fields_is_parse_error(self):
        """MissingTimeFieldsError should be a DateParseError."""
        assert issubclass(MissingTimeFieldsError, DateParseError)

    def test_errors_are_distinct(self):
        """Zone and format errors should not be parse errors."""
        assert not issubclass(InvalidZoneError, DateParseError)
        assert not issubclass(InvalidFormatError, DateParseError)
        assert not issubclass(NoCurrentValueError, DateParseError)
