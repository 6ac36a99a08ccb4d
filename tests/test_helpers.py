"""Tests for truthiness and templating helpers."""

import pytest

from sugarkit.helpers import first_falsy, first_truthy, format_named, format_pairs, truthy


class TestTruthy:
    """Tests for truthy function."""

    def test_none_and_false(self):
        """None and False should be false."""
        assert truthy(None) is False
        assert truthy(False) is False
        assert truthy(True) is True

    def test_numbers(self):
        """Numeric zero should be false, any other number true."""
        assert truthy(0) is False
        assert truthy(0.0) is False
        assert truthy(-3) is True
        assert truthy(1.5) is True

    def test_strings(self):
        """Empty strings should be false."""
        assert truthy("") is False
        assert truthy("hello world") is True
        assert truthy(" ") is True

    def test_containers(self):
        """Empty containers should be false."""
        assert truthy([]) is False
        assert truthy(()) is False
        assert truthy({}) is False
        assert truthy(set()) is False
        assert truthy([0]) is True
        assert truthy({"a": 1}) is True

    def test_plain_objects_are_true(self):
        """Objects without length or number semantics should be true."""
        assert truthy(object()) is True


class TestCombinators:
    """Tests for first_truthy and first_falsy."""

    def test_first_truthy_returns_first_true_value(self):
        """first_truthy() should return the first truthy argument."""
        assert first_truthy("1", "a", "a", "", "c", "sdfs") == "1"
        assert first_truthy("", 0, [], "x", "y") == "x"

    def test_first_truthy_returns_last_when_all_false(self):
        """first_truthy() should return the last argument when none is truthy."""
        assert first_truthy("", "", "") == ""
        result = first_truthy(0, None, [])
        assert result == []

    def test_first_falsy_returns_first_false_value(self):
        """first_falsy() should return the first falsy argument."""
        assert first_falsy("1", "a", "a", "", "c", "sdfs") == ""

    def test_first_falsy_returns_last_when_all_true(self):
        """first_falsy() should return the last argument when all are truthy."""
        assert first_falsy("1", "a", "a", "d", "c", "sdfs") == "sdfs"

    def test_two_arguments(self):
        """Combinators should work with exactly two arguments."""
        assert first_truthy(0, 5) == 5
        assert first_falsy(5, 0) == 0


class TestFormatNamed:
    """Tests for format_named and format_pairs."""

    def test_replaces_placeholders(self):
        """Named placeholders should be replaced with string values."""
        result = format_named("name: {name}, age: {age}", name="Anne", age=15)
        assert result == "name: Anne, age: 15"

    def test_replaces_every_occurrence(self):
        """Repeated placeholders should all be replaced."""
        assert format_named("{x}-{x}", x=1) == "1-1"

    def test_unknown_placeholders_untouched(self):
        """Placeholders without a value should remain."""
        assert format_named("{known} {unknown}", known="a") == "a {unknown}"

    def test_format_pairs(self):
        """Alternating name/value arguments should be applied in order."""
        result = format_pairs("name: {name}, age: {age}", "name", "Anne", "age", 15)
        assert result == "name: Anne, age: 15"

    def test_format_pairs_rejects_odd_arguments(self):
        """A name without a value should raise ValueError."""
        with pytest.raises(ValueError):
            format_pairs("{name}", "name")
