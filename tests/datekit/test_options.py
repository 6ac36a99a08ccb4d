"""Tests for DateKitConfig and ConversionOptions models."""

import pytest
from datetime import timedelta, timezone
from pydantic import ValidationError

from sugarkit.datekit.options import ConversionOptions, DateKitConfig
from sugarkit.exceptions import InvalidFormatError, InvalidZoneError


class TestDateKitConfig:
    """Tests for DateKitConfig model."""

    def test_defaults(self):
        """Defaults should be UTC+8 and a full date-time pattern."""
        config = DateKitConfig()
        assert config.default_zone == "UTC+8"
        assert config.default_format == "yyyy-MM-dd HH:mm:ss"
        assert config.zone.utcoffset(None) == timedelta(hours=8)

    def test_invalid_zone(self):
        """An unknown zone should raise InvalidZoneError."""
        with pytest.raises(InvalidZoneError):
            DateKitConfig(default_zone="Atlantis/Capital")

    def test_invalid_format(self):
        """A malformed pattern should raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            DateKitConfig(default_format="yyyy-MM-dd 'open")

    def test_frozen(self):
        """Configuration values should be immutable."""
        config = DateKitConfig()
        with pytest.raises(ValidationError):
            config.default_zone = "UTC"

    def test_with_zone_returns_copy(self):
        """with_zone() should return a new value and leave the original."""
        config = DateKitConfig()
        updated = config.with_zone("Asia/Tokyo")
        assert updated.default_zone == "Asia/Tokyo"
        assert updated.default_format == config.default_format
        assert config.default_zone == "UTC+8"

    def test_with_format_validates(self):
        """with_format() should reject invalid patterns."""
        with pytest.raises(InvalidFormatError):
            DateKitConfig().with_format("yyyy-bb")


class TestConversionOptions:
    """Tests for ConversionOptions model."""

    def test_omitted_values_use_config(self):
        """Missing zone and format should come from the configuration."""
        config = DateKitConfig(default_zone="UTC", default_format="yyyy")
        options = ConversionOptions()
        assert options.zone_for(config) is timezone.utc
        assert options.format_for(config) == "yyyy"

    def test_explicit_values_win(self):
        """Given zone and format should override the configuration."""
        config = DateKitConfig()
        options = ConversionOptions(zone="UTC", format="MM")
        assert options.zone_for(config) is timezone.utc
        assert options.format_for(config) == "MM"

    def test_accepts_tzinfo(self):
        """A tzinfo zone should be used as is."""
        zone = timezone(timedelta(hours=-2))
        assert ConversionOptions(zone=zone).zone_for(DateKitConfig()) is zone

    def test_invalid_values(self):
        """Invalid overrides should raise the library errors."""
        with pytest.raises(InvalidZoneError):
            ConversionOptions(zone="nowhere").zone_for(DateKitConfig())
        with pytest.raises(InvalidFormatError):
            ConversionOptions(format="[yyyy]").format_for(DateKitConfig())


class TestWrongTypes:
    """Tests that wrong-typed values raise the library errors."""

    @pytest.mark.parametrize("zone", [None, 8, ["UTC"]])
    def test_config_zone(self, zone):
        """A non-string default zone should raise InvalidZoneError."""
        with pytest.raises(InvalidZoneError):
            DateKitConfig(default_zone=zone)

    @pytest.mark.parametrize("pattern", [None, 123, ["yyyy"]])
    def test_config_format(self, pattern):
        """A non-string default format should raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            DateKitConfig(default_format=pattern)

    @pytest.mark.parametrize("zone", [8, ["UTC"]])
    def test_options_zone(self, zone):
        """A zone override that is neither a string nor a tzinfo should raise InvalidZoneError."""
        with pytest.raises(InvalidZoneError):
            ConversionOptions(zone=zone)

    @pytest.mark.parametrize("pattern", [123, ["yyyy"]])
    def test_options_format(self, pattern):
        """A non-string format override should raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            ConversionOptions(format=pattern)
