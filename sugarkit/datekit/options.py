"""Pydantic models for toolkit configuration and per-call options."""

from datetime import tzinfo

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import Settings, settings
from .patterns import validate_pattern
from .zones import coerce_zone, resolve_zone


class DateKitConfig(BaseModel):
    """Default zone and format of a DateKit.

    Immutable; validated on construction so an invalid value never replaces
    a valid one. Zone errors raise InvalidZoneError and pattern errors raise
    InvalidFormatError directly.
    """

    model_config = ConfigDict(frozen=True)

    default_zone: str = Field(default="UTC+8", description="Zone id for omitted zone arguments")
    default_format: str = Field(
        default="yyyy-MM-dd HH:mm:ss",
        description="Pattern for omitted format arguments"
    )

    # Before mode: wrong types must reach resolve_zone/validate_pattern
    @field_validator("default_zone", mode="before")
    @classmethod
    def check_zone(cls, v):
        resolve_zone(v)
        return v

    @field_validator("default_format", mode="before")
    @classmethod
    def check_format(cls, v):
        return validate_pattern(v)

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "DateKitConfig":
        """Build from process settings (SUGARKIT_* environment variables)."""
        source = source or settings
        return cls(default_zone=source.default_zone, default_format=source.default_format)

    @property
    def zone(self) -> tzinfo:
        return resolve_zone(self.default_zone)

    def with_zone(self, zone_id: str) -> "DateKitConfig":
        """Copy with another default zone."""
        return DateKitConfig(default_zone=zone_id, default_format=self.default_format)

    def with_format(self, pattern: str) -> "DateKitConfig":
        """Copy with another default format."""
        return DateKitConfig(default_zone=self.default_zone, default_format=pattern)


class ConversionOptions(BaseModel):
    """Optional zone/format overrides for a single conversion.

    Overrides are validated on construction. Omitted values fall back to
    the configuration given to ``zone_for``/``format_for`` at call time.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    zone: str | tzinfo | None = None
    format: str | None = None

    @field_validator("zone", mode="before")
    @classmethod
    def check_zone(cls, v):
        if v is not None:
            coerce_zone(v)
        return v

    @field_validator("format", mode="before")
    @classmethod
    def check_format(cls, v):
        if v is None:
            return v
        return validate_pattern(v)

    def zone_for(self, config: DateKitConfig) -> tzinfo:
        if self.zone is None:
            return config.zone
        return coerce_zone(self.zone)

    def format_for(self, config: DateKitConfig) -> str:
        if self.format is None:
            return config.default_format
        return self.format
