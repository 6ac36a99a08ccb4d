"""SugarKit: small conveniences for everyday Python.

    from sugarkit import DateKit, truthy, format_named
    kit = DateKit().set_default_zone("Asia/Shanghai")
    kit.now_str("yyyy-MM")
    truthy([])                                  # False
    format_named("{who} says hi", who="Anne")   # 'Anne says hi'
"""

from .datekit import ConversionOptions, DateChain, DateKit, DateKitConfig, ZonedTimestamp
from .exceptions import (
    DateParseError,
    DateRangeError,
    InvalidFormatError,
    InvalidZoneError,
    NoCurrentValueError,
    SugarKitError,
)
from .helpers import first_falsy, first_truthy, format_named, format_pairs, truthy

__all__ = [
    "DateKit",
    "DateChain",
    "DateKitConfig",
    "ConversionOptions",
    "ZonedTimestamp",
    "SugarKitError",
    "InvalidZoneError",
    "InvalidFormatError",
    "DateParseError",
    "DateRangeError",
    "NoCurrentValueError",
    "truthy",
    "first_truthy",
    "first_falsy",
    "format_named",
    "format_pairs",
]
