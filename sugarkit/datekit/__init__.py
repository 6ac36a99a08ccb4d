"""Date/time conversion toolkit.

Import convention: construct a DateKit and work through it.

    from sugarkit.datekit import DateKit
    kit = DateKit()
    ts = kit.str_to_ts("2024-03-20 14:52:51")
    text = kit.parse(ts).to_plus_days(12).to_str("yyyy-MM-dd")
"""

from .chain import DateChain
from .kit import DateKit
from .options import ConversionOptions, DateKitConfig
from .timestamp import ZonedTimestamp

__all__ = ["DateKit", "DateChain", "DateKitConfig", "ConversionOptions", "ZonedTimestamp"]
