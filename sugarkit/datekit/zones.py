"""Zone identifier resolution.

This module is the only place that turns zone identifiers into tzinfo
objects. Accepted forms:

    Z, UTC, GMT, UT                  the zero offset
    +8, +08, +0800, +08:00           fixed offsets (up to +/-18:00)
    UTC+8, GMT-05:30, UT+0100        prefixed fixed offsets
    Asia/Shanghai                    IANA region identifiers (zoneinfo)

Fixed offsets are named in the normalized "UTC+08:00" form so that
formatting a zone id and resolving it again yields the same zone.
"""

import logging
import re
from datetime import timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import InvalidZoneError

logger = logging.getLogger(__name__)

MAX_OFFSET = timedelta(hours=18)

_OFFSET_RE = re.compile(
    r"(?P<sign>[+-])(?P<hours>\d{1,2})"
    r"(?:(?P<colon>:?)(?P<minutes>\d{2})(?:(?P=colon)(?P<seconds>\d{2}))?)?"
)
_PREFIXES = ("UTC", "GMT", "UT")


def offset_name(prefix: str, offset: timedelta) -> str:
    """Render a fixed offset as a zone id, e.g. ``UTC+08:00``."""
    if not offset:
        return prefix
    sign = "-" if offset < timedelta(0) else "+"
    total = abs(int(offset.total_seconds()))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    name = f"{prefix}{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        name += f":{seconds:02d}"
    return name


def parse_offset(text: str, zone: str | None = None) -> timedelta | None:
    """Parse a signed offset such as ``+8`` or ``-05:30``.

    Returns None if ``text`` is not an offset at all. ``zone`` is the full
    identifier reported in errors when ``text`` is only its offset part.

    Raises:
        InvalidZoneError: If the offset is well-formed but out of range
    """
    match = _OFFSET_RE.fullmatch(text)
    if not match:
        return None
    hours = int(match["hours"])
    minutes = int(match["minutes"] or 0)
    seconds = int(match["seconds"] or 0)
    if minutes > 59 or seconds > 59:
        raise InvalidZoneError(f"Invalid zone offset '{text}'", {"zone": zone or text})
    offset = timedelta(hours=hours, minutes=minutes, seconds=seconds)
    if offset > MAX_OFFSET:
        raise InvalidZoneError(
            f"Zone offset '{text}' exceeds +/-18:00",
            {"zone": zone or text}
        )
    return -offset if match["sign"] == "-" else offset


def fixed_zone(offset: timedelta, prefix: str = "UTC") -> timezone:
    """Build a fixed-offset zone with a normalized name."""
    if not offset and prefix == "UTC":
        return timezone.utc
    return timezone(offset, offset_name(prefix, offset))


def resolve_zone(zone_id: str) -> tzinfo:
    """Resolve a zone identifier to a tzinfo.

    Args:
        zone_id: Fixed offset, prefixed offset or IANA region identifier

    Returns:
        A ``datetime.timezone`` for fixed offsets, else a ``ZoneInfo``

    Raises:
        InvalidZoneError: If the identifier does not resolve
    """
    if not isinstance(zone_id, str) or not zone_id:
        raise InvalidZoneError(f"Invalid zone id {zone_id!r}", {"zone": repr(zone_id)})
    return _lookup_zone(zone_id)


@lru_cache(maxsize=256)
def _lookup_zone(zone_id: str) -> tzinfo:
    if zone_id == "Z":
        return timezone.utc

    offset = parse_offset(zone_id)
    if offset is not None:
        return fixed_zone(offset)

    for prefix in _PREFIXES:
        if zone_id == prefix:
            return fixed_zone(timedelta(0), prefix)
        if zone_id.startswith(prefix) and zone_id[len(prefix)] in "+-":
            offset = parse_offset(zone_id[len(prefix):], zone_id)
            if offset is None:
                break
            return fixed_zone(offset, prefix)

    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.debug(f"Zone lookup failed for {zone_id!r}: {e}")
        raise InvalidZoneError(f"Unknown zone id '{zone_id}'", {"zone": zone_id}) from e


def coerce_zone(zone: str | tzinfo) -> tzinfo:
    """Return ``zone`` as a tzinfo, resolving identifiers."""
    if isinstance(zone, tzinfo):
        return zone
    return resolve_zone(zone)


def zone_id(zone: tzinfo) -> str:
    """Return the identifier that resolves back to ``zone``."""
    if isinstance(zone, ZoneInfo):
        return zone.key
    if zone is timezone.utc:
        return "UTC"
    name = zone.tzname(None)
    if name is not None:
        return name
    offset = zone.utcoffset(None)
    return offset_name("UTC", offset) if offset is not None else repr(zone)
