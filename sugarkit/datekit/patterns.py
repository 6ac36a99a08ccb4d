"""Pattern-based formatting and parsing.

Patterns use the letter conventions of ``yyyy-MM-dd HH:mm:ss`` style
formatters. A pattern is compiled once into a list of tokens, which drive
both rendering and a full-match regular expression for parsing.

Letters:
    y, u    year (yy is two-digit, 2000-2099 when parsed)
    M, L    month (M/MM number, MMM short name, MMMM full name)
    d       day of month
    D       day of year
    E       day of week (E-EEE short, EEEE full)
    a       AM/PM marker
    H       hour of day (0-23)
    h       clock hour of AM/PM (1-12)
    m, s    minute, second
    S       fraction of second, one digit per letter
    X, x    offset (X/x +08, XX/xx +0800, XXX/xxx +08:00; X prints Z for zero)
    Z       offset (+0800)
    VV      zone id
    z       zone short name (parsed as the name the requested zone uses at
            the parsed wall time, else as a zone id)

Text between single quotes is literal and '' is a quote. Any other ASCII
letter and the characters [ ] { } # are rejected.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from functools import lru_cache

from ..exceptions import DateParseError, InvalidFormatError, InvalidZoneError, MissingTimeFieldsError
from .timestamp import NANOS_PER_SECOND, ZonedTimestamp
from .zones import fixed_zone, resolve_zone, zone_id

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
MONTH_ABBRS = [name[:3] for name in MONTH_NAMES]
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DAY_ABBRS = [name[:3] for name in DAY_NAMES]

# Maximum run length accepted for each letter
_MAX_WIDTH = {
    "y": 9, "u": 9, "M": 4, "L": 4, "d": 2, "D": 3, "E": 4, "a": 1,
    "H": 2, "h": 2, "m": 2, "s": 2, "S": 9, "X": 3, "x": 3, "Z": 3,
    "V": 2, "z": 3,
}
_RESERVED = "[]{}#"
_ZONE_TEXT = r"[A-Za-z][A-Za-z0-9_/+\-:]*"


def _names_regex(names: list[str]) -> str:
    return "(?i:" + "|".join(re.escape(n) for n in sorted(names, key=len, reverse=True)) + ")"


@dataclass(frozen=True)
class Token:
    """One element of a compiled pattern.

    ``letter`` is None for literal text.
    """

    letter: str | None
    width: int = 0
    text: str = ""

    @property
    def is_literal(self) -> bool:
        return self.letter is None


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into field and literal tokens.

    Raises:
        InvalidFormatError: On unsupported letters, widths or reserved characters
    """
    if not isinstance(pattern, str) or not pattern:
        raise InvalidFormatError(f"Invalid format pattern {pattern!r}", {"pattern": pattern})

    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    n = len(pattern)

    while i < n:
        ch = pattern[i]

        if ch == "'":
            end = i + 1
            chunk = []
            while True:
                if end >= n:
                    raise InvalidFormatError(
                        f"Unterminated quote in pattern '{pattern}'",
                        {"pattern": pattern, "position": i}
                    )
                if pattern[end] == "'":
                    if end + 1 < n and pattern[end + 1] == "'":
                        chunk.append("'")
                        end += 2
                        continue
                    break
                chunk.append(pattern[end])
                end += 1
            # '' outside a quoted section is a single quote
            literal.append("".join(chunk) if end > i + 1 else "'")
            i = end + 1
            continue

        if ch in _RESERVED:
            raise InvalidFormatError(
                f"Reserved character '{ch}' in pattern '{pattern}'",
                {"pattern": pattern, "position": i}
            )

        if ch.isascii() and ch.isalpha():
            run = i
            while run < n and pattern[run] == ch:
                run += 1
            width = run - i
            if ch not in _MAX_WIDTH:
                raise InvalidFormatError(
                    f"Unsupported pattern letter '{ch}' in '{pattern}'",
                    {"pattern": pattern, "letter": ch}
                )
            if width > _MAX_WIDTH[ch] or (ch == "V" and width != 2):
                raise InvalidFormatError(
                    f"Too many pattern letters '{ch * width}' in '{pattern}'",
                    {"pattern": pattern, "letter": ch, "width": width}
                )
            if literal:
                tokens.append(Token(None, text="".join(literal)))
                literal = []
            tokens.append(Token(ch, width))
            i = run
            continue

        literal.append(ch)
        i += 1

    if literal:
        tokens.append(Token(None, text="".join(literal)))
    return tokens


# ============================================================================
# Rendering
# ============================================================================


def _format_offset(offset: timedelta, colon: bool, minutes: str, zero: str | None) -> str:
    """Render an offset.

    Args:
        colon: Separate hours and minutes with ':'
        minutes: 'always', or 'nonzero' to drop zero minutes
        zero: Text for a zero offset, or None to render +00
    """
    if zero is not None and not offset:
        return zero
    sign = "-" if offset < timedelta(0) else "+"
    total = abs(int(offset.total_seconds())) // 60
    hh, mm = divmod(total, 60)
    if minutes == "nonzero" and not mm:
        return f"{sign}{hh:02d}"
    return f"{sign}{hh:02d}{':' if colon else ''}{mm:02d}"


def _render_token(token: Token, local: datetime, nano_of_second: int) -> str:
    letter, width = token.letter, token.width

    if letter in ("y", "u"):
        if width == 2:
            return f"{local.year % 100:02d}"
        return f"{local.year:0{width}d}"
    if letter in ("M", "L"):
        if width == 3:
            return MONTH_ABBRS[local.month - 1]
        if width == 4:
            return MONTH_NAMES[local.month - 1]
        return f"{local.month:0{width}d}"
    if letter == "d":
        return f"{local.day:0{width}d}"
    if letter == "D":
        return f"{local.timetuple().tm_yday:0{width}d}"
    if letter == "E":
        return DAY_NAMES[local.weekday()] if width == 4 else DAY_ABBRS[local.weekday()]
    if letter == "a":
        return "AM" if local.hour < 12 else "PM"
    if letter == "H":
        return f"{local.hour:0{width}d}"
    if letter == "h":
        return f"{local.hour % 12 or 12:0{width}d}"
    if letter == "m":
        return f"{local.minute:0{width}d}"
    if letter == "s":
        return f"{local.second:0{width}d}"
    if letter == "S":
        return f"{nano_of_second:09d}"[:width]

    offset = local.utcoffset() or timedelta(0)
    if letter in ("X", "x"):
        zero = "Z" if letter == "X" else None
        if width == 1:
            return _format_offset(offset, colon=False, minutes="nonzero", zero=zero)
        return _format_offset(offset, colon=width == 3, minutes="always", zero=zero)
    if letter == "Z":
        return _format_offset(offset, colon=False, minutes="always", zero=None)
    if letter == "V":
        return zone_id(local.tzinfo)
    if letter == "z":
        return local.tzname() or zone_id(local.tzinfo)

    # tokenize() rejects every other letter
    raise InvalidFormatError(f"Unsupported pattern letter '{letter}'", {"letter": letter})


# ============================================================================
# Parsing
# ============================================================================


def _token_regex(token: Token) -> str:
    letter, width = token.letter, token.width

    if letter in ("y", "u"):
        if width == 2:
            return r"\d{2}"
        return rf"\d{{{width},9}}"
    if letter in ("M", "L"):
        if width == 3:
            return _names_regex(MONTH_ABBRS)
        if width == 4:
            return _names_regex(MONTH_NAMES)
        return r"\d{1,2}" if width == 1 else r"\d{2}"
    if letter in ("d", "H", "h", "m", "s"):
        return r"\d{1,2}" if width == 1 else r"\d{2}"
    if letter == "D":
        return rf"\d{{{width},3}}"
    if letter == "E":
        return _names_regex(DAY_NAMES if width == 4 else DAY_ABBRS)
    if letter == "a":
        return "(?i:AM|PM)"
    if letter == "S":
        return rf"\d{{{width}}}"
    if letter == "X":
        return (r"Z|[+-]\d{2}(?:\d{2})?", r"Z|[+-]\d{4}", r"Z|[+-]\d{2}:\d{2}")[width - 1]
    if letter == "x":
        return (r"[+-]\d{2}(?:\d{2})?", r"[+-]\d{4}", r"[+-]\d{2}:\d{2}")[width - 1]
    if letter == "Z":
        return r"[+-]\d{4}"
    return _ZONE_TEXT


def _parse_offset_text(text: str) -> timedelta:
    if text in ("Z", "z"):
        return timedelta(0)
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4] or 0)
    if minutes > 59 or hours > 18:
        raise DateParseError(f"Invalid offset '{text}'", {"value": text})
    return sign * timedelta(hours=hours, minutes=minutes)


@dataclass
class ParsedFields:
    """Raw field values extracted from a string by a compiled pattern."""

    text: str
    pattern: str
    values: dict = field(default_factory=dict)

    def set(self, name: str, value) -> None:
        """Record a field, rejecting a conflicting repeat."""
        if name in self.values and self.values[name] != value:
            raise DateParseError(
                f"Conflicting values for {name} in '{self.text}'",
                {"value": self.text, "pattern": self.pattern, "field": name}
            )
        self.values[name] = value

    @property
    def has_time(self) -> bool:
        return "hour" in self.values or "clock_hour" in self.values

    def _error(self, reason: str) -> DateParseError:
        return DateParseError(
            f"Cannot parse '{self.text}' with pattern '{self.pattern}': {reason}",
            {"value": self.text, "pattern": self.pattern}
        )

    def to_date(self) -> date:
        """Resolve the calendar date.

        Raises:
            DateParseError: If date fields are missing, impossible or inconsistent
        """
        v = self.values
        if "year" not in v:
            raise self._error("no year field")
        try:
            if "month" in v and "day" in v:
                d = date(v["year"], v["month"], v["day"])
            elif "day_of_year" in v and "month" not in v and "day" not in v:
                d = date(v["year"], 1, 1) + timedelta(days=v["day_of_year"] - 1)
                if d.year != v["year"]:
                    raise ValueError("day of year out of range")
            else:
                raise self._error("incomplete date fields")
        except (ValueError, OverflowError) as e:
            raise self._error(str(e)) from e

        if "day_of_year" in v and d.timetuple().tm_yday != v["day_of_year"]:
            raise self._error("day of year does not match the date")
        if "weekday" in v and d.weekday() != v["weekday"]:
            raise self._error(f"{d.isoformat()} is not a {DAY_NAMES[v['weekday']]}")
        return d

    def to_time(self) -> time:
        """Resolve the time of day; missing minute/second/fraction default to zero."""
        v = self.values
        hour = v.get("hour")
        if "clock_hour" in v:
            clock = v["clock_hour"]
            if not 1 <= clock <= 12:
                raise self._error(f"clock hour {clock} out of range 1-12")
            from_clock = clock % 12 + (12 if v.get("pm") else 0)
            if hour is not None and hour != from_clock:
                raise self._error("hour of day does not match clock hour")
            hour = from_clock
        elif "pm" in v and hour is not None and (hour >= 12) != v["pm"]:
            raise self._error("hour of day does not match AM/PM marker")
        try:
            return time(hour, v.get("minute", 0), v.get("second", 0))
        except ValueError as e:
            raise self._error(str(e)) from e

    def _named_zone(self, local: datetime, default: tzinfo) -> tuple[tzinfo, int]:
        """Resolve a parsed ``z`` name to a zone and fold at ``local``.

        Short names such as CST are ambiguous across regions, so the name
        ``default`` uses at that wall time wins. Trying both folds lets
        EDT/EST pick their side of an overlap. Other text must be a zone id.
        """
        name = self.values["zone_name"]
        for fold in (0, 1):
            if local.replace(tzinfo=default, fold=fold).tzname() == name:
                return default, fold
        try:
            return resolve_zone(name), 0
        except InvalidZoneError as e:
            raise self._error(
                f"zone name '{name}' is not a zone id and not used by {zone_id(default)} then"
            ) from e

    def zone_or(self, default: tzinfo) -> tzinfo:
        """The zone parsed from the text, else ``default``.

        A ``z`` name is resolved at midnight of the parsed date.
        """
        if "zone" in self.values:
            return self.values["zone"]
        if "offset" in self.values:
            return fixed_zone(self.values["offset"])
        if "zone_name" in self.values:
            return self._named_zone(datetime.combine(self.to_date(), time()), default)[0]
        return default

    def to_zoned(self, default_zone: tzinfo) -> ZonedTimestamp:
        """Resolve a full zoned instant.

        Raises:
            MissingTimeFieldsError: If the pattern has no time-of-day fields
            DateParseError: If the fields do not describe a valid instant
        """
        if not self.has_time:
            raise MissingTimeFieldsError(
                f"Pattern '{self.pattern}' has no time-of-day fields",
                {"value": self.text, "pattern": self.pattern}
            )
        local = datetime.combine(self.to_date(), self.to_time())
        nanos = self.values.get("nanos", 0)
        if "offset" in self.values:
            instant = ZonedTimestamp.from_local(local, fixed_zone(self.values["offset"]), nanos)
            return instant.with_zone(self.zone_or(default_zone))
        if "zone_name" in self.values and "zone" not in self.values:
            zone, fold = self._named_zone(local, default_zone)
            return ZonedTimestamp.from_local(local, zone, nanos, fold)
        return ZonedTimestamp.from_local(local, self.zone_or(default_zone), nanos)


class CompiledPattern:
    """A tokenized pattern with its parsing regex."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.tokens = tokenize(pattern)
        parts = []
        for index, token in enumerate(self.tokens):
            if token.is_literal:
                parts.append(re.escape(token.text))
            else:
                parts.append(f"(?P<f{index}>{_token_regex(token)})")
        self._regex = re.compile("".join(parts))

    def format(self, local: datetime, nano_of_second: int = 0) -> str:
        """Render an aware datetime (wall clock in its own zone)."""
        return "".join(
            token.text if token.is_literal else _render_token(token, local, nano_of_second)
            for token in self.tokens
        )

    def parse(self, text: str) -> ParsedFields:
        """Match ``text`` against the pattern and extract raw field values.

        Raises:
            DateParseError: If the text does not fully match the pattern
        """
        if not isinstance(text, str):
            raise DateParseError(f"Expected a string, got {type(text).__name__}", {"value": repr(text)})
        match = self._regex.fullmatch(text)
        if not match:
            raise DateParseError(
                f"Text '{text}' does not match pattern '{self.pattern}'",
                {"value": text, "pattern": self.pattern}
            )

        fields = ParsedFields(text, self.pattern)
        for index, token in enumerate(self.tokens):
            if token.is_literal:
                continue
            raw = match.group(f"f{index}")
            self._extract(fields, token, raw)
        return fields

    def _extract(self, fields: ParsedFields, token: Token, raw: str) -> None:
        letter, width = token.letter, token.width

        if letter in ("y", "u"):
            fields.set("year", 2000 + int(raw) if width == 2 else int(raw))
        elif letter in ("M", "L"):
            if width == 3:
                fields.set("month", [m.lower() for m in MONTH_ABBRS].index(raw.lower()) + 1)
            elif width == 4:
                fields.set("month", [m.lower() for m in MONTH_NAMES].index(raw.lower()) + 1)
            else:
                fields.set("month", int(raw))
        elif letter == "d":
            fields.set("day", int(raw))
        elif letter == "D":
            fields.set("day_of_year", int(raw))
        elif letter == "E":
            names = DAY_NAMES if width == 4 else DAY_ABBRS
            fields.set("weekday", [n.lower() for n in names].index(raw.lower()))
        elif letter == "a":
            fields.set("pm", raw.upper() == "PM")
        elif letter == "H":
            fields.set("hour", int(raw))
        elif letter == "h":
            fields.set("clock_hour", int(raw))
        elif letter == "m":
            fields.set("minute", int(raw))
        elif letter == "s":
            fields.set("second", int(raw))
        elif letter == "S":
            fields.set("nanos", int(raw.ljust(9, "0")) % NANOS_PER_SECOND)
        elif letter in ("X", "x", "Z"):
            fields.set("offset", _parse_offset_text(raw))
        elif letter == "z":
            # Resolved against the requested zone in ParsedFields
            fields.set("zone_name", raw)
        else:
            try:
                fields.set("zone", resolve_zone(raw))
            except InvalidZoneError as e:
                raise DateParseError(
                    f"Unknown zone '{raw}' in '{fields.text}'",
                    {"value": fields.text, "pattern": self.pattern, "zone": raw}
                ) from e

    def __repr__(self):
        return f"CompiledPattern({self.pattern!r})"


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile and cache a pattern.

    Raises:
        InvalidFormatError: If the pattern is malformed or unsupported
    """
    compiled = CompiledPattern(pattern)
    logger.debug(f"Compiled pattern {pattern!r} into {len(compiled.tokens)} tokens")
    return compiled


def validate_pattern(pattern: str) -> str:
    """Return ``pattern`` unchanged if it compiles.

    Raises:
        InvalidFormatError: If ``pattern`` is not a string or does not compile
    """
    if not isinstance(pattern, str):
        raise InvalidFormatError(
            f"Pattern must be a string, got {type(pattern).__name__}",
            {"pattern": repr(pattern)}
        )
    compile_pattern(pattern)
    return pattern


def render(zdt: ZonedTimestamp, pattern: str, zone: tzinfo | None = None) -> str:
    """Render ``zdt`` with ``pattern``, displayed in ``zone`` (or its own zone)."""
    compiled = compile_pattern(pattern)
    shown = zdt.with_zone(zone) if zone is not None else zdt
    return compiled.format(shown.to_datetime(), shown.nano_of_second)

