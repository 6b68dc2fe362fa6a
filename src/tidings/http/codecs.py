"""Text codecs for individual header values.

Pure functions, no header store involved:

- HTTP dates: one canonical output format, three accepted input formats
- comma-separated list tokenizing and joining
- ETag lists (``If-Match`` / ``If-None-Match``)
- RFC 5987 / RFC 8187 ``ext-value`` encoding for non-ASCII parameters
"""

import calendar
import re
import string
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from tidings.errors import InvalidArgumentError
from tidings.http.charsets import ISO_8859_1, US_ASCII, UTF_8, canonical_charset

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_WEEKDAY_NAMES = frozenset(
    name.lower()
    for name in (
        *_WEEKDAYS,
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    )
)
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_NUMBERS = {name.lower(): number for number, name in enumerate(_MONTHS, start=1)}
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_SECONDS_PER_DAY = 86400

# RFC 822 zone names, in minutes east of UTC
_ZONES = {
    "gmt": 0,
    "ut": 0,
    "utc": 0,
    "z": 0,
    "est": -5 * 60,
    "edt": -4 * 60,
    "cst": -6 * 60,
    "cdt": -5 * 60,
    "mst": -7 * 60,
    "mdt": -6 * 60,
    "pst": -8 * 60,
    "pdt": -7 * 60,
}
_NUMERIC_ZONE = re.compile(r"([+-])(\d{2}):?(\d{2})")

_TIME = r"(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2})"

# Sun, 06 Nov 1994 08:49:37 GMT
_RFC1123 = re.compile(
    r"(?P<weekday>[a-z]+),\s*(?P<day>\d{1,2})\s+(?P<month>[a-z]{3})\s+"
    r"(?P<year>\d{4,}|\d{2})\s+" + _TIME + r"\s+(?P<zone>\S+)",
    re.IGNORECASE,
)
# Sunday, 06-Nov-94 08:49:37 GMT
_RFC850 = re.compile(
    r"(?P<weekday>[a-z]+),\s*(?P<day>\d{1,2})-(?P<month>[a-z]{3})-"
    r"(?P<year>\d{4,}|\d{2})\s+" + _TIME + r"\s+(?P<zone>\S+)",
    re.IGNORECASE,
)
# Sun Nov  6 08:49:37 1994
_ASCTIME = re.compile(
    r"(?P<weekday>[a-z]+)\s+(?P<month>[a-z]{3})\s+(?P<day>\d{1,2})\s+"
    + _TIME
    + r"\s+(?P<year>\d{4,})",
    re.IGNORECASE,
)


def format_http_date(epoch_millis: int) -> str:
    """Format milliseconds since the epoch as an RFC 1123 date in GMT.

    Sub-second precision is dropped. Years past 9999 are written with as
    many digits as they need::

        >>> format_http_date(784111777000)
        'Sun, 06 Nov 1994 08:49:37 GMT'

    Raises ``InvalidArgumentError`` for instants before 0001-01-01.
    """
    days, seconds = divmod(epoch_millis // 1000, _SECONDS_PER_DAY)
    year, month, day = _civil_from_days(days)
    if year < 1:
        msg = f"Cannot format {epoch_millis} as an HTTP date: year {year} is before year 1"
        raise InvalidArgumentError(msg)
    hour, remainder = divmod(seconds, 3600)
    minute, second = divmod(remainder, 60)
    # 1970-01-01 was a Thursday
    weekday = _WEEKDAYS[(days + 3) % 7]
    return (
        f"{weekday}, {day:02d} {_MONTHS[month - 1]} "
        f"{year:04d} {hour:02d}:{minute:02d}:{second:02d} GMT"
    )


def parse_http_date(value: str, *, year_window: int = 80) -> int | None:
    """Parse an HTTP date to milliseconds since the epoch.

    Formats are tried in a fixed order, first success wins:

    1. RFC 1123: ``Sun, 06 Nov 1994 08:49:37 GMT``
    2. RFC 850: ``Sunday, 06-Nov-94 08:49:37 GMT``
    3. asctime: ``Sun Nov  6 08:49:37 1994`` (always GMT)

    Returns ``None`` when no format matches the whole value, or when the
    value is shorter than three characters.
    """
    if len(value) < 3:
        return None
    text = value.strip()
    for attempt in _DATE_ATTEMPTS:
        millis = attempt(text, year_window)
        if millis is not None:
            return millis
    return None


def _parse_rfc1123(text: str, year_window: int) -> int | None:
    return _from_match(_RFC1123.fullmatch(text), year_window)


def _parse_rfc850(text: str, year_window: int) -> int | None:
    return _from_match(_RFC850.fullmatch(text), year_window)


def _parse_asctime(text: str, year_window: int) -> int | None:
    return _from_match(_ASCTIME.fullmatch(text), year_window)


_DATE_ATTEMPTS: tuple[Callable[[str, int], int | None], ...] = (
    _parse_rfc1123,
    _parse_rfc850,
    _parse_asctime,
)


def _from_match(match: re.Match[str] | None, year_window: int) -> int | None:
    """Turn a date regex match into epoch millis, or None if a field is out of range."""
    if match is None:
        return None
    fields = match.groupdict()
    if fields["weekday"].lower() not in _WEEKDAY_NAMES:
        return None
    month = _MONTH_NUMBERS.get(fields["month"].lower())
    if month is None:
        return None

    offset_minutes = _zone_offset(fields.get("zone") or "GMT")
    if offset_minutes is None:
        return None

    year = int(fields["year"])
    if len(fields["year"]) == 2:
        year = _expand_year(year, year_window)
    day = int(fields["day"])
    hour, minute, second = int(fields["hour"]), int(fields["minute"]), int(fields["second"])
    if year < 1 or not 1 <= day <= _days_in_month(year, month):
        return None
    if hour > 23 or minute > 59 or second > 59:
        return None

    days = _days_from_civil(year, month, day)
    seconds = days * _SECONDS_PER_DAY + hour * 3600 + minute * 60 + second
    return (seconds - offset_minutes * 60) * 1000


def _zone_offset(zone: str) -> int | None:
    """Minutes east of UTC for *zone*, or None if unrecognized."""
    named = _ZONES.get(zone.lower())
    if named is not None:
        return named
    match = _NUMERIC_ZONE.fullmatch(zone)
    if match is None:
        return None
    sign, hours, minutes = match.groups()
    offset = int(hours) * 60 + int(minutes)
    return -offset if sign == "-" else offset


def _expand_year(two_digit: int, year_window: int) -> int:
    """Place a two-digit year in the century starting *year_window* years ago."""
    start = datetime.now(UTC).year - year_window
    year = start - start % 100 + two_digit
    if year < start:
        year += 100
    return year


# Proleptic Gregorian day arithmetic, unbounded in both directions
# (datetime stops at year 9999).


def _days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a calendar date."""
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    day_of_year = (153 * ((month + 9) % 12) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - 719468


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Calendar ``(year, month, day)`` for a count of days since 1970-01-01."""
    shifted = days + 719468
    era = shifted // 146097
    day_of_era = shifted - era * 146097
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400 + (month <= 2)
    return year, month, day


def _days_in_month(year: int, month: int) -> int:
    if month == 2 and calendar.isleap(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


def tokenize_comma_list(value: str) -> list[str]:
    """Split on commas, strip each token, drop empty tokens."""
    return [token for token in (part.strip() for part in value.split(",")) if token]


def to_comma_delimited_string(values: Iterable[str], separator: str = ", ") -> str:
    return separator.join(values)


# ---------------------------------------------------------------------------
# ETags
# ---------------------------------------------------------------------------

_ETAG_LIST = re.compile(r'\*|\s*((W/)?("[^"]*"))\s*,?')


def parse_etag_list(value: str) -> list[str]:
    """Extract entity tags from an ``If-Match`` style value.

    Keeps ``*`` literally and each tag with its quotes and optional ``W/``
    prefix, left to right. Text that matches nothing is skipped; callers
    decide whether an empty result is an error.
    """
    tags = []
    for match in _ETAG_LIST.finditer(value):
        if match.group() == "*":
            tags.append("*")
        else:
            tags.append(match.group(1))
    return tags


# ---------------------------------------------------------------------------
# RFC 5987 ext-value
# ---------------------------------------------------------------------------

_ATTR_CHARS = frozenset((string.ascii_letters + string.digits + "!#$&+-.^_`|~").encode("ascii"))


def encode_ext_value(
    value: str,
    charset: str,
    *,
    allowed: Iterable[str] = (UTF_8, ISO_8859_1),
) -> str:
    """Encode *value* as an RFC 5987 ``ext-value`` (``charset''pct-encoded``).

    US-ASCII values are returned unchanged. Any charset not in *allowed*
    raises ``InvalidArgumentError``. Characters the charset cannot
    represent are replaced with ``?`` before encoding.

        >>> encode_ext_value("€ rates", "utf-8")
        "UTF-8''%E2%82%AC%20rates"
    """
    try:
        name = canonical_charset(charset)
        permitted = {canonical_charset(candidate) for candidate in allowed}
    except LookupError as exc:
        msg = f"Unknown charset {charset!r}"
        raise InvalidArgumentError(msg) from exc
    if name == US_ASCII:
        return value
    if name not in permitted:
        msg = f"Charset should be one of {sorted(permitted)}, got {name!r}"
        raise InvalidArgumentError(msg)

    parts = [name, "''"]
    for byte in value.encode(name, errors="replace"):
        if byte in _ATTR_CHARS:
            parts.append(chr(byte))
        else:
            parts.append(f"%{byte:02X}")
    return "".join(parts)
