"""
Time normalization for rules with ``type: time``.

Numbers are Unix timestamps, strings are parsed against the rule's own
``time_format`` and then the built-in ``TIME_LAYOUTS`` table, in order.
The parsed instant is optionally moved into ``timezone`` and emitted as
seconds, milliseconds or a strftime-formatted string.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Any, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import TimeParseError, TimezoneError

# Numeric inputs up to this value are seconds since the epoch, larger ones are
# milliseconds. This is a heuristic: a millisecond timestamp before
# 1970-01-26 is read as seconds. Rules carry no unit field to disambiguate.
SECONDS_THRESHOLD = 2147483647

EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)

# Priority-ordered strptime layouts; first successful parse wins.
TIME_LAYOUTS: Tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S%z",              # RFC 3339
    "%Y-%m-%dT%H:%M:%S.%f%z",           # RFC 3339 with fraction
    "%a, %d %b %Y %H:%M:%S %Z",         # RFC 1123
    "%a, %d %b %Y %H:%M:%S %z",         # RFC 1123 numeric zone
    "%d %b %y %H:%M %Z",                # RFC 822
    "%d %b %y %H:%M %z",                # RFC 822 numeric zone
    "%A, %d-%b-%y %H:%M:%S %Z",         # RFC 850
    "%a %b %d %H:%M:%S %Y",             # ANSI C
    "%a %b %d %H:%M:%S %Z %Y",          # Unix date
    "%a %b %d %H:%M:%S %z %Y",          # Ruby date
    "%m/%d %I:%M:%S%p '%y %z",          # reference layout
    "%b %d %H:%M:%S",                   # stamp
    "%b %d %H:%M:%S.%f",                # stamp with fraction
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%m-%d-%Y",
    "%Y年%m月%d日",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
)


def from_timestamp(num: Union[int, float]) -> datetime:
    try:
        n = int(num)
        if n <= SECONDS_THRESHOLD:
            return EPOCH + timedelta(seconds=n)
        return EPOCH + timedelta(milliseconds=n)
    except (OverflowError, ValueError) as e:
        raise TimeParseError(f"cannot parse time: {num!r}") from e


def parse_time_string(text: str, time_format: Optional[str] = None) -> datetime:
    """Parse ``text`` with the rule's layout first, then the built-in table."""
    layouts = ((time_format,) if time_format else ()) + TIME_LAYOUTS
    for layout in layouts:
        try:
            parsed = datetime.strptime(text, layout)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=dt_timezone.utc)
        return parsed
    raise TimeParseError(f"cannot parse time: {text!r}")


def to_instant(value: Any, time_format: Optional[str] = None) -> datetime:
    if isinstance(value, bool):
        raise TimeParseError(f"cannot parse time: {value!r}")
    if isinstance(value, (int, float)):
        return from_timestamp(value)
    if isinstance(value, str):
        return parse_time_string(value, time_format)
    raise TimeParseError(f"cannot parse time from {type(value).__name__}: {value!r}")


def load_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimezoneError(f"invalid timezone: {name}") from e


def format_instant(instant: datetime, target_time_format: Optional[str]) -> Union[int, str]:
    if target_time_format == "unix":
        return (instant - EPOCH) // timedelta(seconds=1)
    if target_time_format == "unix_ms" or not target_time_format:
        return (instant - EPOCH) // timedelta(milliseconds=1)
    return instant.strftime(target_time_format)


def convert_time(
    value: Any,
    *,
    time_format: str = "",
    target_time_format: str = "",
    timezone: str = "",
) -> Union[int, str]:
    instant = to_instant(value, time_format)
    if timezone:
        instant = instant.astimezone(load_zone(timezone))
    return format_instant(instant, target_time_format)
