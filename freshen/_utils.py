from __future__ import annotations

import calendar
import math
import typing as tp
from datetime import datetime, timezone
from email.utils import formatdate, parsedate_tz


def parse_date(date: str) -> tp.Optional[int]:
    parsed = parsedate_tz(date)
    if parsed is None:
        return None
    try:
        timestamp = calendar.timegm(parsed[:6])
    except (ValueError, OverflowError):
        return None
    # parsed[9] is the offset from UTC in seconds
    return timestamp - (parsed[9] or 0)


def to_timestamp(value: tp.Union[datetime, int, float]) -> float:
    """
    Convert a point in time to a POSIX timestamp.

    Naive datetimes are interpreted as UTC, which is what HTTP dates are
    expressed in.

    Examples:
        >>> to_timestamp(datetime(2015, 8, 25, 12, 0, 0))
        1440504000.0
        >>> to_timestamp(1440504000)
        1440504000.0
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a datetime or a POSIX timestamp, got {type(value).__name__}")
    return float(value)


def whole_seconds(timestamp: float) -> int:
    # HTTP dates have one second resolution
    return math.floor(timestamp)


def generate_http_date(timeval: tp.Optional[float] = None) -> str:
    """
    Generate an HTTP-date header value.
    Returns date in RFC 1123 format (required by HTTP/1.1).

    When ``timeval`` is None the current time is used.

    Example output: 'Sun, 26 Oct 2025 12:34:56 GMT'
    """
    return formatdate(timeval=timeval, localtime=False, usegmt=True)
