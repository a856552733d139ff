"""Time and TLE formatting helpers.

Converts the Unix timestamps returned by the API into timezone-aware
datetimes and display strings.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def split_tle(tle: str) -> tuple[str, str]:
    """Split a TLE string into its two lines.

    Args:
        tle: TLE text with the lines separated by ``"\\r\\n"``.

    Returns:
        Tuple of line 1 and line 2.

    Raises:
        ValueError: If the text is not exactly two CRLF-separated lines.
    """
    if "\r\n" not in tle:
        raise ValueError(r"Invalid TLE format - must contain two lines separated by \r\n")
    lines = tle.split("\r\n")
    if len(lines) != 2:
        raise ValueError("Invalid TLE format - must contain exactly two lines")
    return lines[0], lines[1]


def timestamp_to_datetime(timestamp: float) -> datetime:
    """Convert Unix seconds to a UTC-aware datetime.

    Args:
        timestamp: Seconds since the Unix epoch.

    Returns:
        Aware :class:`~datetime.datetime` in UTC.

    Raises:
        TypeError: If *timestamp* is not a finite number.
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise TypeError("Invalid timestamp value")
    if not math.isfinite(timestamp):
        raise TypeError("Invalid timestamp value")
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def resolve_timezone(
    name: str, log: Callable[[str], None] | None = None
) -> timezone | ZoneInfo:
    """Look up an IANA zone, falling back to UTC when it is unknown.

    Args:
        name: Zone name such as ``"America/New_York"`` or ``"UTC"``.
        log: Diagnostic hook told about the fallback.

    Returns:
        The zone, or :data:`datetime.timezone.utc`.
    """
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        (log or logger.debug)(f"Unknown time zone {name!r}, falling back to UTC")
        return timezone.utc


def format_timestamp(
    timestamp: float,
    time_zone: str = "UTC",
    log: Callable[[str], None] | None = None,
) -> str:
    """Format a Unix timestamp as local time in *time_zone*.

    Args:
        timestamp: Seconds since the Unix epoch.
        time_zone: IANA zone name. Unknown zones format as UTC.
        log: Diagnostic hook for the fallback notice.

    Returns:
        Time formatted as ``YYYY-MM-DD HH:MM:SS``.
    """
    tz = resolve_timezone(time_zone, log)
    return timestamp_to_datetime(timestamp).astimezone(tz).strftime(TIME_FORMAT)
