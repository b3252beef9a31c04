from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional
import calendar
import logging
import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from feedparser.datetimes import _parse_date

from .exceptions import TimezoneError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Yekaterinburg"

# English names, so the output does not follow the process LC_TIME locale.
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def load_timezone(name: str) -> tzinfo:
    """Load a named zone from the tz database, raising TimezoneError if it is unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimezoneError(f"Timezone not available: {name} ({e})") from e


def format_timestamp(ts: Optional[int], tz: tzinfo) -> str:
    """
    Render a unix timestamp as ``Weekday, Mon D YYYY HH:MM:SS +HHMM`` in ``tz``.

    Returns an empty string when no usable timestamp is given.
    """
    if ts is None:
        return ""
    try:
        dt = datetime.fromtimestamp(ts, tz=tz)
    except (OverflowError, OSError, ValueError) as e:
        logger.warning("Unusable timestamp %r: %s", ts, e)
        return ""
    return (
        f"{_WEEKDAYS[dt.weekday()]}, {_MONTHS[dt.month - 1]} {dt.day} {dt.year} "
        + dt.strftime("%H:%M:%S %z")
    )


def parse_feed_date(value: str) -> Optional[datetime]:
    """
    Parse a feed date string into a timezone-aware UTC datetime.

    Relies on feedparser's date handlers, which accept RFC 822 dates with the
    day and month swapped as produced by ``format_timestamp``.
    """
    if not value:
        return None
    parsed = _parse_date(value)
    if not isinstance(parsed, time.struct_time):
        return None
    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
