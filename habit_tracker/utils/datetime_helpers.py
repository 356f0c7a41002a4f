"""
Standardized Date Handling Utilities

Every calendar computation in the package goes through this module so that:
1. Completion records are always keyed by a calendar day (start of day)
2. Weekday numbering is always 0=Monday .. 6=Sunday
3. "Today" is always resolved in one configured timezone

CRITICAL RULES:
- Normalize every incoming date/datetime with start_of_day()
- Never compute a weekday any other way than weekday_index()
- Aware datetimes are converted to the configured timezone before truncation
"""

import logging
from datetime import datetime, date, timedelta
from typing import Iterator, Optional, Union
from zoneinfo import ZoneInfo

from habit_tracker import config

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def get_timezone(tz_name: Optional[str] = None) -> ZoneInfo:
    """
    Resolve an IANA timezone name, falling back to UTC

    Args:
        tz_name: Timezone name (defaults to config.DEFAULT_TIMEZONE)

    Returns:
        ZoneInfo object
    """
    tz_name = tz_name or config.DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.error(f"Invalid timezone '{tz_name}': {e}")
        return ZoneInfo("UTC")


def today_in_timezone(tz_name: Optional[str] = None) -> date:
    """
    Get today's date in the given (or configured) timezone

    Args:
        tz_name: IANA timezone name

    Returns:
        Today's date in that timezone
    """
    return datetime.now(get_timezone(tz_name)).date()


def start_of_day(value: DateLike, tz_name: Optional[str] = None) -> date:
    """
    Normalize a date or datetime to its calendar day

    Naive datetimes are taken as local wall-clock time. Aware datetimes are
    converted to the configured timezone first, so 23:30 UTC can land on the
    next day in Asia/Tokyo.

    Args:
        value: date or datetime
        tz_name: IANA timezone name used for aware datetimes

    Returns:
        The calendar day as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(get_timezone(tz_name))
        return value.date()
    return value


def weekday_index(value: DateLike) -> int:
    """
    Weekday of a day with 0=Monday .. 6=Sunday

    Args:
        value: date or datetime

    Returns:
        Integer in range 0-6
    """
    return start_of_day(value).weekday()


def days_between(start: DateLike, end: DateLike) -> int:
    """Number of calendar days from start to end, both inclusive (0 if end < start)"""
    delta = (start_of_day(end) - start_of_day(start)).days
    return max(delta + 1, 0)


def iter_days(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive"""
    day = start_of_day(start)
    last = start_of_day(end)
    while day <= last:
        yield day
        day += timedelta(days=1)
