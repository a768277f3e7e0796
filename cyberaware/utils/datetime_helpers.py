"""
Standardized Date/Time Handling Utilities

This module provides centralized functions for date/time operations to ensure:
1. All timestamps are timezone-aware and created in UTC
2. Calendar days ("today", "yesterday") are decided in ONE fixed zone
3. Dates survive a JSON round trip as ISO-8601 strings

CRITICAL RULES:
- Never compare dates by locale string formatting
- Never mix naive and aware datetimes
- Decide "today" with today_in_timezone(), never date.today()
"""

import logging
from datetime import datetime, date, timedelta
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

# Fallback when a configured zone name cannot be resolved
DEFAULT_TIMEZONE = "UTC"

Clock = Callable[[], datetime]


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)

    Returns:
        Current datetime in UTC with timezone info
    """
    return datetime.now(ZoneInfo("UTC"))


def get_timezone(tz_name: Optional[str]) -> ZoneInfo:
    """
    Resolve an IANA zone name, falling back to UTC

    Args:
        tz_name: Zone name such as "Europe/Berlin"

    Returns:
        ZoneInfo object
    """
    if not tz_name:
        return ZoneInfo(DEFAULT_TIMEZONE)

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.error(f"Invalid timezone '{tz_name}': {e}")
        return ZoneInfo(DEFAULT_TIMEZONE)


def today_in_timezone(tz_name: str = DEFAULT_TIMEZONE, clock: Optional[Clock] = None) -> date:
    """
    Get today's calendar date in a fixed timezone

    Args:
        tz_name: IANA zone deciding where the day boundary falls
        clock: Callable returning "now"; defaults to now_utc

    Returns:
        Today's date in that zone
    """
    current = (clock or now_utc)()
    if current.tzinfo is None:
        # Assume UTC if naive
        current = current.replace(tzinfo=ZoneInfo("UTC"))
        logger.warning(f"Clock returned naive datetime, assuming UTC: {current}")

    return current.astimezone(get_timezone(tz_name)).date()


def yesterday_of(day: date) -> date:
    return day - timedelta(days=1)


def to_utc(dt: datetime) -> datetime:
    """
    Convert datetime to UTC for storage

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=ZoneInfo("UTC"))
    return dt.astimezone(ZoneInfo("UTC"))


def parse_iso_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse a stored calendar date

    Accepts a date, a datetime (its date part is used) or an ISO-8601
    string with or without a time component.

    Returns:
        date object, or None for empty input

    Raises:
        ValueError: If the string is not ISO-8601
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"Invalid date format '{value}'. Expected ISO-8601 (YYYY-MM-DD)")
