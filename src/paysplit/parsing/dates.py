"""Recovery of the payment date/time embedded in message text."""

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone, tzinfo

from ..exceptions import DateParseAnomaly

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


def month_number(abbreviation: str) -> int:
    """Map a 3-letter month name to 1-12; unknown names map to January."""
    return MONTHS.get(abbreviation.lower(), 1)


def from_epoch_ms(timestamp_ms: int, tz: tzinfo) -> datetime:
    """Convert epoch milliseconds to an aware datetime in ``tz``."""
    return (EPOCH + timedelta(milliseconds=timestamp_ms)).astimezone(tz)


def to_epoch_ms(value: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return (value - EPOCH) // timedelta(milliseconds=1)


def _calendar_date(year: int, month: int, day: int, tz: tzinfo) -> datetime:
    try:
        return datetime(year, month, day, tzinfo=tz)
    except ValueError as e:
        raise DateParseAnomaly(f"Invalid date {day}/{month}/{year}: {e}") from e


def _day_month_name_year(match: re.Match[str], fallback: datetime) -> datetime:
    day, month, year = match.groups()
    return _calendar_date(int(year), month_number(month), int(day), fallback.tzinfo)


def _day_month_number_year(match: re.Match[str], fallback: datetime) -> datetime:
    day, month, year = match.groups()
    return _calendar_date(int(year), int(month), int(day), fallback.tzinfo)


def _day_month_name(match: re.Match[str], fallback: datetime) -> datetime:
    day, month = match.groups()
    # The year comes from the receipt time, not from a clock read
    return _calendar_date(fallback.year, month_number(month), int(day), fallback.tzinfo)


def _time_of_day(match: re.Match[str], fallback: datetime) -> datetime:
    hour, minute = int(match.group(1)), int(match.group(2))
    meridiem = (match.group(3) or "").upper()

    if meridiem == "PM" and hour != 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0

    try:
        return fallback.replace(hour=hour, minute=minute)
    except ValueError as e:
        raise DateParseAnomaly(f"Invalid time {hour}:{minute:02d}: {e}") from e


DateHandler = Callable[[re.Match[str], datetime], datetime]

# Ordered by priority: the first pattern found in the text decides the date
DATE_PATTERNS: list[tuple[re.Pattern[str], DateHandler]] = [
    (
        re.compile(r"on\s+(\d{1,2})[- ]([A-Za-z]{3})[- ](\d{4})", re.IGNORECASE),
        _day_month_name_year,
    ),
    (
        re.compile(r"on\s+(\d{1,2})[/-](\d{1,2})[/-](\d{4})"),
        _day_month_number_year,
    ),
    (
        re.compile(r"(\d{1,2})[- ]([A-Za-z]{3})", re.IGNORECASE),
        _day_month_name,
    ),
    (
        re.compile(r"at\s+(\d{1,2}):(\d{2})\s*(AM|PM)?", re.IGNORECASE),
        _time_of_day,
    ),
]


def extract_timestamp(text: str, fallback_ms: int, tz: tzinfo = timezone.utc) -> int:
    """
    Find the effective payment time of a message.

    Explicit dates resolve to midnight in ``tz``. A bare time of day keeps the
    fallback's date. Anything unparseable yields the fallback unchanged,
    including a fallback outside the calendar range.

    Args:
        text: Raw message text
        fallback_ms: Message receipt time in epoch milliseconds
        tz: Time zone for calendar arithmetic

    Returns:
        Effective timestamp in epoch milliseconds
    """
    for pattern, handler in DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        try:
            fallback = from_epoch_ms(fallback_ms, tz)
            return to_epoch_ms(handler(match, fallback))
        except DateParseAnomaly as e:
            logger.debug(f"Ignoring date in message, using receipt time: {e}")
            return fallback_ms
        except (OverflowError, ValueError) as e:
            logger.debug(f"Receipt time {fallback_ms} has no calendar date: {e}")
            return fallback_ms

    return fallback_ms
