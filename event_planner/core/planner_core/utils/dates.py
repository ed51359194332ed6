"""Date and time helpers for day keys, times of day and the month grid."""

import calendar
import re
from datetime import date, datetime
from typing import Tuple, Union

DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DateLike = Union[date, datetime, str]


def format_day_key(value: date) -> str:
    """Format a date as a YYYY-MM-DD day key."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_day_key(day_key: str) -> date:
    """Parse a YYYY-MM-DD day key into a date.

    Args:
        day_key: Day key to parse

    Returns:
        The calendar date

    Raises:
        ValueError: If the key is not a valid YYYY-MM-DD date
    """
    if not DAY_KEY_PATTERN.match(day_key):
        raise ValueError(f"Invalid day key: {day_key!r}")
    year, month, day = (int(part) for part in day_key.split("-"))
    return date(year, month, day)


def normalize_date(value: DateLike) -> date:
    """Reduce a date, datetime or day key to a bare calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_day_key(value)
    raise TypeError(f"Unsupported date value: {value!r}")


def is_same_day(first: DateLike, second: DateLike) -> bool:
    """True when both values fall on the same calendar day."""
    return normalize_date(first) == normalize_date(second)


def format_time(hour: int, minute: int) -> str:
    """Format an hour and minute as zero-padded HH:MM."""
    return f"{hour:02d}:{minute:02d}"


def parse_time(text: str) -> Tuple[int, int]:
    """Parse an H:MM or HH:MM string into an (hour, minute) pair.

    Raises:
        ValueError: If the text is not two colon-separated integers
    """
    parts = text.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time: {text!r}")
    hour, minute = (int(part) for part in parts)
    return hour, minute


def compare_time(first, second) -> int:
    """Compare two times of day by minutes since midnight.

    Both arguments need ``hour`` and ``minute`` attributes. The result is
    negative, zero or positive like a classic comparator.
    """
    return (first.hour * 60 + first.minute) - (second.hour * 60 + second.minute)


def format_date_display(value: DateLike) -> str:
    """Format a date for display, e.g. "January 15, 2025"."""
    value = normalize_date(value)
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the first of the month, 0 = Sunday through 6 = Saturday."""
    # calendar counts Monday as 0
    return (calendar.monthrange(year, month)[0] + 1) % 7
