"""Date and time utilities for the event planner."""

from .dates import (
    DAY_KEY_PATTERN,
    compare_time,
    days_in_month,
    first_weekday,
    format_date_display,
    format_day_key,
    format_time,
    is_same_day,
    normalize_date,
    parse_day_key,
    parse_time,
)

__all__ = [
    "DAY_KEY_PATTERN",
    "compare_time",
    "days_in_month",
    "first_weekday",
    "format_date_display",
    "format_day_key",
    "format_time",
    "is_same_day",
    "normalize_date",
    "parse_day_key",
    "parse_time",
]
