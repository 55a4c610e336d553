"""Core calendar primitives shared by walkstats components."""

from .time import (
    MONDAY,
    SUNDAY,
    CalendarContext,
    InvalidDateError,
    format_utc_iso8601,
    get_week_start,
    parse_iso8601,
    parse_weekday,
)

__all__ = [
    "CalendarContext",
    "InvalidDateError",
    "MONDAY",
    "SUNDAY",
    "format_utc_iso8601",
    "get_week_start",
    "parse_iso8601",
    "parse_weekday",
]
