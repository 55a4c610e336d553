"""Calendar context and date normalization for walkstats.

All window and bucket arithmetic goes through an explicit CalendarContext:
- one timezone and one first-weekday convention per context
- naive datetimes are local wall time in the context timezone
- day/month/year arithmetic happens on wall time, then is localized,
  so a "day" across a DST transition is 23 or 25 hours long
- malformed dates are rejected here, before any window math runs
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytz
from dateutil.relativedelta import relativedelta

__all__ = [
    "CalendarContext",
    "InvalidDateError",
    "MONDAY",
    "SUNDAY",
    "WEEKDAY_NAMES",
    "format_utc_iso8601",
    "get_week_start",
    "parse_iso8601",
    "parse_weekday",
]

MONDAY = 0
SUNDAY = 6

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class InvalidDateError(ValueError):
    """Raised when a value cannot be normalized to a calendar date."""


def parse_weekday(value: int | str) -> int:
    """Parse a weekday given as a number (0=Monday..6=Sunday) or a name.

    Parameters
    ----------
    value
        Weekday number, full name ("sunday") or three-letter prefix ("sun")

    Returns
    -------
    int
        Weekday number, 0=Monday..6=Sunday

    Raises
    ------
    ValueError
        If the value does not name a weekday
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid weekday: {value!r}")

    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Weekday must be between 0 (Monday) and 6 (Sunday), got {value}")

    text = str(value).strip().lower()
    if text.isdigit():
        return parse_weekday(int(text))

    for index, name in enumerate(WEEKDAY_NAMES):
        if len(text) >= 3 and name.startswith(text):
            return index

    raise ValueError(f"Invalid weekday: {value!r}")


def get_week_start(dt: datetime, start_on: int = SUNDAY) -> datetime:
    """Get start of week for a datetime.

    Parameters
    ----------
    dt
        Datetime to get week start for
    start_on
        Day of week to start on (0=Monday, 6=Sunday)

    Returns
    -------
    datetime
        Start of week (same time as input)
    """
    days_since_start = (dt.weekday() - start_on) % 7
    return dt - timedelta(days=days_since_start)


def parse_iso8601(iso_string: str) -> datetime:
    """Parse an ISO-8601 date or datetime string.

    The result keeps whatever offset the string carries; strings without an
    offset produce naive datetimes. A 'Z' suffix is read as UTC.

    Raises
    ------
    ValueError
        If string is not valid ISO-8601
    """
    text = iso_string.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    return datetime.fromisoformat(text)


def format_utc_iso8601(dt: datetime) -> str:
    """Format datetime as ISO-8601 UTC string.

    Naive datetimes are assumed to already be UTC.

    Example
    -------
    >>> format_utc_iso8601(datetime(2025, 10, 8, 12, 30, tzinfo=timezone.utc))
    '2025-10-08T12:30:00+00:00'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt.isoformat()


@dataclass(frozen=True)
class CalendarContext:
    """Read-only calendar settings shared by every window operation.

    Attributes
    ----------
    timezone_name : str
        IANA timezone name used for day boundaries (e.g. "America/New_York")
    first_weekday : int
        First day of the week, 0=Monday..6=Sunday (default: Sunday)
    """

    timezone_name: str = "UTC"
    first_weekday: int = SUNDAY

    def __post_init__(self) -> None:
        try:
            pytz.timezone(self.timezone_name)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Invalid timezone: {self.timezone_name}") from exc

        object.__setattr__(self, "first_weekday", parse_weekday(self.first_weekday))

    @property
    def tz(self) -> Any:
        """pytz timezone for this context."""
        return pytz.timezone(self.timezone_name)

    def localize(self, naive: datetime) -> datetime:
        """Attach the context timezone to a naive wall-clock datetime.

        Wall times that occur twice resolve to the earlier instant, so a
        repeated local midnight still starts its day. Wall times that fall
        into a DST gap are moved forward to the first valid instant.
        """
        tz = self.tz
        try:
            return tz.localize(naive, is_dst=None)
        except pytz.AmbiguousTimeError:
            return tz.localize(naive, is_dst=True)
        except pytz.NonExistentTimeError:
            return tz.normalize(tz.localize(naive, is_dst=False))

    def normalize(self, value: Any) -> datetime:
        """Convert a caller-supplied date into an aware datetime in this context.

        Parameters
        ----------
        value
            datetime (naive = local wall time), date (local midnight) or
            ISO-8601 string

        Returns
        -------
        datetime
            Timezone-aware datetime in the context timezone

        Raises
        ------
        InvalidDateError
            If the value is not a date or cannot be parsed as one
        """
        if isinstance(value, str):
            try:
                value = parse_iso8601(value)
            except ValueError as exc:
                raise InvalidDateError(f"Cannot parse date: {value!r}") from exc

        if isinstance(value, datetime):
            try:
                if value.tzinfo is None:
                    return self.localize(value)
                return value.astimezone(self.tz)
            except (OverflowError, ValueError) as exc:
                raise InvalidDateError(f"Date out of range: {value!r}") from exc

        if isinstance(value, date):
            return self.localize(datetime(value.year, value.month, value.day))

        raise InvalidDateError(f"Expected date, datetime or ISO-8601 string, got {type(value).__name__}")

    def wall_time(self, value: Any) -> datetime:
        """Naive local wall-clock time of a date in this context."""
        return self.normalize(value).replace(tzinfo=None)

    def start_of_day(self, value: Any) -> datetime:
        wall = self.wall_time(value)
        return self.localize(datetime(wall.year, wall.month, wall.day))

    def start_of_week(self, value: Any) -> datetime:
        wall = get_week_start(self.wall_time(value), start_on=self.first_weekday)
        return self.localize(datetime(wall.year, wall.month, wall.day))

    def start_of_month(self, value: Any) -> datetime:
        wall = self.wall_time(value)
        return self.localize(datetime(wall.year, wall.month, 1))

    def start_of_year(self, value: Any) -> datetime:
        wall = self.wall_time(value)
        return self.localize(datetime(wall.year, 1, 1))

    def shift(
        self,
        value: Any,
        *,
        days: int = 0,
        weeks: int = 0,
        months: int = 0,
        years: int = 0,
    ) -> datetime:
        """Move a date by calendar units, keeping its local wall-clock time.

        Month and year steps clamp to the last valid day of the target month
        (Jan 31 + 1 month = Feb 28/29).

        Raises
        ------
        InvalidDateError
            If the result falls outside the supported date range
        """
        wall = self.wall_time(value)
        try:
            shifted = wall + relativedelta(days=days, weeks=weeks, months=months, years=years)
        except (OverflowError, ValueError) as exc:
            raise InvalidDateError(f"Date out of range after shifting {value!r}") from exc

        return self.localize(shifted)
