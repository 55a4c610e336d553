"""Window calculations for range variants.

Compute the calendar-aligned start of a chart window, the fetch window a
data source must honor, and the bucket boundaries inside it. Arithmetic runs
on local wall time through CalendarContext, so DST transitions and month
lengths are respected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from dateutil.relativedelta import relativedelta

from ..core.time import CalendarContext, format_utc_iso8601
from ..observability.loguru_config import get_logger, log_timing
from .variants import RangeKind, RangeVariant

__all__ = [
    "BUCKET_UNITS",
    "BucketUnit",
    "DAY",
    "FetchWindow",
    "MONTH",
    "WEEK",
    "YEAR",
    "bucket_boundaries",
    "bucket_unit_for",
    "compute_start_date",
    "compute_window",
    "last_week_start_date",
    "last_week_window",
    "step_boundary",
]

logger = get_logger("windows")


@dataclass(frozen=True)
class BucketUnit:
    """Calendar length of one bucket."""

    days: int = 0
    months: int = 0
    years: int = 0

    def offset(self, steps: int = 1) -> relativedelta:
        return relativedelta(days=self.days * steps, months=self.months * steps, years=self.years * steps)

    def __str__(self) -> str:
        parts = [
            f"{amount} {name}"
            for amount, name in ((self.years, "year"), (self.months, "month"), (self.days, "day"))
            if amount
        ]
        return ", ".join(parts) or "0 day"


DAY = BucketUnit(days=1)
WEEK = BucketUnit(days=7)
MONTH = BucketUnit(months=1)
YEAR = BucketUnit(years=1)

BUCKET_UNITS: dict[RangeKind, BucketUnit] = {
    RangeKind.DAILY: DAY,
    RangeKind.WEEKLY: WEEK,
    RangeKind.MONTHLY: MONTH,
    RangeKind.YEARLY: YEAR,
}


@dataclass(frozen=True)
class FetchWindow:
    """Fetch window handed to the data source.

    Attributes
    ----------
    start : datetime
        Window start, aligned to a day boundary (inclusive)
    end : datetime
        Reference date (exclusive)
    bucket_unit : BucketUnit
        Granularity the data source must bucket by
    context : CalendarContext
        Calendar the window was computed in
    variant : RangeVariant | None
        Variant the window was computed for
    """

    start: datetime
    end: datetime
    bucket_unit: BucketUnit
    context: CalendarContext = field(default_factory=CalendarContext)
    variant: RangeVariant | None = None

    def contains(self, timestamp: datetime) -> bool:
        return self.start <= timestamp < self.end

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_utc": format_utc_iso8601(self.start),
            "end_utc": format_utc_iso8601(self.end),
            "bucket_unit": str(self.bucket_unit),
            "timezone": self.context.timezone_name,
            "variant": str(self.variant) if self.variant else None,
        }


def bucket_unit_for(variant: RangeVariant) -> BucketUnit:
    """Bucket unit for a variant kind; independent of the count."""
    return BUCKET_UNITS[variant.kind]


def compute_start_date(
    reference_date: Any,
    variant: RangeVariant,
    context: CalendarContext | None = None,
) -> datetime:
    """Compute the calendar-aligned start of a variant's window.

    Parameters
    ----------
    reference_date
        Date the window ends at (datetime, date or ISO-8601 string)
    variant
        Range variant
    context
        Calendar context (default: UTC, weeks start on Sunday)

    Returns
    -------
    datetime
        Start of day, never later than reference_date

    Raises
    ------
    InvalidDateError
        If reference_date is not a valid date

    Examples
    --------
    >>> compute_start_date(datetime(2023, 3, 15), RangeVariant.weekly(3)).date()
    datetime.date(2023, 2, 26)
    """
    context = context or CalendarContext()
    reference = context.normalize(reference_date)
    steps_back = variant.span - 1

    if variant.kind is RangeKind.DAILY:
        start = context.shift(reference, days=-steps_back)
        return context.start_of_day(start)
    elif variant.kind is RangeKind.WEEKLY:
        week_start = context.start_of_week(reference)
        return context.start_of_day(context.shift(week_start, weeks=-steps_back))
    elif variant.kind is RangeKind.MONTHLY:
        month_start = context.start_of_month(reference)
        return context.start_of_day(context.shift(month_start, months=-steps_back))
    elif variant.kind is RangeKind.YEARLY:
        year_start = context.start_of_year(reference)
        return context.start_of_day(context.shift(year_start, years=-steps_back))
    else:
        raise ValueError(f"Unknown range kind: {variant.kind}")


@log_timing(component="windows")
def compute_window(
    reference_date: Any,
    variant: RangeVariant,
    context: CalendarContext | None = None,
) -> FetchWindow:
    """Compute fetch window and bucket unit for a variant.

    Parameters
    ----------
    reference_date
        Date the window ends at
    variant
        Range variant
    context
        Calendar context

    Returns
    -------
    FetchWindow
        [start, reference_date) with the variant's bucket unit
    """
    context = context or CalendarContext()
    end = context.normalize(reference_date)
    start = compute_start_date(end, variant, context)

    window = FetchWindow(
        start=start,
        end=end,
        bucket_unit=bucket_unit_for(variant),
        context=context,
        variant=variant,
    )
    logger.debug("Computed fetch window", **window.to_dict())
    return window


def bucket_boundaries(window: FetchWindow) -> list[tuple[datetime, datetime]]:
    """Split a window into contiguous [start, end) buckets.

    Boundaries are window.start plus whole bucket units, stepped on local wall
    time. The last bucket is cut at window.end.

    Returns
    -------
    list[tuple[datetime, datetime]]
        Chronological, non-overlapping bucket bounds; empty if the window is
        empty
    """
    start_wall = window.context.wall_time(window.start)

    boundaries: list[tuple[datetime, datetime]] = []
    current = window.start
    step = 0

    while current < window.end:
        step += 1
        next_start = step_boundary(window, start_wall, step)
        if next_start is None or next_start > window.end:
            next_start = window.end
        boundaries.append((current, next_start))
        current = next_start

    return boundaries


def step_boundary(window: FetchWindow, start_wall: datetime, steps: int) -> datetime | None:
    """Local boundary `steps` bucket units after start_wall.

    Returns None when the boundary lies past the last representable date.
    """
    try:
        return window.context.localize(start_wall + window.bucket_unit.offset(steps))
    except (OverflowError, ValueError):
        return None


def last_week_start_date(reference_date: Any, context: CalendarContext | None = None) -> datetime:
    """Reference date minus six days, time of day kept.

    Covers seven days of data counting the reference day itself.
    """
    context = context or CalendarContext()
    return context.shift(reference_date, days=-6)


def last_week_window(reference_date: Any, context: CalendarContext | None = None) -> FetchWindow:
    """Trailing seven-day fetch window with daily buckets."""
    context = context or CalendarContext()
    end = context.normalize(reference_date)
    return FetchWindow(
        start=last_week_start_date(end, context),
        end=end,
        bucket_unit=DAY,
        context=context,
    )
