"""Axis and range labels for charted buckets.

Labels use fixed English abbreviations, independent of the process locale,
so output is identical on every machine.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from ..core.time import CalendarContext
from ..observability.loguru_config import get_logger
from .aggregator import Bucket
from .time_windows import compute_start_date
from .variants import RangeKind, RangeVariant

__all__ = [
    "MONTH_ABBREVIATIONS",
    "RANGE_SEPARATOR",
    "WEEKDAY_ABBREVIATIONS",
    "axis_label",
    "axis_labels",
    "format_range_label",
    "last_updated_label",
    "month_day_markers",
    "trailing_week_markers",
    "variant_range_label",
]

# Sunday first, as on a wall calendar
WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

RANGE_SEPARATOR = "–"

logger = get_logger("labels")


def _weekday_abbreviation(dt: datetime) -> str:
    # datetime.weekday() is Monday=0
    return WEEKDAY_ABBREVIATIONS[(dt.weekday() + 1) % 7]


def _month_day(dt: datetime) -> str:
    return f"{MONTH_ABBREVIATIONS[dt.month - 1]} {dt.day}"


def _month_day_year(dt: datetime) -> str:
    return f"{_month_day(dt)}, {dt.year:04d}"


def _numeric_month_day(dt: datetime) -> str:
    return f"{dt.month:02d}/{dt.day:02d}"


def axis_label(bucket: Bucket, kind: RangeKind, context: CalendarContext | None = None) -> str:
    """Label for one bucket, from its dates only."""
    context = context or CalendarContext()
    start = context.wall_time(bucket.start)

    if kind is RangeKind.DAILY:
        return _weekday_abbreviation(start)
    elif kind is RangeKind.WEEKLY:
        end = context.wall_time(bucket.end)
        return f"{start.day}-{end.day}"
    elif kind is RangeKind.MONTHLY:
        return MONTH_ABBREVIATIONS[start.month - 1]
    elif kind is RangeKind.YEARLY:
        return f"{start.year:04d}"
    else:
        raise ValueError(f"Unknown range kind: {kind}")


def axis_labels(
    buckets: Sequence[Bucket],
    variant: RangeVariant,
    context: CalendarContext | None = None,
) -> list[str]:
    """Produce one axis label per bucket, in bucket order.

    Parameters
    ----------
    buckets
        Chronological buckets
    variant
        Range variant the buckets were computed for
    context
        Calendar context the buckets were computed in

    Returns
    -------
    list[str]
        "Sun".."Sat" (daily), "26-5" (weekly), "Jan".."Dec" (monthly) or
        "2023" (yearly)
    """
    labels = [axis_label(bucket, variant.kind, context) for bucket in buckets]
    logger.debug("Labelled buckets", variant=str(variant), label_count=len(labels))
    return labels


def format_range_label(start_date: Any, end_date: Any, context: CalendarContext | None = None) -> str:
    """Describe a date range without repeating month or year.

    Examples
    --------
    >>> format_range_label(datetime(2020, 6, 3), datetime(2020, 6, 10))
    'Jun 3–10, 2020'
    >>> format_range_label(datetime(2020, 5, 28), datetime(2020, 6, 3))
    'May 28–Jun 3, 2020'
    >>> format_range_label(datetime(2019, 12, 29), datetime(2020, 1, 4))
    'Dec 29, 2019–Jan 4, 2020'
    """
    context = context or CalendarContext()
    start = context.wall_time(start_date)
    end = context.wall_time(end_date)

    start_text = _month_day(start)
    end_text = _month_day_year(end)

    if (start.year, start.month) == (end.year, end.month):
        end_text = f"{end.day}, {end.year:04d}"

    if start.year != end.year:
        start_text = _month_day_year(start)

    return f"{start_text}{RANGE_SEPARATOR}{end_text}"


def variant_range_label(
    reference_date: Any,
    variant: RangeVariant,
    context: CalendarContext | None = None,
) -> str:
    """Range label from a variant's window start to the reference date."""
    context = context or CalendarContext()
    start = compute_start_date(reference_date, variant, context)
    return format_range_label(start, reference_date, context)


def last_updated_label(date_last_updated: Any, context: CalendarContext | None = None) -> str:
    context = context or CalendarContext()
    return f"last updated on {_month_day_year(context.wall_time(date_last_updated))}"


def trailing_week_markers(
    last_date: Any,
    use_weekdays: bool = True,
    context: CalendarContext | None = None,
) -> list[str]:
    """Seven axis markers for the week ending at last_date.

    With use_weekdays the weekday abbreviations are rotated so the last one is
    last_date's weekday; otherwise "MM/DD" strings for each of the seven days.
    """
    context = context or CalendarContext()

    if use_weekdays:
        last = context.wall_time(last_date)
        index = WEEKDAY_ABBREVIATIONS.index(_weekday_abbreviation(last)) + 1
        return list(WEEKDAY_ABBREVIATIONS[index:] + WEEKDAY_ABBREVIATIONS[:index])

    days = [context.shift(last_date, days=-offset) for offset in range(6, -1, -1)]
    return month_day_markers(days, context)


def month_day_markers(dates: Iterable[Any], context: CalendarContext | None = None) -> list[str]:
    """Format dates as "MM/DD" axis markers."""
    context = context or CalendarContext()
    return [_numeric_month_day(context.wall_time(value)) for value in dates]
