"""Bucket aggregation of raw samples.

Reduce timestamped samples into one value per bucket of a fetch window,
summing or averaging according to the metric.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.time import format_utc_iso8601
from ..metrics import AggregationRule, get_aggregation_rule
from ..observability.loguru_config import get_logger
from .time_windows import FetchWindow, bucket_boundaries, step_boundary

__all__ = [
    "Bucket",
    "BucketAlignmentError",
    "Sample",
    "StatisticsRecord",
    "aggregate_samples",
    "buckets_from_statistics",
]

logger = get_logger("aggregator")


class BucketAlignmentError(ValueError):
    """Raised when pre-bucketed records do not match the window's buckets."""


@dataclass(frozen=True)
class Sample:
    """One raw observation; the unit is implied by the metric."""

    timestamp: datetime
    value: float


@dataclass(frozen=True)
class StatisticsRecord:
    """Pre-bucketed value as returned by a data source.

    A value of None means the source had no reading for the bucket.
    """

    start: datetime
    end: datetime
    value: float | None


@dataclass(frozen=True)
class Bucket:
    """Aggregated value for the half-open interval [start, end).

    Attributes
    ----------
    start : datetime
        Bucket start (inclusive)
    end : datetime
        Bucket end (exclusive)
    value : float
        Sum or mean of the samples in the bucket
    sample_count : int | None
        Samples that contributed; None when the value came pre-aggregated
    """

    start: datetime
    end: datetime
    value: float
    sample_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_utc": format_utc_iso8601(self.start),
            "end_utc": format_utc_iso8601(self.end),
            "value": self.value,
            "sample_count": self.sample_count,
        }


def _as_sample(item: Sample | tuple[Any, Any]) -> Sample:
    if isinstance(item, Sample):
        return item
    timestamp, value = item
    return Sample(timestamp=timestamp, value=value)


def aggregate_samples(
    samples: Iterable[Sample | tuple[Any, Any]],
    window: FetchWindow,
    metric_id: str,
    rule: AggregationRule | None = None,
) -> list[Bucket]:
    """Aggregate samples into the window's buckets.

    Each sample lands in exactly one bucket, start inclusive and end
    exclusive. Samples outside the window are ignored.

    Parameters
    ----------
    samples
        Samples, or (timestamp, value) pairs; naive timestamps are local wall
        time in the window's calendar context
    window
        Fetch window with bucket unit
    metric_id
        Metric identifier, selects the aggregation rule
    rule
        Explicit rule overriding the metric catalog

    Returns
    -------
    list[Bucket]
        Chronological buckets. Sum buckets without samples report 0;
        average buckets without samples are omitted.

    Raises
    ------
    InvalidDateError
        If a sample timestamp is not a valid date
    """
    rule = rule or get_aggregation_rule(metric_id)
    context = window.context
    boundaries = bucket_boundaries(window)
    starts = [start for start, _ in boundaries]
    grouped: list[list[float]] = [[] for _ in boundaries]

    dropped = 0
    for item in samples:
        sample = _as_sample(item)
        timestamp = context.normalize(sample.timestamp)
        if not window.contains(timestamp):
            dropped += 1
            continue
        grouped[bisect_right(starts, timestamp) - 1].append(float(sample.value))

    buckets: list[Bucket] = []
    for (start, end), values in zip(boundaries, grouped):
        if rule is AggregationRule.SUM:
            buckets.append(Bucket(start, end, math.fsum(values), len(values)))
        elif values:
            buckets.append(Bucket(start, end, math.fsum(values) / len(values), len(values)))

    logger.debug(
        "Aggregated samples",
        metric_id=metric_id,
        rule=rule.value,
        bucket_count=len(boundaries),
        emitted=len(buckets),
        dropped=dropped,
    )
    return buckets


def buckets_from_statistics(
    records: Iterable[StatisticsRecord | tuple[Any, Any, Any]],
    window: FetchWindow,
) -> list[Bucket]:
    """Turn data-source statistics into buckets, checking their boundaries.

    Parameters
    ----------
    records
        StatisticsRecord objects or (start, end, value) tuples
    window
        Fetch window the statistics were requested for

    Returns
    -------
    list[Bucket]
        Chronological buckets; records without a value are skipped

    Raises
    ------
    BucketAlignmentError
        If a record does not coincide with one of the window's buckets, or
        two records cover the same bucket
    """
    context = window.context
    boundaries = bucket_boundaries(window)
    expected = dict(boundaries)

    # Sources report the last bucket at full length; it is cut at window.end.
    full_last_end = None
    if boundaries:
        last_start = boundaries[-1][0]
        full_last_end = step_boundary(window, context.wall_time(last_start), 1)

    seen: set[datetime] = set()
    by_start: dict[datetime, Bucket] = {}
    for item in records:
        record = item if isinstance(item, StatisticsRecord) else StatisticsRecord(*item)
        start = context.normalize(record.start)
        end = context.normalize(record.end)

        if start not in expected:
            raise BucketAlignmentError(f"Record starting {start.isoformat()} is not on a bucket boundary")
        if end != expected[start] and not (start == boundaries[-1][0] and end == full_last_end):
            raise BucketAlignmentError(
                f"Record {start.isoformat()} ends {end.isoformat()}, expected {expected[start].isoformat()}"
            )
        if start in seen:
            raise BucketAlignmentError(f"Duplicate record for bucket starting {start.isoformat()}")
        seen.add(start)

        if record.value is None:
            continue
        by_start[start] = Bucket(start, expected[start], float(record.value))

    return [by_start[start] for start in sorted(by_start)]
