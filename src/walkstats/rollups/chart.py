"""Chart series assembly for one metric.

Chains window computation, aggregation and labelling into the two outputs a
display layer consumes: (bucket, label) pairs and a range title.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..core.time import CalendarContext
from ..metrics import get_display_name, preferred_unit
from ..observability.loguru_config import timing_context
from .aggregator import Bucket, Sample, aggregate_samples
from .labels import axis_labels, format_range_label
from .time_windows import FetchWindow, compute_window
from .variants import RangeVariant

__all__ = [
    "ChartSeries",
    "build_chart_series",
]


@dataclass(frozen=True)
class ChartSeries:
    """Everything needed to draw one metric's chart.

    Attributes
    ----------
    metric_id : str
        Metric identifier, unchanged from the caller
    unit : str | None
        Display unit, None for metrics outside the catalog
    display_name : str | None
        Chart title, None for metrics outside the catalog
    window : FetchWindow
        Window the buckets tile
    buckets : list[Bucket]
        Chronological buckets
    labels : list[str]
        One axis label per bucket
    title : str
        Range label shown under the chart title
    """

    metric_id: str
    unit: str | None
    display_name: str | None
    window: FetchWindow
    buckets: list[Bucket] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    title: str = ""

    def pairs(self) -> Iterator[tuple[Bucket, str]]:
        return iter(zip(self.buckets, self.labels))

    def values(self) -> list[float]:
        return [bucket.value for bucket in self.buckets]

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric_id": self.metric_id,
            "unit": self.unit,
            "display_name": self.display_name,
            "window": self.window.to_dict(),
            "title": self.title,
            "points": [{**bucket.to_dict(), "label": label} for bucket, label in self.pairs()],
        }


def build_chart_series(
    samples: Iterable[Sample | tuple[Any, Any]],
    reference_date: Any,
    variant: RangeVariant,
    metric_id: str,
    context: CalendarContext | None = None,
) -> ChartSeries:
    """Build the chart series for one metric.

    Parameters
    ----------
    samples
        Raw samples returned by the data source for the variant's window
    reference_date
        Date the window ends at (normally now)
    variant
        Range variant
    metric_id
        Metric identifier
    context
        Calendar context

    Returns
    -------
    ChartSeries
        Buckets, labels and range title. The title spans the first bucket's
        start to the last bucket's end, or the whole window when no bucket
        has data.
    """
    context = context or CalendarContext()

    with timing_context("build_chart_series", component="chart", metric_id=metric_id, variant=str(variant)) as ctx:
        window = compute_window(reference_date, variant, context)
        buckets = aggregate_samples(samples, window, metric_id)
        labels = axis_labels(buckets, variant, context)

        if buckets:
            title = format_range_label(buckets[0].start, buckets[-1].end, context)
        else:
            title = format_range_label(window.start, window.end, context)

        ctx["bucket_count"] = len(buckets)

    return ChartSeries(
        metric_id=metric_id,
        unit=preferred_unit(metric_id),
        display_name=get_display_name(metric_id),
        window=window,
        buckets=buckets,
        labels=labels,
        title=title,
    )
