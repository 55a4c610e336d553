"""Time windows, bucket aggregation and chart labels."""

from .aggregator import (
    Bucket,
    BucketAlignmentError,
    Sample,
    StatisticsRecord,
    aggregate_samples,
    buckets_from_statistics,
)
from .chart import ChartSeries, build_chart_series
from .labels import (
    axis_labels,
    format_range_label,
    last_updated_label,
    month_day_markers,
    trailing_week_markers,
    variant_range_label,
)
from .time_windows import (
    BucketUnit,
    FetchWindow,
    bucket_boundaries,
    bucket_unit_for,
    compute_start_date,
    compute_window,
    last_week_start_date,
    last_week_window,
)
from .variants import DEFAULT_VARIANT, RangeKind, RangeVariant

__all__ = [
    # Variants
    "DEFAULT_VARIANT",
    "RangeKind",
    "RangeVariant",
    # Time windows
    "BucketUnit",
    "FetchWindow",
    "bucket_boundaries",
    "bucket_unit_for",
    "compute_start_date",
    "compute_window",
    "last_week_start_date",
    "last_week_window",
    # Aggregation
    "Bucket",
    "BucketAlignmentError",
    "Sample",
    "StatisticsRecord",
    "aggregate_samples",
    "buckets_from_statistics",
    # Labels
    "axis_labels",
    "format_range_label",
    "last_updated_label",
    "month_day_markers",
    "trailing_week_markers",
    "variant_range_label",
    # Chart
    "ChartSeries",
    "build_chart_series",
]
