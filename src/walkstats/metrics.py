"""Metric catalog: aggregation rule, display unit and name per metric.

Cumulative metrics (steps, distance) are summed per bucket; discrete
readings (walking speed, six-minute walk distance) are averaged. The table
is fixed; identifiers not listed here are averaged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .observability.loguru_config import get_logger

__all__ = [
    "AggregationRule",
    "DEFAULT_AGGREGATION_RULE",
    "DISTANCE_WALKING_RUNNING",
    "METRICS",
    "MetricInfo",
    "SIX_MINUTE_WALK_TEST_DISTANCE",
    "STEP_COUNT",
    "WALKING_SPEED",
    "get_aggregation_rule",
    "get_display_name",
    "get_metric",
    "preferred_unit",
]

logger = get_logger("aggregator")

STEP_COUNT = "HKQuantityTypeIdentifierStepCount"
DISTANCE_WALKING_RUNNING = "HKQuantityTypeIdentifierDistanceWalkingRunning"
SIX_MINUTE_WALK_TEST_DISTANCE = "HKQuantityTypeIdentifierSixMinuteWalkTestDistance"
WALKING_SPEED = "HKQuantityTypeIdentifierWalkingSpeed"


class AggregationRule(str, Enum):
    """How raw samples collapse into one bucket value."""

    SUM = "sum"
    AVERAGE = "average"


# Applied to any metric missing from METRICS. Product has not decided whether
# new metrics should be summed; change it here if that happens.
DEFAULT_AGGREGATION_RULE = AggregationRule.AVERAGE


@dataclass(frozen=True)
class MetricInfo:
    """Static description of a known metric.

    Attributes
    ----------
    identifier : str
        Data source identifier, passed through unchanged
    display_name : str
        Chart title
    unit : str
        Display unit of the aggregated values
    rule : AggregationRule
        Sum or average per bucket
    """

    identifier: str
    display_name: str
    unit: str
    rule: AggregationRule


METRICS: dict[str, MetricInfo] = {
    info.identifier: info
    for info in (
        MetricInfo(STEP_COUNT, "Step Count", "count", AggregationRule.SUM),
        MetricInfo(DISTANCE_WALKING_RUNNING, "Distance Walking + Running", "m", AggregationRule.SUM),
        MetricInfo(SIX_MINUTE_WALK_TEST_DISTANCE, "Six-Minute Walk", "m", AggregationRule.AVERAGE),
        MetricInfo(WALKING_SPEED, "Walking Speed", "m/s", AggregationRule.AVERAGE),
    )
}


def get_metric(metric_id: str) -> MetricInfo | None:
    """Get catalog entry for a metric, or None if unknown."""
    return METRICS.get(metric_id)


def get_aggregation_rule(metric_id: str) -> AggregationRule:
    """Get aggregation rule for a metric.

    Parameters
    ----------
    metric_id
        Metric identifier

    Returns
    -------
    AggregationRule
        Catalog rule, or DEFAULT_AGGREGATION_RULE for unknown metrics
    """
    info = METRICS.get(metric_id)
    if info is None:
        logger.debug("Unknown metric, using default rule", metric_id=metric_id, rule=DEFAULT_AGGREGATION_RULE.value)
        return DEFAULT_AGGREGATION_RULE
    return info.rule


def preferred_unit(metric_id: str) -> str | None:
    info = METRICS.get(metric_id)
    return info.unit if info else None


def get_display_name(metric_id: str) -> str | None:
    info = METRICS.get(metric_id)
    return info.display_name if info else None
