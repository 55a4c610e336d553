"""Tests for the metric catalog."""

import pytest

from walkstats.metrics import (
    DEFAULT_AGGREGATION_RULE,
    DISTANCE_WALKING_RUNNING,
    METRICS,
    SIX_MINUTE_WALK_TEST_DISTANCE,
    STEP_COUNT,
    WALKING_SPEED,
    AggregationRule,
    get_aggregation_rule,
    get_display_name,
    get_metric,
    preferred_unit,
)


@pytest.mark.parametrize(
    "metric_id,rule",
    [
        (STEP_COUNT, AggregationRule.SUM),
        (DISTANCE_WALKING_RUNNING, AggregationRule.SUM),
        (SIX_MINUTE_WALK_TEST_DISTANCE, AggregationRule.AVERAGE),
        (WALKING_SPEED, AggregationRule.AVERAGE),
    ],
)
def test_known_rules(metric_id, rule):
    assert get_aggregation_rule(metric_id) is rule


@pytest.mark.parametrize("metric_id", ["HKQuantityTypeIdentifierHeartRate", "", "walkingSpeed"])
def test_unknown_metric_defaults_to_average(metric_id):
    assert DEFAULT_AGGREGATION_RULE is AggregationRule.AVERAGE
    assert get_aggregation_rule(metric_id) is AggregationRule.AVERAGE


def test_units():
    assert preferred_unit(STEP_COUNT) == "count"
    assert preferred_unit(DISTANCE_WALKING_RUNNING) == "m"
    assert preferred_unit(SIX_MINUTE_WALK_TEST_DISTANCE) == "m"
    assert preferred_unit(WALKING_SPEED) == "m/s"
    assert preferred_unit("HKQuantityTypeIdentifierHeartRate") is None


def test_display_names():
    assert get_display_name(WALKING_SPEED) == "Walking Speed"
    assert get_display_name("unknown") is None


def test_catalog_is_keyed_by_identifier():
    assert len(METRICS) == 4
    for identifier, info in METRICS.items():
        assert info.identifier == identifier
        assert get_metric(identifier) is info
