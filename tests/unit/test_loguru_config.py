"""Tests for loguru configuration and timing helpers."""

from __future__ import annotations

import json

import pytest
from loguru import logger

from walkstats.config.settings import Settings
from walkstats.metrics import STEP_COUNT, get_aggregation_rule
from walkstats.observability.loguru_config import (
    COMPONENTS,
    configure_loguru,
    get_logger,
    log_timing,
    timing_context,
)
from walkstats.rollups.labels import axis_labels
from walkstats.rollups.time_windows import compute_window
from walkstats.rollups.variants import RangeVariant


@pytest.fixture
def captured():
    """Collect loguru records emitted during a test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(lambda message: None)


def test_get_logger_binds_component(captured):
    get_logger("windows").debug("hello")

    assert captured[-1]["extra"]["component"] == "windows"


def test_timing_context_logs_start_and_end(captured):
    with timing_context("aggregate", component="aggregator", metric_id="x") as ctx:
        ctx["bucket_count"] = 3

    start, end = [r for r in captured if r["extra"].get("timing")]

    assert start["message"] == "START: aggregate"
    assert end["message"] == "END: aggregate"
    assert end["extra"]["bucket_count"] == 3
    assert end["extra"]["metric_id"] == "x"
    assert end["extra"]["duration_ms"] >= 0


def test_timing_context_logs_end_on_error(captured):
    with pytest.raises(RuntimeError):
        with timing_context("failing"):
            raise RuntimeError("boom")

    assert captured[-1]["message"] == "END: failing"


def test_log_timing_decorator(captured):
    @log_timing(component="labels")
    def double(value):
        return value * 2

    assert double(4) == 8
    assert any(r["message"].startswith("END: ") and r["extra"]["component"] == "labels" for r in captured)


def test_configure_loguru_writes_component_files(tmp_path):
    configure_loguru(log_dir=tmp_path, level="DEBUG", enable_console=False)

    get_logger("chart").debug("chart built", metric_id="speed")
    logger.complete()

    for component in COMPONENTS:
        assert (tmp_path / f"{component}.jsonl").exists()

    lines = (tmp_path / "chart.jsonl").read_text().splitlines()
    payload = json.loads(lines[-1])
    assert payload["record"]["message"] == "chart built"
    assert payload["record"]["extra"]["metric_id"] == "speed"


def test_configure_loguru_console_only(tmp_path, capsys):
    configure_loguru(level="INFO")

    get_logger("windows").info("visible")
    get_logger("windows").debug("hidden")

    err = capsys.readouterr().err
    assert "visible" in err
    assert "hidden" not in err


def test_settings_configure_logging(tmp_path):
    Settings(log_dir=tmp_path, log_level="DEBUG").configure_logging()

    get_logger("aggregator").debug("aggregated")
    logger.complete()

    assert "aggregated" in (tmp_path / "aggregator.jsonl").read_text()


def test_compute_window_is_timed(captured):
    compute_window("2023-03-15T00:00:00Z", RangeVariant.daily(7))

    timing = [r for r in captured if r["extra"].get("timing") and r["extra"]["component"] == "windows"]
    assert [r["extra"]["phase"] for r in timing] == ["start", "end"]
    assert timing[-1]["extra"]["operation"].endswith("compute_window")


def test_unknown_metric_default_is_logged(captured):
    get_aggregation_rule("HKQuantityTypeIdentifierHeartRate")

    record = captured[-1]
    assert record["level"].name == "DEBUG"
    assert record["extra"]["component"] == "aggregator"
    assert record["extra"]["metric_id"] == "HKQuantityTypeIdentifierHeartRate"


def test_known_metric_is_not_logged(captured):
    get_aggregation_rule(STEP_COUNT)

    assert captured == []


def test_axis_labels_log_under_labels_component(captured):
    axis_labels([], RangeVariant.daily(7))

    assert captured[-1]["extra"]["component"] == "labels"
    assert captured[-1]["extra"]["label_count"] == 0
