"""Shared pytest configuration for the test suite."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from walkstats.core.time import CalendarContext  # noqa: E402
from walkstats.rollups.aggregator import Sample  # noqa: E402


@pytest.fixture
def utc_context() -> CalendarContext:
    """UTC calendar, weeks starting on Sunday."""
    return CalendarContext()


@pytest.fixture
def ny_context() -> CalendarContext:
    """New York calendar (observes DST), weeks starting on Sunday."""
    return CalendarContext("America/New_York")


@pytest.fixture
def reference_date() -> datetime:
    """Wednesday, March 15, 2023."""
    return datetime(2023, 3, 15)


@pytest.fixture
def make_samples():
    """Build samples from (iso_timestamp, value) pairs."""

    def _make(*pairs: tuple[str, float]) -> list[Sample]:
        return [Sample(timestamp=datetime.fromisoformat(ts), value=value) for ts, value in pairs]

    return _make
