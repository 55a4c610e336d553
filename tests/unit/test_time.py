"""Tests for the calendar context and date normalization."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from walkstats.core.time import (
    MONDAY,
    SUNDAY,
    CalendarContext,
    InvalidDateError,
    format_utc_iso8601,
    get_week_start,
    parse_iso8601,
    parse_weekday,
)


class TestParseWeekday:
    def test_numbers(self):
        assert parse_weekday(0) == MONDAY
        assert parse_weekday(6) == SUNDAY
        assert parse_weekday("3") == 3

    def test_names(self):
        assert parse_weekday("sunday") == SUNDAY
        assert parse_weekday("Mon") == MONDAY
        assert parse_weekday(" Saturday ") == 5

    @pytest.mark.parametrize("value", [7, -1, "funday", "s", True])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_weekday(value)


def test_get_week_start_sunday():
    """Wednesday Oct 8, 2025 belongs to the week starting Sunday Oct 5."""
    start = get_week_start(datetime(2025, 10, 8, 10, 0), start_on=SUNDAY)

    assert start.weekday() == 6
    assert start.day == 5
    assert start.hour == 10  # Same time as input


def test_get_week_start_monday():
    start = get_week_start(datetime(2025, 10, 8, 15, 30), start_on=MONDAY)

    assert start.weekday() == 0
    assert start.day == 6


def test_parse_iso8601_zulu():
    dt = parse_iso8601("2025-10-08T14:30:00Z")

    assert dt.tzinfo is not None
    assert dt.utcoffset().total_seconds() == 0


def test_parse_iso8601_naive():
    assert parse_iso8601("2023-03-15").tzinfo is None


def test_format_utc_iso8601_converts_offset():
    dt = parse_iso8601("2025-10-08T14:30:00+02:00")

    assert format_utc_iso8601(dt) == "2025-10-08T12:30:00+00:00"


class TestCalendarContext:
    def test_defaults(self):
        context = CalendarContext()

        assert context.timezone_name == "UTC"
        assert context.first_weekday == SUNDAY

    def test_first_weekday_by_name(self):
        assert CalendarContext(first_weekday="monday").first_weekday == MONDAY

    def test_invalid_timezone(self):
        with pytest.raises(ValueError, match="Invalid timezone"):
            CalendarContext("Invalid/Timezone")

    def test_invalid_weekday(self):
        with pytest.raises(ValueError):
            CalendarContext(first_weekday=9)

    def test_is_immutable(self):
        context = CalendarContext()

        with pytest.raises(AttributeError):
            context.timezone_name = "Europe/Brussels"  # type: ignore[misc]

    def test_normalize_naive_is_local_wall_time(self, ny_context):
        dt = ny_context.normalize(datetime(2023, 3, 15, 8, 0))

        assert dt.hour == 8
        assert dt.utcoffset().total_seconds() == -4 * 3600  # EDT

    def test_normalize_aware_converts(self, ny_context):
        dt = ny_context.normalize(datetime(2023, 1, 15, 12, 0, tzinfo=timezone.utc))

        assert dt.hour == 7  # EST

    def test_normalize_date(self, utc_context):
        dt = utc_context.normalize(date(2023, 3, 15))

        assert (dt.year, dt.month, dt.day, dt.hour) == (2023, 3, 15, 0)

    def test_normalize_string(self, utc_context):
        assert utc_context.normalize("2023-03-15T10:00:00").hour == 10

    @pytest.mark.parametrize("value", ["not a date", "2023-02-30", 20230315, None, 1.5])
    def test_normalize_rejects_malformed(self, utc_context, value):
        with pytest.raises(InvalidDateError):
            utc_context.normalize(value)

    def test_invalid_date_error_is_value_error(self):
        assert issubclass(InvalidDateError, ValueError)

    def test_start_of_day(self, ny_context):
        start = ny_context.start_of_day(datetime(2023, 3, 15, 17, 45))

        assert (start.day, start.hour, start.minute) == (15, 0, 0)

    def test_localize_repeated_midnight_is_earliest(self):
        """Clocks in the Azores fall back from 01:00 to 00:00 on October 29, 2023."""
        azores = CalendarContext("Atlantic/Azores")

        midnight = azores.localize(datetime(2023, 10, 29))

        assert midnight == datetime(2023, 10, 29, 0, 0, tzinfo=timezone.utc)
        assert azores.start_of_day(datetime(2023, 10, 29, 0, 30, tzinfo=timezone.utc)) == midnight

    def test_localize_skipped_time_moves_forward(self, ny_context):
        localized = ny_context.localize(datetime(2023, 3, 12, 2, 30))

        assert (localized.hour, localized.minute) == (3, 30)
        assert localized == datetime(2023, 3, 12, 7, 30, tzinfo=timezone.utc)

    def test_start_of_week_follows_first_weekday(self):
        wednesday = datetime(2023, 3, 15, 9, 0)

        assert CalendarContext(first_weekday=SUNDAY).start_of_week(wednesday).day == 12
        assert CalendarContext(first_weekday=MONDAY).start_of_week(wednesday).day == 13

    def test_start_of_month_and_year(self, utc_context):
        dt = datetime(2024, 2, 29, 13, 0)

        assert utc_context.start_of_month(dt).date() == date(2024, 2, 1)
        assert utc_context.start_of_year(dt).date() == date(2024, 1, 1)

    def test_shift_months_clamps_to_month_end(self, utc_context):
        assert utc_context.shift(datetime(2023, 1, 31), months=1).date() == date(2023, 2, 28)
        assert utc_context.shift(datetime(2024, 1, 31), months=1).date() == date(2024, 2, 29)

    def test_shift_years_from_leap_day(self, utc_context):
        assert utc_context.shift(datetime(2024, 2, 29), years=-1).date() == date(2023, 2, 28)

    def test_shift_days_keeps_wall_time_across_dst(self, ny_context):
        """Spring forward on March 12, 2023 in New York."""
        before = ny_context.normalize(datetime(2023, 3, 11, 0, 0))
        after = ny_context.shift(before, days=1)

        assert after.hour == 0
        assert (after - before).total_seconds() == 24 * 3600
        assert (ny_context.shift(after, days=1) - after).total_seconds() == 23 * 3600
