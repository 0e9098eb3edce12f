from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tallybook.errors import InvalidInputError
from tallybook.services.time_range import (
    EPOCH,
    DateBounds,
    Granularity,
    TimeRange,
    granularity_for,
    previous_bounds,
    resolve_bounds,
)

NOW = datetime(2025, 1, 15, 14, 30)  # a Wednesday


@pytest.mark.parametrize(
    "time_range, expected_start",
    [
        (TimeRange.DAY, datetime(2025, 1, 15)),
        (TimeRange.WEEK, datetime(2025, 1, 13)),
        (TimeRange.MONTH, datetime(2025, 1, 1)),
        (TimeRange.YEAR, datetime(2025, 1, 1)),
    ],
)
def test_symbolic_ranges_start_at_local_midnight_and_end_now(time_range, expected_start):
    bounds = resolve_bounds(time_range, now=NOW)
    assert bounds.start_date == expected_start
    assert bounds.end_date == NOW


def test_week_on_monday_starts_same_day():
    monday = datetime(2025, 1, 13, 9, 0)
    assert resolve_bounds("week", now=monday).start_date == datetime(2025, 1, 13)


def test_week_on_sunday_goes_back_six_days():
    sunday = datetime(2025, 1, 19, 23, 59)
    assert resolve_bounds("week", now=sunday).start_date == datetime(2025, 1, 13)


def test_month_start_mid_year():
    assert resolve_bounds("month", now=datetime(2024, 7, 31, 8)).start_date == datetime(2024, 7, 1)


def test_custom_uses_supplied_bounds_verbatim():
    start, end = datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59)
    assert resolve_bounds("custom", now=NOW, custom_start=start, custom_end=end) == DateBounds(start, end)


def test_custom_without_start_defaults_to_epoch():
    bounds = resolve_bounds(TimeRange.CUSTOM, now=NOW)
    assert bounds.start_date == EPOCH
    assert bounds.end_date == NOW


def test_inverted_custom_bounds_are_accepted():
    start, end = datetime(2025, 2, 1), datetime(2025, 1, 1)
    bounds = resolve_bounds("custom", now=NOW, custom_start=start, custom_end=end)
    assert bounds.start_date > bounds.end_date


def test_unknown_range_raises_invalid_input():
    with pytest.raises(InvalidInputError):
        resolve_bounds("fortnight", now=NOW)


def test_range_names_are_case_insensitive():
    assert resolve_bounds("MONTH", now=NOW).start_date == datetime(2025, 1, 1)


def test_previous_bounds_is_adjacent_and_equal_length():
    current = resolve_bounds("day", now=NOW)
    prior = previous_bounds(current)

    assert prior.end_date == current.start_date - timedelta(milliseconds=1)
    assert prior.start_date == current.start_date - current.duration
    assert prior.start_date == datetime(2025, 1, 14, 9, 30)


def test_granularity_per_range():
    assert granularity_for("day") is Granularity.HOUR
    assert granularity_for("week") is Granularity.DAY
    assert granularity_for("month") is Granularity.DAY
    assert granularity_for("year") is Granularity.MONTH
    assert granularity_for("custom") is Granularity.DAY
