"""Tests for the shared calendar helpers behind the extended calculators."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from recur import (
    Weekday,
    create_week_of_month_date,
    create_week_of_period_date,
    normalize_numbers,
    pick_next_candidate,
    to_month_day_date,
)
from tests.conftest import d

# =============================================================================
# normalize_numbers
# =============================================================================


class TestNormalizeNumbers:
    def test_dedupes_filters_and_sorts(self) -> None:
        assert normalize_numbers([31, 5, 5, 0, 32], 1, 31) == [5, 31]

    def test_none_and_empty(self) -> None:
        assert normalize_numbers(None, 1, 31) == []
        assert normalize_numbers([], 1, 31) == []

    def test_drops_non_integers(self) -> None:
        assert normalize_numbers([1.5, "3", True, 7], 1, 31) == [7]  # type: ignore[list-item]

    def test_inclusive_bounds(self) -> None:
        assert normalize_numbers([2, 0, 3, -1], 0, 2) == [0, 2]


# =============================================================================
# to_month_day_date
# =============================================================================


class TestToMonthDayDate:
    def test_day_within_month(self) -> None:
        assert to_month_day_date(d("2024-01-10"), 2024, 3, 15) == d("2024-03-15")

    def test_clamps_to_february_non_leap(self) -> None:
        assert to_month_day_date(d("2023-01-10"), 2023, 2, 30) == d("2023-02-28")

    def test_clamps_to_february_leap(self) -> None:
        assert to_month_day_date(d("2024-01-10"), 2024, 2, 30) == d("2024-02-29")

    def test_clamps_to_thirty_day_month(self) -> None:
        assert to_month_day_date(d("2024-01-31"), 2024, 4, 31) == d("2024-04-30")

    def test_keeps_time_of_day(self) -> None:
        base = datetime(2024, 1, 10, 9, 30)
        assert to_month_day_date(base, 2024, 5, 20) == datetime(2024, 5, 20, 9, 30)


# =============================================================================
# create_week_of_month_date
# =============================================================================


class TestWeekOfMonth:
    def test_second_sunday(self) -> None:
        result = create_week_of_month_date(d("2024-01-01"), 2024, 2, 2, Weekday.SUNDAY)
        assert result == d("2024-02-11")

    def test_first_weekday_on_month_start(self) -> None:
        # February 2024 starts on a Thursday
        result = create_week_of_month_date(d("2024-01-01"), 2024, 2, 1, Weekday.THURSDAY)
        assert result == d("2024-02-01")

    def test_fourth_thursday_of_november(self) -> None:
        result = create_week_of_month_date(d("2024-01-01"), 2024, 11, 4, Weekday.THURSDAY)
        assert result == d("2024-11-28")

    def test_last_friday_of_january(self) -> None:
        result = create_week_of_month_date(d("2024-01-01"), 2024, 1, 5, Weekday.FRIDAY)
        assert result == d("2024-01-26")

    def test_last_is_fifth_when_it_exists(self) -> None:
        # February 2024 has five Thursdays
        result = create_week_of_month_date(d("2024-01-01"), 2024, 2, 5, Weekday.THURSDAY)
        assert result == d("2024-02-29")

    @pytest.mark.parametrize("week", [0, 6, -1])
    def test_out_of_range_week(self, week: int) -> None:
        assert create_week_of_month_date(d("2024-01-01"), 2024, 1, week, Weekday.MONDAY) is None

    @pytest.mark.parametrize("weekday", list(Weekday))
    @pytest.mark.parametrize("year,month", [(2023, 2), (2024, 2), (2024, 4), (2024, 12)])
    def test_last_weekday_property(self, weekday: Weekday, year: int, month: int) -> None:
        result = create_week_of_month_date(d("2024-01-01"), year, month, 5, weekday)
        assert result is not None
        assert (result.year, result.month) == (year, month)
        assert (result.weekday() + 1) % 7 == weekday.number
        assert (result + timedelta(days=7)).month != month


# =============================================================================
# create_week_of_period_date
# =============================================================================


class TestWeekOfPeriod:
    def test_first_week_on_period_start(self) -> None:
        # 2024-01-01 is a Monday
        result = create_week_of_period_date(d("2024-01-01"), 3, 1, Weekday.MONDAY)
        assert result == d("2024-01-01")

    def test_weekday_on_or_after_week_start(self) -> None:
        result = create_week_of_period_date(d("2024-01-01"), 3, 2, Weekday.WEDNESDAY)
        assert result == d("2024-01-10")

    def test_last_week_inside_period(self) -> None:
        result = create_week_of_period_date(d("2024-01-01"), 3, 13, Weekday.MONDAY)
        assert result == d("2024-03-25")

    def test_week_past_period_end(self) -> None:
        # Jan 1 + 13 weeks is April 1, the first day after the quarter
        assert create_week_of_period_date(d("2024-01-01"), 3, 14, Weekday.MONDAY) is None

    def test_week_below_one(self) -> None:
        assert create_week_of_period_date(d("2024-01-01"), 3, 0, Weekday.MONDAY) is None

    def test_week_far_past_period_end(self) -> None:
        assert create_week_of_period_date(d("2024-01-01"), 3, 10**9, Weekday.MONDAY) is None


# =============================================================================
# pick_next_candidate
# =============================================================================


class TestPickNextCandidate:
    def test_earliest_future(self) -> None:
        candidates = [d("2024-03-01"), d("2024-01-05"), d("2024-02-01")]
        assert pick_next_candidate(d("2024-01-10"), candidates) == d("2024-02-01")

    def test_reference_itself_is_not_next(self) -> None:
        assert pick_next_candidate(d("2024-01-10"), [d("2024-01-10")]) is None

    def test_no_candidates(self) -> None:
        assert pick_next_candidate(d("2024-01-10"), []) is None
