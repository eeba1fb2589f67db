"""
Tests for period calculus: start/end derivation, contiguity and naming.
"""

from datetime import date, timedelta

import pytest

from mealplan.services.periods import (
    TWO_WEEK_EPOCH, Period, PeriodMode, format_period_name, next_period_start,
    period_end, period_for, period_from_range, period_start, total_possible_meals,
)

ALL_MODES = list(PeriodMode)


def _days(start: date, count: int):
    for i in range(count):
        yield start + timedelta(days=i)


class TestPeriodStart:

    def test_week_starts_on_monday(self):
        """A Wednesday maps back to the Monday of its ISO week."""
        assert period_start(date(2024, 1, 3), PeriodMode.WEEK) == date(2024, 1, 1)

    def test_sunday_belongs_to_previous_monday(self):
        """Sunday is the last day of the week, six days after its Monday."""
        assert period_start(date(2024, 1, 7), PeriodMode.WEEK) == date(2024, 1, 1)

    def test_monday_is_its_own_week_start(self):
        assert period_start(date(2024, 1, 8), PeriodMode.WEEK) == date(2024, 1, 8)

    def test_two_week_anchored_to_epoch(self):
        """Second week of a two-week block maps to the block's first Monday."""
        assert period_start(date(2024, 1, 10), PeriodMode.TWO_WEEK) == date(2024, 1, 1)
        assert period_start(date(2024, 1, 15), PeriodMode.TWO_WEEK) == date(2024, 1, 15)

    def test_two_week_before_epoch(self):
        """Dates before the epoch still land on a 14-day multiple."""
        assert period_start(date(2023, 12, 31), PeriodMode.TWO_WEEK) == date(2023, 12, 18)

    def test_month_starts_on_first(self):
        assert period_start(date(2024, 2, 29), PeriodMode.MONTH) == date(2024, 2, 1)

    def test_accepts_mode_string_value(self):
        assert period_start(date(2024, 1, 3), "2weeks") == date(2024, 1, 1)


class TestPeriodEnd:

    def test_week_end_is_sunday(self):
        assert period_end(date(2024, 1, 1), PeriodMode.WEEK) == date(2024, 1, 7)

    def test_two_week_end(self):
        assert period_end(date(2024, 1, 1), PeriodMode.TWO_WEEK) == date(2024, 1, 14)

    @pytest.mark.parametrize("start,expected", [
        (date(2024, 2, 1), date(2024, 2, 29)),
        (date(2023, 2, 1), date(2023, 2, 28)),
        (date(1900, 2, 1), date(1900, 2, 28)),
        (date(2000, 2, 1), date(2000, 2, 29)),
        (date(2024, 4, 1), date(2024, 4, 30)),
        (date(2024, 12, 1), date(2024, 12, 31)),
    ])
    def test_month_end_handles_month_lengths(self, start, expected):
        """Month ends come from the calendar, including leap years."""
        assert period_end(start, PeriodMode.MONTH) == expected

    def test_total_possible_meals_uses_real_month_length(self):
        """February 2024 has 29 days, so 87 meal slots."""
        assert total_possible_meals(period_for(date(2024, 2, 10), PeriodMode.MONTH)) == 87
        assert total_possible_meals(period_for(date(2024, 1, 10), PeriodMode.WEEK)) == 21


class TestPartitionProperties:

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_every_date_inside_its_period(self, mode):
        """period_start(d) <= d <= period_end(period_start(d)) for two years of dates."""
        for d in _days(date(2023, 1, 1), 731):
            start = period_start(d, mode)
            assert start <= d <= period_end(start, mode)

    @pytest.mark.parametrize("mode", ALL_MODES)
    def test_consecutive_periods_are_contiguous(self, mode):
        """End of one period plus one day is the start of the next."""
        start = period_start(date(2023, 1, 1), mode)
        for _ in range(60):
            end = period_end(start, mode)
            nxt = next_period_start(start, mode)
            assert end + timedelta(days=1) == nxt
            assert period_start(nxt, mode) == nxt
            start = nxt

    def test_two_week_start_is_multiple_of_14_from_epoch(self):
        for d in _days(date(2022, 6, 1), 900):
            start = period_start(d, PeriodMode.TWO_WEEK)
            assert (start - TWO_WEEK_EPOCH).days % 14 == 0
            assert start.weekday() == 0


class TestPeriodFromRange:

    def test_canonical_week_is_tagged(self):
        period = period_from_range(date(2024, 1, 8), date(2024, 1, 14))
        assert period.mode is PeriodMode.WEEK
        assert period.key == "2024-01-08"

    def test_adhoc_range_has_no_mode(self):
        period = period_from_range(date(2024, 1, 3), date(2024, 1, 9))
        assert period.mode is None
        assert period.days == 7

    def test_reversed_range_rejected(self):
        with pytest.raises(ValueError):
            period_from_range(date(2024, 1, 9), date(2024, 1, 3))


class TestFormatPeriodName:

    def test_same_year(self):
        assert format_period_name(date(2024, 1, 1), date(2024, 1, 7)) == "Jan 1 - Jan 7, 2024"

    def test_spanning_years(self):
        assert (
            format_period_name(date(2024, 12, 30), date(2025, 1, 12))
            == "Dec 30, 2024 - Jan 12, 2025"
        )

    def test_period_key_is_iso_start(self):
        period = Period(date(2024, 3, 1), date(2024, 3, 31), PeriodMode.MONTH)
        assert period.key == "2024-03-01"
        assert period.contains(date(2024, 3, 31))
        assert not period.contains(date(2024, 4, 1))
