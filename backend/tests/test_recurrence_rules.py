"""Tests for recurrence rule evaluation."""

import pytest
from datetime import date, datetime, timedelta

from app.exceptions import InvalidSpec
from app.schemas.recurring import Frequency, RecurringAnchor, RecurringSpec, Weekday
from app.services.recurrence_rules import iter_occurrences, next_occurrence, occurrences


def spec(frequency, **anchor):
    return RecurringSpec(frequency=frequency, anchor=RecurringAnchor(**anchor))


class TestDaily:
    """Daily specs occur on every date in the window."""

    def test_every_day(self):
        """Each date in the window should be returned once, in order."""
        result = occurrences(spec(Frequency.daily), date(2025, 1, 2), date(2025, 1, 5))
        assert result == [date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 4), date(2025, 1, 5)]

    def test_single_day_window(self):
        """A one-day window should yield that day."""
        assert occurrences(spec(Frequency.daily), date(2025, 3, 1), date(2025, 3, 1)) == [date(2025, 3, 1)]

    def test_empty_window(self):
        """A window whose start is after its end yields nothing."""
        assert occurrences(spec(Frequency.daily), date(2025, 1, 5), date(2025, 1, 4)) == []

    def test_accepts_datetimes(self):
        """Datetimes should be reduced to their calendar dates."""
        result = occurrences(
            spec(Frequency.daily),
            datetime(2025, 1, 1, 23, 59),
            datetime(2025, 1, 2, 0, 1),
        )
        assert result == [date(2025, 1, 1), date(2025, 1, 2)]


class TestWeekly:
    """Weekly specs occur on their weekday."""

    def test_two_mondays_in_fourteen_days(self):
        """A 14-day window contains exactly two Mondays."""
        start = date(2025, 1, 1)  # Wednesday
        result = occurrences(spec(Frequency.weekly, day_of_week=Weekday.monday), start, start + timedelta(days=13))
        assert result == [date(2025, 1, 6), date(2025, 1, 13)]
        assert all(d.weekday() == 0 for d in result)

    def test_window_starting_on_weekday(self):
        """The window start itself counts when it is the anchor weekday."""
        result = occurrences(spec(Frequency.weekly, day_of_week="friday"), date(2025, 1, 3), date(2025, 1, 10))
        assert result == [date(2025, 1, 3), date(2025, 1, 10)]

    def test_requires_day_of_week(self):
        """Weekly without a weekday is unusable."""
        bad = RecurringSpec.model_construct(frequency=Frequency.weekly, anchor=RecurringAnchor())
        with pytest.raises(InvalidSpec):
            occurrences(bad, date(2025, 1, 1), date(2025, 1, 31))


class TestMonthly:
    """Monthly specs occur on their day of month, skipping short months."""

    def test_day_31_skips_february(self):
        """February contributes nothing to a 31st-of-month spec; March 31 is kept."""
        result = occurrences(spec(Frequency.monthly, day_of_month=31), date(2025, 2, 1), date(2025, 3, 31))
        assert result == [date(2025, 3, 31)]

    def test_day_31_across_a_year(self):
        """Only the seven 31-day months produce an occurrence."""
        result = occurrences(spec(Frequency.monthly, day_of_month=31), date(2025, 1, 1), date(2025, 12, 31))
        assert [d.month for d in result] == [1, 3, 5, 7, 8, 10, 12]

    def test_day_29_leap_year(self):
        """Feb 29 only exists in leap years."""
        monthly_29 = spec(Frequency.monthly, day_of_month=29)
        assert occurrences(monthly_29, date(2024, 2, 1), date(2024, 2, 29)) == [date(2024, 2, 29)]
        assert occurrences(monthly_29, date(2025, 2, 1), date(2025, 2, 28)) == []

    def test_year_rollover(self):
        """Occurrences continue from December into January."""
        result = occurrences(spec(Frequency.monthly, day_of_month=15), date(2024, 12, 1), date(2025, 1, 31))
        assert result == [date(2024, 12, 15), date(2025, 1, 15)]

    def test_window_edges_inclusive(self):
        """Dates equal to the window start or end are included; outside are not."""
        monthly_10 = spec(Frequency.monthly, day_of_month=10)
        assert occurrences(monthly_10, date(2025, 1, 10), date(2025, 2, 10)) == [date(2025, 1, 10), date(2025, 2, 10)]
        assert occurrences(monthly_10, date(2025, 1, 11), date(2025, 2, 9)) == []

    def test_weekday_fallback(self):
        """A monthly spec with only a weekday falls on every such weekday."""
        result = occurrences(spec(Frequency.monthly, day_of_week="sunday"), date(2025, 1, 1), date(2025, 1, 31))
        assert result == [date(2025, 1, 5), date(2025, 1, 12), date(2025, 1, 19), date(2025, 1, 26)]


class TestYearly:
    """Yearly specs occur in their anchor month."""

    def test_new_year(self):
        """Jan 1 over mid-2024..mid-2026 hits 2025-01-01 and 2026-01-01, not 2024-01-01."""
        result = occurrences(spec(Frequency.yearly, month=1, day_of_month=1), date(2024, 6, 1), date(2026, 6, 1))
        assert result == [date(2025, 1, 1), date(2026, 1, 1)]

    def test_leap_day(self):
        """Feb 29 yearly only occurs in leap years."""
        result = occurrences(spec(Frequency.yearly, month=2, day_of_month=29), date(2023, 1, 1), date(2028, 12, 31))
        assert result == [date(2024, 2, 29), date(2028, 2, 29)]

    def test_month_only_uses_first_of_month(self):
        """Without a day anchor the first of the anchor month is used."""
        result = occurrences(spec(Frequency.yearly, month=7), date(2024, 1, 1), date(2025, 12, 31))
        assert result == [date(2024, 7, 1), date(2025, 7, 1)]

    def test_requires_month(self):
        """Yearly without a month is unusable."""
        bad = RecurringSpec.model_construct(frequency=Frequency.yearly, anchor=RecurringAnchor(day_of_month=1))
        with pytest.raises(InvalidSpec):
            occurrences(bad, date(2025, 1, 1), date(2025, 12, 31))


class TestEvaluatorContract:
    """Purity and error behaviour."""

    def test_unknown_frequency(self):
        """An unrecognised frequency is rejected."""
        bad = RecurringSpec.model_construct(frequency="hourly", anchor=RecurringAnchor())
        with pytest.raises(InvalidSpec):
            occurrences(bad, date(2025, 1, 1), date(2025, 1, 2))

    def test_invalid_spec_raised_eagerly(self):
        """iter_occurrences should fail on call, not on first iteration."""
        bad = RecurringSpec.model_construct(frequency=Frequency.weekly, anchor=RecurringAnchor())
        with pytest.raises(InvalidSpec):
            iter_occurrences(bad, date(2025, 1, 1), date(2025, 1, 2))

    def test_repeatable(self):
        """Evaluating the same inputs twice gives the same answer."""
        monthly = spec(Frequency.monthly, day_of_month=5)
        first = occurrences(monthly, date(2025, 1, 1), date(2025, 6, 30))
        second = occurrences(monthly, date(2025, 1, 1), date(2025, 6, 30))
        assert first == second
        assert len(first) == 6


class TestNextOccurrence:
    """Next occurrence lookups."""

    def test_strictly_after(self):
        """An occurrence on the given date itself is not returned."""
        monthly = spec(Frequency.monthly, day_of_month=15)
        assert next_occurrence(monthly, date(2025, 1, 15)) == date(2025, 2, 15)

    def test_leap_day_far_ahead(self):
        """Feb 29 yearly finds the next leap year."""
        leap = spec(Frequency.yearly, month=2, day_of_month=29)
        assert next_occurrence(leap, date(2024, 3, 1)) == date(2028, 2, 29)
