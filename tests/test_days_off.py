"""
Tests for the yearly days-off accounting.
"""

import pendulum
import pytest

from flexbalance.domain.days_off import DaysOffAccountant, sick_summary, vacation_summary
from flexbalance.domain.models import (
    AllowedDaysOff,
    Configuration,
    DayOff,
    DayPortion,
    DaysOffSummary,
    WorkingDays,
)


def _days(year: int, full: int, half: int, kind: str):
    """Build ``full`` full and ``half`` half days off starting January 1st."""
    first = pendulum.date(year, 1, 1)
    entries = {}
    for offset in range(full):
        entries[first.add(days=offset)] = DayOff(kind)
    for offset in range(full, full + half):
        entries[first.add(days=offset)] = DayOff(kind, DayPortion.HALF)
    return entries


def _make_config(vacation_days=None, sick_days=None, allowed_vacation=50, allowed_sick=30,
                 start_date=pendulum.date(2082, 1, 1)) -> Configuration:
    return Configuration(
        time_zone="Etc/UTC",
        start_date=start_date,
        working_days=WorkingDays(hours={1: 8, 2: 8, 3: 8, 4: 8, 5: 8, 6: 0, 7: 0}),
        allowed_days_off=AllowedDaysOff(sick_days=allowed_sick, vacation_days=allowed_vacation),
        vacation_days=vacation_days or {},
        sick_days=sick_days or {},
    )


class TestVacationSummary:
    """Tests for vacation day accounting."""

    def test_allowance_with_full_and_half_days(self):
        """40 full and 4 half vacation days in 2082 leave 8 of 50."""
        config = _make_config(vacation_days=_days(2082, full=40, half=4, kind="Vacation"))

        summary = vacation_summary(2082, config)

        assert summary == DaysOffSummary(allowed=50, taken=42, left=8)

    def test_other_years_are_ignored(self):
        """Only entries of the requested year count."""
        vacation_days = {
            **_days(2081, full=3, half=0, kind="Vacation"),
            **_days(2082, full=2, half=1, kind="Vacation"),
            pendulum.date(2083, 1, 1): DayOff("Vacation"),
        }
        config = _make_config(vacation_days=vacation_days)

        assert vacation_summary(2082, config).taken == 2.5
        assert vacation_summary(2081, config).taken == 3
        assert vacation_summary(2084, config).taken == 0

    def test_days_before_start_date_still_count(self):
        """The configured start date does not limit the yearly accounting."""
        config = _make_config(
            vacation_days={pendulum.date(2082, 2, 1): DayOff("Vacation")},
            start_date=pendulum.date(2082, 6, 1),
        )

        assert vacation_summary(2082, config).taken == 1

    def test_overdraft_gives_negative_left(self):
        """Taking more than allowed results in negative left days."""
        config = _make_config(
            vacation_days=_days(2082, full=3, half=0, kind="Vacation"),
            allowed_vacation=2,
        )

        assert vacation_summary(2082, config) == DaysOffSummary(allowed=2, taken=3, left=-1)

    def test_nothing_taken(self):
        """Without entries everything is left."""
        summary = vacation_summary(2082, _make_config())

        assert summary.taken == 0
        assert summary.left == 50


class TestSickSummary:
    """Tests for sick day accounting."""

    def test_allowance(self):
        """6 full and 4 half sick days in 2082 leave 22 of 30."""
        config = _make_config(sick_days=_days(2082, full=6, half=4, kind="Sick"))

        assert sick_summary(2082, config) == DaysOffSummary(allowed=30, taken=8, left=22)

    def test_vacation_days_do_not_count_as_sick_days(self):
        """Each category is accounted separately."""
        config = _make_config(vacation_days=_days(2082, full=5, half=0, kind="Vacation"))

        assert sick_summary(2082, config).taken == 0


class TestDaysOffAccountant:
    """Tests for the combined accountant."""

    def test_summaries_returns_vacation_then_sick(self):
        """Both categories are summarized for the same year."""
        config = _make_config(
            vacation_days=_days(2082, full=1, half=1, kind="Vacation"),
            sick_days=_days(2082, full=0, half=1, kind="Sick"),
        )

        vacation, sick = DaysOffAccountant(config).summaries(2082)

        assert vacation == DaysOffSummary(allowed=50, taken=1.5, left=48.5)
        assert sick == DaysOffSummary(allowed=30, taken=0.5, left=29.5)

    @pytest.mark.parametrize("full,half,allowed", [(0, 0, 0), (3, 5, 4), (10, 1, 12), (0, 7, 3)])
    def test_left_is_allowed_minus_taken(self, full, half, allowed):
        """left always equals allowed minus taken."""
        config = _make_config(
            vacation_days=_days(2082, full=full, half=half, kind="Vacation"),
            allowed_vacation=allowed,
        )

        summary = DaysOffAccountant(config).vacation_summary(2082)

        assert summary.taken == pytest.approx(full + 0.5 * half)
        assert summary.left == pytest.approx(summary.allowed - summary.taken, abs=1e-9)

    def test_zero_left_is_not_negative_zero(self):
        """Using up the allowance exactly does not produce -0.0."""
        config = _make_config(
            vacation_days=_days(2082, full=2, half=0, kind="Vacation"),
            allowed_vacation=2,
        )

        summary = DaysOffAccountant(config).vacation_summary(2082)

        assert str(summary.left) == "0.0"
