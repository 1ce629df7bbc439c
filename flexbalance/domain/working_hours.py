"""
Core business logic for calculating expected working time.

Pure domain logic: no I/O, no clock access, no configuration lookup. Every
input arrives through the immutable ``Configuration`` and the requested range.
"""

import logging
from datetime import date
from typing import Dict, Optional, Tuple

import pendulum

from .exceptions import InvalidDateRangeError
from .models import Configuration, DayPortion

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600
DAYS_PER_WEEK = 7


class WorkingHoursCalculator:
    """
    Calculates the expected work duration over an inclusive date range.

    Algorithm:
    1. Split the range into full weeks and a remainder of days
    2. Every full week contributes the configured weekly hours
    3. The remainder contributes the hours of the last days up to the end date
    4. Days off inside the range subtract their weekday's hours (half for half days)
    5. The time adjustment is subtracted as a whole
    """

    def __init__(self, config: Configuration):
        self.config = config

    def expected_seconds(self, end_date: date, start_date: Optional[date] = None) -> float:
        """
        Return the number of expected work seconds from the start date through the end date.

        Args:
            end_date: Last day of the range (inclusive), usually today
            start_date: First day of the range; defaults to the configured start date

        Returns:
            Expected work time in seconds

        Raises:
            InvalidDateRangeError: If end_date lies before the start of the range
        """
        start_date = start_date or self.config.start_date

        if end_date < start_date:
            raise InvalidDateRangeError(
                f"End date {end_date.isoformat()} is before start date {start_date.isoformat()}"
            )

        start_date = pendulum.date(start_date.year, start_date.month, start_date.day)
        end_date = pendulum.date(end_date.year, end_date.month, end_date.day)

        full_weeks, remaining_days = self._weeks_and_days(start_date, end_date)

        full_week_hours = full_weeks * self.config.working_days.weekly_hours()
        remaining_days_hours = self._remaining_days_hours(remaining_days, end_date)
        days_off_hours = self._days_off_hours(start_date, end_date)
        time_adjustment_hours = self.config.time_adjustment_seconds / SECONDS_PER_HOUR

        logger.debug(
            "Expected hours %s..%s: %d full weeks = %sh, %d remaining days = %sh, "
            "days off = %sh, adjustment = %sh",
            start_date, end_date, full_weeks, full_week_hours, remaining_days,
            remaining_days_hours, days_off_hours, time_adjustment_hours,
        )

        hours = full_week_hours + remaining_days_hours - time_adjustment_hours - days_off_hours
        return hours * SECONDS_PER_HOUR

    @staticmethod
    def _weeks_and_days(start_date: pendulum.Date, end_date: pendulum.Date) -> Tuple[int, int]:
        """Split the inclusive range into full weeks and remaining days."""
        days_diff = start_date.diff(end_date).in_days() + 1
        return divmod(days_diff, DAYS_PER_WEEK)

    def _remaining_days_hours(self, remaining_days: int, end_date: pendulum.Date) -> float:
        """
        Sum the hours of the last ``remaining_days`` days ending at end_date.

        A full week contributes the same hours wherever it starts, so only the
        remainder depends on which weekdays the range covers.
        """
        if remaining_days == 0:
            return 0

        first_day = end_date.subtract(days=remaining_days - 1)

        return sum(
            self.config.working_days.hours_for(first_day.add(days=offset))
            for offset in range(remaining_days)
        )

    def _days_off_hours(self, start_date: date, end_date: date) -> float:
        """Sum the hours removed by days off that fall inside the range."""
        days_off = self._merge_days_off(start_date, end_date)

        return sum(
            portion.factor * self.config.working_days.hours_for(day)
            for day, portion in days_off.items()
        )

    def _merge_days_off(self, start_date: date, end_date: date) -> Dict[date, DayPortion]:
        """
        Merge holidays, vacation and sick days in range into one portion per date.

        A date listed in several categories is counted once. A full day
        outranks a half day; with equal portions the earlier category
        (holidays, then vacation, then sick days) keeps the entry.
        """
        merged: Dict[date, DayPortion] = {}
        categories = (
            ("holiday", self.config.holidays),
            ("vacation day", self.config.vacation_days),
            ("sick day", self.config.sick_days),
        )

        for category, entries in categories:
            for day, day_off in entries.items():
                if not start_date <= day <= end_date:
                    continue

                existing = merged.get(day)
                if existing is None:
                    merged[day] = day_off.portion
                    continue

                logger.warning(
                    "%s is listed as %s and in another category; counting it once",
                    day.isoformat(), category,
                )
                if existing is DayPortion.HALF and day_off.portion is DayPortion.FULL:
                    merged[day] = DayPortion.FULL

        return merged


def expected_seconds(
    end_date: date,
    config: Configuration,
    start_date: Optional[date] = None,
) -> float:
    """Return the expected work seconds up to end_date for the given configuration."""
    return WorkingHoursCalculator(config).expected_seconds(end_date, start_date=start_date)
