"""
Yearly accounting of vacation and sick days against their allowances.
"""

from datetime import date
from typing import Mapping, Tuple

from .models import Configuration, DayOff, DaysOffSummary


class DaysOffAccountant:
    """
    Computes allowed, taken and left days per category and year.

    Only the calendar year of each entry matters. The configured start date
    is not considered, so a day off before it still counts against its year.
    """

    def __init__(self, config: Configuration):
        self.config = config

    def vacation_summary(self, year: int) -> DaysOffSummary:
        """Summarize vacation days for the given year."""
        return self._summarize(
            year,
            self.config.allowed_days_off.vacation_days,
            self.config.vacation_days,
        )

    def sick_summary(self, year: int) -> DaysOffSummary:
        """Summarize sick days for the given year."""
        return self._summarize(
            year,
            self.config.allowed_days_off.sick_days,
            self.config.sick_days,
        )

    def summaries(self, year: int) -> Tuple[DaysOffSummary, DaysOffSummary]:
        """Return the vacation and sick day summaries for the given year."""
        return self.vacation_summary(year), self.sick_summary(year)

    @staticmethod
    def _summarize(year: int, allowed: int, entries: Mapping[date, DayOff]) -> DaysOffSummary:
        taken = sum(
            day_off.portion.factor
            for day, day_off in entries.items()
            if day.year == year
        )
        left = allowed - taken

        # Avoid printing "-0.0"
        return DaysOffSummary(
            allowed=allowed,
            taken=taken + 0.0,
            left=left + 0.0,
        )


def vacation_summary(year: int, config: Configuration) -> DaysOffSummary:
    """Summarize the vacation days taken in ``year``."""
    return DaysOffAccountant(config).vacation_summary(year)


def sick_summary(year: int, config: Configuration) -> DaysOffSummary:
    """Summarize the sick days taken in ``year``."""
    return DaysOffAccountant(config).sick_summary(year)
