"""
Domain layer - Pure business logic without external dependencies.
"""

from .days_off import DaysOffAccountant, sick_summary, vacation_summary
from .exceptions import ConfigurationError, FlexBalanceError, InvalidDateRangeError, LedgerError
from .models import (
    AllowedDaysOff,
    BalanceSummary,
    Configuration,
    DayOff,
    DayPortion,
    DaysOffSummary,
    LedgerSummary,
    WorkingDays,
)
from .working_hours import WorkingHoursCalculator, expected_seconds

__all__ = [
    "AllowedDaysOff",
    "BalanceSummary",
    "Configuration",
    "ConfigurationError",
    "DayOff",
    "DayPortion",
    "DaysOffAccountant",
    "DaysOffSummary",
    "FlexBalanceError",
    "InvalidDateRangeError",
    "LedgerError",
    "LedgerSummary",
    "WorkingDays",
    "WorkingHoursCalculator",
    "expected_seconds",
    "sick_summary",
    "vacation_summary",
]
