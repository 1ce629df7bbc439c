"""
Domain models for schedule, days-off and balance calculations.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class DayPortion(Enum):
    """How much of a working day a day off covers."""
    FULL = "full"
    HALF = "half"

    @property
    def factor(self) -> float:
        """Return the share of the day's expected hours this portion removes."""
        return 1.0 if self is DayPortion.FULL else 0.5


@dataclass(frozen=True)
class DayOff:
    """
    A single holiday, vacation or sick day entry.
    """
    description: str
    portion: DayPortion = DayPortion.FULL


@dataclass(frozen=True)
class WorkingDays:
    """
    Expected working hours per ISO weekday (Monday=1 ... Sunday=7).

    Invariant: exactly seven entries, all non-negative.
    """
    hours: Mapping[int, float]

    def __post_init__(self):
        if set(self.hours) != set(range(1, 8)):
            raise ValueError(
                f"Working days must define hours for weekdays 1 to 7, got {sorted(self.hours)}"
            )
        negative = [day for day, hours in self.hours.items() if hours < 0]
        if negative:
            raise ValueError(f"Working hours must not be negative, got weekdays {sorted(negative)}")
        object.__setattr__(self, "hours", MappingProxyType(dict(self.hours)))

    def hours_for(self, day: date) -> float:
        """Return the expected hours for the weekday of the given date."""
        return self.hours[day.isoweekday()]

    def weekly_hours(self) -> float:
        """Return the expected hours of a full calendar week."""
        return sum(self.hours.values())


@dataclass(frozen=True)
class AllowedDaysOff:
    """Yearly allowance of sick and vacation days."""
    sick_days: int
    vacation_days: int


def _frozen(entries: Optional[Mapping[date, DayOff]]) -> Mapping[date, DayOff]:
    return MappingProxyType(dict(entries or {}))


@dataclass(frozen=True)
class Configuration:
    """
    Immutable snapshot of all schedule and allowance data.

    Built once per process run and passed explicitly to every calculator.
    """
    time_zone: str
    start_date: date
    working_days: WorkingDays
    allowed_days_off: AllowedDaysOff
    time_adjustment_seconds: int = 0
    holidays: Mapping[date, DayOff] = field(default_factory=dict)
    vacation_days: Mapping[date, DayOff] = field(default_factory=dict)
    sick_days: Mapping[date, DayOff] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "holidays", _frozen(self.holidays))
        object.__setattr__(self, "vacation_days", _frozen(self.vacation_days))
        object.__setattr__(self, "sick_days", _frozen(self.sick_days))


@dataclass(frozen=True)
class DaysOffSummary:
    """
    Allowed, taken and left days of one category for one year.

    ``left`` is negative when more days were taken than allowed.
    """
    allowed: float
    taken: float
    left: float


@dataclass(frozen=True)
class LedgerSummary:
    """Logged work time as reported by the ledger."""
    start_date: date
    total_seconds: float


@dataclass(frozen=True)
class BalanceSummary:
    """
    Expected versus logged work time over an inclusive date range.

    A negative ``remaining_seconds`` means overtime.
    """
    start_date: date
    end_date: date
    expected_seconds: float
    actual_seconds: float
    remaining_seconds: float
    ledger_start_date: Optional[date] = None

    def to_dict(self) -> dict:
        """Return a JSON-friendly representation with whole seconds."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "expected_seconds": round(self.expected_seconds),
            "actual_seconds": round(self.actual_seconds),
            "remaining_seconds": round(self.remaining_seconds),
            "ledger_start_date": (
                self.ledger_start_date.isoformat() if self.ledger_start_date else None
            ),
        }
