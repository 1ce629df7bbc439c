"""
Mock ledger for running reports without a watson installation.
"""

from datetime import date
from typing import List, Optional, Tuple

from ..domain.models import LedgerSummary


class MockLedger:
    """
    Ledger that returns a fixed amount of logged time.

    Every call is recorded in ``calls`` so tests can check how the ledger
    was queried.
    """

    def __init__(self, total_seconds: float = 0, start_date: Optional[date] = None):
        """
        Initialize the mock ledger.

        Args:
            total_seconds: Logged time returned for every query
            start_date: Earliest logged date to report; defaults to the queried date
        """
        self.total_seconds = total_seconds
        self.start_date = start_date
        self.calls: List[Tuple[date, Optional[date]]] = []

    def fetch_summary(self, since: date, until: Optional[date] = None) -> LedgerSummary:
        """Return the configured summary."""
        self.calls.append((since, until))

        return LedgerSummary(
            start_date=self.start_date or since,
            total_seconds=self.total_seconds,
        )
