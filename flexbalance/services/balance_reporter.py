"""
Application services for reporting the flex time balance.

The service fetches logged time via a ledger adapter and delegates the
expected time calculation to the domain-level ``WorkingHoursCalculator``.
This keeps the CLI thin and lets tests swap the ledger for a fake through a
simple protocol.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Protocol

from ..domain.exceptions import InvalidDateRangeError
from ..domain.models import BalanceSummary, Configuration, LedgerSummary
from ..domain.working_hours import WorkingHoursCalculator

logger = logging.getLogger(__name__)


class LedgerProviderProtocol(Protocol):
    """Protocol describing the ledger behaviour needed by the service."""

    def fetch_summary(self, since: date, until: Optional[date] = None) -> LedgerSummary:
        """Return the logged work time from ``since`` through ``until`` (or now)."""


def balance(
    end_date: date,
    config: Configuration,
    actual_seconds: float,
    start_date: Optional[date] = None,
) -> BalanceSummary:
    """
    Compare expected and logged work time.

    ``remaining_seconds`` is expected minus actual, so a negative value
    signals overtime.
    """
    start_date = start_date or config.start_date
    expected = WorkingHoursCalculator(config).expected_seconds(end_date, start_date=start_date)

    return BalanceSummary(
        start_date=start_date,
        end_date=end_date,
        expected_seconds=expected,
        actual_seconds=actual_seconds,
        remaining_seconds=expected - actual_seconds,
    )


class BalanceReporter:
    """
    Orchestrates ledger retrieval and balance calculation.

    The ledger is queried exactly once per report. Its errors are not
    caught here.
    """

    def __init__(self, ledger: LedgerProviderProtocol, config: Configuration) -> None:
        self._ledger = ledger
        self._config = config

    def report(self, end_date: date, start_date: Optional[date] = None) -> BalanceSummary:
        """
        Build the balance for the inclusive range ``start_date``..``end_date``.

        Args:
            end_date: Last day of the range
            start_date: First day of the range; defaults to the configured start date

        Raises:
            InvalidDateRangeError: If end_date lies before start_date
            LedgerError: If the ledger cannot deliver the logged time
        """
        start_date = start_date or self._config.start_date

        if end_date < start_date:
            raise InvalidDateRangeError(
                f"End date {end_date.isoformat()} is before start date {start_date.isoformat()}"
            )

        ledger_summary = self._ledger.fetch_summary(since=start_date, until=end_date)
        logger.debug(
            "Ledger reports %ss logged since %s",
            ledger_summary.total_seconds, ledger_summary.start_date,
        )

        summary = balance(
            end_date,
            self._config,
            ledger_summary.total_seconds,
            start_date=start_date,
        )

        return replace(summary, ledger_start_date=ledger_summary.start_date)
