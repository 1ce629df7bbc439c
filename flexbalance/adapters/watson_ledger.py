"""
Ledger adapter for the watson time-tracking CLI.
"""

import json
import logging
import subprocess
from datetime import date
from typing import Any, Dict, List, Optional

import pendulum

from ..domain.exceptions import LedgerError
from ..domain.models import LedgerSummary

logger = logging.getLogger(__name__)


class WatsonLedger:
    """
    Fetches logged work time by running ``watson report --json``.

    The running frame is included (``--current``), so the total covers
    everything up to the current moment.
    """

    def __init__(self, time_zone: str, executable: str = "watson"):
        """
        Initialize the ledger.

        Args:
            time_zone: IANA zone used to turn the report timestamps into dates
            executable: Name or path of the watson executable
        """
        self.time_zone = time_zone
        self.executable = executable

    def fetch_summary(self, since: date, until: Optional[date] = None) -> LedgerSummary:
        """
        Get the total logged time from ``since`` through ``until`` (or now).

        Raises:
            LedgerError: If watson cannot be run or its report is malformed
        """
        report = self._run_report(since, until)

        return LedgerSummary(
            start_date=self._parse_start_date(report),
            total_seconds=self._parse_total_seconds(report),
        )

    def _build_command(self, since: date, until: Optional[date]) -> List[str]:
        command = [self.executable, "report", "--json", "--current", "--from", since.isoformat()]
        if until is not None:
            command += ["--to", until.isoformat()]
        return command

    def _run_report(self, since: date, until: Optional[date]) -> Dict[str, Any]:
        command = self._build_command(since, until)
        logger.debug("Running %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as exc:
            raise LedgerError(f"watson executable not found: {self.executable}") from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise LedgerError(
                f"watson report failed with exit code {exc.returncode}: {stderr}"
            ) from exc

        try:
            report = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise LedgerError(f"Could not decode watson report: {exc}") from exc

        if not isinstance(report, dict):
            raise LedgerError("Unexpected watson report: expected a JSON object")

        return report

    def _parse_start_date(self, report: Dict[str, Any]) -> date:
        """Read the earliest timestamp of the report as a date in the configured zone."""
        try:
            timestamp = report["timespan"]["from"]
            start = pendulum.parse(timestamp)
        except (KeyError, TypeError) as exc:
            raise LedgerError("watson report is missing 'timespan.from'") from exc
        except ValueError as exc:
            raise LedgerError(f"Invalid timestamp in watson report: {exc}") from exc

        if not isinstance(start, pendulum.DateTime):
            raise LedgerError(f"Invalid timestamp in watson report: {timestamp!r}")

        return start.in_timezone(self.time_zone).date()

    @staticmethod
    def _parse_total_seconds(report: Dict[str, Any]) -> float:
        try:
            return float(report["time"])
        except KeyError as exc:
            raise LedgerError("watson report is missing 'time'") from exc
        except (TypeError, ValueError) as exc:
            raise LedgerError(f"Invalid time in watson report: {report['time']!r}") from exc
