"""
Main CLI application using Typer.
"""

import logging
from dataclasses import asdict
from datetime import date
from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional, Annotated, Tuple, Union

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.mock_ledger import MockLedger
from ..adapters.watson_ledger import WatsonLedger
from ..config import get_default_config_path, load_configuration
from ..domain.days_off import DaysOffAccountant
from ..domain.exceptions import FlexBalanceError, InvalidDateRangeError
from ..domain.models import BalanceSummary, Configuration, DaysOffSummary
from ..formatting import format_days, format_duration
from ..services.balance_reporter import BalanceReporter

app = typer.Typer(
    name="flexbalance",
    help="Track your flex time balance and days off",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to $FLEXBALANCE_CONFIG_PATH/config.yml"),
]


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Output format", case_sensitive=False),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Compare logged work time with your working hours and track days off.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(error: Union[Exception, str]) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _load_config(config_file: Optional[Path]) -> Configuration:
    config_path = config_file or get_default_config_path()
    logger.debug("Using configuration file %s", config_path)
    return load_configuration(config_path)


def _today(time_zone: str) -> date:
    return pendulum.now(time_zone).date()


def _parse_date(value: str, option: str) -> date:
    try:
        return pendulum.from_format(value, "YYYY-MM-DD").date()
    except ValueError as e:
        _fail(f"Invalid date for {option}: {value} ({e})")


def _determine_date_range(
    *,
    config: Configuration,
    today: date,
    day: bool,
    week: bool,
    month: bool,
    year: bool,
    from_option: Optional[str],
    to_option: Optional[str]
) -> Tuple[date, date]:
    """
    Resolve the balance range from shortcut flags or explicit dates.

    Without any option the range runs from the configured start date
    through today.
    """
    shortcuts = {"--day": day, "--week": week, "--month": month, "--year": year}
    selected = [name for name, enabled in shortcuts.items() if enabled]

    if len(selected) > 1:
        _fail(f"{', '.join(selected)} cannot be used together.")

    if selected and from_option:
        _fail(f"{selected[0]} cannot be combined with --from.")

    end_date = _parse_date(to_option, "--to") if to_option else today
    # start_of() needs a pendulum Date
    today = pendulum.date(today.year, today.month, today.day)

    if day:
        start_date = today
    elif week:
        start_date = today.start_of("week")
    elif month:
        start_date = today.start_of("month")
    elif year:
        start_date = today.start_of("year")
    elif from_option:
        start_date = _parse_date(from_option, "--from")
    else:
        start_date = config.start_date

    if start_date > end_date:
        raise InvalidDateRangeError(
            f"Range start {start_date.isoformat()} is after range end {end_date.isoformat()}"
        )

    return start_date, end_date


def _render_balance(summary: BalanceSummary) -> str:
    expected = format_duration(summary.expected_seconds)
    actual = format_duration(summary.actual_seconds)
    remaining = format_duration(summary.remaining_seconds)
    width = max(len(expected), len(actual), len(remaining))

    lines = [f"{summary.start_date.isoformat()} - {summary.end_date.isoformat()}"]
    if summary.ledger_start_date and summary.ledger_start_date != summary.start_date:
        lines.append(f"First logged day: {summary.ledger_start_date.isoformat()}")
    lines += [
        "",
        f"Expected:  {expected:>{width}}",
        f"Actual:    {actual:>{width}}",
        f"Remaining: {remaining:>{width}}",
    ]
    return "\n".join(lines)


def _days_off_table(vacation: DaysOffSummary, sick: DaysOffSummary) -> Table:
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Category", style="bold")
    table.add_column("Allowed", justify="right")
    table.add_column("Taken", justify="right")
    table.add_column("Remaining", justify="right")

    for category, summary in (("Vacation", vacation), ("Sick", sick)):
        table.add_row(
            category,
            str(summary.allowed),
            format_days(summary.taken),
            format_days(summary.left),
        )

    return table


@app.command()
def balance(
    config_file: ConfigOption = None,
    from_date: Annotated[Optional[str], typer.Option("--from", help="Start date (YYYY-MM-DD)")] = None,
    to_date: Annotated[Optional[str], typer.Option("--to", help="End date (YYYY-MM-DD), defaults to today")] = None,
    day: Annotated[bool, typer.Option("--day", help="Balance of today.")] = False,
    week: Annotated[bool, typer.Option("--week", help="Balance since Monday of the current week.")] = False,
    month: Annotated[bool, typer.Option("--month", help="Balance since the first of the current month.")] = False,
    year: Annotated[bool, typer.Option("--year", help="Balance since January 1st.")] = False,
    output_format: FormatOption = OutputFormat.TEXT,
    mock: Annotated[bool, typer.Option("--mock", help="Use an empty mock ledger instead of watson.")] = False,
):
    """
    Show expected, logged and remaining work time.

    A negative remaining time means overtime.

    Examples:

        flexbalance balance

        flexbalance balance --month

        flexbalance balance --from 2024-01-01 --to 2024-03-31 --format json
    """
    try:
        config = _load_config(config_file)

        start_date, end_date = _determine_date_range(
            config=config,
            today=_today(config.time_zone),
            day=day,
            week=week,
            month=month,
            year=year,
            from_option=from_date,
            to_option=to_date
        )

        if mock:
            ledger = MockLedger(start_date=start_date)
        else:
            ledger = WatsonLedger(time_zone=config.time_zone)

        reporter = BalanceReporter(ledger=ledger, config=config)
        summary = reporter.report(end_date, start_date=start_date)

    except FlexBalanceError as e:
        _fail(e)

    if output_format is OutputFormat.JSON:
        console.print_json(data=summary.to_dict())
    else:
        console.print(_render_balance(summary), highlight=False)


@app.command()
def daysoff(
    config_file: ConfigOption = None,
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Year to summarize, defaults to the current year")] = None,
    output_format: FormatOption = OutputFormat.TEXT,
):
    """
    Show allowed, taken and remaining vacation and sick days for a year.
    """
    try:
        config = _load_config(config_file)
    except FlexBalanceError as e:
        _fail(e)

    year = year or _today(config.time_zone).year
    vacation, sick = DaysOffAccountant(config).summaries(year)

    if output_format is OutputFormat.JSON:
        console.print_json(data={
            "year": year,
            "vacation": asdict(vacation),
            "sick": asdict(sick),
        })
        return

    console.print(f"Year: {year}\n", highlight=False)
    console.print(_days_off_table(vacation, sick))


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]flexbalance[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
