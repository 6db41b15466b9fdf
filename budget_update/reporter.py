from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from budget_update.domain.models import PeriodRecord
from budget_update.orchestrator import RunReport


def _status(outcome) -> str:
    if outcome.error:
        return f"[red]failed[/red]: {outcome.error}"
    if outcome.skipped:
        return "[yellow]nothing to append[/yellow]"
    return "[green]appended[/green]"


def print_report(report: RunReport, console: Optional[Console] = None) -> None:
    """
    Render a run report as a rich table, one line per destination.
    """
    console = console or Console()

    if not report.outcomes:
        console.print("[yellow]No active budgets for this date range; nothing appended.[/yellow]")
        return

    interval = f"{report.interval.start.isoformat()} .. {report.interval.end.isoformat()}"
    table = Table(
        title=f"Budget Update\n[dim]{interval}[/dim]",
        box=box.ROUNDED,
        caption=f"routed={report.routed} unrouted={report.unrouted}",
    )
    table.add_column("Destination", style="cyan", no_wrap=True)
    table.add_column("Range", style="magenta")
    table.add_column("Rows", justify="right", style="bold green")
    table.add_column("Status")

    for outcome in report.outcomes:
        table.add_row(
            outcome.destination_id,
            outcome.range_descriptor,
            f"{outcome.rows_appended:,}",
            _status(outcome),
        )

    console.print(table)


def print_periods(periods: List[PeriodRecord], console: Optional[Console] = None) -> None:
    """Render period records (e.g. the active budgets) as a table."""
    console = console or Console()

    if not periods:
        console.print("[yellow]No active budgets.[/yellow]")
        return

    table = Table(title="Budgets", box=box.ROUNDED)
    table.add_column("#", justify="right", style="blue")
    table.add_column("Label", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Last updated", style="yellow")
    table.add_column("Spreadsheet", style="magenta", no_wrap=True)

    for period in periods:
        table.add_row(
            str(period.sequence_index),
            period.file_label,
            period.start.isoformat(),
            period.end.isoformat(),
            period.last_updated.isoformat(sep=" ") if period.last_updated else "never",
            period.destination_id,
        )

    console.print(table)
