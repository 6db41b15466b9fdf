from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError

from budget_update.config import Settings, load_settings
from budget_update.domain.models import Interval, RowLayout
from budget_update.errors import BudgetUpdateError, ConfigError
from budget_update.ledger.abstract import RecordingSink
from budget_update.orchestrator import RunConfig, run_update_sync
from budget_update.periods.resolver import active_periods
from budget_update.reporter import print_periods, print_report
from budget_update.sinks.google_sheets import GoogleSheetsCatalog, GoogleSheetsSink, open_client
from budget_update.sources.csv_history import CsvHistorySource
from budget_update.utils.logging import configure_logging

app = typer.Typer(help="Append downloaded bank transactions to the matching budget spreadsheets.")

_DATE_FORMATS = ["%Y-%m-%d", "%m/%d/%Y"]

ConfigFileOption = typer.Option(
    None, "--config-file", "-c", help="Options file (JSON). Defaults to ~/.budget-update/options.json."
)
IndexSheetOption = typer.Option(None, "--index-sheet-id", help="Google sheet ID of the budget index.")
StartOption = typer.Option(None, "--start", formats=_DATE_FORMATS, help="First day of the range.")
EndOption = typer.Option(None, "--end", formats=_DATE_FORMATS, help="Last day of the range.")
AppSecretOption = typer.Option(
    None, "--app-secret-file", help="OAuth client secret used to authenticate with Google."
)
UserAuthOption = typer.Option(
    None, "--user-auth-file", help="File with cached Google user credentials."
)


def _settings(config_file: Optional[Path], **overrides: Any) -> Settings:
    settings = load_settings(config_file, overrides)
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    return settings


def resolve_interval(
    settings: Settings,
    start: Optional[dt.datetime],
    end: Optional[dt.datetime],
    today: Optional[dt.date] = None,
) -> Interval:
    """Default to the last `lookback_days` days, ending today."""
    last = end.date() if end else (today or dt.date.today())
    first = start.date() if start else last - dt.timedelta(days=settings.lookback_days)
    try:
        return Interval(start=first, end=last)
    except ValidationError as exc:
        raise ConfigError(f"Invalid date range: start {first} is after end {last}") from exc


def _fail(exc: Exception) -> None:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def info(config_file: Optional[Path] = ConfigFileOption) -> None:
    """
    Show effective configuration values.
    """
    try:
        settings = _settings(config_file)
    except BudgetUpdateError as exc:
        _fail(exc)
    typer.echo(
        f"index={settings.index_sheet_id or '<unset>'} | account={settings.account} "
        f"category={settings.category} layout={settings.row_layout.value} | "
        f"lookback={settings.lookback_days}d queue={settings.queue_maxsize} "
        f"policy={settings.failure_policy}"
    )
    typer.echo(f"app secret: {settings.app_secret_file} | user auth: {settings.user_auth_file}")


@app.command()
def periods(
    config_file: Optional[Path] = ConfigFileOption,
    index_sheet_id: Optional[str] = IndexSheetOption,
    start: Optional[dt.datetime] = StartOption,
    end: Optional[dt.datetime] = EndOption,
    app_secret_file: Optional[Path] = AppSecretOption,
    user_auth_file: Optional[Path] = UserAuthOption,
    show_all: bool = typer.Option(False, "--all", help="List every budget, not only active ones."),
) -> None:
    """
    List the budgets in the index that are active for a date range.
    """
    try:
        settings = _settings(
            config_file,
            index_sheet_id=index_sheet_id,
            app_secret_file=app_secret_file,
            user_auth_file=user_auth_file,
        )
        interval = resolve_interval(settings, start, end)
        client = open_client(settings.app_secret_file, settings.user_auth_file)
        catalog = GoogleSheetsCatalog(client).fetch(settings.index_sheet_id)
    except BudgetUpdateError as exc:
        _fail(exc)
    print_periods(catalog if show_all else active_periods(catalog, interval))


@app.command()
def run(
    history: Path = typer.Option(
        ..., "--history", "-H", exists=True, dir_okay=False, help="Bank-history CSV export."
    ),
    config_file: Optional[Path] = ConfigFileOption,
    index_sheet_id: Optional[str] = IndexSheetOption,
    start: Optional[dt.datetime] = StartOption,
    end: Optional[dt.datetime] = EndOption,
    app_secret_file: Optional[Path] = AppSecretOption,
    user_auth_file: Optional[Path] = UserAuthOption,
    account: Optional[str] = typer.Option(
        None, "--account", "-a", help="Worksheet (account) name to append to."
    ),
    category: Optional[str] = typer.Option(None, "--category", help="Category label for every row."),
    layout: Optional[RowLayout] = typer.Option(None, "--layout", help="Worksheet column layout."),
    failure_policy: Optional[str] = typer.Option(
        None, "--failure-policy", help="strict (default) or tolerant."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Resolve and route, but do not write to any budget."
    ),
) -> None:
    """
    Append the history's transactions to every active budget covering them.
    """
    overrides: Dict[str, Any] = {
        "index_sheet_id": index_sheet_id,
        "app_secret_file": app_secret_file,
        "user_auth_file": user_auth_file,
        "account": account,
        "category": category,
        "row_layout": layout,
        "failure_policy": failure_policy,
    }
    try:
        settings = _settings(config_file, **overrides)
        interval = resolve_interval(settings, start, end)
        typer.echo(
            f"Updating '{settings.account}' for {interval.start.isoformat()} .. "
            f"{interval.end.isoformat()}{' (dry run)' if dry_run else ''}."
        )
        client = open_client(settings.app_secret_file, settings.user_auth_file)
        sink = RecordingSink() if dry_run else GoogleSheetsSink(client)
        report = run_update_sync(
            RunConfig(
                catalog_id=settings.index_sheet_id,
                interval=interval,
                worksheet=settings.account,
                category=settings.category,
                layout=settings.row_layout,
                queue_maxsize=settings.queue_maxsize,
                failure_policy=settings.failure_policy,
            ),
            catalog_source=GoogleSheetsCatalog(client),
            transaction_source=CsvHistorySource(history, interval),
            sink=sink,
        )
    except BudgetUpdateError as exc:
        _fail(exc)
    print_report(report)
    if report.failed:
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
