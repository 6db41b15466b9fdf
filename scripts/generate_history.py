"""
Synthetic bank-history generator for budget-update.

Writes a deterministic pseudo-random account history CSV in the format read by
`budget_update.sources.csv_history.CsvHistorySource`, for dry runs and demos
without a real bank export.
"""

from __future__ import annotations

import csv
import datetime as dt
import random
import sys
from pathlib import Path

import typer

from budget_update.sources.csv_history import REQUIRED_COLUMNS

app = typer.Typer(help="Generate a synthetic bank-history CSV.")

_PAYEES = {
    "POS": ["GROCERY MART", "CORNER CAFE", "HARDWARE DEPOT", "GAS-N-GO"],
    "ATM": ["ATM WITHDRAWAL"],
    "CHECK": ["CHECK"],
    "ACH": ["PAYROLL DEPOSIT", "ELECTRIC CO", "MORTGAGE SERVICING"],
}


def _cents(value: int) -> str:
    return f"{value // 100}.{value % 100:02d}" if value >= 0 else f"-{_cents(-value)}"


def _generate_history_csv(
    csv_path: Path, start: dt.date, days: int, per_day: int, opening_cents: int, seed: int
) -> int:
    rng = random.Random(seed)
    balance = opening_cents
    rows = 0

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(REQUIRED_COLUMNS)
        for offset in range(days):
            day = start + dt.timedelta(days=offset)
            for _ in range(rng.randint(0, per_day)):
                kind = rng.choice(list(_PAYEES))
                payee = rng.choice(_PAYEES[kind])
                debit = credit = 0
                if payee == "PAYROLL DEPOSIT":
                    credit = rng.randint(150_000, 350_000)
                else:
                    debit = rng.randint(100, 25_000)
                balance += credit - debit
                writer.writerow(
                    [
                        day.isoformat(),
                        kind,
                        payee,
                        _cents(debit) if debit else "",
                        _cents(credit) if credit else "",
                        _cents(balance),
                    ]
                )
                rows += 1
    return rows


@app.command()
def main(
    output: Path = typer.Option(
        Path("history.csv"), "--output", "-o", help="CSV output path."
    ),
    start: dt.datetime = typer.Option(
        ..., "--start", formats=["%Y-%m-%d"], help="First day of the generated history."
    ),
    days: int = typer.Option(31, "--days", "-d", help="Number of days to cover."),
    per_day: int = typer.Option(4, "--per-day", help="Maximum transactions per day."),
    opening_balance: int = typer.Option(
        500_000, "--opening-balance", help="Opening balance in minor units."
    ),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
) -> None:
    """
    Generate a synthetic account history.
    """
    output.parent.mkdir(parents=True, exist_ok=True)
    rows = _generate_history_csv(
        output,
        start=start.date(),
        days=days,
        per_day=per_day,
        opening_cents=opening_balance,
        seed=seed,
    )
    typer.echo(f"Wrote {rows:,} transactions -> {output} (seed={seed})")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
