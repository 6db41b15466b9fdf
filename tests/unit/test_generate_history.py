import csv
import datetime as dt
from pathlib import Path

from budget_update.sources.csv_history import REQUIRED_COLUMNS, CsvHistorySource
from scripts import generate_history


def test_cents_formatting():
    assert generate_history._cents(0) == "0.00"
    assert generate_history._cents(5) == "0.05"
    assert generate_history._cents(123456) == "1234.56"
    assert generate_history._cents(-250) == "-2.50"


def test_generate_history_writes_readable_csv(tmp_path: Path):
    csv_path = tmp_path / "history.csv"
    rows = generate_history._generate_history_csv(
        csv_path, start=dt.date(2018, 1, 1), days=10, per_day=3, opening_cents=100_000, seed=123
    )

    with csv_path.open("r", newline="", encoding="utf-8") as f:
        lines = list(csv.reader(f))
    assert lines[0] == list(REQUIRED_COLUMNS)
    assert len(lines) == rows + 1

    transactions = CsvHistorySource(csv_path).load()
    assert len(transactions) == rows
    assert all(dt.date(2018, 1, 1) <= t.date <= dt.date(2018, 1, 10) for t in transactions)

    # running balance is consistent with the amounts
    balance = 100_000
    for txn in transactions:
        balance += txn.credit_minor_units - txn.debit_minor_units
        assert txn.balance_minor_units == balance


def test_generation_is_deterministic(tmp_path: Path):
    first, second = tmp_path / "a.csv", tmp_path / "b.csv"
    for path in (first, second):
        generate_history._generate_history_csv(
            path, start=dt.date(2018, 1, 1), days=5, per_day=4, opening_cents=0, seed=7
        )
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")
