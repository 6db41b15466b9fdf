"""
Bank-history CSV transaction source.

Reads an account-history export with the header

    date,type,description,debit,credit,balance

and streams it as Transaction values. Amounts are decimal strings (an
optional currency sign and thousands separators are accepted) and are
converted to minor units exactly. The row number within the file is the
transaction's sequence index, which keeps same-day transactions in the order
the bank listed them.
"""

from __future__ import annotations

import asyncio
import csv
from decimal import Decimal, InvalidOperation
from os import PathLike
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional

from dateutil import parser as date_parser

from budget_update.domain.models import Interval, Transaction
from budget_update.errors import HistoryParseError
from budget_update.utils.logging import get_logger

log = get_logger(__name__)

REQUIRED_COLUMNS = ("date", "type", "description", "debit", "credit", "balance")


def parse_minor_units(text: str, line: int, column: str) -> int:
    """Parse '1,234.56' (or '$1,234.56', or '') into minor units."""
    cleaned = (text or "").strip().replace("$", "").replace(",", "")
    if not cleaned:
        return 0
    try:
        cents = Decimal(cleaned) * 100
    except InvalidOperation as exc:
        raise HistoryParseError(line, f"{column} is not an amount: {text!r}") from exc
    if not cents.is_finite():
        raise HistoryParseError(line, f"{column} is not an amount: {text!r}")
    if cents != cents.to_integral_value():
        raise HistoryParseError(line, f"{column} has fractional cents: {text!r}")
    return int(cents)


def _row_to_transaction(row: Dict[str, str], index: int, line: int) -> Transaction:
    text = (row.get("date") or "").strip()
    try:
        posted = date_parser.parse(text).date()
    except (ValueError, OverflowError) as exc:
        raise HistoryParseError(line, f"cannot parse date {text!r}") from exc
    return Transaction(
        sequence_index=index,
        date=posted,
        kind=(row.get("type") or "").strip(),
        description=(row.get("description") or "").strip(),
        debit_minor_units=parse_minor_units(row.get("debit", ""), line, "debit"),
        credit_minor_units=parse_minor_units(row.get("credit", ""), line, "credit"),
        balance_minor_units=parse_minor_units(row.get("balance", ""), line, "balance"),
    )


class CsvHistorySource:
    """
    Stream transactions from a bank-history CSV file.

    Parameters
    ----------
    path : str | PathLike
        CSV file to read.
    interval : Interval | None
        When given, only transactions dated inside it are produced.
    """

    def __init__(self, path: str | PathLike[str], interval: Optional[Interval] = None) -> None:
        self.path = Path(path)
        self.interval = interval

    def load(self) -> List[Transaction]:
        """Read and parse the whole file."""
        with self.path.open(encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            headers = {h.strip().lower() for h in reader.fieldnames or []}
            missing = [c for c in REQUIRED_COLUMNS if c not in headers]
            if missing:
                raise HistoryParseError(1, "missing columns: " + ", ".join(missing))

            transactions: List[Transaction] = []
            for index, raw in enumerate(reader):
                row = {(k or "").strip().lower(): v for k, v in raw.items()}
                # header is line 1
                transaction = _row_to_transaction(row, index, line=index + 2)
                if self.interval is None or transaction.date in self.interval:
                    transactions.append(transaction)

        log.info(
            "Loaded account history",
            extra={"path": str(self.path), "transactions": len(transactions)},
        )
        return transactions

    def __aiter__(self) -> AsyncIterator[Transaction]:
        return self._stream()

    async def _stream(self) -> AsyncIterator[Transaction]:
        for transaction in await asyncio.to_thread(self.load):
            yield transaction


__all__ = ["CsvHistorySource", "REQUIRED_COLUMNS", "parse_minor_units"]
