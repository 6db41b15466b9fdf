"""
Mapping of transactions to ledger worksheet rows.

A labeled ledger row is eight cells, in column order:

    category | index | date | type | description | debit | credit | balance

Unlabeled worksheets start one column to the right and omit the category.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Iterable, List

from budget_update.domain.models import RowLayout, Transaction

_CENTS = Decimal(100)


def minor_to_major(minor_units: int) -> Decimal:
    """Convert minor units to a two-place amount (12345 -> Decimal('123.45'))."""
    return (Decimal(minor_units) / _CENTS).quantize(Decimal("0.01"))


def format_ledger_date(day: dt.date) -> str:
    """Format as month/day/year without leading zeros, independent of locale."""
    return f"{day.month}/{day.day}/{day.year}"


def transaction_to_row(
    transaction: Transaction, category: str, layout: RowLayout = RowLayout.LABELED
) -> List[Any]:
    row: List[Any] = [
        category,
        transaction.sequence_index,
        format_ledger_date(transaction.date),
        transaction.kind,
        transaction.description,
        minor_to_major(transaction.debit_minor_units),
        minor_to_major(transaction.credit_minor_units),
        minor_to_major(transaction.balance_minor_units),
    ]
    if layout is RowLayout.UNLABELED:
        return row[1:]
    return row


def build_rows(
    transactions: Iterable[Transaction], category: str, layout: RowLayout = RowLayout.LABELED
) -> List[List[Any]]:
    return [transaction_to_row(t, category, layout) for t in transactions]


def data_range(worksheet: str, layout: RowLayout = RowLayout.LABELED) -> str:
    """A1 range descriptor of the transaction rows of `worksheet`."""
    return f"{worksheet}!{layout.data_range}"


__all__ = [
    "build_rows",
    "data_range",
    "format_ledger_date",
    "minor_to_major",
    "transaction_to_row",
]
