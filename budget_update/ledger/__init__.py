"""
Ledger package: ordering, row mapping and the append pipeline.

This module re-exports the pipeline pieces so downstream code can import from
`budget_update.ledger` directly.
"""

from budget_update.ledger.abstract import (
    AppendOutcome,
    AppendSink,
    RecordingSink,
    TransactionSource,
)
from budget_update.ledger.channel import TransactionChannel
from budget_update.ledger.latch import CompletionLatch
from budget_update.ledger.ordering import sort_for_append
from budget_update.ledger.pipeline import LedgerAppender
from budget_update.ledger.rows import build_rows, data_range, transaction_to_row

__all__ = [
    # Abstracts
    "AppendOutcome",
    "AppendSink",
    "RecordingSink",
    "TransactionSource",
    # Pipeline
    "CompletionLatch",
    "LedgerAppender",
    "TransactionChannel",
    "build_rows",
    "data_range",
    "sort_for_append",
    "transaction_to_row",
]
