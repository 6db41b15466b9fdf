"""
Exception taxonomy for budget-update.

Parse errors abort loading of the offending input, retrieval errors surface
collaborator failures, and append errors report a failed ledger write. None of
them are retried by the core; callers decide whether to abort the whole run.
"""

from __future__ import annotations

from typing import Any


class BudgetUpdateError(Exception):
    """Base exception for budget-update failures."""


class ConfigError(BudgetUpdateError):
    """Raised when the options file cannot be read or is malformed."""


class CatalogParseError(BudgetUpdateError, ValueError):
    """Raised when a catalog row is missing or has an unparseable mandatory field."""

    def __init__(self, row_index: int, message: str, value: Any = None) -> None:
        self.row_index = row_index
        self.value = value
        super().__init__(f"Catalog row {row_index}: {message}")


class CatalogRetrievalError(BudgetUpdateError):
    """Raised when the period catalog cannot be fetched."""


class HistoryParseError(BudgetUpdateError, ValueError):
    """Raised when a bank-history line cannot be turned into a transaction."""

    def __init__(self, line: int, message: str) -> None:
        self.line = line
        super().__init__(f"History line {line}: {message}")


class LedgerAppendError(BudgetUpdateError, RuntimeError):
    """Raised when appending a batch to a ledger destination fails."""

    def __init__(self, destination_id: str, message: str) -> None:
        self.destination_id = destination_id
        super().__init__(f"Append to {destination_id} failed: {message}")


__all__ = [
    "BudgetUpdateError",
    "CatalogParseError",
    "CatalogRetrievalError",
    "ConfigError",
    "HistoryParseError",
    "LedgerAppendError",
]
