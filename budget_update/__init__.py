"""
budget-update: append bank transactions to date-bounded budget spreadsheets.

The package reads a budget index listing one spreadsheet per budget period,
works out which budgets are active for the downloaded transactions and
appends each budget's transactions once, sorted by date:

- Period catalog parsing and active-period resolution
- Deterministic ordering of transaction batches
- A bounded-channel append pipeline with one write per destination
- Google Sheets and CSV collaborators, a typer CLI and rich reporting
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from budget_update.config import Settings, load_settings
from budget_update.domain.models import Interval, PeriodRecord, RowLayout, Transaction
from budget_update.errors import (
    BudgetUpdateError,
    CatalogParseError,
    CatalogRetrievalError,
    LedgerAppendError,
)
from budget_update.ledger import (
    AppendOutcome,
    AppendSink,
    CompletionLatch,
    LedgerAppender,
    TransactionChannel,
    sort_for_append,
)
from budget_update.orchestrator import RunConfig, RunReport, run_update, run_update_sync
from budget_update.periods import active_periods, destination_for, parse_catalog, period_from_row
from budget_update.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "load_settings",
    # Domain
    "Interval",
    "PeriodRecord",
    "RowLayout",
    "Transaction",
    # Errors
    "BudgetUpdateError",
    "CatalogParseError",
    "CatalogRetrievalError",
    "LedgerAppendError",
    # Periods
    "active_periods",
    "destination_for",
    "parse_catalog",
    "period_from_row",
    # Ledger
    "AppendOutcome",
    "AppendSink",
    "CompletionLatch",
    "LedgerAppender",
    "TransactionChannel",
    "sort_for_append",
    # Orchestration
    "RunConfig",
    "RunReport",
    "run_update",
    "run_update_sync",
    # Logging
    "configure_logging",
    "get_logger",
]
