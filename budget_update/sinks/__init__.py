"""
Sinks package for budget-update.

Centralizes the Google Sheets I/O (client, index reads, ledger appends). Keep
this layer focused on I/O, decoupled from resolver and pipeline logic.
"""

from budget_update.sinks.google_sheets import (
    GoogleSheetsCatalog,
    GoogleSheetsSink,
    open_client,
    open_spreadsheet,
)

__all__ = [
    "GoogleSheetsCatalog",
    "GoogleSheetsSink",
    "open_client",
    "open_spreadsheet",
]
