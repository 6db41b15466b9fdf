"""
Domain package for budget-update.

Exports the period, transaction and interval models shared by the resolver,
the ledger pipeline and the collaborators. Keep this package focused on data
definitions and validation concerns.
"""

from budget_update.domain.models import Interval, PeriodRecord, RowLayout, Transaction

__all__ = [
    "Interval",
    "PeriodRecord",
    "RowLayout",
    "Transaction",
]
