"""
Deterministic ordering of transaction batches before they are appended.
"""

from __future__ import annotations

from typing import Iterable, List

from budget_update.domain.models import Transaction


def _sort_key(transaction: Transaction) -> tuple:
    return (transaction.date, transaction.sequence_index)


def sort_for_append(items: Iterable[Transaction]) -> List[Transaction]:
    """
    Return the transactions ordered by date, then by sequence index.

    The result depends only on the transactions themselves, never on the order
    they arrived in, so racing producers cannot change what gets written.
    """
    return sorted(items, key=_sort_key)


__all__ = ["sort_for_append"]
