"""
Collaborator interfaces and result contracts for the ledger pipeline.

Transaction producers implement TransactionSource, ledger writers implement
AppendSink, and every append cycle reports an AppendOutcome so the
orchestrator and reporter can summarise a run uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, AsyncIterator, List, Optional, Protocol, Sequence, runtime_checkable

from budget_update.domain.models import Transaction


@runtime_checkable
class AppendSink(Protocol):
    """
    Writes a batch of rows to a ledger destination.

    `append` may be a plain or a coroutine function. It performs a single
    write and raises on failure; any retry policy belongs to the sink.
    """

    def append(
        self, destination_id: str, range_descriptor: str, rows: Sequence[Sequence[Any]]
    ) -> Any:
        ...


@runtime_checkable
class TransactionSource(Protocol):
    """A finite, asynchronous stream of transactions."""

    def __aiter__(self) -> AsyncIterator[Transaction]:
        ...


@dataclass(frozen=True)
class AppendOutcome:
    """
    Result of one append cycle for one destination.

    `skipped` is True when the batch was empty and no write was issued.
    """

    destination_id: str
    worksheet: str
    range_descriptor: str
    rows_appended: int = 0
    skipped: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RecordingSink:
    """
    In-memory sink that keeps every call instead of writing; used for dry runs.
    """

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def append(
        self, destination_id: str, range_descriptor: str, rows: Sequence[Sequence[Any]]
    ) -> None:
        self.calls.append((destination_id, range_descriptor, [list(r) for r in rows]))


__all__ = ["AppendOutcome", "AppendSink", "RecordingSink", "TransactionSource"]
