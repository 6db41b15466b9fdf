"""
Ledger append pipeline.

Consumes a finite stream of transactions for one destination, sorts the full
batch and writes it with a single append call. The pipeline is trusting: it
appends everything it's given and does no date filtering of its own, so the
caller must route only the transactions that belong to the destination.

Usage:
    appender = LedgerAppender(sink, worksheet="Joint Checking")
    channel = TransactionChannel(maxsize=100)
    latch = CompletionLatch(1)
    task = appender.append_from_channel(channel, latch, sheet_id, "Uncategorized")
    for txn in transactions:
        await channel.send(txn)
    await channel.close()
    await latch.wait()
    outcome = task.result()
"""

from __future__ import annotations

import asyncio
import inspect
from typing import AsyncIterable, List, Sequence

from budget_update.domain.models import RowLayout, Transaction
from budget_update.errors import LedgerAppendError
from budget_update.ledger.abstract import AppendOutcome, AppendSink
from budget_update.ledger.channel import TransactionChannel
from budget_update.ledger.latch import CompletionLatch
from budget_update.ledger.ordering import sort_for_append
from budget_update.ledger.rows import build_rows, data_range
from budget_update.utils.logging import get_logger

log = get_logger(__name__)


class LedgerAppender:
    """
    Appends sorted transaction batches to ledger worksheets through a sink.

    Parameters
    ----------
    sink : AppendSink
        Collaborator performing the actual write.
    worksheet : str
        Worksheet (tab) name inside each destination spreadsheet.
    layout : RowLayout
        Column layout of the worksheet.
    """

    def __init__(
        self,
        sink: AppendSink,
        worksheet: str,
        layout: RowLayout = RowLayout.LABELED,
    ) -> None:
        self._sink = sink
        self.worksheet = worksheet
        self.layout = layout

    async def _write(self, destination_id: str, area: str, rows: List[list]) -> None:
        if inspect.iscoroutinefunction(self._sink.append):
            await self._sink.append(destination_id, area, rows)
        else:
            await asyncio.to_thread(self._sink.append, destination_id, area, rows)

    async def append_batch(
        self, transactions: Sequence[Transaction], destination_id: str, category: str
    ) -> AppendOutcome:
        """
        Sort `transactions` and write them with one append call.

        An empty batch issues no write. Sink failures are logged and re-raised
        as LedgerAppendError.
        """
        area = data_range(self.worksheet, self.layout)
        if not transactions:
            log.info(
                "No transactions to append",
                extra={"destination_id": destination_id, "range": area},
            )
            return AppendOutcome(destination_id, self.worksheet, area, skipped=True)

        rows = build_rows(sort_for_append(transactions), category, self.layout)
        try:
            await self._write(destination_id, area, rows)
        except Exception as exc:
            log.exception(
                "Couldn't append transactions",
                extra={"destination_id": destination_id, "range": area, "rows": len(rows)},
            )
            raise LedgerAppendError(destination_id, str(exc)) from exc

        log.info(
            "Appended transactions",
            extra={"destination_id": destination_id, "range": area, "rows": len(rows)},
        )
        return AppendOutcome(destination_id, self.worksheet, area, rows_appended=len(rows))

    async def run_append(
        self, source: AsyncIterable[Transaction], destination_id: str, category: str
    ) -> AppendOutcome:
        """
        Drain `source` completely, then append the whole batch once.
        """
        transactions: List[Transaction] = []
        async for transaction in source:
            transactions.append(transaction)
        log.debug(
            "Source drained",
            extra={"destination_id": destination_id, "buffered": len(transactions)},
        )
        return await self.append_batch(transactions, destination_id, category)

    def append_from_channel(
        self,
        channel: TransactionChannel,
        latch: CompletionLatch,
        destination_id: str,
        category: str,
    ) -> "asyncio.Task[AppendOutcome]":
        """
        Start a consumer task appending everything sent on `channel`.

        The append happens when the producer closes the channel. The latch is
        counted down exactly once, whether the append succeeded or failed; a
        failure is re-raised from the returned task.
        """

        async def _consume() -> AppendOutcome:
            try:
                return await self.run_append(channel, destination_id, category)
            finally:
                latch.count_down()

        return asyncio.create_task(_consume(), name=f"append:{destination_id}")


__all__ = ["LedgerAppender"]
