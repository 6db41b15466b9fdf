"""
Orchestrator for a budget update run.

Fetches the budget index, resolves which budgets are active for the run
interval, routes every downloaded transaction to the budget covering its date
and appends each budget's batch once.

Usage:
    from budget_update.orchestrator import RunConfig, run_update_sync

    report = run_update_sync(
        RunConfig(catalog_id=index_id, interval=interval, worksheet="Joint Checking"),
        catalog_source=GoogleSheetsCatalog(client),
        transaction_source=CsvHistorySource("history.csv", interval),
        sink=GoogleSheetsSink(client),
    )

Each active budget gets its own channel and consumer task; the producer side
dispatches transactions and closes every channel at end-of-stream, then the
run waits on a completion latch before collecting the outcomes.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterable, Dict, List, Literal, Tuple

from budget_update.domain.models import Interval, PeriodRecord, RowLayout, Transaction
from budget_update.errors import LedgerAppendError
from budget_update.ledger.abstract import AppendOutcome, AppendSink
from budget_update.ledger.channel import TransactionChannel
from budget_update.ledger.latch import CompletionLatch
from budget_update.ledger.pipeline import LedgerAppender
from budget_update.ledger.rows import data_range
from budget_update.periods.catalog import CatalogSource
from budget_update.periods.resolver import active_periods, destination_for
from budget_update.utils.logging import get_logger

log = get_logger(__name__)

FailurePolicy = Literal["strict", "tolerant"]


@dataclass(frozen=True)
class RunConfig:
    """
    Parameters of one update run.

    Attributes
    ----------
    catalog_id : str
        Spreadsheet ID of the budget index.
    interval : Interval
        Dates the downloaded history covers.
    worksheet : str
        Worksheet (account) name in each budget spreadsheet.
    category : str
        Label written in the first column of every row.
    layout : RowLayout
        Column layout of the worksheet.
    queue_maxsize : int
        Bound of each destination channel (0 = unbounded).
    failure_policy : "strict" | "tolerant"
        strict raises after all consumers finish if any append failed;
        tolerant records the error in the report and carries on.
    """

    catalog_id: str
    interval: Interval
    worksheet: str = "Joint Checking"
    category: str = "Uncategorized"
    layout: RowLayout = RowLayout.LABELED
    queue_maxsize: int = 100
    failure_policy: FailurePolicy = "strict"


@dataclass(frozen=True)
class RunReport:
    interval: Interval
    outcomes: List[AppendOutcome] = field(default_factory=list)
    routed: int = 0
    unrouted: int = 0

    @property
    def rows_appended(self) -> int:
        return sum(o.rows_appended for o in self.outcomes)

    @property
    def failed(self) -> List[AppendOutcome]:
        return [o for o in self.outcomes if not o.ok]


async def _produce(
    source: AsyncIterable[Transaction],
    candidates: List[PeriodRecord],
    channels: Dict[str, TransactionChannel],
) -> Tuple[int, int]:
    """
    Route each transaction to its destination's channel.

    Channels are closed only once the source is exhausted; a failing source
    leaves them open so no partial batch gets appended.
    """
    routed = unrouted = 0
    async for transaction in source:
        period = destination_for(candidates, transaction.date)
        if period is None:
            unrouted += 1
            log.warning(
                "No active budget for transaction",
                extra={
                    "date": transaction.date.isoformat(),
                    "sequence_index": transaction.sequence_index,
                },
            )
            continue
        await channels[period.destination_id].send(transaction)
        routed += 1
    for channel in channels.values():
        await channel.close()
    return routed, unrouted


def _outcome_from_task(
    task: "asyncio.Task[AppendOutcome]", destination_id: str, config: RunConfig
) -> AppendOutcome:
    exc = task.exception()
    if exc is None:
        return task.result()
    return AppendOutcome(
        destination_id=destination_id,
        worksheet=config.worksheet,
        range_descriptor=data_range(config.worksheet, config.layout),
        error=str(exc),
    )


async def run_update(
    config: RunConfig,
    *,
    catalog_source: CatalogSource,
    transaction_source: AsyncIterable[Transaction],
    sink: AppendSink,
) -> RunReport:
    """
    Run one update: resolve budgets, route transactions, append per budget.

    Raises
    ------
    CatalogParseError, CatalogRetrievalError
        If the index cannot be loaded.
    LedgerAppendError
        Under the strict policy, once every consumer finished, if any append failed.
    """
    catalog = await asyncio.to_thread(catalog_source.fetch, config.catalog_id)
    log.info(
        "Budget index loaded",
        extra={"catalog_id": config.catalog_id, "records": len(catalog)},
    )

    candidates = active_periods(catalog, config.interval)
    if not candidates:
        log.info(
            "No active budgets for interval",
            extra={
                "start": config.interval.start.isoformat(),
                "end": config.interval.end.isoformat(),
            },
        )
        return RunReport(interval=config.interval)

    # Several index rows may point at the same spreadsheet; one consumer each.
    destinations = list(dict.fromkeys(p.destination_id for p in candidates))
    log.info(
        "Active budgets resolved",
        extra={"destinations": destinations, "labels": [p.file_label for p in candidates]},
    )

    appender = LedgerAppender(sink, worksheet=config.worksheet, layout=config.layout)
    latch = CompletionLatch(len(destinations))
    channels: Dict[str, TransactionChannel] = {}
    tasks: Dict[str, asyncio.Task[AppendOutcome]] = {}
    for destination_id in destinations:
        channel = TransactionChannel(maxsize=config.queue_maxsize)
        channels[destination_id] = channel
        tasks[destination_id] = appender.append_from_channel(
            channel, latch, destination_id, config.category
        )

    try:
        routed, unrouted = await _produce(transaction_source, candidates, channels)
    except BaseException:
        log.error("Transaction source failed; abandoning all appends")
        for task in tasks.values():
            task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise

    await latch.wait()
    await asyncio.gather(*tasks.values(), return_exceptions=True)

    outcomes = [_outcome_from_task(tasks[d], d, config) for d in destinations]
    report = RunReport(
        interval=config.interval, outcomes=outcomes, routed=routed, unrouted=unrouted
    )

    failed = report.failed
    if failed and config.failure_policy == "strict":
        first = failed[0]
        raise LedgerAppendError(first.destination_id, first.error or "unknown error") from (
            tasks[first.destination_id].exception()
        )

    log.info(
        "[RUN COMPLETE] Budget update finished",
        extra={
            "routed": routed,
            "unrouted": unrouted,
            "rows_appended": report.rows_appended,
            "failed": len(failed),
        },
    )
    return report


def run_update_sync(
    config: RunConfig,
    *,
    catalog_source: CatalogSource,
    transaction_source: AsyncIterable[Transaction],
    sink: AppendSink,
) -> RunReport:
    """
    Synchronous entry point for run_update.

    Raises RuntimeError when called from inside a running event loop; await
    run_update there instead.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(
            run_update(
                config,
                catalog_source=catalog_source,
                transaction_source=transaction_source,
                sink=sink,
            )
        )
    raise RuntimeError("run_update_sync() cannot be called from an async context; use run_update()")


__all__ = ["RunConfig", "RunReport", "run_update", "run_update_sync"]
