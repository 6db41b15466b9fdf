"""
Single-producer/single-consumer hand-off of transactions.

A TransactionChannel wraps a bounded asyncio.Queue. The producer `send`s
transactions and `close`s the channel when its stream ends; the consumer
iterates with `async for` and stops once the channel is closed and drained.
A full channel suspends the producer, an empty one suspends the consumer.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator

from budget_update.domain.models import Transaction

_CLOSED = object()


class TransactionChannel:
    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, transaction: Transaction) -> None:
        if self._closed:
            raise RuntimeError("send on closed channel")
        await self._queue.put(transaction)

    async def close(self) -> None:
        """Signal end-of-stream. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_CLOSED)

    def __aiter__(self) -> AsyncIterator[Transaction]:
        return self._drain()

    async def _drain(self) -> AsyncIterator[Transaction]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item


__all__ = ["TransactionChannel"]
