"""
Completion latch for a group of append consumers.
"""

from __future__ import annotations

import asyncio


class CompletionLatch:
    """
    Counts outstanding consumers down to zero; `wait()` returns once it gets there.

    A latch created with a count of zero is already released.
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("latch count must be >= 0")
        self._count = count
        self._released = asyncio.Event()
        if count == 0:
            self._released.set()

    @property
    def count(self) -> int:
        return self._count

    def count_down(self) -> None:
        if self._count == 0:
            raise RuntimeError("latch counted down below zero")
        self._count -= 1
        if self._count == 0:
            self._released.set()

    async def wait(self) -> None:
        await self._released.wait()


__all__ = ["CompletionLatch"]
