# keyword_scout/gate.py
"""
Admission control for scan operations.
"""
from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Optional, Type

__all__ = ("ConcurrencyGate",)


class ConcurrencyGate:
    """Counting semaphore bounding how many scans run at once.

    Use it as ``async with gate:`` so the slot is freed on every exit path.
    Waiting for a slot has no timeout.
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("concurrency limit must be >= 1")
        self.limit = limit
        self._sema = asyncio.Semaphore(limit)
        self.in_flight = 0
        self.peak = 0

    async def acquire(self) -> None:
        await self._sema.acquire()
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)

    def release(self) -> None:
        self.in_flight -= 1
        self._sema.release()

    def locked(self) -> bool:
        """True when every slot is taken."""
        return self._sema.locked()

    async def __aenter__(self) -> ConcurrencyGate:
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()
