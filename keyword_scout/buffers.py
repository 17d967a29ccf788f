# keyword_scout/buffers.py
"""
Reusable byte buffers for reading response bodies.
"""
from __future__ import annotations

from collections import deque
from typing import Deque

__all__ = ("BufferPool",)


class BufferPool:
    """Amortizes ``bytearray`` allocation across fetches.

    ``acquire`` never blocks and creates a new buffer when the pool is empty.
    There is no cap on how many buffers exist; the pool only keeps released
    ones around. ``deque.append``/``deque.pop`` are atomic, so the pool can be
    shared by any number of tasks or threads without a lock.
    """

    def __init__(self) -> None:
        self._free: Deque[bytearray] = deque()
        self.created = 0

    def acquire(self) -> bytearray:
        try:
            return self._free.pop()
        except IndexError:
            self.created += 1
            return bytearray()

    def release(self, buf: bytearray) -> None:
        """Empty *buf* and make it available to the next ``acquire``."""
        buf.clear()
        self._free.append(buf)

    def __len__(self) -> int:
        return len(self._free)
