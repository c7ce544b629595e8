"""Deferred continuation scheduling for representation refreshes.

Refreshing a large tree hands each level's work to a later turn of the
host's event loop instead of recursing synchronously. A Scheduler is the
seam to that loop: AsyncioScheduler defers onto an asyncio loop, TaskQueue
is an explicit queue pumped by the host (or a test) one turn at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

Continuation = Callable[[], None]


class Scheduler(Protocol):
    """Protocol for deferring work to a later event-loop turn."""

    def call_soon(self, callback: Continuation) -> None:
        """Schedule callback to run on a later turn. Must not run it inline."""
        ...


class AsyncioScheduler:
    """Defers continuations onto an asyncio event loop.

    Attributes:
        loop: The loop to schedule on. When None, the running loop is
            resolved each time a continuation is scheduled.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self.loop = loop

    def call_soon(self, callback: Continuation) -> None:
        """Schedule callback on the loop.

        Raises:
            RuntimeError: If no loop was given and none is running.
        """
        loop = self.loop if self.loop is not None else asyncio.get_running_loop()
        loop.call_soon(callback)


class TaskQueue:
    """An explicit FIFO queue of continuations.

    Each turn runs only the continuations that were queued before the turn
    began; anything they schedule waits for the next turn. There is no
    cancellation: a queued continuation always runs.
    """

    def __init__(self):
        self._queue: deque[Continuation] = deque()

    def call_soon(self, callback: Continuation) -> None:
        self._queue.append(callback)

    @property
    def pending(self) -> int:
        """Number of continuations waiting to run."""
        return len(self._queue)

    def run_turn(self) -> int:
        """Run one turn.

        Returns:
            The number of continuations that ran.
        """
        count = len(self._queue)
        for _ in range(count):
            self._queue.popleft()()
        return count

    def run_until_idle(self, max_turns: int | None = None) -> int:
        """Run turns until the queue is empty.

        Args:
            max_turns: Optional upper bound on the number of turns.

        Returns:
            The number of turns that ran.
        """
        turns = 0
        while self._queue and (max_turns is None or turns < max_turns):
            self.run_turn()
            turns += 1
        if self._queue:
            logger.debug(f"Stopped after {turns} turns with {len(self._queue)} pending")
        return turns
