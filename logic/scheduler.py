"""
Deferred callbacks for the game session.

The session never sleeps: it asks a scheduler to run the AI move later
and keeps the returned handle so the call can be cancelled.
"""

import heapq
import itertools
from typing import Any, Callable, List, Tuple


class Scheduler:
    """Interface: run a callback after a delay, cancellable by handle."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        raise NotImplementedError

    def cancel(self, handle: Any):
        raise NotImplementedError


class TkScheduler(Scheduler):
    """Runs callbacks on the Tkinter event loop (root.after / after_cancel)."""

    def __init__(self, root):
        self.root = root

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.root.after(delay_ms, callback)

    def cancel(self, handle: str):
        self.root.after_cancel(handle)


class ManualScheduler(Scheduler):
    """
    Virtual clock for tests and the console shell.

    Nothing runs until `advance()` moves time forward; due callbacks run
    in order of their due time, then of scheduling.
    """

    def __init__(self):
        self.now_ms = 0
        self._queue: List[Tuple[int, int, Callable[[], None]]] = []
        self._cancelled = set()
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._counter)
        heapq.heappush(self._queue, (self.now_ms + max(0, delay_ms), handle, callback))
        return handle

    def cancel(self, handle: int):
        if any(entry[1] == handle for entry in self._queue):
            self._cancelled.add(handle)

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def advance(self, ms: int) -> int:
        """
        Move the clock forward and run every callback that became due.

        Returns:
            Number of callbacks that ran.
        """
        target = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, handle, callback = heapq.heappop(self._queue)
            self.now_ms = due
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
            ran += 1
        self.now_ms = target
        return ran

    def run_all(self) -> int:
        """Run everything scheduled, including callbacks scheduled meanwhile."""
        ran = 0
        while self.pending:
            ran += self.advance(self._queue[0][0] - self.now_ms)
        return ran
