"""Deterministic delayed-callback queue pumped by the host loop."""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Tuple


Callback = Callable[[], None]


class FrameScheduler:
    """``post_delayed`` / ``cancel`` on top of an injected clock.

    The host calls ``run_due(now_ms)`` once per loop iteration; nothing runs
    on its own, which keeps the wheel single-threaded and lets tests drive
    time explicitly. Callbacks posted at the same due time run in the order
    they were posted.
    """

    def __init__(self, now_ms: float = 0.0) -> None:
        self.now_ms = now_ms
        self._queue: List[Tuple[float, int, Callback]] = []
        self._sequence = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def post_delayed(self, callback: Callback, delay_ms: float) -> None:
        due = self.now_ms + max(0.0, float(delay_ms))
        heapq.heappush(self._queue, (due, next(self._sequence), callback))

    def cancel(self, callback: Callback) -> None:
        """Remove every pending entry of ``callback``; unknown callbacks are ignored."""

        remaining = [entry for entry in self._queue if entry[2] != callback]
        if len(remaining) != len(self._queue):
            heapq.heapify(remaining)
            self._queue = remaining

    def run_due(self, now_ms: float) -> int:
        """Advance the clock to ``now_ms`` and run everything that came due."""

        self.now_ms = max(self.now_ms, now_ms)
        ran = 0
        # Entries posted while draining wait for the next pass, even with zero delay.
        boundary = next(self._sequence)
        while self._queue and self._queue[0][0] <= self.now_ms and self._queue[0][1] < boundary:
            _, _, callback = heapq.heappop(self._queue)
            callback()
            ran += 1
        return ran
