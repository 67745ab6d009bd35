"""Cooperative scheduler for round timers.

A logical clock that owns one-shot and periodic callbacks. Nothing runs on
its own: the host advances the clock (from a wall-clock pump, a UI timer or
a test) and due callbacks fire in due-time order on the caller's thread, so
every round mutation happens on one logical event loop.

Tasks belonging to one round are collected in a ``TaskGroup`` and cancelled
together when the round is superseded.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional

Callback = Callable[[], None]


class ScheduledTask:
    """Handle for a scheduled callback; ``cancel()`` is idempotent."""

    __slots__ = ("due", "interval", "callback", "name", "cancelled", "fired")

    def __init__(self, due: float, callback: Callback, interval: Optional[float] = None, name: str = ""):
        self.due = due
        self.interval = interval
        self.callback = callback
        self.name = name
        self.cancelled = False
        self.fired = 0

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    @property
    def active(self) -> bool:
        return not self.cancelled and (self.periodic or self.fired == 0)

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<ScheduledTask {self.name or '?'} due={self.due} interval={self.interval} cancelled={self.cancelled}>"


class Scheduler:
    def __init__(self, start: float = 0.0):
        self.now = float(start)
        self._heap: List[tuple] = []
        self._seq = itertools.count()

    def _push(self, task: ScheduledTask) -> ScheduledTask:
        heapq.heappush(self._heap, (task.due, next(self._seq), task))
        return task

    def call_later(self, delay: float, callback: Callback, *, name: str = "") -> ScheduledTask:
        if delay < 0:
            raise ValueError("delay must not be negative")
        return self._push(ScheduledTask(self.now + delay, callback, name=name))

    def call_every(self, interval: float, callback: Callback, *, first_delay: Optional[float] = None, name: str = "") -> ScheduledTask:
        if interval <= 0:
            raise ValueError("interval must be positive")
        delay = interval if first_delay is None else first_delay
        return self._push(ScheduledTask(self.now + delay, callback, interval=interval, name=name))

    def pending(self) -> int:
        return sum(1 for _, _, task in self._heap if not task.cancelled)

    def next_due(self) -> Optional[float]:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)
        return self._heap[0][0] if self._heap else None

    def advance(self, dt: float) -> int:
        """Move the clock forward by ``dt`` firing every task that falls due.

        Tasks scheduled by callbacks are honoured within the same window.
        Returns the number of callbacks fired.
        """
        if dt < 0:
            raise ValueError("cannot move the clock backwards")
        target = self.now + dt
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, task = heapq.heappop(self._heap)
            if task.cancelled:
                continue
            self.now = max(self.now, due)
            task.fired += 1
            fired += 1
            if task.periodic:
                task.due = due + task.interval
                self._push(task)
            task.callback()
        self.now = target
        return fired


class TaskGroup:
    """Tasks that live and die together (one round's timers)."""

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self._tasks: List[ScheduledTask] = []

    def call_later(self, delay: float, callback: Callback, *, name: str = "") -> ScheduledTask:
        task = self.scheduler.call_later(delay, callback, name=name)
        self._tasks.append(task)
        return task

    def call_every(self, interval: float, callback: Callback, *, first_delay: Optional[float] = None, name: str = "") -> ScheduledTask:
        task = self.scheduler.call_every(interval, callback, first_delay=first_delay, name=name)
        self._tasks.append(task)
        return task

    def cancel_all(self) -> int:
        count = 0
        for task in self._tasks:
            if task.active:
                count += 1
            task.cancel()
        self._tasks.clear()
        return count


__all__ = ["ScheduledTask", "Scheduler", "TaskGroup"]
