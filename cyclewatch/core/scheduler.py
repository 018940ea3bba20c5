# cyclewatch/core/scheduler.py
# Cooperative scheduling of repeating tasks driven from a single loop thread
#
# * Tasks never run on their own thread: the owning loop calls run_due()
# * A RepeatingTask handle is owned by whoever scheduled it & cancelled deterministically

from __future__ import annotations

from typing import Callable

from .clock import Clock, system_clock
from .verbose import vlog


# * Handle for a periodic callback; cancel() is idempotent
class RepeatingTask:
    def __init__(
        self, name: str, interval: float, callback: Callable[[], None], next_due: float
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.name = name
        self.interval = interval
        self.callback = callback
        self.next_due = next_due
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> None:
        if not self._cancelled:
            self._cancelled = True
            vlog("SCHED", f"Cancelled task '{self.name}'")

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"RepeatingTask({self.name!r}, interval={self.interval}, {state})"


# * Owns repeating tasks & fires the ones that are due
class Scheduler:
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or system_clock
        self._tasks: list[RepeatingTask] = []

    @property
    def tasks(self) -> list[RepeatingTask]:
        return [t for t in self._tasks if t.active]

    # schedule callback every interval seconds; first run after one interval unless immediate
    def schedule_repeating(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = "task",
        immediate: bool = False,
    ) -> RepeatingTask:
        now = self._clock.monotonic()
        task = RepeatingTask(name, interval, callback, now if immediate else now + interval)
        self._tasks.append(task)
        vlog("SCHED", f"Scheduled task '{name}' every {interval:g}s")
        return task

    # * Fire every due task once; returns number of callbacks run
    def run_due(self) -> int:
        now = self._clock.monotonic()
        fired = 0
        for task in list(self._tasks):
            if not task.active or task.next_due > now:
                continue
            # missed intervals are skipped, not replayed
            while task.next_due <= now:
                task.next_due += task.interval
            task.callback()
            fired += 1
        self._tasks = [t for t in self._tasks if t.active]
        return fired

    # seconds until the earliest active task is due (None when idle)
    def time_until_next(self) -> float | None:
        active = self.tasks
        if not active:
            return None
        return max(0.0, min(t.next_due for t in active) - self._clock.monotonic())

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []
