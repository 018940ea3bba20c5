# cyclewatch/core/clock.py
# Clock abstraction shared by the accumulator, state machines & scheduler
#
# * now() is wall time for record & session timestamps
# * monotonic() is for measuring spans; it never steps backwards w/ the system clock

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> float: ...

    def monotonic(self) -> float: ...


# * Real clock backed by time.time() & time.monotonic()
class SystemClock:
    def now(self) -> float:
        return time.time()

    def monotonic(self) -> float:
        return time.monotonic()


# module-level default so callers don't each build their own
system_clock = SystemClock()
