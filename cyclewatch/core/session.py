# cyclewatch/core/session.py
# Session identifiers & lap statistics over finished sessions (pure - no I/O)

from __future__ import annotations

import random
import string
from dataclasses import dataclass

from .clock import Clock, system_clock
from .types import TrainingSession

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9

# last millisecond stamp handed out; ids stay unique even within one millisecond
_last_stamp_ms = 0


# * Generate a process-unique session id: session-<epoch ms>-<9 base36 chars>
def new_session_id(clock: Clock | None = None) -> str:
    global _last_stamp_ms
    stamp = int((clock or system_clock).now() * 1000)
    stamp = max(stamp, _last_stamp_ms + 1)
    _last_stamp_ms = stamp
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LENGTH))
    return f"session-{stamp}-{suffix}"


# * Summary statistics over a session's sealed cycle durations
@dataclass(frozen=True)
class LapStatistics:
    count: int = 0
    average: float = 0.0
    fastest: float = 0.0
    slowest: float = 0.0
    total: float = 0.0


def lap_statistics(session: TrainingSession) -> LapStatistics:
    durations = session.sealed_durations
    if not durations:
        return LapStatistics()
    total = sum(durations)
    return LapStatistics(
        count=len(durations),
        average=total / len(durations),
        fastest=min(durations),
        slowest=max(durations),
        total=total,
    )
