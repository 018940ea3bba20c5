# cyclewatch/core/pausable_timer.py
# Pausable elapsed-time accumulator used as the clock source for every training run

from __future__ import annotations

from dataclasses import dataclass

from .clock import Clock, system_clock


# * Immutable snapshot of the accumulator's internal fields
@dataclass(frozen=True)
class ElapsedTimeState:
    start_epoch: float | None = None
    accumulated_before_pause: float = 0.0
    running: bool = False
    paused: bool = False


# pausable timer; elapsed is derived from monotonic clock differences, never from tick counts
class PausableTimer:
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or system_clock
        self._start_epoch: float | None = None
        self._accumulated: float = 0.0
        self._running = False
        self._paused = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> ElapsedTimeState:
        return ElapsedTimeState(
            start_epoch=self._start_epoch,
            accumulated_before_pause=self._accumulated,
            running=self._running,
            paused=self._paused,
        )

    # start timer if not already running; the accumulated base is kept
    def start(self) -> None:
        if self._running:
            return
        self._start_epoch = self._clock.monotonic()
        self._running = True
        self._paused = False

    # fold the running span into the base & freeze
    def pause(self) -> None:
        if not self._running or self._paused:
            return
        assert self._start_epoch is not None
        self._accumulated += self._clock.monotonic() - self._start_epoch
        self._start_epoch = None
        self._paused = True

    # continue from the frozen value
    def resume(self) -> None:
        if not self._running or not self._paused:
            return
        self._start_epoch = self._clock.monotonic()
        self._paused = False

    def reset(self) -> None:
        self._start_epoch = None
        self._accumulated = 0.0
        self._running = False
        self._paused = False

    # reset & start in one step so no reader ever observes a stopped timer;
    # offset seeds the base w/ time that already elapsed (e.g. a countdown overshoot)
    def restart(self, offset: float = 0.0) -> None:
        now = self._clock.monotonic()
        self._accumulated = max(0.0, offset)
        self._start_epoch = now
        self._running = True
        self._paused = False

    # get elapsed time in seconds (excluding paused time); pure read
    def elapsed(self) -> float:
        if self._start_epoch is None:
            return self._accumulated
        return self._accumulated + max(0.0, self._clock.monotonic() - self._start_epoch)
