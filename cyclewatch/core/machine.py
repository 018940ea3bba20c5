# cyclewatch/core/machine.py
# Cycle state machine: one shared mechanism w/ automatic (countdown) & manual (lap) policies
#
# * All mutation happens synchronously inside tick() or an action method
# * Requests that are invalid for the current phase are ignored, never raised
# * Once FINISHED the machine is inert

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from .clock import Clock, system_clock
from .pausable_timer import PausableTimer
from .scheduler import RepeatingTask, Scheduler
from .session import new_session_id
from .types import (
    Action,
    CycleRecord,
    ManualControls,
    PartialCyclePolicy,
    Phase,
    TrainingConfig,
    TrainingMode,
    TrainingSession,
)
from .verbose import dlog_ignored, vlog_action, vlog_phase, vlog_session

PhaseListener = Callable[[Phase, Phase, int], None]
FinishListener = Callable[[TrainingSession], None]

# default poll cadence in seconds
DEFAULT_POLL_INTERVAL = 0.1


# * Shared mechanism: phase, round counter, record list, clock & poll ownership
class CycleMachine:
    mode: TrainingMode

    def __init__(
        self,
        clock: Clock | None = None,
        session_id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._clock = clock or system_clock
        self._timer = PausableTimer(self._clock)
        self._session_id_factory = session_id_factory or (
            lambda: new_session_id(self._clock)
        )
        self._phase = Phase.IDLE
        self._round = 0
        self._records: list[CycleRecord] = []
        self._run_start: float | None = None
        self._run_end: float | None = None
        self._cancelled = False
        self._session: TrainingSession | None = None
        self._poll_task: RepeatingTask | None = None
        self._phase_listeners: list[PhaseListener] = []
        self._finish_listeners: list[FinishListener] = []

    # read-only state

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current_round(self) -> int:
        return self._round

    @property
    def records(self) -> tuple[CycleRecord, ...]:
        return tuple(replace(r) for r in self._records)

    @property
    def finished(self) -> bool:
        return self._phase is Phase.FINISHED

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def paused(self) -> bool:
        return self._timer.paused

    @property
    def session(self) -> TrainingSession | None:
        return self._session

    @property
    def run_start(self) -> float | None:
        return self._run_start

    @property
    def poll_task(self) -> RepeatingTask | None:
        return self._poll_task

    # elapsed active time of the current phase or lap
    def elapsed(self) -> float:
        return self._timer.elapsed()

    # wall time since the run's true start, pauses included
    def total_elapsed(self) -> float:
        if self._run_start is None:
            return 0.0
        end = self._run_end if self._run_end is not None else self._clock.now()
        return max(0.0, end - self._run_start)

    # listeners

    def on_phase_change(self, listener: PhaseListener) -> None:
        self._phase_listeners.append(listener)

    def on_finish(self, listener: FinishListener) -> None:
        self._finish_listeners.append(listener)

    # polling

    # * Schedule tick() on scheduler; the handle is cancelled when the run finishes
    def attach_poll(
        self, scheduler: Scheduler, interval: float = DEFAULT_POLL_INTERVAL
    ) -> RepeatingTask | None:
        if self.finished:
            return None
        self.detach_poll()
        self._poll_task = scheduler.schedule_repeating(
            interval, self.tick, name=f"{self.mode.value}-poll"
        )
        return self._poll_task

    def detach_poll(self) -> None:
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    # policy hooks

    def tick(self) -> None:
        pass

    def start(self) -> None:
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def resume(self) -> None:
        raise NotImplementedError

    def actions(self) -> frozenset[Action]:
        raise NotImplementedError

    def _seal_for_finish(self, now: float) -> None:
        raise NotImplementedError

    def _total_rounds(self) -> int:
        raise NotImplementedError

    def _config(self) -> TrainingConfig | None:
        return None

    # termination

    # * Finish the run early; returns the session (None if not active)
    def finish(self) -> TrainingSession | None:
        if not self._phase.active:
            dlog_ignored("finish", self._phase)
            return None
        vlog_action("finish", self._phase)
        self._before_finish()
        if not self._phase.active:
            # catching up completed the run on schedule
            return self._session
        now = self._clock.now()
        self._seal_for_finish(now)
        self._complete(now)
        return self._session

    # * Abort the run; in-flight records are sealed but no session is produced
    def cancel(self) -> None:
        if self.finished:
            dlog_ignored("cancel", self._phase)
            return
        vlog_action("cancel", self._phase)
        now = self._clock.now()
        if self._phase.active:
            self._seal_for_finish(now)
        self._complete(now, cancelled=True)

    def _before_finish(self) -> None:
        pass

    # shared helpers

    def _open_record(self, round_number: int, start_time: float) -> CycleRecord:
        self._round = round_number
        record = CycleRecord(cycle_number=round_number, start_time=start_time)
        self._records.append(record)
        return record

    def _open_record_or_none(self) -> CycleRecord | None:
        if self._records and not self._records[-1].sealed:
            return self._records[-1]
        return None

    def _set_phase(self, new: Phase) -> None:
        old = self._phase
        self._phase = new
        vlog_phase(old, new, self._round)
        for listener in list(self._phase_listeners):
            listener(old, new, self._round)

    def _complete(self, end_time: float, cancelled: bool = False) -> None:
        self._run_end = end_time
        self._cancelled = cancelled
        self.detach_poll()
        self._timer.reset()
        if not cancelled and self._run_start is not None:
            self._session = TrainingSession(
                id=self._session_id_factory(),
                mode=self.mode,
                start_time=self._run_start,
                end_time=end_time,
                total_duration=max(0.0, end_time - self._run_start),
                total_rounds=self._total_rounds(),
                cycles=tuple(self._records),
                config=self._config(),
            )
        self._set_phase(Phase.FINISHED)
        if self._session is not None:
            vlog_session(self._session)
            for listener in list(self._finish_listeners):
                listener(self._session)


# * Automatic mode: optional buffer, then cycle/rest countdowns until the round count is spent
class AutomaticCycleMachine(CycleMachine):
    mode = TrainingMode.AUTOMATIC

    def __init__(
        self,
        config: TrainingConfig,
        clock: Clock | None = None,
        partial_cycle_policy: PartialCyclePolicy = PartialCyclePolicy.NOMINAL,
        session_id_factory: Callable[[], str] | None = None,
    ) -> None:
        super().__init__(clock, session_id_factory)
        self.config = config
        self.partial_cycle_policy = partial_cycle_policy
        self._countdown = 0.0

    @property
    def countdown_length(self) -> float:
        return self._countdown

    # seconds left in the current buffer/cycle/rest countdown
    def remaining(self) -> float:
        if not self._phase.active:
            return 0.0
        return max(0.0, self._countdown - self._timer.elapsed())

    def actions(self) -> frozenset[Action]:
        if self._phase is Phase.IDLE:
            return frozenset({Action.START, Action.CANCEL})
        if self.finished:
            return frozenset()
        toggle = Action.RESUME if self.paused else Action.PAUSE
        return frozenset({toggle, Action.FINISH, Action.CANCEL})

    def start(self) -> None:
        if self._phase is not Phase.IDLE:
            dlog_ignored("start", self._phase)
            return
        vlog_action("start", self._phase)
        now = self._clock.now()
        self._run_start = now
        if self.config.buffer_time > 0:
            self._enter_countdown(Phase.BUFFER, self.config.buffer_time)
        else:
            self._begin_cycle(1, now)

    def pause(self) -> None:
        if not self._phase.active or self.paused:
            dlog_ignored("pause", self._phase)
            return
        vlog_action("pause", self._phase)
        self._timer.pause()

    def resume(self) -> None:
        if not self._phase.active or not self.paused:
            dlog_ignored("resume", self._phase)
            return
        vlog_action("resume", self._phase)
        self._timer.resume()

    # * Fire every transition whose countdown has run out; no-op while paused
    def tick(self) -> None:
        while self._phase.active and not self.paused:
            overshoot = self._timer.elapsed() - self._countdown
            if overshoot < 0:
                break
            # the boundary is when the countdown hit zero, not when we noticed
            boundary = self._clock.now() - overshoot
            self._expire(boundary, overshoot)

    def _before_finish(self) -> None:
        self.tick()

    def _expire(self, boundary: float, overshoot: float) -> None:
        if self._phase is Phase.BUFFER:
            self._begin_cycle(1, boundary, overshoot)
        elif self._phase is Phase.CYCLE:
            record = self._open_record_or_none()
            if record is not None:
                record.seal(boundary, self.config.cycle_duration)
            next_round = self._round + 1
            if not self.config.permits_round(next_round):
                self._complete(boundary)
            elif self.config.rest_time > 0:
                self._enter_countdown(Phase.REST, self.config.rest_time, overshoot)
            else:
                self._begin_cycle(next_round, boundary, overshoot)
        elif self._phase is Phase.REST:
            next_round = self._round + 1
            if self.config.permits_round(next_round):
                self._begin_cycle(next_round, boundary, overshoot)
            else:
                self._complete(boundary)

    def _begin_cycle(
        self, round_number: int, start_time: float, overshoot: float = 0.0
    ) -> None:
        self._open_record(round_number, start_time)
        self._enter_countdown(Phase.CYCLE, self.config.cycle_duration, overshoot)

    def _enter_countdown(
        self, phase: Phase, length: float, overshoot: float = 0.0
    ) -> None:
        self._countdown = length
        self._timer.restart(offset=overshoot)
        self._set_phase(phase)

    def _seal_for_finish(self, now: float) -> None:
        record = self._open_record_or_none()
        if record is None:
            return
        if self.partial_cycle_policy is PartialCyclePolicy.NOMINAL:
            record.seal(now, self.config.cycle_duration)
        else:
            record.seal(now, min(self._timer.elapsed(), self.config.cycle_duration))

    def _total_rounds(self) -> int:
        return self._round

    def _config(self) -> TrainingConfig | None:
        return self.config


# * Manual mode: user-driven lap boundaries w/ stop/resume
class ManualCycleMachine(CycleMachine):
    mode = TrainingMode.MANUAL

    @property
    def stopped(self) -> bool:
        return self._phase is Phase.STOPPED

    # * Visible & enabled controls; end round stays visible but disabled while stopped
    def controls(self) -> ManualControls:
        if self._phase is Phase.IDLE:
            return ManualControls(show_start=True)
        if self._phase is Phase.STOPPED:
            return ManualControls(
                show_end_round=True,
                show_resume=True,
                show_finish=True,
                end_round_disabled=True,
            )
        if self._phase is Phase.RUNNING:
            return ManualControls(show_end_round=True, show_stop=True)
        return ManualControls()

    def actions(self) -> frozenset[Action]:
        if self._phase is Phase.IDLE:
            return frozenset({Action.START, Action.CANCEL})
        if self._phase is Phase.RUNNING:
            return frozenset({Action.END_ROUND, Action.STOP, Action.FINISH, Action.CANCEL})
        if self._phase is Phase.STOPPED:
            return frozenset({Action.RESUME, Action.FINISH, Action.CANCEL})
        return frozenset()

    def start(self) -> None:
        if self._phase is not Phase.IDLE:
            dlog_ignored("start", self._phase)
            return
        vlog_action("start", self._phase)
        now = self._clock.now()
        self._run_start = now
        self._timer.start()
        self._open_record(1, now)
        self._set_phase(Phase.RUNNING)

    # * Close the current lap & begin the next one from zero
    def end_round(self) -> None:
        if self._phase is not Phase.RUNNING:
            dlog_ignored("end_round", self._phase)
            return
        vlog_action("end_round", self._phase)
        now = self._clock.now()
        record = self._open_record_or_none()
        if record is not None:
            record.seal(now, self._timer.elapsed())
        self._timer.restart()
        self._open_record(self._round + 1, now)
        self._set_phase(Phase.RUNNING)

    def stop(self) -> None:
        if self._phase is not Phase.RUNNING:
            dlog_ignored("stop", self._phase)
            return
        vlog_action("stop", self._phase)
        self._timer.pause()
        self._set_phase(Phase.STOPPED)

    def resume(self) -> None:
        if self._phase is not Phase.STOPPED:
            dlog_ignored("resume", self._phase)
            return
        vlog_action("resume", self._phase)
        self._timer.resume()
        self._set_phase(Phase.RUNNING)

    # stopping is how a manual run pauses
    def pause(self) -> None:
        self.stop()

    def _seal_for_finish(self, now: float) -> None:
        record = self._open_record_or_none()
        if record is None:
            return
        if self._phase is Phase.RUNNING:
            record.seal(now, self._timer.elapsed())
        else:
            # a lap left open while stopped is not committed
            self._records.remove(record)

    def _total_rounds(self) -> int:
        return sum(1 for r in self._records if r.sealed)
