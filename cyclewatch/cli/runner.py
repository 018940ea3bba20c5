# cyclewatch/cli/runner.py
# Cooperative loop that drives one training run: poll ticks, key actions, live display & persistence
#
# * Single loop thread: scheduler ticks & key actions are applied one at a time, never interleaved
# * The machine's poll task is cancelled when the run finishes or the loop is torn down

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from rich.live import Live

from ..core.clock import Clock, system_clock
from ..core.exceptions import SessionStoreError
from ..core.machine import DEFAULT_POLL_INTERVAL, CycleMachine, ManualCycleMachine
from ..core.output import get_output_manager
from ..core.scheduler import Scheduler
from ..core.types import Action, TrainingSession
from ..core.verbose import dlog
from ..cw_io.console import get_console
from ..cw_io.session_store import SessionStore
from ..ui.training_view import render_training
from .keys import KeySource, resolve_action


# * Result of a run: the session (None if cancelled) & whether it reached the store
@dataclass
class RunOutcome:
    session: TrainingSession | None
    cancelled: bool = False
    saved: bool = False
    store_error: SessionStoreError | None = None


class TrainingRunner:
    def __init__(
        self,
        machine: CycleMachine,
        keys: KeySource,
        store: SessionStore | None = None,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        live: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.machine = machine
        self.keys = keys
        self.store = store
        self.clock = clock or system_clock
        self.scheduler = scheduler or Scheduler(self.clock)
        self.poll_interval = poll_interval
        self.live = live
        self._sleep = sleep

    # * Apply one user action to the machine
    def apply(self, action: Action) -> None:
        machine = self.machine
        if action is Action.START:
            machine.start()
        elif action is Action.PAUSE:
            machine.pause()
        elif action is Action.RESUME:
            machine.resume()
        elif action is Action.FINISH:
            machine.finish()
        elif action is Action.CANCEL:
            machine.cancel()
        elif isinstance(machine, ManualCycleMachine):
            if action is Action.END_ROUND:
                machine.end_round()
            elif action is Action.STOP:
                machine.stop()
        else:
            dlog(f"No {action.value} in {machine.mode.value}", "ACTION")

    def handle_key(self, k: str) -> None:
        action = resolve_action(self.machine, k)
        if action is None:
            dlog(f"Unbound key {k!r}", "KEY")
            return
        self.apply(action)

    # * One loop iteration: due ticks first, then queued keys in arrival order
    def step(self) -> None:
        self.scheduler.run_due()
        for k in self.keys.poll():
            if self.machine.finished:
                break
            self.handle_key(k)

    def _wait(self) -> None:
        pending = self.scheduler.time_until_next()
        self._sleep(self.poll_interval if pending is None else min(pending, self.poll_interval))

    def _loop(self, refresh: Callable[[], None] | None = None) -> None:
        while not self.machine.finished:
            self.step()
            if refresh is not None:
                refresh()
            if not self.machine.finished:
                self._wait()

    # * Drive the machine until it finishes, then persist the session
    def run(self, autostart: bool = False) -> RunOutcome:
        get_output_manager().open_log()
        self.machine.attach_poll(self.scheduler, self.poll_interval)
        if autostart:
            self.machine.start()
        try:
            if self.live:
                with Live(
                    render_training(self.machine),
                    console=get_console(),
                    refresh_per_second=10,
                ) as live:
                    self._loop(lambda: live.update(render_training(self.machine)))
            else:
                self._loop()
        except KeyboardInterrupt:
            self.machine.cancel()
        finally:
            self.machine.detach_poll()
            self.keys.close()

        session = self.machine.session
        outcome = RunOutcome(session=session, cancelled=self.machine.cancelled)
        if session is not None and self.store is not None:
            try:
                self.store.append(session)
                outcome.saved = True
            except SessionStoreError as e:
                # the session stays in memory for the caller to retry or show
                outcome.store_error = e
                get_output_manager().warning(f"Session not saved: {e}")
        get_output_manager().close_log()
        return outcome
