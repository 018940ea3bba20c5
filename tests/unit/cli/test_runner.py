# tests/unit/cli/test_runner.py
# Unit tests for the training run loop driven by a fake clock & scripted keys

import pytest

from cyclewatch.cli.runner import TrainingRunner
from cyclewatch.core.exceptions import SessionWriteError
from cyclewatch.core.machine import AutomaticCycleMachine, ManualCycleMachine
from cyclewatch.core.scheduler import Scheduler
from cyclewatch.core.types import Action, Phase, TrainingConfig
from cyclewatch.cw_io.session_store import InMemorySessionStore


def make_runner(machine, keys, clock, store=None):
    return TrainingRunner(
        machine,
        keys,
        store=store if store is not None else InMemorySessionStore(),
        clock=clock,
        scheduler=Scheduler(clock),
        poll_interval=0.1,
        live=False,
        sleep=clock.advance,
    )


class TestManualRuns:

    # * Verify keys drive a manual run to a saved session
    def test_laps_and_finish(self, clock, scripted_keys):
        machine = ManualCycleMachine(clock=clock)
        keys = scripted_keys([["s"], [], ["\r"], ["f"]])
        store = InMemorySessionStore()
        outcome = make_runner(machine, keys, clock, store).run()

        assert outcome.saved
        assert outcome.cancelled is False
        assert outcome.session.total_rounds == 2
        assert [c.duration for c in outcome.session.cycles] == pytest.approx([0.2, 0.1], abs=1e-3)
        assert store.list_all() == [outcome.session]
        assert keys.closed

    # * Verify the toggle key stops & resumes a lap
    def test_toggle(self, clock, scripted_keys):
        machine = ManualCycleMachine(clock=clock)
        runner = make_runner(machine, scripted_keys(), clock)
        machine.start()
        runner.handle_key(" ")
        assert machine.phase is Phase.STOPPED
        runner.handle_key(" ")
        assert machine.phase is Phase.RUNNING

    # * Verify keys after finish in the same batch are dropped
    def test_keys_after_finish_dropped(self, clock, scripted_keys):
        machine = ManualCycleMachine(clock=clock)
        outcome = make_runner(machine, scripted_keys([["s", "f", "s"]]), clock).run()
        assert machine.finished
        assert outcome.session is not None

    # * Verify cancel discards the run
    def test_cancel(self, clock, scripted_keys):
        machine = ManualCycleMachine(clock=clock)
        store = InMemorySessionStore()
        outcome = make_runner(machine, scripted_keys([["s"], ["q"]]), clock, store).run()
        assert outcome.cancelled
        assert outcome.session is None
        assert store.list_all() == []


class TestAutomaticRuns:

    # * Verify polling alone completes a timed run
    def test_runs_to_completion(self, clock, scripted_keys):
        config = TrainingConfig(cycle_duration=1.0, rest_time=0.5, number_of_cycles=2)
        machine = AutomaticCycleMachine(config, clock=clock)
        outcome = make_runner(machine, scripted_keys(), clock).run(autostart=True)

        assert outcome.session.total_rounds == 2
        assert outcome.session.total_duration == pytest.approx(2.5, abs=1e-3)
        assert machine.poll_task is None

    # * Verify pause from the toggle key holds the countdown
    def test_pause_key(self, clock, scripted_keys):
        config = TrainingConfig(cycle_duration=1.0, number_of_cycles=1)
        machine = AutomaticCycleMachine(config, clock=clock)
        runner = make_runner(machine, scripted_keys(), clock)
        machine.start()
        runner.handle_key("p")
        assert machine.paused
        clock.advance(5)
        machine.tick()
        assert machine.phase is Phase.CYCLE

    # * Verify END_ROUND is a no-op in automatic mode
    def test_end_round_ignored(self, clock, scripted_keys):
        machine = AutomaticCycleMachine(TrainingConfig(cycle_duration=5.0), clock=clock)
        runner = make_runner(machine, scripted_keys(), clock)
        machine.start()
        runner.apply(Action.END_ROUND)
        assert machine.current_round == 1
        assert machine.phase is Phase.CYCLE


class TestTeardown:

    # * Verify Ctrl+C during the loop cancels the run & closes keys
    def test_keyboard_interrupt(self, clock, scripted_keys):
        machine = ManualCycleMachine(clock=clock)
        keys = scripted_keys()

        def interrupt(_seconds):
            raise KeyboardInterrupt

        runner = TrainingRunner(
            machine, keys, clock=clock, scheduler=Scheduler(clock), live=False, sleep=interrupt
        )
        outcome = runner.run(autostart=True)
        assert outcome.cancelled
        assert keys.closed
        assert machine.poll_task is None

    # * Verify a store failure keeps the session & reports the error
    def test_store_failure(self, clock, scripted_keys):
        class FailingStore(InMemorySessionStore):
            def append(self, session):
                raise SessionWriteError("disk full")

        machine = ManualCycleMachine(clock=clock)
        outcome = make_runner(machine, scripted_keys([["f"]]), clock, FailingStore()).run(
            autostart=True
        )
        assert outcome.session is not None
        assert outcome.saved is False
        assert isinstance(outcome.store_error, SessionWriteError)
