# tests/unit/cli/test_keys.py
# Unit tests for key -> action mapping & the background key reader

import time

import readchar
from readchar import key

from cyclewatch.cli import keys as keys_module
from cyclewatch.cli.keys import ReadcharKeySource, resolve_action
from cyclewatch.core.machine import AutomaticCycleMachine, ManualCycleMachine
from cyclewatch.core.types import Action, TrainingConfig


class TestResolveAction:

    # * Verify fixed bindings
    def test_bindings(self, clock):
        machine = ManualCycleMachine(clock=clock)
        assert resolve_action(machine, "s") is Action.START
        assert resolve_action(machine, "\r") is Action.END_ROUND
        assert resolve_action(machine, "N") is Action.END_ROUND
        assert resolve_action(machine, "f") is Action.FINISH
        assert resolve_action(machine, "q") is Action.CANCEL
        assert resolve_action(machine, key.ESC) is Action.CANCEL
        assert resolve_action(machine, "x") is None

    # * Verify the toggle follows the machine state
    def test_toggle_manual(self, clock):
        machine = ManualCycleMachine(clock=clock)
        assert resolve_action(machine, " ") is Action.START
        machine.start()
        assert resolve_action(machine, " ") is Action.STOP
        machine.stop()
        assert resolve_action(machine, " ") is Action.RESUME
        machine.finish()
        assert resolve_action(machine, " ") is None

    # * Verify the toggle pauses & resumes timed cycles
    def test_toggle_automatic(self, clock):
        machine = AutomaticCycleMachine(TrainingConfig(cycle_duration=10.0), clock=clock)
        machine.start()
        assert resolve_action(machine, "p") is Action.PAUSE
        machine.pause()
        assert resolve_action(machine, "p") is Action.RESUME


class TestReadcharKeySource:

    # * Verify keys read on the thread arrive through poll()
    def test_reader_thread(self, monkeypatch):
        pending = ["a", "b"]
        monkeypatch.setattr(readchar, "readkey", lambda: pending.pop(0))
        monkeypatch.setattr(keys_module, "_enter_cbreak", lambda: None)
        source = ReadcharKeySource(ready=lambda timeout: bool(pending), wait_interval=0.01)
        received = []
        deadline = time.monotonic() + 2
        while len(received) < 2 and time.monotonic() < deadline:
            received.extend(source.poll())
            time.sleep(0.01)
        source.close()
        assert received == ["a", "b"]

    # * Verify close() stops the reader & restores the saved terminal mode
    def test_close_restores_terminal(self, monkeypatch):
        restored = []
        monkeypatch.setattr(keys_module, "_enter_cbreak", lambda: (0, ["saved"]))
        monkeypatch.setattr(keys_module, "_restore_mode", restored.append)

        def idle(timeout):
            time.sleep(timeout)
            return False

        source = ReadcharKeySource(ready=idle, wait_interval=0.01)
        assert source.reading
        source.close()
        assert not source.reading
        assert restored == [(0, ["saved"])]
        source.close()
        assert restored == [(0, ["saved"])]

    # * Verify Ctrl+C raised inside readkey is queued as a key
    def test_interrupt_becomes_ctrl_c(self, monkeypatch):
        calls = []

        def interrupted():
            calls.append(1)
            raise KeyboardInterrupt

        monkeypatch.setattr(readchar, "readkey", interrupted)
        monkeypatch.setattr(keys_module, "_enter_cbreak", lambda: None)
        source = ReadcharKeySource(ready=lambda timeout: not calls, wait_interval=0.01)
        received = []
        deadline = time.monotonic() + 2
        while not received and time.monotonic() < deadline:
            received.extend(source.poll())
            time.sleep(0.01)
        source.close()
        assert received == [key.CTRL_C]
