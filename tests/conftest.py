# tests/conftest.py
# Pytest configuration w/ isolation fixtures & deterministic clock/key doubles

import json
from pathlib import Path

import pytest


# * Manually advanced clock; every timing test drives time explicitly
# wall & monotonic readings advance together unless the wall clock is stepped
class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.t = start
        self.mono = start

    def now(self) -> float:
        return self.t

    def monotonic(self) -> float:
        return self.mono

    def advance(self, seconds: float) -> None:
        self.t += seconds
        self.mono += seconds

    # move only the wall clock, as an NTP correction would
    def step_wall(self, seconds: float) -> None:
        self.t += seconds


# * Key source replaying a script; each poll() hands out the next batch
class ScriptedKeys:
    def __init__(self, batches=None):
        self.batches = [list(b) for b in (batches or [])]
        self.closed = False

    def poll(self):
        if not self.batches:
            return []
        return self.batches.pop(0)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    # Patch Path.home() to isolated temp directory
    fake_home = tmp_path / "fake_home"
    fake_home.mkdir()
    cw_dir = fake_home / ".cyclewatch"
    cw_dir.mkdir()

    # Create minimal config.json w/ test defaults
    config_data = {
        "cycle_duration": 60,
        "rest_time": 30,
        "number_of_cycles": "unlimited",
        "buffer_time": 5,
        "poll_interval": 0.1,
        "partial_cycle_policy": "nominal",
        "sessions_filename": "sessions.json",
        "dev_mode": False,
    }
    with open(cw_dir / "config.json", "w") as f:
        json.dump(config_data, f, indent=2)

    monkeypatch.setattr(Path, "home", lambda: fake_home)
    monkeypatch.delenv("CYCLEWATCH_HOME", raising=False)

    # ! reset global settings_manager state & patch its config_path to use isolated location
    from cyclewatch.config.settings import settings_manager

    settings_manager._settings = None
    settings_manager.config_path = cw_dir / "config.json"

    # ! reset output manager to NullOutputManager for test isolation
    from cyclewatch.core.output import reset_output_manager

    reset_output_manager()

    return fake_home


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scripted_keys():
    return ScriptedKeys


@pytest.fixture
def sessions_path(isolate_config):
    return isolate_config / ".cyclewatch" / "sessions.json"
