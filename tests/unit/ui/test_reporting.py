# tests/unit/ui/test_reporting.py
# Unit tests for time formatting & session report rendering

import pytest
from rich.console import Console

from cyclewatch.core.types import CycleRecord, TrainingConfig, TrainingMode, TrainingSession
from cyclewatch.ui.reporting import (
    format_clock,
    format_countdown,
    format_minutes,
    render_session,
    render_session_list,
)


def render_text(renderable) -> str:
    console = Console(record=True, width=120)
    console.print(renderable)
    return console.export_text()


def make_session(mode, durations, config=None):
    cycles = []
    t = 1_700_000_000.0
    for i, d in enumerate(durations, start=1):
        record = CycleRecord(cycle_number=i, start_time=t)
        record.seal(t + d)
        cycles.append(record)
        t += d
    return TrainingSession(
        id="session-42",
        mode=mode,
        start_time=1_700_000_000.0,
        end_time=t,
        total_duration=t - 1_700_000_000.0,
        total_rounds=len(cycles),
        cycles=tuple(cycles),
        config=config,
    )


class TestFormatting:

    # * Verify MM:SS display
    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "00:00"), (59.9, "00:59"), (61, "01:01"), (3600, "60:00"), (-3, "00:00")],
    )
    def test_format_clock(self, seconds, expected):
        assert format_clock(seconds) == expected

    # * Verify countdowns round partial seconds up
    @pytest.mark.parametrize(
        "seconds,expected", [(0.2, "00:01"), (5.0, "00:05"), (4.01, "00:05"), (0, "00:00")]
    )
    def test_format_countdown(self, seconds, expected):
        assert format_countdown(seconds) == expected

    # * Verify summary durations
    def test_format_minutes(self):
        assert format_minutes(125) == "2m 5s"
        assert format_minutes(0) == "0m 0s"


class TestRenderSession:

    # * Verify automatic summary shows rounds & cycle duration
    def test_automatic(self):
        config = TrainingConfig(cycle_duration=90, rest_time=30, number_of_cycles=2)
        text = render_text(render_session(make_session(TrainingMode.AUTOMATIC, [90, 90], config)))
        assert "Training Complete!" in text
        assert "Total rounds" in text
        assert "1m 30s" in text
        assert "Fastest" not in text

    # * Verify manual summary shows lap statistics & the lap table
    def test_manual(self):
        text = render_text(render_session(make_session(TrainingMode.MANUAL, [12, 10, 5])))
        assert "Average" in text and "9.0s" in text
        assert "Fastest" in text and "5.0s" in text
        assert "Slowest" in text and "12.0s" in text
        assert "Laps" in text

    # * Verify a manual session w/o laps still renders
    def test_manual_empty(self):
        text = render_text(render_session(make_session(TrainingMode.MANUAL, [])))
        assert "0.0s" in text


class TestRenderSessionList:

    # * Verify empty list message
    def test_empty(self):
        assert "No saved sessions" in render_text(render_session_list([]))

    # * Verify one row per session
    def test_rows(self):
        sessions = [make_session(TrainingMode.MANUAL, [5]), make_session(TrainingMode.AUTOMATIC, [10])]
        text = render_text(render_session_list(sessions))
        assert text.count("session-42") == 2
        assert "Manual cycles" in text and "Timed cycles" in text
