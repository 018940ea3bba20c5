# cyclewatch/ui/reporting.py
# Report rendering for finished sessions: time formatting, summaries & session tables

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.session import lap_statistics
from ..core.types import TrainingMode, TrainingSession
from ..cw_io.console import console
from .theming import CycleColors, success_gradient


# * MM:SS clock display (minutes keep growing past 59)
def format_clock(seconds: float) -> str:
    seconds = max(0.0, seconds)
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins:02d}:{secs:02d}"


# * Clock display for a countdown: partial seconds round up so 0.2s left shows 00:01
def format_countdown(seconds: float) -> str:
    return format_clock(math.ceil(max(0.0, seconds) - 1e-9))


# * "Xm Ys" summary duration
def format_minutes(seconds: float) -> str:
    seconds = max(0.0, seconds)
    return f"{int(seconds // 60)}m {int(seconds % 60)}s"


def format_timestamp(epoch: float) -> str:
    return datetime.fromtimestamp(epoch).strftime("%Y-%m-%d %H:%M:%S")


def _mode_label(mode: TrainingMode) -> str:
    return "Timed cycles" if mode is TrainingMode.AUTOMATIC else "Manual cycles"


def _summary_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
    table.add_column(style="dim")
    table.add_column(style="bold")
    return table


# * Lap table w/ one row per sealed cycle
def render_lap_table(session: TrainingSession) -> Table:
    table = Table(
        title="Laps",
        title_justify="left",
        border_style=CycleColors.ACCENT_DEEP,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Lap", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Start")
    table.add_column("End")
    for cycle in session.cycles:
        table.add_row(
            str(cycle.cycle_number),
            f"{cycle.duration:.1f}s" if cycle.duration is not None else "-",
            format_timestamp(cycle.start_time),
            format_timestamp(cycle.end_time) if cycle.end_time is not None else "-",
        )
    return table


# * Full results view for one session
def render_session(session: TrainingSession) -> RenderableType:
    summary = _summary_table()
    summary.add_row("Session", session.id)
    summary.add_row("Mode", _mode_label(session.mode))
    summary.add_row("Started", format_timestamp(session.start_time))

    parts: list[RenderableType] = [success_gradient("Training Complete!"), summary]

    if session.mode is TrainingMode.AUTOMATIC:
        summary.add_row("Total rounds", str(session.total_rounds))
        if session.config is not None:
            summary.add_row("Cycle duration", format_minutes(session.config.cycle_duration))
        summary.add_row("Total time", format_minutes(session.total_duration))
    else:
        stats = lap_statistics(session)
        summary.add_row("Total cycles", str(stats.count))
        summary.add_row("Total time", format_minutes(session.total_duration))
        summary.add_row("Average", f"{stats.average:.1f}s")
        summary.add_row("Fastest", f"{stats.fastest:.1f}s")
        summary.add_row("Slowest", f"{stats.slowest:.1f}s")
        if session.cycles:
            parts.append(render_lap_table(session))

    return Panel(
        Group(*parts),
        border_style=CycleColors.ACCENT_SECONDARY,
        padding=(0, 1),
    )


# * Table of stored sessions, oldest first
def render_session_list(sessions: Iterable[TrainingSession]) -> RenderableType:
    sessions = list(sessions)
    if not sessions:
        return Text("No saved sessions", style="dim")
    table = Table(border_style=CycleColors.ACCENT_DEEP, header_style="bold")
    table.add_column("ID")
    table.add_column("Mode")
    table.add_column("Started")
    table.add_column("Rounds", justify="right")
    table.add_column("Total", justify="right")
    for session in sessions:
        table.add_row(
            session.id,
            _mode_label(session.mode),
            format_timestamp(session.start_time),
            str(session.total_rounds),
            format_minutes(session.total_duration),
        )
    return table


def print_session(session: TrainingSession) -> None:
    console.print(render_session(session))
