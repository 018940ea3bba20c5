# cyclewatch/ui/training_view.py
# Live training screen: phase label, round, timer, completed laps & key hints

from __future__ import annotations

from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from ..core.machine import AutomaticCycleMachine, CycleMachine, ManualCycleMachine
from ..core.types import Action, Phase
from .reporting import format_clock, format_countdown
from .theming import CycleColors, phase_color

# key hint shown for each available action, in display order
ACTION_HINTS: list[tuple[Action, str]] = [
    (Action.START, "[s] start"),
    (Action.END_ROUND, "[enter] end round"),
    (Action.STOP, "[space] stop"),
    (Action.PAUSE, "[space] pause"),
    (Action.RESUME, "[space] resume"),
    (Action.FINISH, "[f] finish"),
    (Action.CANCEL, "[q] cancel"),
]

# laps listed under the manual timer
MAX_LAPS_SHOWN = 8


# * Heading for the current phase
def phase_label(machine: CycleMachine) -> str:
    phase = machine.phase
    if isinstance(machine, ManualCycleMachine):
        if phase is Phase.IDLE:
            return "Ready to Start"
        if phase is Phase.FINISHED:
            return "Finished"
        label = f"Round {machine.current_round}"
        return f"{label} - Stopped" if phase is Phase.STOPPED else label

    labels = {
        Phase.BUFFER: "Starting in...",
        Phase.CYCLE: "Cycle",
        Phase.REST: "Rest",
        Phase.FINISHED: "Finished",
    }
    label = labels.get(phase, "Ready")
    if machine.paused and phase.active:
        label = f"{label} (paused)"
    return label


# * Timer text: countdown for automatic runs, lap time for manual runs
def timer_text(machine: CycleMachine) -> str:
    if isinstance(machine, AutomaticCycleMachine):
        return format_countdown(machine.remaining())
    return format_clock(machine.elapsed())


def key_hints(machine: CycleMachine) -> Text:
    available = machine.actions()
    text = Text(style="dim")
    if isinstance(machine, ManualCycleMachine) and machine.controls().end_round_disabled:
        text.append("end round", style="strike")
        text.append("   ")
    text.append("   ".join(hint for action, hint in ACTION_HINTS if action in available))
    return text


def _lap_lines(machine: ManualCycleMachine) -> RenderableType:
    sealed = [r for r in machine.records if r.sealed]
    if not sealed:
        return Text("")
    lines = Text(f"Laps - {len(sealed)}\n", style="bold")
    for record in sealed[-MAX_LAPS_SHOWN:]:
        lines.append(f"Lap {record.cycle_number:<4} {record.duration:>8.1f}s\n")
    return lines


# * Compose the whole live view for one refresh
def render_training(machine: CycleMachine) -> RenderableType:
    color = phase_color(machine.phase, machine.paused)
    title = (
        "Manual Cycles" if isinstance(machine, ManualCycleMachine) else "Timed Cycles"
    )
    parts: list[RenderableType] = [
        Align.center(Text(phase_label(machine), style=f"bold {color}")),
    ]
    if isinstance(machine, AutomaticCycleMachine) and machine.current_round > 0:
        parts.append(Align.center(Text(f"Round {machine.current_round}", style="dim")))
    parts.append(Align.center(Text(timer_text(machine), style=f"bold {color}")))
    if machine.run_start is not None:
        parts.append(
            Align.center(Text(f"Total {format_clock(machine.total_elapsed())}", style="dim"))
        )
    if isinstance(machine, ManualCycleMachine):
        parts.append(_lap_lines(machine))
    parts.append(Align.center(key_hints(machine)))
    return Panel(
        Group(*parts),
        title=f"[bold]{title}[/]",
        border_style=CycleColors.ACCENT_SECONDARY,
        padding=(1, 2),
    )
