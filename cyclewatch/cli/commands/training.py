# cyclewatch/cli/commands/training.py
# Training subcommands: timed cycles (auto) & user-driven laps (manual)

from __future__ import annotations

from typing import Optional

import typer

from ...config.settings import get_settings
from ...core.machine import AutomaticCycleMachine, ManualCycleMachine
from ...core.validation import build_training_config
from ..app import app
from ..decorators import handle_cyclewatch_error
from ..helpers import run_training


# * Automatic mode: buffer, then cycle/rest countdowns until the cycle count is spent
@app.command(
    name="auto",
    help="Run timed cycles w/ optional rest & buffer. [dim]space: pause/resume, f: finish, q: cancel[/]",
)
@handle_cyclewatch_error
def auto(
    ctx: typer.Context,
    cycle: Optional[float] = typer.Option(
        None, "--cycle", "-c", help="Cycle duration in seconds (default from config)"
    ),
    rest: Optional[float] = typer.Option(
        None, "--rest", "-r", help="Rest time between cycles in seconds"
    ),
    cycles: Optional[str] = typer.Option(
        None, "--cycles", "-n", help="Number of cycles or 'unlimited'"
    ),
    buffer: Optional[float] = typer.Option(
        None, "--buffer", "-b", help="Countdown before the first cycle in seconds"
    ),
    save: bool = typer.Option(
        True, "--save/--no-save", help="Persist the finished session"
    ),
    autostart: bool = typer.Option(
        False, "--autostart", help="Start immediately instead of waiting for the s key"
    ),
) -> None:
    settings = get_settings(ctx)
    config = build_training_config(
        cycle_duration=cycle if cycle is not None else settings.cycle_duration,
        rest_time=rest if rest is not None else settings.rest_time,
        number_of_cycles=cycles if cycles is not None else settings.number_of_cycles,
        buffer_time=buffer if buffer is not None else settings.buffer_time,
    )
    machine = AutomaticCycleMachine(config, partial_cycle_policy=settings.policy)
    outcome = run_training(machine, settings, save=save, autostart=autostart)
    if outcome.store_error is not None:
        raise typer.Exit(1)


# * Manual mode: each lap ends on [enter]; stop/resume w/ space, finish w/ f
@app.command(
    name="manual",
    help="Record manual laps. [dim]enter: end round, space: stop/resume, f: finish, q: cancel[/]",
)
@handle_cyclewatch_error
def manual(
    ctx: typer.Context,
    save: bool = typer.Option(
        True, "--save/--no-save", help="Persist the finished session"
    ),
    autostart: bool = typer.Option(
        False, "--autostart", help="Start immediately instead of waiting for the s key"
    ),
) -> None:
    settings = get_settings(ctx)
    machine = ManualCycleMachine()
    outcome = run_training(machine, settings, save=save, autostart=autostart)
    if outcome.store_error is not None:
        raise typer.Exit(1)
