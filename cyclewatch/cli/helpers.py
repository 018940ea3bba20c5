# cyclewatch/cli/helpers.py
# Shared CLI helpers: session store selection & the run -> persist -> report flow

from __future__ import annotations

from ..config.settings import CycleWatchSettings
from ..core.machine import CycleMachine
from ..cw_io.console import console
from ..cw_io.session_store import InMemorySessionStore, JsonSessionStore, SessionStore
from ..ui.reporting import print_session
from ..ui.theming import styled_success_line
from .keys import ReadcharKeySource
from .runner import RunOutcome, TrainingRunner


# * Store for this invocation: the JSON file, or memory only when saving is off
def open_store(settings: CycleWatchSettings, save: bool = True) -> SessionStore:
    if not save:
        return InMemorySessionStore()
    return JsonSessionStore(settings.sessions_path).open()


# * Run a machine interactively, then report the outcome
def run_training(
    machine: CycleMachine,
    settings: CycleWatchSettings,
    save: bool = True,
    autostart: bool = False,
) -> RunOutcome:
    store = open_store(settings, save)
    runner = TrainingRunner(
        machine,
        ReadcharKeySource(),
        store=store,
        poll_interval=settings.poll_interval,
    )
    outcome = runner.run(autostart=autostart)

    if outcome.session is None:
        console.print("[dim]Training cancelled - nothing saved[/]")
        return outcome

    print_session(outcome.session)
    if outcome.saved and save:
        console.print(*styled_success_line("Saved session", f"[cw.accent2]{outcome.session.id}[/]"))
    elif outcome.store_error is not None:
        console.print(f"[red]Session could not be saved:[/] {outcome.store_error}")
    return outcome
