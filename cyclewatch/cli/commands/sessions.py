# cyclewatch/cli/commands/sessions.py
# Saved session subcommands (list/show/export/delete/clear) over the JSON session store

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...config.settings import get_settings
from ...cw_io.console import console
from ...cw_io.session_export import ExportFormat, export_session
from ...cw_io.session_store import JsonSessionStore
from ...ui.reporting import render_session, render_session_list
from ...ui.theming import accent_gradient, styled_success_line
from ..app import app
from ..decorators import handle_cyclewatch_error

# * Sub-app for session commands; registered on root app
sessions_app = typer.Typer(
    rich_markup_mode="rich", help="[cw.accent2]Browse & manage saved sessions[/]"
)
app.add_typer(sessions_app, name="sessions")


def _store(ctx: typer.Context) -> JsonSessionStore:
    return JsonSessionStore(get_settings(ctx).sessions_path).open()


def _print_sessions(ctx: typer.Context) -> None:
    store = _store(ctx)
    console.print()
    console.print(accent_gradient("Saved Sessions"))
    console.print(f"[dim]Store: {store.path}[/]")
    console.print()
    console.print(render_session_list(store.list_all()))


# * default callback: list sessions when no subcommand provided
@sessions_app.callback(invoke_without_command=True)
@handle_cyclewatch_error
def sessions_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _print_sessions(ctx)


@sessions_app.command(name="list", help="List saved sessions, oldest first")
@handle_cyclewatch_error
def list_cmd(ctx: typer.Context) -> None:
    _print_sessions(ctx)


# * Show one session's report, or its stored JSON
@sessions_app.command(help="Show the report for one session")
@handle_cyclewatch_error
def show(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Session id"),
    as_json: bool = typer.Option(
        False, "--json", help="Print the stored JSON record instead"
    ),
) -> None:
    session = _store(ctx).get(session_id)
    if as_json:
        console.print_json(data=session.to_dict())
    else:
        console.print(render_session(session))


# * Export one session to a file, as the stored JSON record or a CSV table
@sessions_app.command(help="Export one session to a JSON or CSV file")
@handle_cyclewatch_error
def export(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Session id"),
    fmt: ExportFormat = typer.Option(
        ExportFormat.JSON, "--format", "-f", case_sensitive=False, help="File format"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Target file or directory (default: cycle-training-<id>.<format> here)",
    ),
) -> None:
    session = _store(ctx).get(session_id)
    path = export_session(session, fmt, output)
    console.print(*styled_success_line("Exported session", f"[cw.accent2]{path}[/]"))


@sessions_app.command(help="Delete one session")
@handle_cyclewatch_error
def delete(
    ctx: typer.Context,
    session_id: str = typer.Argument(..., help="Session id"),
) -> None:
    if not _store(ctx).delete(session_id):
        console.print(f"[yellow]No session with id '{session_id}' - nothing deleted[/]")
        return
    console.print(*styled_success_line("Deleted session", f"[cw.accent2]{session_id}[/]"))


@sessions_app.command(help="Delete every saved session")
@handle_cyclewatch_error
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    store = _store(ctx)
    if not yes and not typer.confirm(
        f"Delete all {len(store.list_all())} saved session(s)?"
    ):
        console.print("[dim]Nothing deleted[/]")
        return
    count = store.clear()
    console.print(*styled_success_line("Cleared sessions", f"[cw.accent2]{count}[/]"))
