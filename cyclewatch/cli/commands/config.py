# cyclewatch/cli/commands/config.py
# Settings mgmt subcommands (list/get/set/reset/path) w/ JSON-backed storage

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

import typer

from ...config.settings import CycleWatchSettings, settings_manager
from ...core.exceptions import SettingsValidationError
from ...cw_io.console import console
from ...ui.theming import (
    accent_gradient,
    format_setting_value,
    styled_checkmark,
    styled_setting_line,
    styled_success_line,
    success_gradient,
)
from ..app import app
from ..decorators import handle_cyclewatch_error

# * Sub-app for config commands; registered on root app
config_app = typer.Typer(
    rich_markup_mode="rich", help="[cw.accent2]Manage cyclewatch settings[/]"
)
app.add_typer(config_app, name="config")


def _known_keys() -> set[str]:
    return {f.name for f in fields(CycleWatchSettings)}


# coerce string value to JSON value (numbers, bools, null) or keep raw string
def _coerce_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


# * Print current settings & config path w/ styled output
def _print_current_settings() -> None:
    data = settings_manager.list_settings()

    console.print()
    console.print(accent_gradient("Current Configuration"))
    console.print(f"[dim]Config file: {settings_manager.config_path}[/]")
    console.print()

    for key, value in data.items():
        console.print(*styled_setting_line(key, format_setting_value(value)))

    console.print()
    console.print(
        "[dim]Use [/][cw.accent2]cyclewatch config --help[/][dim] to see available commands[/]"
    )


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _print_current_settings()


@config_app.command(name="list", help="Show all current settings")
def list_cmd() -> None:
    _print_current_settings()


# * Get a specific setting value & print as JSON
@config_app.command(help="Print one setting as JSON")
def get(key: str) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")
    console.print(f"[cw.accent2]{json.dumps(settings_manager.get(key))}[/]")


# * Set a specific setting value; values are JSON-coerced when possible
@config_app.command(name="set", help="Set one setting (values parsed as JSON when possible)")
@handle_cyclewatch_error
def set_cmd(key: str, value: str) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")

    coerced = _coerce_value(value)
    try:
        settings_manager.set(key, coerced)
    except SettingsValidationError as e:
        raise typer.BadParameter(str(e))
    console.print(
        *styled_success_line(f"Set {key}", f"[cw.accent2]{json.dumps(coerced)}[/]")
    )


@config_app.command(help="Reset all settings to defaults")
@handle_cyclewatch_error
def reset() -> None:
    settings_manager.reset()
    console.print(styled_checkmark(), success_gradient("Reset settings to defaults"))


@config_app.command(help="Show the configuration file path")
def path() -> None:
    console.print(f"[cw.accent2]{settings_manager.config_path}[/]")
