# cyclewatch/cw_io/console.py
# Shared Rich console for reports, verbose lines & the live training screen
#
# - Modules import `console` once; swap_console() replaces what it points at
# - The runner hands the real Console to rich.live.Live via get_console()

from __future__ import annotations

from typing import Any

from rich.console import Console


# forwards every attribute to the current Console
class _ConsoleProxy:
    __slots__ = ("_target",)

    def __init__(self) -> None:
        self._target = Console()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._target, name)


console = _ConsoleProxy()


def get_console() -> Console:
    return console._target


# * Point the shared console at another Console (e.g. a recording one); returns the old one
def swap_console(new_console: Console) -> Console:
    previous = console._target
    console._target = new_console
    return previous


__all__ = ["console", "get_console", "swap_console"]
