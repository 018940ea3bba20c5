# cyclewatch/core/verbose.py
# Verbose logging helpers for phases, user actions, store I/O & finished sessions

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .output import OutputLevel, get_output_manager, set_output_manager

if TYPE_CHECKING:
    from .types import Phase, TrainingSession


# * Initialize verbose logging for a CLI invocation
def init_verbose(
    enabled: bool = False,
    log_file: Path | None = None,
    dev_mode: bool = False,
    quiet: bool = False,
) -> None:
    if enabled and dev_mode:
        requested_level = OutputLevel.DEBUG
    elif enabled:
        requested_level = OutputLevel.VERBOSE
    else:
        requested_level = OutputLevel.NORMAL

    try:
        from ..cli.output_manager import OutputManager

        manager = OutputManager()
        manager.initialize(
            requested_level=requested_level,
            dev_mode=dev_mode,
            quiet=quiet,
            log_file=log_file,
        )
        set_output_manager(manager)
    except ImportError:
        pass


def is_verbose_enabled() -> bool:
    return get_output_manager().is_verbose_enabled()


# * Core verbose logging function
def vlog(category: str, message: str, detail: str | None = None) -> None:
    get_output_manager().verbose(message, category, detail)


# * Debug-level message (dev_mode + --verbose only)
def dlog(message: str, category: str = "DEBUG") -> None:
    get_output_manager().debug(message, category)


# * Log a phase transition of a state machine
def vlog_phase(old: "Phase", new: "Phase", round_number: int) -> None:
    detail = f"Round {round_number}" if round_number else None
    get_output_manager().verbose(f"{old.value} -> {new.value}", "PHASE", detail)


# * Log an accepted user action
def vlog_action(action: str, phase: "Phase") -> None:
    get_output_manager().verbose(f"{action} (in {phase.value})", "ACTION")


# * Log a rejected user action; rejected requests are no-ops by policy
def dlog_ignored(action: str, phase: "Phase") -> None:
    get_output_manager().debug(f"Ignored {action} while {phase.value}", "ACTION")


def vlog_file_read(path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    get_output_manager().verbose(f"Read: {path}{size_str}", "FILE")


def vlog_file_write(path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    get_output_manager().verbose(f"Write: {path}{size_str}", "FILE")


# * Log a finished session summary
def vlog_session(session: "TrainingSession") -> None:
    detail = (
        f"Mode: {session.mode.value}, Rounds: {session.total_rounds}, "
        f"Cycles: {len(session.cycles)}, Total: {session.total_duration:.2f}s"
    )
    get_output_manager().verbose(f"Session {session.id} finished", "SESSION", detail)
    get_output_manager().debug_json("session", session.to_dict())
