# cyclewatch/core/output.py
# Verbosity levels & the output registry the state machines, scheduler & store log through
# * No I/O here; cyclewatch/cli/output_manager.py registers the Rich-backed manager at startup

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional, Protocol, runtime_checkable


# --quiet < default < --verbose < --verbose w/ dev_mode
class OutputLevel(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


# * What core code may call on the registered manager
@runtime_checkable
class OutputInterface(Protocol):
    def is_verbose_enabled(self) -> bool: ...

    def verbose(
        self, msg: str, category: str = "INFO", detail: Optional[str] = None, **kwargs: Any
    ) -> None: ...

    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None: ...

    def debug_json(self, label: str, data: Any) -> None: ...

    def warning(self, msg: str, **kwargs: Any) -> None: ...

    # bracket one training run in the log file
    def open_log(self) -> None: ...

    def close_log(self) -> None: ...


# Stands in until init_verbose() runs, so library use & tests stay silent
class NullOutputManager:
    def is_verbose_enabled(self) -> bool:
        return False

    def verbose(
        self, msg: str, category: str = "INFO", detail: Optional[str] = None, **kwargs: Any
    ) -> None: ...

    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None: ...

    def debug_json(self, label: str, data: Any) -> None: ...

    def warning(self, msg: str, **kwargs: Any) -> None: ...

    def open_log(self) -> None: ...

    def close_log(self) -> None: ...


_active: OutputInterface = NullOutputManager()


def set_output_manager(manager: OutputInterface) -> None:
    global _active
    _active = manager


def get_output_manager() -> OutputInterface:
    return _active


# back to the silent manager; conftest calls this before every test
def reset_output_manager() -> None:
    set_output_manager(NullOutputManager())
