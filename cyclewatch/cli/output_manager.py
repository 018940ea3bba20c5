# cyclewatch/cli/output_manager.py
# Unified output management implementation for debug, verbose & quiet modes
#
# * Rich console output plus optional plain-text log file
# * Registered via set_output_manager() at CLI startup

from __future__ import annotations

import json
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO

from ..core.output import OutputLevel
from ..cw_io.console import console


class OutputManager:
    # Implements the OutputInterface protocol from core.output

    def __init__(self) -> None:
        self._level = OutputLevel.NORMAL
        self._dev_mode = False
        self._started: float | None = None
        self._log_file_path: Path | None = None
        self._log_file_handle: TextIO | None = None

    def initialize(
        self,
        requested_level: OutputLevel = OutputLevel.NORMAL,
        dev_mode: bool = False,
        quiet: bool = False,
        log_file: Path | None = None,
    ) -> None:
        self._dev_mode = dev_mode
        self._level = self._compute_effective_level(requested_level, dev_mode, quiet)
        self._started = time.time()
        self._setup_log_file(log_file)

    # Precedence: --quiet wins, DEBUG requires dev_mode (capped at VERBOSE otherwise)
    def _compute_effective_level(
        self, requested: OutputLevel, dev_mode: bool, quiet: bool
    ) -> OutputLevel:
        if quiet:
            return OutputLevel.QUIET
        max_allowed = OutputLevel.DEBUG if dev_mode else OutputLevel.VERBOSE
        return min(requested, max_allowed)

    @property
    def log_file_path(self) -> Path | None:
        return self._log_file_path

    # OutputInterface implementation

    def get_level(self) -> OutputLevel:
        return self._level

    def is_debug_enabled(self) -> bool:
        return self._level >= OutputLevel.DEBUG

    def is_verbose_enabled(self) -> bool:
        return self._level >= OutputLevel.VERBOSE

    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None:
        if self._level >= OutputLevel.DEBUG:
            console.print(f"[debug]\\[{category}][/] {msg}", **kwargs)
            self._write_to_file(f"[{self._elapsed()}] [{category}] {msg}")

    def verbose(
        self,
        msg: str,
        category: str = "INFO",
        detail: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if self._level < OutputLevel.VERBOSE:
            return
        prefix = f"[dim][{self._elapsed()}][/] [bold cyan]\\[{category}][/]"
        console.print(f"{prefix} {msg}", **kwargs)
        self._write_to_file(f"[{self._elapsed()}] [{category}] {msg}")
        if detail:
            for line in detail.split("\n"):
                console.print(f"  [dim]{line}[/]")
                self._write_to_file(f"  {line}")

    # warnings still show at NORMAL; only --quiet hides them
    def warning(self, msg: str, **kwargs: Any) -> None:
        if self._level >= OutputLevel.NORMAL:
            console.print(f"[warning]Warning:[/] {msg}", **kwargs)
        self._write_to_file(f"[{self._elapsed()}] [WARNING] {msg}")

    def debug_json(self, label: str, data: Any) -> None:
        if self._level < OutputLevel.DEBUG:
            return
        console.print(f"[debug]\\[JSON][/] {label}:")
        console.print_json(data=data)
        try:
            json_str = json.dumps(data, indent=2, default=str)
        except (TypeError, ValueError):
            self._write_to_file(f"[{self._elapsed()}] [JSON] {label}: {data}")
            return
        self._write_to_file(f"[{self._elapsed()}] [JSON] {label}:")
        for line in json_str.split("\n"):
            self._write_to_file(f"  {line}")

    def open_log(self) -> None:
        self._started = time.time()
        if self._log_file_handle:
            self._write_to_file(f"\n{'=' * 60}")
            self._write_to_file(f"Run Started: {datetime.now().isoformat()}")
            self._write_to_file(f"Level: {self._level.name}")
            if self._dev_mode:
                self._write_to_file("Mode: Developer (dev_mode enabled)")
            self._write_to_file(f"{'=' * 60}\n")

    def close_log(self) -> None:
        if self._log_file_handle:
            self._write_to_file(f"\n{'=' * 60}")
            self._write_to_file(f"Run Ended: {datetime.now().isoformat()}")
            self._write_to_file(f"{'=' * 60}\n")
        self.cleanup()

    # File logging

    def _elapsed(self) -> str:
        if self._started is None:
            return "0.00s"
        return f"{time.time() - self._started:.2f}s"

    def _setup_log_file(self, log_file: Path | None) -> None:
        self.cleanup()
        self._log_file_path = log_file
        if log_file is None:
            return
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._log_file_handle = open(log_file, "a", encoding="utf-8")
        except OSError as e:
            self._log_file_path = None
            self._log_file_handle = None
            console.print(f"[warning]Warning:[/] cannot open log file {log_file}: {e}")

    def _write_to_file(self, msg: str) -> None:
        if self._log_file_handle is None:
            return
        try:
            self._log_file_handle.write(f"{msg}\n")
            self._log_file_handle.flush()
        except OSError:
            # a broken log file must never interrupt a training run
            self._log_file_handle = None

    def cleanup(self) -> None:
        if self._log_file_handle is not None:
            try:
                self._log_file_handle.close()
            except OSError:
                pass
            self._log_file_handle = None
