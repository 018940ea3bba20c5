# cyclewatch/config/settings.py
# Configuration management for the cyclewatch CLI: training defaults, polling & storage paths

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, cast

import typer

from ..core.exceptions import JSONParsingError, SettingsValidationError
from ..core.types import UNLIMITED, PartialCyclePolicy
from ..cw_io.generics import read_json_safe, write_json_safe

# environment override for the directory holding config & sessions
HOME_ENV_VAR = "CYCLEWATCH_HOME"


# * Resolve the cyclewatch home directory (env override or ~/.cyclewatch)
def cyclewatch_home() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cyclewatch"


# * Default settings dataclass w/ automatic-mode defaults & runtime tuning
@dataclass
class CycleWatchSettings:
    # automatic-mode defaults (used when CLI options are omitted)
    cycle_duration: float = 60
    rest_time: float = 30
    number_of_cycles: Any = UNLIMITED
    buffer_time: float = 5

    # seconds between state machine polls
    poll_interval: float = 0.1

    # what a cycle cut short by finish records: "elapsed" or "nominal"
    partial_cycle_policy: str = PartialCyclePolicy.NOMINAL.value

    # session storage, relative to the cyclewatch home unless absolute
    sessions_filename: str = "sessions.json"

    # dev mode setting (allows debug-level output w/ --verbose)
    dev_mode: bool = False

    def __post_init__(self) -> None:
        # Validate settings values after initialization.
        for name in ("cycle_duration", "rest_time", "buffer_time", "poll_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(
                    f"{name} must be a number, got {type(value).__name__}"
                )

        if self.cycle_duration <= 0:
            raise ValueError(
                f"cycle_duration must be greater than 0, got {self.cycle_duration}"
            )
        if self.rest_time < 0:
            raise ValueError(f"rest_time cannot be negative, got {self.rest_time}")
        if self.buffer_time < 0:
            raise ValueError(f"buffer_time cannot be negative, got {self.buffer_time}")

        # number_of_cycles: positive int or "unlimited"
        if self.number_of_cycles != UNLIMITED and (
            isinstance(self.number_of_cycles, bool)
            or not isinstance(self.number_of_cycles, int)
            or self.number_of_cycles < 1
        ):
            raise ValueError(
                f"number_of_cycles must be a positive integer or '{UNLIMITED}', "
                f"got {self.number_of_cycles!r}"
            )

        # poll_interval bounds (must stay responsive but not spin)
        if not 0.01 <= self.poll_interval <= 1.0:
            raise ValueError(
                f"poll_interval must be 0.01-1.0 seconds, got {self.poll_interval}"
            )

        valid_policies = {p.value for p in PartialCyclePolicy}
        if self.partial_cycle_policy not in valid_policies:
            raise ValueError(
                f"partial_cycle_policy must be one of {sorted(valid_policies)}, "
                f"got '{self.partial_cycle_policy}'"
            )

        # dev_mode strict bool validation (no coercion)
        if not isinstance(self.dev_mode, bool):
            raise ValueError(
                f"dev_mode must be a boolean (true/false), "
                f"got {type(self.dev_mode).__name__}: {self.dev_mode}"
            )

    @property
    def policy(self) -> PartialCyclePolicy:
        return PartialCyclePolicy(self.partial_cycle_policy)

    @property
    def sessions_path(self) -> Path:
        path = Path(self.sessions_filename).expanduser()
        if path.is_absolute():
            return path
        return cyclewatch_home() / path


# * Settings management class w/ JSON persistence for loading, saving, & modifying settings
class SettingsManager:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or cyclewatch_home() / "config.json"
        self._settings: Optional[CycleWatchSettings] = None

    # load settings from file or return defaults
    def load(self) -> CycleWatchSettings:
        if self._settings is not None:
            return self._settings

        if self.config_path.exists():
            try:
                data = read_json_safe(self.config_path)
                self._settings = CycleWatchSettings(**data)
            except (JSONParsingError, TypeError, ValueError) as e:
                typer.echo(f"Warning: Invalid config file {self.config_path}: {e}")
                typer.echo("Using default settings")
                self._settings = CycleWatchSettings()
        else:
            self._settings = CycleWatchSettings()

        return self._settings

    # save settings to file
    def save(self, settings: CycleWatchSettings) -> None:
        write_json_safe(asdict(settings), self.config_path)
        self._settings = settings

    def get(self, key: str) -> Any:
        settings = self.load()
        return getattr(settings, key, None)

    # set a single value; the whole dataclass is rebuilt so __post_init__ validates it
    def set(self, key: str, value: Any) -> None:
        settings = self.load()
        if not hasattr(settings, key):
            raise SettingsValidationError(f"Unknown setting: {key}", key, value)

        data = asdict(settings)
        data[key] = value
        try:
            updated = CycleWatchSettings(**data)
        except ValueError as e:
            raise SettingsValidationError(str(e), key, value) from e
        self.save(updated)

    def reset(self) -> None:
        self.save(CycleWatchSettings())

    def list_settings(self) -> Dict[str, Any]:
        return asdict(self.load())


# global settings manager instance
settings_manager = SettingsManager()


# * Retrieve settings preferring injected object from Typer context
def get_settings(
    ctx: typer.Context, provided: Optional[CycleWatchSettings] = None
) -> CycleWatchSettings:
    if provided is not None:
        return provided

    # search ctx, parent, & root for CycleWatchSettings
    candidates: list[typer.Context] = [ctx]
    parent = cast(Optional[typer.Context], getattr(ctx, "parent", None))
    if parent is not None:
        candidates.append(parent)
    find_root = getattr(ctx, "find_root", None)
    root_ctx = (
        cast(Optional[typer.Context], find_root()) if callable(find_root) else None
    )
    if root_ctx is not None:
        candidates.append(root_ctx)

    for c in candidates:
        obj = getattr(c, "obj", None)
        if isinstance(obj, CycleWatchSettings):
            return obj

    # fallback to loading from disk
    return settings_manager.load()
