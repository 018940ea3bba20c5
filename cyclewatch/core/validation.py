# cyclewatch/core/validation.py
# Training parameter validation performed before any run starts (pure - no I/O)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .exceptions import TrainingConfigError
from .types import UNLIMITED, CycleCount, TrainingConfig


# * Standard result type for validation operations (pure data, no I/O)
@dataclass
class ValidationResult:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# * Non-negative duration check; strict requires > 0
def validate_duration(
    value: Any, label: str, strict: bool = False
) -> tuple[bool, Optional[str]]:
    if not _is_number(value) or value != value:
        return False, f"{label} must be a number"
    if strict and value <= 0:
        return False, f"{label} must be greater than 0"
    if value < 0:
        return False, f"{label} cannot be negative"
    return True, None


# * Cycle count check: positive integer or "unlimited"
def validate_cycle_count(value: Any) -> tuple[bool, Optional[str]]:
    if value == UNLIMITED:
        return True, None
    if not _is_number(value) or int(value) != value:
        return False, "Number of cycles must be a whole number or 'unlimited'"
    if value <= 0:
        return False, "Number of cycles must be greater than 0"
    return True, None


# * Collect every field error at once, like a form would
def check_training_config(
    cycle_duration: Any,
    rest_time: Any,
    number_of_cycles: Any,
    buffer_time: Any,
) -> ValidationResult:
    errors: dict[str, str] = {}
    checks = {
        "cycle_duration": validate_duration(cycle_duration, "Cycle duration", strict=True),
        "rest_time": validate_duration(rest_time, "Rest time"),
        "number_of_cycles": validate_cycle_count(number_of_cycles),
        "buffer_time": validate_duration(buffer_time, "Buffer time"),
    }
    for name, (ok, message) in checks.items():
        if not ok and message:
            errors[name] = message
    return ValidationResult(is_valid=not errors, errors=errors)


# * Parse a CLI/settings cycle count ("unlimited", "5", 5) into CycleCount
def parse_cycle_count(raw: Any) -> CycleCount | Any:
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in (UNLIMITED, "inf"):
            return UNLIMITED
        try:
            return int(text)
        except ValueError:
            return raw
    return raw


# * Validate raw parameters & build the immutable TrainingConfig the core consumes
def build_training_config(
    cycle_duration: Any,
    rest_time: Any = 0,
    number_of_cycles: Any = UNLIMITED,
    buffer_time: Any = 0,
) -> TrainingConfig:
    number_of_cycles = parse_cycle_count(number_of_cycles)
    result = check_training_config(
        cycle_duration, rest_time, number_of_cycles, buffer_time
    )
    if not result.is_valid:
        raise TrainingConfigError(result.errors)
    return TrainingConfig(
        cycle_duration=float(cycle_duration),
        rest_time=float(rest_time),
        number_of_cycles=number_of_cycles if number_of_cycles == UNLIMITED else int(number_of_cycles),
        buffer_time=float(buffer_time),
    )
