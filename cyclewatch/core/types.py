# cyclewatch/core/types.py
# Core data model: phases, cycle records, training config & finished sessions

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Literal, Union

from .exceptions import CycleRecordError

UNLIMITED = "unlimited"

# int >= 1 or the literal "unlimited"
CycleCount = Union[int, Literal["unlimited"]]

# float tolerance when checking end - start against a recorded duration
_DURATION_TOLERANCE = 1e-6


# * Training modes; values match the persisted session format
class TrainingMode(Enum):
    AUTOMATIC = "mode1"
    MANUAL = "mode2"


# * Every phase either machine can be in
class Phase(Enum):
    IDLE = "idle"
    BUFFER = "buffer"
    CYCLE = "cycle"
    REST = "rest"
    RUNNING = "running"
    STOPPED = "stopped"
    FINISHED = "finished"

    @property
    def active(self) -> bool:
        return self not in (Phase.IDLE, Phase.FINISHED)


# * User actions a running machine may accept
class Action(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    END_ROUND = "end_round"
    STOP = "stop"
    FINISH = "finish"
    CANCEL = "cancel"


# * What to record for a cycle cut short by finish()
class PartialCyclePolicy(Enum):
    ELAPSED = "elapsed"
    NOMINAL = "nominal"


# seconds <-> epoch milliseconds used by the stored session format
def _to_ms(seconds: float) -> int:
    return int(round(seconds * 1000))


def _from_ms(ms: float) -> float:
    return float(ms) / 1000.0


# * One timed cycle or manual lap; end_time & duration are set together when sealed
@dataclass
class CycleRecord:
    cycle_number: int
    start_time: float
    end_time: float | None = None
    duration: float | None = None

    def __post_init__(self) -> None:
        if self.cycle_number < 1:
            raise CycleRecordError(
                f"cycle_number must be >= 1, got {self.cycle_number}",
                self.cycle_number,
            )
        if (self.end_time is None) != (self.duration is None):
            raise CycleRecordError(
                "end_time and duration must both be set or both be absent",
                self.cycle_number,
            )
        if self.duration is not None and self.end_time is not None:
            self._check_sealed(self.end_time, self.duration)

    @property
    def sealed(self) -> bool:
        return self.end_time is not None

    # Seal the record at end_time.
    # Without a duration the record measures end_time - start_time; w/ an explicit
    # (active) duration the start is re-anchored to end_time - duration so that
    # paused spans inside the record never count toward it.
    def seal(self, end_time: float, duration: float | None = None) -> None:
        if self.sealed:
            raise CycleRecordError(
                f"Cycle {self.cycle_number} is already sealed", self.cycle_number
            )
        if duration is None:
            duration = end_time - self.start_time
        else:
            self.start_time = end_time - duration
        self._check_sealed(end_time, duration)
        self.end_time = end_time
        self.duration = duration

    def _check_sealed(self, end_time: float, duration: float) -> None:
        if duration < 0:
            raise CycleRecordError(
                f"Cycle {self.cycle_number} has negative duration {duration}",
                self.cycle_number,
            )
        if not math.isclose(
            end_time - self.start_time, duration, abs_tol=_DURATION_TOLERANCE
        ):
            raise CycleRecordError(
                f"Cycle {self.cycle_number} duration {duration} does not match "
                f"its start/end times",
                self.cycle_number,
            )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "cycleNumber": self.cycle_number,
            "startTime": _to_ms(self.start_time),
        }
        if self.sealed:
            data["endTime"] = _to_ms(self.end_time)  # type: ignore[arg-type]
            data["duration"] = self.duration
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CycleRecord":
        start = _from_ms(data["startTime"])
        duration = data.get("duration")
        end_ms = data.get("endTime")
        if duration is None:
            return cls(cycle_number=int(data["cycleNumber"]), start_time=start)
        duration = float(duration)
        if end_ms is None:
            # older records only carried a duration
            end = start + duration
        else:
            end = _from_ms(end_ms)
            # ms rounding on disk; keep the stored duration authoritative
            start = end - duration
        return cls(
            cycle_number=int(data["cycleNumber"]),
            start_time=start,
            end_time=end,
            duration=duration,
        )


# * Automatic-mode parameters; validated by the configuration form before use
@dataclass(frozen=True)
class TrainingConfig:
    cycle_duration: float
    rest_time: float = 0.0
    number_of_cycles: CycleCount = UNLIMITED
    buffer_time: float = 0.0

    @property
    def unlimited(self) -> bool:
        return self.number_of_cycles == UNLIMITED

    # * Check whether round_number may begin under the configured count
    def permits_round(self, round_number: int) -> bool:
        if self.unlimited:
            return True
        return round_number <= int(self.number_of_cycles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cycleDuration": self.cycle_duration,
            "restTime": self.rest_time,
            "numberOfCycles": self.number_of_cycles,
            "bufferTime": self.buffer_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrainingConfig":
        return cls(
            cycle_duration=data["cycleDuration"],
            rest_time=data.get("restTime", 0),
            number_of_cycles=data.get("numberOfCycles", UNLIMITED),
            buffer_time=data.get("bufferTime", 0),
        )


# * One finished training run; the unit of persistence
@dataclass(frozen=True)
class TrainingSession:
    id: str
    mode: TrainingMode
    start_time: float
    end_time: float
    total_duration: float
    total_rounds: int
    cycles: tuple[CycleRecord, ...] = field(default_factory=tuple)
    config: TrainingConfig | None = None

    def __post_init__(self) -> None:
        # detach from the machine's mutable records
        object.__setattr__(
            self, "cycles", tuple(replace(c) for c in self.cycles)
        )

    @property
    def sealed_durations(self) -> list[float]:
        return [c.duration for c in self.cycles if c.duration is not None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mode": self.mode.value,
            "config": self.config.to_dict() if self.config is not None else {},
            "startTime": _to_ms(self.start_time),
            "endTime": _to_ms(self.end_time),
            "totalDuration": self.total_duration,
            "cycles": [c.to_dict() for c in self.cycles],
            "totalRounds": self.total_rounds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrainingSession":
        mode = TrainingMode(data["mode"])
        raw_config = data.get("config") or {}
        config = (
            TrainingConfig.from_dict(raw_config)
            if mode is TrainingMode.AUTOMATIC and raw_config
            else None
        )
        start = _from_ms(data["startTime"])
        total = float(data.get("totalDuration") or 0.0)
        end_ms = data.get("endTime")
        return cls(
            id=str(data["id"]),
            mode=mode,
            start_time=start,
            end_time=_from_ms(end_ms) if end_ms is not None else start + total,
            total_duration=total,
            total_rounds=int(data.get("totalRounds", 0)),
            cycles=tuple(CycleRecord.from_dict(c) for c in data.get("cycles", [])),
            config=config,
        )


# * Visible/enabled manual-mode buttons for the current state
@dataclass(frozen=True)
class ManualControls:
    show_start: bool = False
    show_end_round: bool = False
    show_stop: bool = False
    show_resume: bool = False
    show_finish: bool = False
    end_round_disabled: bool = False
