# cyclewatch/cw_io/session_export.py
# Export a saved session to a JSON or CSV file named cycle-training-<id>.<ext>
#
# * Manual sessions export one CSV row per lap; automatic sessions export a single summary row

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from ..core.types import TrainingMode, TrainingSession
from ..core.verbose import vlog
from .generics import write_json_safe, write_text_safe

LAP_HEADERS = ["Cycle Number", "Duration (seconds)", "Start Time", "End Time"]
SUMMARY_HEADERS = [
    "Total Rounds",
    "Cycle Duration (seconds)",
    "Total Duration (seconds)",
    "Start Time",
    "End Time",
]


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


# ISO-8601 UTC w/ milliseconds & a Z suffix
def _iso(epoch_seconds: float | None) -> str:
    if epoch_seconds is None:
        return ""
    stamp = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# whole numbers print w/o a trailing .0
def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def export_filename(session: TrainingSession, fmt: ExportFormat) -> str:
    return f"cycle-training-{session.id}.{fmt.value}"


# * Header plus data rows for the CSV export
def csv_rows(session: TrainingSession) -> list[list[str]]:
    if session.mode is TrainingMode.MANUAL:
        rows = [LAP_HEADERS]
        for cycle in session.cycles:
            rows.append(
                [
                    str(cycle.cycle_number),
                    "" if cycle.duration is None else f"{cycle.duration:.2f}",
                    _iso(cycle.start_time),
                    _iso(cycle.end_time),
                ]
            )
        return rows

    cycle_duration = "" if session.config is None else _number(session.config.cycle_duration)
    return [
        SUMMARY_HEADERS,
        [
            str(session.total_rounds),
            cycle_duration,
            f"{session.total_duration:.2f}",
            _iso(session.start_time),
            _iso(session.end_time),
        ],
    ]


def render_csv(session: TrainingSession) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(csv_rows(session))
    return buffer.getvalue()


# * Write the export; output may be a directory (default name inside) or a file path
def export_session(
    session: TrainingSession, fmt: ExportFormat, output: Path | None = None
) -> Path:
    target = Path(output) if output is not None else Path.cwd()
    if target.is_dir():
        target = target / export_filename(session, fmt)

    if fmt is ExportFormat.JSON:
        write_json_safe(session.to_dict(), target)
    else:
        write_text_safe(render_csv(session), target)
    vlog("EXPORT", f"Exported {session.id} as {fmt.value} to {target}")
    return target
