# cyclewatch/cw_io/generics.py
# JSON file helpers shared by settings & the session store

from pathlib import Path
from typing import Any, Union
import json
import os
import tempfile

from ..core.exceptions import FileWriteError, JSONParsingError
from ..core.verbose import vlog_file_read, vlog_file_write


def ensure_parent(path: Union[Path, str]) -> None:
    # create parent directories for any file path
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)


# write text atomically (temp file + replace) w/ UTF-8 encoding, creating parent dirs
def write_text_safe(content: str, path: Path) -> None:
    path = Path(path)
    try:
        ensure_parent(path)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise FileWriteError(f"Could not write {path}: {e}", path) from e
    vlog_file_write(path, len(content))


# write JSON through write_text_safe
def write_json_safe(obj: Any, path: Path) -> None:
    write_text_safe(json.dumps(obj, indent=2), path)


# read JSON w/ UTF-8 encoding
def read_json_safe(path: Path) -> Any:
    text = Path(path).read_text(encoding="utf-8")
    vlog_file_read(path, len(text))
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        # create a trimmed snippet of the offending JSON for the error message
        lines = text.split("\n")
        line_num = e.lineno - 1
        snippet_start = max(0, line_num - 2)
        snippet_end = min(len(lines), line_num + 3)

        numbered_lines = []
        for i, line in enumerate(lines[snippet_start:snippet_end], start=snippet_start + 1):
            marker = ">>> " if i == e.lineno else "    "
            numbered_lines.append(f"{marker}{i:3}: {line}")

        snippet = "\n".join(numbered_lines)
        raise JSONParsingError(f"Invalid JSON in {path}:\n{snippet}\nError: {e.msg}")
