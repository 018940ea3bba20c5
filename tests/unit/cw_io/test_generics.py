# tests/unit/cw_io/test_generics.py
# Unit tests for JSON file helpers

import json

import pytest

from cyclewatch.core.exceptions import FileWriteError, JSONParsingError
from cyclewatch.cw_io.generics import read_json_safe, write_json_safe


class TestWriteJsonSafe:

    # * Verify parent dirs are created & content round trips
    def test_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "out.json"
        write_json_safe({"k": [1, 2]}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": [1, 2]}

    # * Verify no temp files are left behind
    def test_no_temp_left(self, tmp_path):
        path = tmp_path / "w" / "out.json"
        write_json_safe([1], path)
        write_json_safe([2], path)
        assert [p.name for p in path.parent.iterdir()] == ["out.json"]

    # * Verify OS errors surface as FileWriteError
    def test_write_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(FileWriteError):
            write_json_safe({}, blocker / "out.json")


class TestReadJsonSafe:

    # * Verify invalid JSON reports a numbered snippet
    def test_invalid_json_snippet(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{\n  "a": 1,\n  "b": \n}', encoding="utf-8")
        with pytest.raises(JSONParsingError) as exc_info:
            read_json_safe(path)
        message = str(exc_info.value)
        assert "Invalid JSON" in message
        assert ">>>" in message
