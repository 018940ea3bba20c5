# cyclewatch/cw_io/session_store.py
# Session persistence: store protocol, JSON-file backed store & in-memory store
#
# * JsonSessionStore loads its file once when opened & rewrites it on every mutation
# * A failed write leaves the in-memory list untouched so the caller can retry
# * delete/clear of unknown ids are no-ops

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from ..core.exceptions import (
    FileWriteError,
    JSONParsingError,
    SessionNotFoundError,
    SessionReadError,
    SessionWriteError,
)
from ..core.types import TrainingSession
from ..core.verbose import vlog
from .generics import read_json_safe, write_json_safe


# * Operations every session store provides
@runtime_checkable
class SessionStore(Protocol):
    def append(self, session: TrainingSession) -> None: ...

    def list_all(self) -> list[TrainingSession]: ...

    def get(self, session_id: str) -> TrainingSession: ...

    def delete(self, session_id: str) -> bool: ...

    def clear(self) -> int: ...


# add or replace by id, keeping insertion order
def _with_session(
    sessions: Iterable[TrainingSession], session: TrainingSession
) -> list[TrainingSession]:
    updated = [s for s in sessions if s.id != session.id]
    updated.append(session)
    return updated


# * Volatile store used by tests & --no-save runs
class InMemorySessionStore:
    def __init__(self, sessions: Iterable[TrainingSession] = ()) -> None:
        self._sessions: list[TrainingSession] = list(sessions)

    def append(self, session: TrainingSession) -> None:
        self._sessions = _with_session(self._sessions, session)

    def list_all(self) -> list[TrainingSession]:
        return list(self._sessions)

    def get(self, session_id: str) -> TrainingSession:
        for session in self._sessions:
            if session.id == session_id:
                return session
        raise SessionNotFoundError(f"No session with id '{session_id}'", session_id)

    def delete(self, session_id: str) -> bool:
        before = len(self._sessions)
        self._sessions = [s for s in self._sessions if s.id != session_id]
        return len(self._sessions) != before

    def clear(self) -> int:
        count = len(self._sessions)
        self._sessions = []
        return count


# * Store backed by a single JSON array file
class JsonSessionStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._sessions: list[TrainingSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._sessions is not None

    # * Load stored sessions once; later calls are no-ops
    def open(self) -> "JsonSessionStore":
        if self._sessions is not None:
            return self
        if not self.path.exists():
            self._sessions = []
            return self
        try:
            data = read_json_safe(self.path)
        except JSONParsingError as e:
            raise SessionReadError(str(e), self.path) from e
        except OSError as e:
            raise SessionReadError(f"Could not read {self.path}: {e}", self.path) from e

        if not isinstance(data, list):
            raise SessionReadError(
                f"Expected a JSON array of sessions in {self.path}", self.path
            )
        try:
            self._sessions = [TrainingSession.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise SessionReadError(
                f"Malformed session record in {self.path}: {e}", self.path
            ) from e
        vlog("STORE", f"Loaded {len(self._sessions)} session(s) from {self.path}")
        return self

    def close(self) -> None:
        self._sessions = None

    def __enter__(self) -> "JsonSessionStore":
        return self.open()

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _loaded(self) -> list[TrainingSession]:
        if self._sessions is None:
            self.open()
        assert self._sessions is not None
        return self._sessions

    # write the full list, committing to memory only after the file is updated
    def _flush(self, sessions: list[TrainingSession]) -> None:
        try:
            write_json_safe([s.to_dict() for s in sessions], self.path)
        except FileWriteError as e:
            raise SessionWriteError(str(e), self.path) from e
        self._sessions = sessions

    def append(self, session: TrainingSession) -> None:
        self._flush(_with_session(self._loaded(), session))
        vlog("STORE", f"Saved session {session.id}")

    def list_all(self) -> list[TrainingSession]:
        return list(self._loaded())

    def get(self, session_id: str) -> TrainingSession:
        for session in self._loaded():
            if session.id == session_id:
                return session
        raise SessionNotFoundError(f"No session with id '{session_id}'", session_id)

    def delete(self, session_id: str) -> bool:
        sessions = self._loaded()
        remaining = [s for s in sessions if s.id != session_id]
        if len(remaining) == len(sessions):
            return False
        self._flush(remaining)
        vlog("STORE", f"Deleted session {session_id}")
        return True

    def clear(self) -> int:
        count = len(self._loaded())
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise SessionWriteError(f"Could not remove {self.path}: {e}", self.path) from e
        self._sessions = []
        vlog("STORE", f"Cleared {count} session(s)")
        return count
