# cyclewatch/cw_io/__init__.py
# Package initialization & exports for cyclewatch I/O: console, JSON files, session storage & export

from .generics import (
    write_json_safe,
    write_text_safe,
    read_json_safe,
    ensure_parent,
)
from .session_store import (
    SessionStore,
    JsonSessionStore,
    InMemorySessionStore,
)
from .session_export import ExportFormat, export_session

__all__ = [
    "write_json_safe",
    "write_text_safe",
    "read_json_safe",
    "ensure_parent",
    "SessionStore",
    "JsonSessionStore",
    "InMemorySessionStore",
    "ExportFormat",
    "export_session",
]
