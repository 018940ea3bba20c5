# cyclewatch/core/exceptions.py
# Custom exception hierarchy for cyclewatch (pure - no I/O operations)

from pathlib import Path
from typing import Any, Dict


# * Format error message for display (pure string formatting, no I/O)
def format_error_message(error_type: str, message: str) -> str:
    return f"[red]{error_type}:[/] {message}"


# * Base exception for cyclewatch
class CycleWatchError(Exception):
    pass


# * Configuration errors
class ConfigurationError(CycleWatchError):
    pass


# * Training parameters rejected before a run starts; errors maps field -> message
class TrainingConfigError(ConfigurationError):
    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = "; ".join(self.errors.values()) if self.errors else "no details"
        super().__init__(f"Invalid training configuration: {details}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(errors={self.errors!r})"


# * Settings value validation failed
class SettingsValidationError(ConfigurationError):
    def __init__(self, message: str, setting_name: str, value: Any):
        super().__init__(message)
        self.setting_name = setting_name
        self.value = value

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"setting_name={self.setting_name!r}, value={self.value!r})"
        )


# * Cycle record sealed twice or w/ an end before its start
class CycleRecordError(CycleWatchError):
    def __init__(self, message: str, cycle_number: int):
        super().__init__(message)
        self.cycle_number = cycle_number

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"cycle_number={self.cycle_number!r})"
        )


# * JSON parsing errors
class JSONParsingError(CycleWatchError):
    pass


# * Base error for session persistence
class SessionStoreError(CycleWatchError):
    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if isinstance(path, str) else path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, path={self.path!r})"


# * Failed to load stored sessions
class SessionReadError(SessionStoreError):
    pass


# * Failed to write stored sessions
class SessionWriteError(SessionStoreError):
    pass


# * Requested session id not present in the store
class SessionNotFoundError(SessionStoreError):
    def __init__(self, message: str, session_id: str):
        super().__init__(message)
        self.session_id = session_id

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"session_id={self.session_id!r})"
        )


# * Base error for file I/O operations
class FileOperationError(CycleWatchError):
    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path) if isinstance(path, str) else path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, path={self.path!r})"


# * Failed to write file
class FileWriteError(FileOperationError):
    pass
