# cyclewatch/cli/decorators.py
# CLI decorator for error handling w/ Rich output

import functools
from typing import Any, Callable, TypeVar, cast

from ..core.exceptions import (
    ConfigurationError,
    CycleWatchError,
    FileOperationError,
    JSONParsingError,
    SessionNotFoundError,
    SessionStoreError,
    TrainingConfigError,
    format_error_message,
)

F = TypeVar("F", bound=Callable[..., Any])


# * Decorator for handling cyclewatch errors in CLI commands w/ Rich output
def handle_cyclewatch_error(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        # ! Lazy import to avoid circular dependencies
        from ..cw_io.console import console

        try:
            return func(*args, **kwargs)
        except TrainingConfigError as e:
            console.print(format_error_message("Invalid Training Configuration", ""))
            for name, message in e.errors.items():
                console.print(f"  [red]•[/] {name}: {message}")
            raise SystemExit(1)
        except ConfigurationError as e:
            console.print(format_error_message("Configuration Error", str(e)))
            raise SystemExit(1)
        except SessionNotFoundError as e:
            console.print(format_error_message("Not Found", str(e)))
            raise SystemExit(1)
        except SessionStoreError as e:
            console.print(format_error_message("Session Store Error", str(e)))
            raise SystemExit(1)
        except JSONParsingError as e:
            console.print(format_error_message("JSON Parsing Error", str(e)))
            raise SystemExit(1)
        except FileOperationError as e:
            console.print(format_error_message("File Error", str(e)))
            raise SystemExit(1)
        except CycleWatchError as e:
            console.print(format_error_message("Error", str(e)))
            raise SystemExit(1)

    return cast(F, wrapper)
