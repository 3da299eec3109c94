"""
Centralized error handling utilities.

| Scenario | Use This |
|----------|----------|
| Serial write failed | `raise wrap_serial_error(e, port=self.port)` |
| Config file invalid | `raise wrap_pydantic_error(e, str(path)) from e` |
| Show an error to the operator | `message, hint = format_error_for_display(e)` |
| Critical section with auto-logging | `with ErrorContext("open dmx transport"): ...` |

Low-level library errors are converted at the boundary where they occur, so
the rest of the console only ever sees CueDeckError subclasses.
"""

import logging
from typing import Optional

from .base import CueDeckError
from .config import ConfigFileInvalidError, ConfigValidationError
from .dmx import TransportError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("open dmx transport", logger_instance=logger):
            transport.open()
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log any exception; suppress it only when re_raise is False."""
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, CueDeckError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> CueDeckError:
    """
    Convert Pydantic validation errors to cuedeck exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", ("unknown",)))
            return ConfigValidationError(
                field=field,
                value=first_error.get("input"),
                error_msg=first_error.get("msg", "validation failed"),
                file_path=file_path,
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get("loc", ("unknown",)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")
            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)
            return ConfigValidationError(
                field="multiple fields", value=None, error_msg=combined_msg, file_path=file_path
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def wrap_serial_error(error: Exception, port: Optional[str] = None) -> TransportError:
    """
    Convert a pyserial (or OS) error into a TransportError.

    Args:
        error: The original exception
        port: Serial port path

    Returns:
        TransportError with a message matching the failure
    """
    import serial

    error_str = str(error)
    lowered = error_str.lower()

    if isinstance(error, serial.SerialTimeoutException) or "timeout" in lowered:
        return TransportError("DMX write timed out", port=port, original_error=error_str)

    if "permission denied" in lowered or "access is denied" in lowered:
        return TransportError(
            "Permission denied opening the DMX interface",
            port=port,
            original_error=error_str,
            recovery_hint="Add your user to the 'dialout' group or run with access to the port.",
        )

    if "no such file" in lowered or "could not open port" in lowered or "not found" in lowered:
        return TransportError("DMX interface not found", port=port, original_error=error_str)

    return TransportError("DMX interface write failed", port=port, original_error=error_str)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for operator display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, CueDeckError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
