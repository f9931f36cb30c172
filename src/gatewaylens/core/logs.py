"""Log helper functions for creating LogEntry objects."""

import sys
import time
import traceback

from gatewaylens.core.models import LogEntry


def log(
    level: str,
    message: str,
    **attributes: str | int | float | bool,
) -> LogEntry:
    """Create a log entry with automatic timestamp.

    Args:
        level: Log level (e.g., "INFO", "ERROR", "DEBUG")
        message: The log message
        **attributes: Additional structured fields

    Returns:
        LogEntry with current timestamp
    """
    return LogEntry(
        timestamp=time.time(),
        level=level,
        message=message,
        attributes=dict(attributes),
    )


def warn(message: str, **attributes: str | int | float | bool) -> LogEntry:
    """Create a WARN log entry with automatic timestamp."""
    return log("WARN", message, **attributes)


def log_exception(message: str, **attributes: str | int | float | bool) -> LogEntry:
    """Create an ERROR log entry describing the exception being handled.

    Must be called from inside an ``except`` block. Outside of one, the
    entry is created without exception details.

    Args:
        message: The log message
        **attributes: Additional structured fields

    Returns:
        LogEntry with ERROR level and exc_type/exc_message/exc_traceback
        attributes when an exception is active
    """
    exc_type, exc_value, exc_tb = sys.exc_info()
    details: dict[str, str | int | float | bool] = dict(attributes)
    if exc_type is not None:
        details["exc_type"] = exc_type.__name__
        details["exc_message"] = str(exc_value)
        details["exc_traceback"] = "".join(
            traceback.format_exception(exc_type, exc_value, exc_tb)
        )
    return log("ERROR", message, **details)
