from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
    ParsingError,
    SessionStateError,
)


def error_category(error: BaseException) -> str:
    """Return the structured-log category for an exception."""
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, SessionStateError):
        return "session"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error category is derived from the exception type and any structured
    ``data`` carried by an InternalError is merged into the context.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=error_category(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
