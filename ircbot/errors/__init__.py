"""Error taxonomy and reporting helpers."""

from .handling import error_category, log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    ConnectionSetupError,
    InternalError,
    MalformedLineError,
    NetworkError,
    ParsingError,
    ReadError,
    SessionStateError,
    WriteError,
)

__all__ = [
    "ConfigError",
    "ConnectionSetupError",
    "InternalError",
    "MalformedLineError",
    "NetworkError",
    "ParsingError",
    "ReadError",
    "SessionStateError",
    "WriteError",
    "error_category",
    "log_error",
]
