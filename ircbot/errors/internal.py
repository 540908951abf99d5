"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the session pipeline. Raw
socket / ssl / asyncio errors never leave the transport layer; they are
wrapped into one of these classes first.

Classes:
  InternalError         – Base for all internal errors.
  NetworkError          – Transport failures; always fatal to a session.
  ConnectionSetupError  – Connect, TLS or credential loading failed.
  ReadError             – The stream closed or broke while reading a line.
  WriteError            – Writing a line to the stream failed.
  ParsingError          – Protocol text could not be interpreted.
  MalformedLineError    – One inbound line is malformed; skipped, not fatal.
  SessionStateError     – An operation was called in the wrong session state.
  ConfigError           – The configuration file or environment is invalid.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Every NetworkError reaching the error sink terminates the session; there
    is no retry.
    """


class ConnectionSetupError(NetworkError):
    """Raised when the transport cannot be opened.

    Covers DNS / TCP connect failures, connect timeouts, TLS handshake
    failures and unreadable certificate or key files.
    """


class ReadError(NetworkError):
    """Raised when reading a line fails or the server closed the stream."""


class WriteError(NetworkError):
    """Raised when a line cannot be written to the stream."""


class ParsingError(InternalError):
    """Exception raised when protocol text cannot be interpreted."""


class MalformedLineError(ParsingError):
    """A single inbound line does not follow the line grammar.

    Attributes:
        line: The offending raw line.
    """

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message, data={"line": line})
        self.line = line


class SessionStateError(InternalError):
    """Raised when a session operation is not valid in the current state."""


class ConfigError(InternalError):
    """Raised when configuration cannot be loaded or fails validation."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ConnectionSetupError",
    "ReadError",
    "WriteError",
    "ParsingError",
    "MalformedLineError",
    "SessionStateError",
    "ConfigError",
]
