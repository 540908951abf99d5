"""
Configuration constants for the IRC bot engine

This module contains the tunables used by the session pipeline and the
control panel. Each constant can be overridden by setting an environment
variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Protocol grammar
PREFIX_SIGIL = ":"  # Marks a line carrying an origin prefix
NICK_SEPARATOR = "!"  # Separates nick from user@host inside the prefix
LINE_TERMINATOR = "\r\n"  # Written after every outbound line

# Handshake / session lines
USER_MODE = "8"  # Mode field of the USER registration line
QUIT_COMMAND = "QUIT"

# Server defaults
DEFAULT_IRC_PORT = 6667
DEFAULT_WEB_PORT = 8080

# Transport
IRCBOT_CONNECT_TIMEOUT = _get_env_float(
    "IRCBOT_CONNECT_TIMEOUT", 15.0
)  # Seconds allowed for TCP/TLS connection setup
IRCBOT_READ_LINE_LIMIT = _get_env_int(
    "IRCBOT_READ_LINE_LIMIT", 65536
)  # Maximum bytes buffered while waiting for one line

# Pipeline queues (size 1 keeps reader/dispatcher/writer in near lock-step)
IRCBOT_INBOUND_QUEUE_SIZE = _get_env_int("IRCBOT_INBOUND_QUEUE_SIZE", 1)
IRCBOT_OUTBOUND_QUEUE_SIZE = _get_env_int("IRCBOT_OUTBOUND_QUEUE_SIZE", 1)

# Control panel
IRCBOT_WEB_SHUTDOWN_TIMEOUT = _get_env_float(
    "IRCBOT_WEB_SHUTDOWN_TIMEOUT", 5.0
)  # Grace period for in-flight HTTP requests on shutdown
