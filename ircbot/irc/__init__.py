"""IRC subsystem package.

Contains the message grammar, handler registry, transport, join gate, error
sink and the session pipeline tying them together.
"""

from .dispatcher import Handler, HandlerRegistry, pong, valid_connect  # noqa: F401
from .error_sink import ErrorSink  # noqa: F401
from .health import SessionStatusReporter  # noqa: F401
from .join import ChannelJoiner, JoinGate  # noqa: F401
from .listener import IRCListener  # noqa: F401
from .models import SessionState  # noqa: F401
from .parser import Message, extract_nick, parse_line  # noqa: F401
from .session import IrcSession  # noqa: F401
from .transport import Transport, open_transport  # noqa: F401

__all__ = [
    "ChannelJoiner",
    "ErrorSink",
    "Handler",
    "HandlerRegistry",
    "IRCListener",
    "IrcSession",
    "JoinGate",
    "Message",
    "SessionState",
    "SessionStatusReporter",
    "Transport",
    "extract_nick",
    "open_transport",
    "parse_line",
    "pong",
    "valid_connect",
]
