"""Handler registry: routes inbound messages to callbacks by command."""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol

from ..logs.logger import logger
from .parser import Message

if TYPE_CHECKING:  # pragma: no cover
    from .session import IrcSession


class Handler(Protocol):
    """Reacts to one inbound message.

    May be a plain function or a coroutine function; it returns nothing and
    may enqueue further messages through the session.
    """

    def __call__(
        self, session: IrcSession, message: Message
    ) -> Awaitable[None] | None: ...


class HandlerRegistry:
    """Append-only mapping of command keyword to ordered handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def register(self, command: str, handler: Handler) -> None:
        self._handlers[command].append(handler)

    def handlers_for(self, command: str) -> list[Handler]:
        return list(self._handlers.get(command, ()))

    def commands(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, session: IrcSession, message: Message) -> int:
        """Run every handler registered for ``message.command``, in order.

        Each handler finishes before the next starts. An exception raised by
        one handler is logged and does not prevent the remaining ones from
        running.

        Returns:
            The number of handlers invoked (0 when none is registered).
        """
        handlers = self.handlers_for(message.command)
        for handler in handlers:
            try:
                result = handler(session, message)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:  # noqa: BLE001
                logger.log_event(
                    "irc",
                    "handler_error",
                    level=logging.ERROR,
                    user=session.nick,
                    command=message.command,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    error_type=type(e).__name__,
                )
        return len(handlers)


async def pong(session: IrcSession, message: Message) -> None:
    """Answer a server keep-alive, echoing the ping arguments."""
    reply = " ".join(("PONG", *message.params))
    await session.send_line(reply)
    logger.log_event(
        "irc", "pong", level=logging.DEBUG, user=session.nick, reply=reply
    )


def valid_connect(session: IrcSession, message: Message) -> None:
    """Treat the first MODE line as confirmation that the handshake succeeded."""
    if session.gate.confirm():
        logger.log_event("irc", "ready", user=session.nick)


__all__ = ["Handler", "HandlerRegistry", "pong", "valid_connect"]
