"""Read loop extracted from the session for clarity & testability."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors.internal import MalformedLineError, NetworkError
from ..logs.logger import logger
from .parser import parse_line

if TYPE_CHECKING:  # pragma: no cover
    from .transport import Transport
    from .session import IrcSession


class IRCListener:
    """Owns the read loop: socket line -> Message -> inbound queue."""

    def __init__(self, session: IrcSession, transport: Transport):
        self.session = session
        self.transport = transport

    async def listen(self) -> None:
        logger.log_event(
            "irc", "listener_start", level=logging.DEBUG, user=self.session.nick
        )
        try:
            while True:
                try:
                    message = parse_line(await self.transport.read_line())
                except NetworkError as e:
                    self.session.report_error(e)
                    return
                except MalformedLineError as e:
                    logger.log_event(
                        "irc",
                        "parse_error",
                        level=logging.WARNING,
                        user=self.session.nick,
                        error=str(e),
                        line=e.line,
                    )
                    continue
                await self.session.inbound.put(message)
        finally:
            logger.log_event(
                "irc", "listener_stopped", level=logging.DEBUG, user=self.session.nick
            )
