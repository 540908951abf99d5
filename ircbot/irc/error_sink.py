"""Single consumer of the session error queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors.handling import log_error
from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from .session import IrcSession


class ErrorSink:
    """Tears the session down on the first reported error.

    Every error is fatal: there is no retry and no recoverable/fatal
    classification. Parse errors never reach this queue.
    """

    def __init__(self, session: IrcSession) -> None:
        self.session = session

    async def run(self) -> None:
        session = self.session
        error = await session.errors.get()
        session.error = error
        log_error("Session error", error, context={"nick": session.nick})
        logger.log_event(
            "irc",
            "error_fatal",
            level=logging.ERROR,
            user=session.nick,
            error=str(error),
            error_type=type(error).__name__,
        )
        await session.disconnect()
