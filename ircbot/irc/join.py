"""Join gate and join routine."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from .session import IrcSession


class JoinGate:
    """Keeps application traffic off the wire until channels are joined.

    Two one-shot signals: ``confirmed`` fires when the server acknowledged
    the handshake, ``joined`` fires once JOIN lines for every configured
    channel have been queued. Only ``joined`` admits outbound messages.
    """

    def __init__(self) -> None:
        self._confirmed = asyncio.Event()
        self._joined = asyncio.Event()

    @property
    def ready(self) -> bool:
        return self._confirmed.is_set()

    @property
    def is_open(self) -> bool:
        return self._joined.is_set()

    def confirm(self) -> bool:
        """Record the handshake confirmation; True only on the first call."""
        if self._confirmed.is_set():
            return False
        self._confirmed.set()
        return True

    def open(self) -> None:
        self._joined.set()

    def admit(self) -> bool:
        return self._joined.is_set()

    async def wait_confirmed(self) -> None:
        await self._confirmed.wait()

    async def wait_open(self) -> None:
        await self._joined.wait()


class ChannelJoiner:
    """Sends one JOIN per configured channel once the handshake is confirmed."""

    def __init__(self, session: IrcSession) -> None:
        self.session = session

    async def run(self) -> None:
        session = self.session
        logger.log_event(
            "irc",
            "join_wait",
            level=logging.DEBUG,
            user=session.nick,
            channels=len(session.channels),
        )
        await session.gate.wait_confirmed()
        for channel in session.channels:
            await session.send_line(f"JOIN {channel}")
            logger.log_event("irc", "join_sent", user=session.nick, channel=channel)
        session.gate.open()
        logger.log_event(
            "irc", "join_complete", user=session.nick, channels=len(session.channels)
        )


__all__ = ["ChannelJoiner", "JoinGate"]
