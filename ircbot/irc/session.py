"""Session pipeline: owns the transport and runs the concurrent loops."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import TYPE_CHECKING, Any

from ..constants import (
    IRCBOT_INBOUND_QUEUE_SIZE,
    IRCBOT_OUTBOUND_QUEUE_SIZE,
    QUIT_COMMAND,
    USER_MODE,
)
from ..errors.internal import InternalError, NetworkError, SessionStateError
from ..logs.logger import logger
from .dispatcher import Handler, HandlerRegistry, pong, valid_connect
from .error_sink import ErrorSink
from .health import SessionStatusReporter
from .join import ChannelJoiner, JoinGate
from .listener import IRCListener
from .models import SessionState
from .parser import Message
from .transport import Transport, open_transport

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import BotConfig

TransportFactory = Callable[["BotConfig"], Awaitable[Transport]]


class IrcSession:  # pylint: disable=too-many-instance-attributes
    """One long-lived protocol session.

    Tasks started by :meth:`connect` communicate through three queues:
    ``inbound`` (parsed messages for the dispatcher), ``outbound`` (lines for
    the single writer) and ``errors`` (drained by the error sink). All of them
    run on one event loop, so the gate flags need no locking.
    """

    def __init__(
        self, config: BotConfig, transport_factory: TransportFactory | None = None
    ) -> None:
        self.config = config
        self.channels: tuple[str, ...] = tuple(config.channels)
        self.registry = HandlerRegistry()
        self.gate = JoinGate()
        self.transport: Transport | None = None
        self.state = SessionState.CREATED
        self.error: BaseException | None = None
        self.inbound: asyncio.Queue[Message] = asyncio.Queue(
            maxsize=IRCBOT_INBOUND_QUEUE_SIZE
        )
        self.outbound: asyncio.Queue[str] = asyncio.Queue(
            maxsize=IRCBOT_OUTBOUND_QUEUE_SIZE
        )
        self.errors: asyncio.Queue[BaseException] = asyncio.Queue()
        self._transport_factory = transport_factory or open_transport
        self._tasks: list[asyncio.Task[Any]] = []
        self._closed = asyncio.Event()
        self.joiner = ChannelJoiner(self)
        self.error_sink = ErrorSink(self)
        self.status_reporter = SessionStatusReporter(self)
        self.listener: IRCListener | None = None

        # default actions, needed for the session to become usable
        self.add_action("PING", pong)
        self.add_action("MODE", valid_connect)

    @property
    def nick(self) -> str:
        return self.config.nick

    @property
    def closed(self) -> bool:
        return self.state is SessionState.TERMINATED

    def _set_state(self, new_state: SessionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def _spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro, name=f"ircbot-{name}-{self.nick}")
        self._tasks.append(task)
        return task

    def add_action(self, command: str, handler: Handler) -> None:
        self.registry.register(command, handler)

    async def connect(self) -> bool:
        """Open the transport, start the pipeline and join every channel.

        Returns:
            True once JOIN lines for all configured channels are queued,
            False if the session terminated first (the cause is in ``error``).

        Raises:
            SessionStateError: the session was already connected or closed.
        """
        if self.state is not SessionState.CREATED:
            raise SessionStateError(
                f"cannot connect a session in state {self.state.name}"
            )
        self._set_state(SessionState.CONNECTING)
        logger.log_event(
            "irc",
            "connect_start",
            user=self.nick,
            server=self.config.server,
            port=self.config.port,
            encrypted=self.config.encrypted,
        )
        self._spawn(self.error_sink.run(), "errors")

        try:
            self.transport = await self._transport_factory(self.config)
        except InternalError as e:
            self.report_error(e)
            await self.wait_closed()
            return False
        logger.log_event(
            "irc", "connection_established", level=logging.DEBUG, user=self.nick
        )

        self.listener = IRCListener(self, self.transport)
        self._spawn(self._send_loop(self.transport), "send")
        self._spawn(self.listener.listen(), "read")
        self._spawn(self._dispatch_loop(), "dispatch")
        self._spawn(self.joiner.run(), "join")

        await self.send_line(f"USER {self.nick} {USER_MODE} * :{self.nick}")
        await self.send_line(f"NICK {self.nick}")
        if self.closed:
            await self.wait_closed()
            return False
        self._set_state(SessionState.LIVE)
        logger.log_event("irc", "handshake_sent", level=logging.DEBUG, user=self.nick)

        open_waiter = asyncio.ensure_future(self.gate.wait_open())
        closed_waiter = asyncio.ensure_future(self._closed.wait())
        try:
            await asyncio.wait(
                {open_waiter, closed_waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            open_waiter.cancel()
            closed_waiter.cancel()
        if self.closed:
            await self.wait_closed()
            return False
        return self.gate.is_open

    def _reject_line_break(self, line: str) -> bool:
        if "\r" not in line and "\n" not in line:
            return False
        logger.log_event(
            "irc",
            "outbound_rejected",
            level=logging.WARNING,
            user=self.nick,
            line=repr(line),
        )
        return True

    async def _enqueue(self, line: str) -> bool:
        if self.closed or self._reject_line_break(line):
            return False
        if not self.outbound.full():
            self.outbound.put_nowait(line)
            return True
        # A full queue only drains while the send loop runs; stop waiting
        # if the session terminates meanwhile.
        put = asyncio.ensure_future(self.outbound.put(line))
        closed_waiter = asyncio.ensure_future(self._closed.wait())
        try:
            await asyncio.wait({put, closed_waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            closed_waiter.cancel()
            if not put.done():
                put.cancel()
        return put.done() and not put.cancelled()

    async def send_line(self, line: str) -> bool:
        """Queue a protocol control line; bypasses the join gate."""
        return await self._enqueue(line)

    async def send(self, message: Message) -> bool:
        """Queue an application message through the join gate.

        Messages sent before the gate opened are dropped, not buffered, and
        so are messages whose fields embed a line break.

        Returns:
            True if the message was queued for writing.
        """
        line = message.to_wire()
        if self._reject_line_break(line):
            return False
        if not self.gate.admit():
            logger.log_event(
                "irc",
                "outbound_dropped",
                level=logging.WARNING,
                user=self.nick,
                line=line,
            )
            return False
        return await self._enqueue(line)

    async def say(self, text: str, channel: str = "") -> bool:
        return await self.send(Message(command="PRIVMSG", channel=channel, args=(text,)))

    def report_error(self, error: BaseException) -> None:
        self.errors.put_nowait(error)

    async def _send_loop(self, transport: Transport) -> None:
        while True:
            line = await self.outbound.get()
            try:
                await transport.write_line(line)
            except NetworkError as e:
                self.report_error(e)
                return
            logger.log_event(
                "irc", "outbound", level=logging.DEBUG, user=self.nick, line=line
            )

    async def _dispatch_loop(self) -> None:
        while True:
            message = await self.inbound.get()
            logger.log_event(
                "irc", "inbound", level=logging.DEBUG, user=self.nick, raw=message.raw
            )
            await self.registry.dispatch(self, message)
            if self.closed:
                return

    async def disconnect(self) -> None:
        """Send QUIT and close the transport. Safe to call more than once.

        Lines still queued for the send loop are discarded.
        """
        if self.closed:
            # another caller is tearing down; wait until it has finished
            await self._closed.wait()
            return
        self._set_state(SessionState.TERMINATED)
        logger.log_event("irc", "disconnect", user=self.nick)

        current = asyncio.current_task()
        pending = [t for t in self._tasks if t is not current and not t.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if self.transport is not None:
            try:
                await self.transport.write_line(QUIT_COMMAND)
            except NetworkError as e:
                logger.log_event(
                    "irc", "quit_failed", level=logging.DEBUG, user=self.nick, error=str(e)
                )
            await self.transport.close()
        self._closed.set()
        logger.log_event("irc", "disconnected", level=logging.WARNING, user=self.nick)

    async def wait_closed(self) -> None:
        await self._closed.wait()

    def status(self) -> dict[str, Any]:
        return self.status_reporter.get_status()

    def __str__(self) -> str:
        return self.status_reporter.describe()


__all__ = ["IrcSession", "TransportFactory"]
