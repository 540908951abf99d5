"""Line-oriented byte stream over TCP, optionally TLS encrypted."""

from __future__ import annotations

import asyncio
import logging
import ssl
from typing import TYPE_CHECKING

from ..constants import (
    IRCBOT_CONNECT_TIMEOUT,
    IRCBOT_READ_LINE_LIMIT,
    LINE_TERMINATOR,
)
from ..errors.internal import (
    ConnectionSetupError,
    MalformedLineError,
    ReadError,
    WriteError,
)
from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import BotConfig


class Transport:
    """Reads and writes protocol lines on an asyncio stream pair.

    Only the session's send loop writes while the session is live, so no
    write lock is held here.
    """

    def __init__(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self.reader = reader
        self.writer = writer

    @property
    def closed(self) -> bool:
        return self.writer.is_closing()

    async def read_line(self) -> str:
        """Block until one full line is available and return it decoded.

        Raises:
            ReadError: the server closed the stream or the read failed.
            MalformedLineError: the line exceeded the read limit; it has been
                discarded and the stream is positioned at the next line.
        """
        dropped = b""
        while True:
            try:
                data = await self.reader.readuntil(b"\n")
            except asyncio.LimitOverrunError as e:
                # discard what is buffered of the over-long line, keep reading
                chunk = await self._read_exactly(e.consumed)
                dropped = dropped or chunk[:64]
                continue
            except asyncio.IncompleteReadError as e:
                if not e.partial:
                    raise ReadError("connection closed by server") from e
                raise ReadError(
                    "connection closed mid-line", data={"partial": e.partial}
                ) from e
            except OSError as e:
                raise ReadError(f"read failed: {e}") from e
            break
        if dropped:
            raise MalformedLineError(
                "line exceeds read limit",
                line=dropped.decode("utf-8", errors="replace"),
            )
        return data.decode("utf-8", errors="replace").rstrip("\r\n")

    async def _read_exactly(self, n: int) -> bytes:
        try:
            return await self.reader.readexactly(n)
        except asyncio.IncompleteReadError as e:
            raise ReadError("connection closed mid-line") from e
        except OSError as e:
            raise ReadError(f"read failed: {e}") from e

    async def write_line(self, line: str) -> None:
        """Write ``line`` followed by the line terminator.

        Raises:
            WriteError: the line embeds a line break, the stream is closed or
                the write failed.
        """
        if "\r" in line or "\n" in line:
            raise WriteError("line contains a line break", data={"line": line})
        if self.closed:
            raise WriteError("transport is closed", data={"line": line})
        try:
            self.writer.write(f"{line}{LINE_TERMINATOR}".encode())
            await self.writer.drain()
        except (OSError, RuntimeError) as e:
            raise WriteError(f"write failed: {e}", data={"line": line}) from e

    async def close(self) -> None:
        if self.closed:
            return
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (OSError, ssl.SSLError) as e:
            logger.log_event(
                "irc", "close_error", level=logging.DEBUG, error=str(e)
            )


def build_ssl_context(config: BotConfig) -> ssl.SSLContext:
    """Create the client TLS context, loading the certificate pair if set.

    Raises:
        ConnectionSetupError: the certificate or key cannot be loaded.
    """
    context = ssl.create_default_context()
    if not config.tls_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    if config.tls_cert_file and config.tls_key_file:
        try:
            context.load_cert_chain(config.tls_cert_file, config.tls_key_file)
        except (OSError, ssl.SSLError) as e:
            raise ConnectionSetupError(
                f"cannot load client certificate: {e}",
                data={"cert": config.tls_cert_file, "key": config.tls_key_file},
            ) from e
    return context


async def open_transport(config: BotConfig) -> Transport:
    """Connect to the configured server and return a ready Transport.

    Raises:
        ConnectionSetupError: connecting, the TLS handshake or credential
            loading failed, or the connect timeout elapsed.
    """
    ssl_context = build_ssl_context(config) if config.encrypted else None
    logger.log_event(
        "irc",
        "open_connection",
        level=logging.DEBUG,
        user=config.nick,
        server=config.server,
        port=config.port,
        encrypted=config.encrypted,
        timeout=IRCBOT_CONNECT_TIMEOUT,
    )
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(
                config.server,
                config.port,
                ssl=ssl_context,
                limit=IRCBOT_READ_LINE_LIMIT,
            ),
            timeout=IRCBOT_CONNECT_TIMEOUT,
        )
    except TimeoutError as e:
        raise ConnectionSetupError(
            f"connect to {config.address} timed out",
            data={"timeout": IRCBOT_CONNECT_TIMEOUT},
        ) from e
    except (OSError, ssl.SSLError, ValueError) as e:
        # ValueError: host name rejected by the idna codec
        raise ConnectionSetupError(f"connect to {config.address} failed: {e}") from e
    return Transport(reader, writer)


__all__ = ["Transport", "build_ssl_context", "open_transport"]
