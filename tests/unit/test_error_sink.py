"""
Unit tests for ErrorSink.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from ircbot.errors.internal import ReadError, WriteError
from ircbot.irc.error_sink import ErrorSink


class TestErrorSink:
    """Test class for ErrorSink functionality."""

    def make_session(self):
        return SimpleNamespace(
            nick="tester",
            errors=asyncio.Queue(),
            error=None,
            disconnect=AsyncMock(),
        )

    @pytest.mark.asyncio
    async def test_first_error_disconnects_session(self):
        session = self.make_session()
        error = ReadError("connection closed by server")
        session.errors.put_nowait(error)

        await asyncio.wait_for(ErrorSink(session).run(), timeout=1)

        assert session.error is error
        session.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_waits_for_an_error(self):
        session = self.make_session()
        task = asyncio.create_task(ErrorSink(session).run())
        await asyncio.sleep(0.01)
        assert not task.done()
        session.disconnect.assert_not_awaited()

        session.errors.put_nowait(WriteError("write failed"))
        await asyncio.wait_for(task, timeout=1)
        assert isinstance(session.error, WriteError)

    @pytest.mark.asyncio
    async def test_any_exception_is_fatal(self):
        session = self.make_session()
        session.errors.put_nowait(RuntimeError("unexpected"))
        await asyncio.wait_for(ErrorSink(session).run(), timeout=1)
        session.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_error_is_logged_structured(self, caplog):
        session = self.make_session()
        session.errors.put_nowait(ReadError("connection closed by server"))
        with caplog.at_level("ERROR"):
            await ErrorSink(session).run()
        assert any("[NETWORK]" in r.getMessage() for r in caplog.records)
