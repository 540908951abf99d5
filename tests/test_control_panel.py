"""
Tests for the HTTP control panel
"""

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from ircbot.irc.session import IrcSession
from ircbot.web.control_panel import create_app


@pytest_asyncio.fixture
async def panel_session(bot_config):
    s = IrcSession(bot_config)
    yield s
    await s.disconnect()


@pytest_asyncio.fixture
async def client(panel_session):
    async with TestClient(TestServer(create_app(panel_session))) as c:
        yield c


@pytest.mark.asyncio
async def test_form_page(client):
    resp = await client.get("/qg")
    assert resp.status == 200
    assert resp.content_type == "text/html"
    assert 'action="/send"' in await resp.text()


@pytest.mark.asyncio
async def test_send_requires_text(client):
    resp = await client.post("/send", data={"channel": "#alpha"})
    assert resp.status == 400
    assert await resp.json() == {"error": "missing text"}


@pytest.mark.asyncio
async def test_send_before_join_is_not_admitted(client, panel_session):
    resp = await client.get("/send", params={"channel": "#alpha", "text": "hi"})
    assert resp.status == 200
    assert await resp.json() == {"queued": False}
    assert panel_session.outbound.empty()


@pytest.mark.asyncio
async def test_send_after_join_is_queued(client, panel_session):
    panel_session.gate.confirm()
    panel_session.gate.open()
    resp = await client.post("/send", data={"channel": "#alpha", "text": "hi"})
    assert await resp.json() == {"queued": True}
    assert panel_session.outbound.get_nowait() == "PRIVMSG #alpha hi"


@pytest.mark.asyncio
async def test_status_text(client):
    resp = await client.get("/ircbot")
    assert resp.status == 200
    text = await resp.text()
    assert text.startswith("server: irc.example.org\nport: 6667\nssl: false\n")
    assert "channels: #alpha #beta #gamma " in text


@pytest.mark.asyncio
async def test_status_json(client):
    resp = await client.get("/ircbot", params={"format": "json"})
    data = await resp.json()
    assert data["nick"] == "tester"
    assert data["state"] == "CREATED"
    assert data["joined"] is False


@pytest.mark.asyncio
async def test_send_cannot_inject_extra_lines(client, panel_session):
    panel_session.gate.confirm()
    panel_session.gate.open()
    resp = await client.get(
        "/send", params={"channel": "#alpha", "text": "hi\r\nKICK #alpha victim"}
    )
    assert await resp.json() == {"queued": False}
    assert panel_session.outbound.empty()
