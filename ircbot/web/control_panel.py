"""HTTP control panel for a running session.

Only two operations of the session are used: queueing a chat line through
the join gate and reading the session status.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiohttp import web

from ..constants import IRCBOT_WEB_SHUTDOWN_TIMEOUT
from ..logs.logger import logger

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.session import IrcSession

SESSION_KEY = web.AppKey("session", object)

_FORM_PAGE = """<!DOCTYPE html>
<html>
<head><title>ircbot</title></head>
<body>
<form action="/send" method="post">
  <input type="text" name="channel" placeholder="#channel">
  <input type="text" name="text" placeholder="message" autofocus>
  <input type="submit" value="Send">
</form>
</body>
</html>
"""


def _session(request: web.Request) -> IrcSession:
    return request.app[SESSION_KEY]  # type: ignore[return-value]


async def handle_form(request: web.Request) -> web.Response:
    return web.Response(text=_FORM_PAGE, content_type="text/html")


async def handle_send(request: web.Request) -> web.Response:
    session = _session(request)
    params: dict[str, str] = dict(request.query)
    if request.method == "POST":
        form = await request.post()
        params.update({k: v for k, v in form.items() if isinstance(v, str)})
    text = params.get("text", "").strip()
    if not text:
        logger.log_event(
            "web", "send_rejected", level=logging.WARNING, user=session.nick
        )
        return web.json_response({"error": "missing text"}, status=400)
    channel = params.get("channel", "").strip()
    admitted = await session.say(text, channel=channel)
    logger.log_event(
        "web",
        "send",
        level=logging.DEBUG,
        user=session.nick,
        channel=channel,
        admitted=admitted,
    )
    return web.json_response({"queued": admitted})


async def handle_status(request: web.Request) -> web.Response:
    session = _session(request)
    if request.query.get("format") == "json":
        return web.json_response(session.status())
    return web.Response(text=str(session))


def create_app(session: IrcSession) -> web.Application:
    app = web.Application()
    app[SESSION_KEY] = session
    app.router.add_get("/qg", handle_form)
    app.router.add_route("GET", "/send", handle_send)
    app.router.add_route("POST", "/send", handle_send)
    app.router.add_get("/ircbot", handle_status)
    return app


async def start_control_panel(
    session: IrcSession, port: int, host: str = "0.0.0.0"
) -> web.AppRunner:
    """Serve the control panel; stop it with ``await runner.cleanup()``."""
    runner = web.AppRunner(
        create_app(session), shutdown_timeout=IRCBOT_WEB_SHUTDOWN_TIMEOUT
    )
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.log_event("web", "started", user=session.nick, port=port)
    return runner


async def stop_control_panel(runner: web.AppRunner) -> None:
    await runner.cleanup()
    logger.log_event("web", "stopped", level=logging.DEBUG)


__all__ = ["create_app", "start_control_panel", "stop_control_panel"]
