#!/usr/bin/env python3
"""
Main entry point for the IRC bot
"""

import asyncio
import logging
import signal
import sys

from .config import get_configuration, print_config_summary
from .errors.handling import log_error
from .irc.session import IrcSession
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .web.control_panel import start_control_panel, stop_control_panel


_shutdown_tasks: set[asyncio.Task[None]] = set()


def _install_signal_handlers(session: IrcSession) -> None:
    """Disconnect the session on SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()

    def handler(signum: int) -> None:
        logger.log_event("app", "signal", level=logging.WARNING, signal=signum)
        task = loop.create_task(session.disconnect())
        _shutdown_tasks.add(task)
        task.add_done_callback(_shutdown_tasks.discard)

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handler, sig)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            pass


async def main() -> int:
    """Run one session until it terminates.

    Returns:
        Process exit status: 1 when the session ended with an error.
    """
    logger.log_event("app", "start")
    config = get_configuration()
    print_config_summary(config)

    session = IrcSession(config)
    _install_signal_handlers(session)

    runner = None
    if config.web_enable:
        runner = await start_control_panel(session, config.web_port)
    try:
        if await session.connect():
            logger.log_event(
                "irc", "live", user=session.nick, channels=len(session.channels)
            )
        await session.wait_closed()
    finally:
        if runner is not None:
            await stop_control_panel(runner)
        await session.disconnect()
        logger.log_event("app", "shutdown")
    return 1 if session.error is not None else 0


def run() -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: always, with the session's exit status.
    """
    LoggerConfigurator().configure()
    if len(sys.argv) > 1 and sys.argv[1] == "--check-config":
        config = get_configuration()
        logging.info(f"✅ Configuration check passed - {config.address}")
        sys.exit(0)
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
