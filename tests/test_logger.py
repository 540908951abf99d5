"""
Tests for the structured event logger and logging configuration
"""

import io
import logging

import pytest

from ircbot.logging_config import LoggerConfigurator, log_structured_error
from ircbot.logs import EVENT_TEMPLATES, BotLogger, reload_event_templates


@pytest.fixture
def bot_logger(caplog):
    caplog.set_level(logging.DEBUG, logger="test_ircbot")
    return BotLogger("test_ircbot")


def test_event_templates_loaded():
    assert ("irc", "ready") in EVENT_TEMPLATES
    assert ("web", "send") in EVENT_TEMPLATES


def test_reload_idempotent():
    from ircbot.logs import event_catalog

    before = set(event_catalog.EVENT_TEMPLATES)
    reload_event_templates()
    assert set(event_catalog.EVENT_TEMPLATES) == before


def test_template_formatted_with_context(bot_logger, caplog):
    bot_logger.log_event("irc", "outbound", level=logging.DEBUG, line="NICK tester")
    assert caplog.records[-1].getMessage().endswith("irc >> NICK tester")
    assert caplog.records[-1].levelno == logging.DEBUG


def test_missing_template_key_falls_back_to_raw_template(bot_logger, caplog):
    bot_logger.log_event("irc", "outbound")
    assert "irc >> {line}" in caplog.records[-1].getMessage()


def test_unknown_event_derives_text(bot_logger, caplog):
    bot_logger.log_event("custom_domain", "some_action")
    assert "custom domain: some action" in caplog.records[-1].getMessage()


def test_user_and_channel_prefix(bot_logger, caplog):
    bot_logger.log_event("irc", "join_sent", user="tester", channel="#alpha")
    message = caplog.records[-1].getMessage()
    assert message.startswith("[tester #alpha")
    assert "system" not in message


def test_debug_mode_appends_context(bot_logger, caplog, monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    bot_logger.log_event("irc", "pong", user="tester", reply="PONG :x")
    message = caplog.records[-1].getMessage()
    assert message.startswith("irc_pong")
    assert "reply=PONG :x" in message


def test_log_structured_error(caplog):
    with caplog.at_level(logging.ERROR):
        log_structured_error(
            "network", "Session error", ValueError("bad"), context={"nick": "tester"}
        )
    message = caplog.records[-1].getMessage()
    assert message.startswith("[NETWORK] Session error")
    assert "ValueError: bad" in message
    assert "nick=tester" in message


def test_configurator_installs_colored_handler(monkeypatch):
    import colorlog

    monkeypatch.setenv("DEBUG", "1")
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    stream = io.StringIO()
    try:
        handler = LoggerConfigurator({"stream": stream}).configure()
        assert isinstance(handler.formatter, colorlog.ColoredFormatter)
        assert root.level == logging.DEBUG
        logging.getLogger("ircbot.test").debug("hello colors")
        assert "hello colors" in stream.getvalue()
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
