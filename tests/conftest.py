import pytest
import pytest_asyncio

from ircbot.config.model import BotConfig
from ircbot.irc.session import IrcSession
from tests.fixtures.config_fixtures import MOCK_BOT_CONFIG
from tests.fixtures.fake_transport import FakeTransport


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer IRCBOT_* / DEBUG settings out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("IRCBOT_") or name == "DEBUG":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def bot_config() -> BotConfig:
    return BotConfig.from_dict(MOCK_BOT_CONFIG)


@pytest_asyncio.fixture
async def transport() -> FakeTransport:
    return FakeTransport()


@pytest_asyncio.fixture
async def session(bot_config, transport):
    async def factory(_config):
        return transport

    s = IrcSession(bot_config, transport_factory=factory)
    yield s
    await s.disconnect()
