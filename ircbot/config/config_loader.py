"""Configuration loading utilities."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from .model import BotConfig
from .repository import ConfigRepository

DEFAULT_CONFIG_FILE = "ircbot.conf"
ENV_PREFIX = "IRCBOT_"

# Environment variables that override file settings (suffix after ENV_PREFIX).
_ENV_FIELDS = (
    "nick",
    "server",
    "port",
    "channels",
    "encrypted",
    "tls_cert_file",
    "tls_key_file",
    "tls_verify",
    "web_enable",
    "web_port",
)


class ConfigLoader:
    """Builds a validated BotConfig from the config file and environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def config_file(self) -> str:
        return self.environ.get("IRCBOT_CONF_FILE", DEFAULT_CONFIG_FILE)

    def env_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        for field in _ENV_FIELDS:
            value = self.environ.get(f"{ENV_PREFIX}{field.upper()}")
            if value is not None and value != "":
                # pydantic coerces "6667" / "true" in lax mode
                overrides[field] = value
        return overrides

    def load_raw(self, config_file: str | None = None) -> dict[str, Any]:
        repo = ConfigRepository(config_file or self.config_file())
        raw = repo.load_raw()
        raw.update(self.env_overrides())
        return raw

    def get_configuration(self, config_file: str | None = None) -> BotConfig:
        """Load and validate the bot configuration.

        Raises:
            ConfigError: no settings were found or validation failed.
        """
        path = config_file or self.config_file()
        raw = self.load_raw(path)
        if not raw:
            raise ConfigError("no configuration found", data={"path": path})
        try:
            config = BotConfig.from_dict(raw)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(
                f"invalid configuration: {problems}", data={"path": path}
            ) from e
        logging.info(
            f"✅ Configuration loaded nick={config.nick} server={config.address}"
        )
        return config
