"""Procedural configuration API used by the entry point."""

from __future__ import annotations

import logging
import sys

from ..errors.handling import log_error
from ..errors.internal import ConfigError
from .config_loader import ConfigLoader
from .model import BotConfig


def get_configuration(config_file: str | None = None) -> BotConfig:
    """Load and validate the bot configuration.

    Returns:
        The validated BotConfig.

    Raises:
        SystemExit: If no configuration is found or it fails validation.
    """
    loader = ConfigLoader()
    try:
        return loader.get_configuration(config_file)
    except ConfigError as e:
        log_error("Configuration error", e)
        sys.exit(1)


def print_config_summary(config: BotConfig) -> None:
    settings = config.to_dict()
    channels = settings.pop("channels", [])
    summary = ", ".join(f"{key}={value}" for key, value in settings.items())
    logging.debug(f"📊 Configuration summary ({summary})")
    for channel in channels:
        logging.debug(f"📺 Channel {channel}")
