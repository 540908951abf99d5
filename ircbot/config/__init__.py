"""Configuration package exports.

Unified access point for the configuration repository/model and the
procedural API used by the entry point.
"""

from .config_loader import ConfigLoader  # noqa: F401
from .core import get_configuration, print_config_summary  # noqa: F401
from .model import BotConfig
from .repository import ConfigRepository

__all__ = [
    "BotConfig",
    "ConfigLoader",
    "ConfigRepository",
    "get_configuration",
    "print_config_summary",
]
