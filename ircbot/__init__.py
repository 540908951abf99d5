"""ircbot: asyncio client engine for a line-oriented chat protocol."""

__version__ = "0.1.0"
