from __future__ import annotations

import json
import logging
import os
from typing import Any

from ..errors.internal import ConfigError


class ConfigRepository:
    """Reads the JSON configuration file.

    The file holds either the bot settings object itself or an object with
    a ``"bot"`` key. Parsed content is cached until the file's mtime or size
    changes.
    """

    def __init__(self, path: str | os.PathLike[str]):
        if not isinstance(path, str | os.PathLike):
            raise TypeError("path must be str or os.PathLike")
        self.path = str(path)
        self._file_mtime: float | None = None
        self._file_size: int | None = None
        self._cached: dict[str, Any] | None = None

    def load_raw(self) -> dict[str, Any]:
        """Load the raw settings mapping; ``{}`` when the file does not exist.

        Raises:
            ConfigError: the file is unreadable, not JSON, or not an object.
        """
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            logging.debug(f"📁 No configuration file at {self.path}")
            return {}
        if (
            self._cached is not None
            and self._file_mtime == st.st_mtime
            and self._file_size == st.st_size
        ):
            return dict(self._cached)

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"cannot read configuration file: {e}", data={"path": self.path}
            ) from e

        if isinstance(data, dict) and isinstance(data.get("bot"), dict):
            data = data["bot"]
        if not isinstance(data, dict):
            raise ConfigError(
                "configuration file must contain a JSON object",
                data={"path": self.path},
            )
        self._cached = data
        self._file_mtime = st.st_mtime
        self._file_size = st.st_size
        return dict(data)
