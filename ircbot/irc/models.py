"""Shared IRC session data models."""

from __future__ import annotations

from enum import Enum, auto


class SessionState(Enum):
    CREATED = auto()
    CONNECTING = auto()
    LIVE = auto()
    TERMINATED = auto()
