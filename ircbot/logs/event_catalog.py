"""Event template catalog loaded from the co-located JSON file."""

from __future__ import annotations

import json
from pathlib import Path

_JSON_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _load_event_templates() -> dict[tuple[str, str], str]:
    with _JSON_PATH.open("r", encoding="utf-8") as f:
        raw: dict[str, dict[str, str]] = json.load(f)
    return {
        (domain, action): template
        for domain, actions in raw.items()
        for action, template in actions.items()
    }


def reload_event_templates() -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates()


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "reload_event_templates"]
