from __future__ import annotations

import ast
import string
from pathlib import Path

from ircbot.logs.event_catalog import EVENT_TEMPLATES

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "ircbot"


def _template_fields(template: str) -> set[str]:
    return {
        field.split(".", 1)[0].split("[", 1)[0]
        for _, field, _, _ in string.Formatter().parse(template)
        if field
    }


def _code_references() -> set[tuple[str, str]]:
    """Collect literal (domain, action) pairs passed to ``*.log_event``."""
    refs: set[tuple[str, str]] = set()
    for path in PACKAGE_ROOT.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if not (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr == "log_event"
                and len(node.args) >= 2
            ):
                continue
            domain, action = node.args[0], node.args[1]
            if isinstance(domain, ast.Constant) and isinstance(action, ast.Constant):
                refs.add((domain.value, action.value))
    return refs


def test_event_catalog_placeholders_renderable():
    failures: list[tuple[str, str, str]] = []
    for (domain, action), template in EVENT_TEMPLATES.items():
        dummy = dict.fromkeys(_template_fields(template), "x")
        try:
            template.format(**dummy)
        except (KeyError, IndexError, ValueError) as e:
            failures.append((domain, action, str(e)))
    assert not failures, f"Unrenderable templates: {failures}"


def test_event_template_keys_lowercase():
    for domain, action in EVENT_TEMPLATES:
        assert domain == domain.lower()
        assert action == action.lower()


def test_every_logged_event_has_a_template():
    missing = _code_references() - set(EVENT_TEMPLATES)
    assert not missing, f"Events without templates: {sorted(missing)}"


def test_no_unused_templates():
    unused = set(EVENT_TEMPLATES) - _code_references()
    assert not unused, f"Templates never logged: {sorted(unused)}"
