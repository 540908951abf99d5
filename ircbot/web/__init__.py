"""HTTP control panel package."""

from .control_panel import create_app, start_control_panel, stop_control_panel  # noqa: F401

__all__ = ["create_app", "start_control_panel", "stop_control_panel"]
