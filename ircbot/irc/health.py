"""Session status read model used by the control panel."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .session import IrcSession


class SessionStatusReporter:
    def __init__(self, host: IrcSession) -> None:
        self.host = host

    def get_status(self) -> dict[str, Any]:
        host = self.host
        config = host.config
        return {
            "nick": host.nick,
            "server": config.server,
            "port": config.port,
            "encrypted": config.encrypted,
            "channels": list(host.channels),
            "state": host.state.name,
            "ready": host.gate.ready,
            "joined": host.gate.is_open,
            "handlers": {
                command: len(host.registry.handlers_for(command))
                for command in host.registry.commands()
            },
            "error": str(host.error) if host.error is not None else None,
        }

    def describe(self) -> str:
        """Plain-text summary: server, port, ssl flag and channels."""
        config = self.host.config
        s = f"server: {config.server}\n"
        s += f"port: {config.port}\n"
        s += f"ssl: {str(config.encrypted).lower()}\n"
        if self.host.channels:
            s += "channels: "
            for channel in self.host.channels:
                s += f"{channel} "
        return s
