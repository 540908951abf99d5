from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import DEFAULT_IRC_PORT, DEFAULT_WEB_PORT


class BotConfig(BaseModel):
    """Identity, server and channel configuration of one bot session.

    Attributes:
        nick: Nickname used for both the USER and NICK registration lines.
        server: Host name of the chat server.
        port: TCP port of the chat server.
        channels: Channels to join, in join order (e.g. ``#python``).
        encrypted: Connect over TLS.
        tls_cert_file: Client certificate presented during the TLS handshake.
        tls_key_file: Private key matching ``tls_cert_file``.
        tls_verify: Verify the server certificate and host name.
        web_enable: Start the HTTP control panel.
        web_port: Port of the HTTP control panel.
    """

    nick: str = Field(min_length=1, max_length=30)
    server: str = Field(min_length=1)
    port: int = Field(default=DEFAULT_IRC_PORT, ge=1, le=65535)
    channels: list[str] = Field(default_factory=list)
    encrypted: bool = False
    tls_cert_file: str | None = None
    tls_key_file: str | None = None
    tls_verify: bool = True
    web_enable: bool = False
    web_port: int = Field(default=DEFAULT_WEB_PORT, ge=1, le=65535)

    @field_validator("nick", "server", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        if any(ch.isspace() for ch in v) or v.startswith(":"):
            raise ValueError("nick must be a single token not starting with ':'")
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        """Strip whitespace, drop empties and duplicates; keep configured order.

        A comma separated string is accepted as well.
        """
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list | tuple):
            raise ValueError("channels must be a list")
        validated = []
        for c in v:
            if isinstance(c, str):
                stripped = c.strip()
                if stripped:
                    if any(ch.isspace() for ch in stripped):
                        raise ValueError(f"invalid channel name: {stripped!r}")
                    validated.append(stripped)
        return list(dict.fromkeys(validated))

    @model_validator(mode="after")
    def validate_tls_pair(self) -> BotConfig:
        if bool(self.tls_cert_file) != bool(self.tls_key_file):
            raise ValueError("tls_cert_file and tls_key_file must be set together")
        return self

    @property
    def address(self) -> str:
        return f"{self.server}:{self.port}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BotConfig:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
