"""Protocol line grammar and the Message model."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import NICK_SEPARATOR, PREFIX_SIGIL
from ..errors.internal import MalformedLineError


def extract_nick(prefix: str) -> str:
    """Return the origin nick carried by ``prefix``.

    The nick is the text strictly between the sigil and the first separator.
    A separator at index 0 or 1 (or none at all) yields an empty nick.
    """
    i = prefix.find(NICK_SEPARATOR)
    if i > 1:
        return prefix[1:i]
    return ""


@dataclass(frozen=True, slots=True)
class Message:
    """One protocol line, inbound or outbound.

    Inbound messages come from :func:`parse_line` and keep the received text
    in ``raw``. Outbound messages are built directly and leave ``raw`` empty.
    """

    command: str
    channel: str = ""
    args: tuple[str, ...] = ()
    prefix: str = ""
    raw: str = ""

    @property
    def nick(self) -> str:
        return extract_nick(self.prefix)

    @property
    def params(self) -> tuple[str, ...]:
        """Every field after the command token, as received."""
        fields = self.raw.split()
        start = 2 if self.prefix else 1
        return tuple(fields[start:])

    def to_wire(self) -> str:
        # An empty channel deliberately yields a double space.
        return f"{self.command} {self.channel} {' '.join(self.args)}"


def parse_line(line: str) -> Message:
    """Parse one protocol line (without its terminator) into a Message.

    Raises:
        MalformedLineError: the line is blank, or a prefixed line lacks its
            command or first argument field.
    """
    fields = line.split()
    if not fields:
        raise MalformedLineError("empty line", line)

    if not line.startswith(PREFIX_SIGIL):
        # message sent by the server itself
        return Message(command=fields[0], args=tuple(fields[1:]), raw=line)

    if len(fields) < 2:
        raise MalformedLineError(
            "malformed command line: missing command field", line
        )
    if len(fields) < 3:
        raise MalformedLineError(
            "malformed command line: missing argument field", line
        )
    return Message(
        command=fields[1],
        channel=fields[2].removeprefix(PREFIX_SIGIL),
        args=tuple(fields[3:]),
        prefix=fields[0],
        raw=line,
    )


__all__ = ["Message", "extract_nick", "parse_line"]
