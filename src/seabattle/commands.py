from dataclasses import dataclass
from typing import Union

from .coord_utils import coord_to_xy


class CommandParseError(Exception):
    """Raised when a line of local input is not a valid command."""


@dataclass(frozen=True)
class FireCommand:
    x: int
    y: int


@dataclass(frozen=True)
class QuitCommand:
    pass


Command = Union[FireCommand, QuitCommand]


def parse_command(line: str) -> Command:
    """Parse one line typed by the local player: a coordinate such as ``C4``, or ``QUIT``."""
    if line is None:
        raise CommandParseError("No command to parse")
    raw = line.strip().upper()
    if not raw:
        raise CommandParseError("Empty command")
    if raw == "QUIT":
        return QuitCommand()
    try:
        x, y = coord_to_xy(raw)
    except ValueError:
        raise CommandParseError(f"Invalid coordinate: {raw} (use A-H then 1-8, e.g. C4)") from None
    return FireCommand(x=x, y=y)
