"""Coordinate names shared by the wire protocol and the console.

A cell is named by its column letter followed by its row digit, ``A1`` through
``H8``; the same two characters are the bytes of a move on the wire.
"""

import re
from typing import Tuple

from .config import FIELD_SIZE

COORD_RE = re.compile(rf"^[A-{chr(ord('A') + FIELD_SIZE - 1)}][1-{FIELD_SIZE}]$")


def coord_to_xy(coord: str) -> Tuple[int, int]:
    """Convert a name like ``'C4'`` to zero-based ``(x, y)``.

    Raises:
        ValueError: *coord* does not name a cell on the field.
    """
    if not COORD_RE.fullmatch(coord):
        raise ValueError(f"{coord!r} is not a cell between A1 and {format_coord(FIELD_SIZE - 1, FIELD_SIZE - 1)}")
    return ord(coord[0]) - ord("A"), ord(coord[1]) - ord("1")


def format_coord(x: int, y: int) -> str:
    """Convert zero-based ``(x, y)`` to a name like ``'A1'``."""
    if not (0 <= x < FIELD_SIZE and 0 <= y < FIELD_SIZE):
        raise ValueError(f"coordinate ({x}, {y}) is outside the field")
    return f"{chr(ord('A') + x)}{y + 1}"
