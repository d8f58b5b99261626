"""Wire encoding for moves and shot results.

There is no framing: every message has a fixed size.

Move   (2 bytes) : column letter 'A'-'H' followed by row digit '1'-'8'
Result (1 byte)  : '0' = miss, '1' = hit, '2' = kill
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Final, Tuple

from .coord_utils import coord_to_xy, format_coord
from .field import ShotResult

logger = logging.getLogger(__name__)

MOVE_LEN: Final[int] = 2
RESULT_LEN: Final[int] = 1


class ProtocolError(Exception):
    """Base for wire-level problems; any of them ends the game."""


class IncompleteError(ProtocolError):
    """Raised when the stream closes before a full message could be read."""


class MalformedMoveError(ProtocolError):
    """Raised when two move bytes do not name a cell on the field."""


class MalformedResultError(ProtocolError):
    """Raised when a result byte is not one of '0', '1', '2'."""


def encode_move(x: int, y: int) -> bytes:
    """Turn zero-based (*x*, *y*) into the two-byte move, e.g. (0, 0) -> b'A1'."""
    return format_coord(x, y).encode("ascii")


def decode_move(data: bytes) -> Tuple[int, int]:
    """Parse a two-byte move into zero-based (x, y)."""
    if len(data) != MOVE_LEN:
        raise MalformedMoveError(f"move must be {MOVE_LEN} bytes, got {len(data)}")
    try:
        return coord_to_xy(data.decode("ascii"))
    except ValueError:
        raise MalformedMoveError(f"move {data!r} is outside the field") from None


def encode_result(result: ShotResult) -> bytes:
    return bytes((ord("0") + int(result),))


def decode_result(data: bytes) -> ShotResult:
    if len(data) != RESULT_LEN:
        raise MalformedResultError(f"result must be {RESULT_LEN} byte, got {len(data)}")
    try:
        return ShotResult(data[0] - ord("0"))
    except ValueError:
        raise MalformedResultError(f"unknown result byte {data!r}") from None


# ---------------------------------------------------------------------------
# Convenience wrappers for file-like objects
# ---------------------------------------------------------------------------


def send_move(w: BinaryIO, x: int, y: int) -> bool:
    """Write a move to *w*; False if the connection failed."""
    from .io_utils import write_exact

    return write_exact(w, encode_move(x, y))


def recv_move(r: BinaryIO) -> Tuple[int, int]:
    """Blocking helper that returns the next decoded move from *r*."""
    from .io_utils import read_exact

    return decode_move(read_exact(r, MOVE_LEN))


def send_result(w: BinaryIO, result: ShotResult) -> bool:
    from .io_utils import write_exact

    return write_exact(w, encode_result(result))


def recv_result(r: BinaryIO) -> ShotResult:
    from .io_utils import read_exact

    return decode_result(read_exact(r, RESULT_LEN))


__all__ = [
    "ProtocolError",
    "IncompleteError",
    "MalformedMoveError",
    "MalformedResultError",
    "encode_move",
    "decode_move",
    "encode_result",
    "decode_result",
    "send_move",
    "recv_move",
    "send_result",
    "recv_result",
]
