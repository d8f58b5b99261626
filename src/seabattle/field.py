"""
field.py

Core data structures and logic for the 8x8 sea battle grid, including:
 - CellState / ShotResult enums shared by the engine, the wire codec and the UI
 - Field class storing one grid plus its remaining-segment counter
 - generate_random_field() for procedural, non-touching fleet placement

The same Field class plays two roles during a game:

  * the *own* field knows where every ship is (``SHIP`` cells) and answers
    incoming shots through :meth:`Field.shoot`;
  * the *opponent view* starts fully ``UNKNOWN`` and is filled in from the
    results the opponent reports, via :meth:`Field.mark_miss`,
    :meth:`Field.mark_hit` and :meth:`Field.mark_kill`.  ``SHIP`` never
    appears on a view.

Coordinates are ``(x, y)`` pairs: x is the column (A-H), y the row (1-8).
"""

from __future__ import annotations

import enum
import logging
import random
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from . import config as _cfg

logger = logging.getLogger(__name__)

FIELD_SIZE = _cfg.FIELD_SIZE
FLEET = _cfg.FLEET

Coord = Tuple[int, int]


class CellState(enum.IntEnum):
    """State of a single grid cell."""

    UNKNOWN = 0
    EMPTY = 1
    SHIP = 2
    KILLED = 3


class ShotResult(enum.IntEnum):
    """Outcome of one shot. The value is the digit sent on the wire."""

    MISS = 0
    HIT = 1
    KILL = 2


class Axis(enum.Enum):
    """Direction a ship extends in from its origin cell."""

    HORIZONTAL = (1, 0)
    VERTICAL = (0, 1)

    @property
    def step(self) -> Coord:
        return self.value


# Single-char display symbols, shared with the console renderer
CELL_CHARS = {
    CellState.UNKNOWN: "?",
    CellState.EMPTY: ".",
    CellState.SHIP: "o",
    CellState.KILLED: "x",
}
_CHAR_TO_STATE = {ch: state for state, ch in CELL_CHARS.items()}

_CARDINALS: tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class PlacementError(Exception):
    """Raised when a single random placement attempt runs out of room."""


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < FIELD_SIZE and 0 <= y < FIELD_SIZE


def neighbourhood(x: int, y: int) -> Iterator[Coord]:
    """Yield every in-bounds cell within Chebyshev distance 1, *(x, y)* included."""
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if in_bounds(x + dx, y + dy):
                yield x + dx, y + dy


def ship_cells(origin: Coord, axis: Axis, length: int) -> list[Coord]:
    """Cells covered by a *length*-deck ship starting at *origin* along *axis*."""
    x, y = origin
    dx, dy = axis.step
    return [(x + dx * i, y + dy * i) for i in range(length)]


class Field:
    """
    One player's 8x8 grid plus the number of ship segments still afloat.

    The grid is a numpy int8 array indexed ``[y, x]``; callers never touch it
    directly and go through :meth:`cell` / ``field[x, y]`` instead.  The field
    is lost once ``remaining_segments`` drops to zero.
    """

    def __init__(self, default: CellState = CellState.UNKNOWN, segments: int = _cfg.FLEET_SEGMENTS):
        """Create a grid filled with *default* that still has *segments* ship cells to find."""
        self.size = FIELD_SIZE
        self._grid = np.full((FIELD_SIZE, FIELD_SIZE), int(default), dtype=np.int8)
        self.remaining_segments = segments

    @classmethod
    def from_rows(cls, rows: Sequence[str], *, segments: Optional[int] = None) -> "Field":
        """Build a field from display rows such as ``"o . . ? x . . ."`` (top row first).

        Spaces are ignored.  *segments* defaults to the number of ``o`` cells.
        """
        if len(rows) != FIELD_SIZE:
            raise ValueError(f"expected {FIELD_SIZE} rows, got {len(rows)}")
        field = cls(CellState.EMPTY, segments=0)
        for y, row in enumerate(rows):
            chars = row.replace(" ", "")
            if len(chars) != FIELD_SIZE:
                raise ValueError(f"row {y + 1} has {len(chars)} cells, expected {FIELD_SIZE}")
            for x, ch in enumerate(chars):
                try:
                    field._grid[y, x] = _CHAR_TO_STATE[ch]
                except KeyError:
                    raise ValueError(f"unknown cell symbol {ch!r} in row {y + 1}") from None
        field.remaining_segments = field.count(CellState.SHIP) if segments is None else segments
        return field

    # ------------------------------------------------------------------ #
    # Read-only access
    # ------------------------------------------------------------------ #
    def cell(self, x: int, y: int) -> CellState:
        self._check_bounds(x, y)
        return CellState(int(self._grid[y, x]))

    def __getitem__(self, xy: Coord) -> CellState:
        return self.cell(*xy)

    def count(self, state: CellState) -> int:
        """Number of cells currently in *state*."""
        return int(np.count_nonzero(self._grid == int(state)))

    def as_array(self) -> np.ndarray:
        """Copy of the raw ``[y, x]`` grid of CellState values."""
        return self._grid.copy()

    def rows(self) -> list[str]:
        """Display rows, top to bottom, one symbol per cell separated by spaces."""
        return [" ".join(CELL_CHARS[CellState(int(v))] for v in row) for row in self._grid]

    def is_loser(self) -> bool:
        """Return True once every ship segment on this field is destroyed."""
        return self.remaining_segments == 0

    def __str__(self) -> str:
        return "\n".join(self.rows())

    def __repr__(self) -> str:
        return f"<Field remaining_segments={self.remaining_segments}>"

    # ------------------------------------------------------------------ #
    # Own field: shot resolution
    # ------------------------------------------------------------------ #
    def shoot(self, x: int, y: int) -> ShotResult:
        """Apply an incoming shot at (*x*, *y*) and report MISS, HIT or KILL.

        Anything other than an intact ``SHIP`` cell is a miss and leaves the
        field untouched, so repeated shots never count twice.
        """
        if self.cell(x, y) != CellState.SHIP:
            return ShotResult.MISS

        self._grid[y, x] = CellState.KILLED
        self.remaining_segments -= 1
        return ShotResult.KILL if self.is_fully_sunk(x, y) else ShotResult.HIT

    def is_fully_sunk(self, x: int, y: int) -> bool:
        """True if no intact segment continues the ship through (*x*, *y*) in any direction."""
        self._check_bounds(x, y)
        return all(self._sunk_towards(x, y, dx, dy) for dx, dy in _CARDINALS)

    def _sunk_towards(self, x: int, y: int, dx: int, dy: int) -> bool:
        while in_bounds(x, y):
            state = self._grid[y, x]
            if state == CellState.EMPTY:
                return True
            if state != CellState.KILLED:
                return False
            x, y = x + dx, y + dy
        return True

    # ------------------------------------------------------------------ #
    # Opponent view: updates from reported results
    # ------------------------------------------------------------------ #
    def mark_miss(self, x: int, y: int) -> None:
        if self.cell(x, y) == CellState.UNKNOWN:
            self._grid[y, x] = CellState.EMPTY

    def mark_hit(self, x: int, y: int) -> None:
        if self.cell(x, y) == CellState.UNKNOWN:
            self.remaining_segments -= 1
            self._grid[y, x] = CellState.KILLED

    def mark_kill(self, x: int, y: int) -> None:
        """Record a kill at (*x*, *y*) and clear the border of the sunk ship.

        Ships never touch, so every still-unknown cell around the destroyed
        hull is marked ``EMPTY``.  Already resolved cells are left alone,
        which makes replaying the same result harmless.
        """
        if self.cell(x, y) != CellState.UNKNOWN:
            return
        self.mark_hit(x, y)
        for dx, dy in _CARDINALS:
            self._mark_border_towards(x, y, dx, dy)

    def _mark_border_towards(self, x: int, y: int, dx: int, dy: int) -> None:
        while in_bounds(x, y) and self._grid[y, x] == CellState.KILLED:
            for nx, ny in neighbourhood(x, y):
                if self._grid[ny, nx] == CellState.UNKNOWN:
                    self._grid[ny, nx] = CellState.EMPTY
            x, y = x + dx, y + dy

    def apply_result(self, x: int, y: int, result: ShotResult) -> None:
        """Dispatch a reported *result* to the matching ``mark_*`` update."""
        if result is ShotResult.MISS:
            self.mark_miss(x, y)
        elif result is ShotResult.HIT:
            self.mark_hit(x, y)
        else:
            self.mark_kill(x, y)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _check_bounds(self, x: int, y: int) -> None:
        if not in_bounds(x, y):
            raise ValueError(f"coordinate ({x}, {y}) is outside the {FIELD_SIZE}x{FIELD_SIZE} field")

    def _place(self, cells: Sequence[Coord]) -> None:
        for x, y in cells:
            self._grid[y, x] = CellState.SHIP


# ---------------------------------------------------------------------- #
# Random placement
# ---------------------------------------------------------------------- #


def _draw_placement(rng: random.Random, pool: Sequence[Coord], length: int) -> tuple[Coord, Axis]:
    anchor = pool[rng.randrange(len(pool))]
    direction = rng.randrange(4)
    # 0..3 walk +y, +x, -y, -x from the anchor.  A backwards walk covers the
    # same cells as a forwards one starting length-1 cells earlier.
    axis = Axis.VERTICAL if direction % 2 == 0 else Axis.HORIZONTAL
    x, y = anchor
    if direction >= 2:
        dx, dy = axis.step
        x, y = x - dx * (length - 1), y - dy * (length - 1)
    return (x, y), axis


def _place_fleet(rng: random.Random, fleet: Sequence[int]) -> Field:
    field = Field(CellState.EMPTY, segments=sum(fleet))
    available = {(x, y) for y in range(FIELD_SIZE) for x in range(FIELD_SIZE)}

    for length in fleet:
        # Sorted so that index draws are reproducible for a given seed
        pool = sorted(available)
        for _ in range(_cfg.MAX_PLACEMENT_ATTEMPTS):
            if not pool:
                raise PlacementError(f"no free cells left for a {length}-deck ship")
            origin, axis = _draw_placement(rng, pool, length)
            cells = ship_cells(origin, axis, length)
            if all(c in available for c in cells):
                break
        else:
            raise PlacementError(
                f"no room for a {length}-deck ship after {_cfg.MAX_PLACEMENT_ATTEMPTS} draws"
            )

        field._place(cells)
        for x, y in cells:
            available.difference_update(neighbourhood(x, y))

    return field


def try_generate_random_field(rng: random.Random, fleet: Sequence[int] = FLEET) -> Optional[Field]:
    """Single placement attempt; returns ``None`` when the fleet did not fit."""
    try:
        return _place_fleet(rng, fleet)
    except PlacementError as exc:
        logger.debug("placement attempt abandoned: %s", exc)
        return None


def generate_random_field(rng: random.Random, fleet: Sequence[int] = FLEET) -> Field:
    """Randomly position *fleet* with no two ships touching, retrying until it fits."""
    attempts = 1
    while (field := try_generate_random_field(rng, fleet)) is None:
        attempts += 1
    logger.debug("fleet placed after %d attempt(s)", attempts)
    return field
