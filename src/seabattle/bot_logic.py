from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .field import FIELD_SIZE, CellState, Coord, Field, in_bounds

_ORTHOGONAL: Tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class BotLogic:
    """
    Shot selection that reads nothing but the opponent view.

    1. Target: a KILLED cell with an UNKNOWN orthogonal neighbour belongs to a
       ship that is still afloat (a kill clears the whole border of the sunk
       ship).  Fire next to it; once two aligned hits are known, only extend
       along that line.
    2. Parity hunt: otherwise fire at a random UNKNOWN cell, even squares
       ((x + y) % 2 == 0) first, since every ship longer than one deck
       covers at least one of them.
    """

    def __init__(self, *, seed: Optional[int] = None) -> None:
        self.rnd = random.Random(seed)

    # ------------------------------------------------------------------ #
    # Shot selection
    # ------------------------------------------------------------------ #
    def choose_shot(self, view: Field) -> Optional[Coord]:
        """Pick the next cell to fire at, or None if nothing is left unknown."""
        targets = self._targets(view)
        if targets:
            return self.rnd.choice(targets)

        unknown = [
            (x, y)
            for y in range(FIELD_SIZE)
            for x in range(FIELD_SIZE)
            if view.cell(x, y) is CellState.UNKNOWN
        ]
        if not unknown:
            return None
        even = [rc for rc in unknown if (rc[0] + rc[1]) % 2 == 0]
        return self.rnd.choice(even or unknown)

    # ------------------------------------------------------------------ #
    # Helper utilities
    # ------------------------------------------------------------------ #
    def _targets(self, view: Field) -> List[Coord]:
        aligned: set[Coord] = set()
        loose: set[Coord] = set()
        for y in range(FIELD_SIZE):
            for x in range(FIELD_SIZE):
                if view.cell(x, y) is not CellState.KILLED:
                    continue
                horizontal = _is_killed(view, x - 1, y) or _is_killed(view, x + 1, y)
                vertical = _is_killed(view, x, y - 1) or _is_killed(view, x, y + 1)
                for dx, dy in _ORTHOGONAL:
                    nx, ny = x + dx, y + dy
                    if not in_bounds(nx, ny) or view.cell(nx, ny) is not CellState.UNKNOWN:
                        continue
                    # Off-axis neighbours of a known line cannot hold a ship
                    if (horizontal and dy) or (vertical and dx):
                        continue
                    (aligned if horizontal or vertical else loose).add((nx, ny))
        # Sorted so the choice is reproducible for a given seed
        return sorted(aligned or loose)


def _is_killed(view: Field, x: int, y: int) -> bool:
    return in_bounds(x, y) and view.cell(x, y) is CellState.KILLED
