"""Console rendering of the two grids and of session events."""

from __future__ import annotations

import logging
from typing import Callable, Dict

from .events import Event
from .field import FIELD_SIZE, Field, ShotResult
from .session import Outcome

logger = logging.getLogger(__name__)

_COLUMNS = " ".join(chr(ord("A") + x) for x in range(FIELD_SIZE))
_GAP = "    "

_MY_SHOT_TEXT = {
    ShotResult.MISS: "You missed at {}",
    ShotResult.HIT: "You hit a ship at {}",
    ShotResult.KILL: "You sank a ship at {}",
}
_INCOMING_TEXT = {
    ShotResult.MISS: "Opponent missed at {}",
    ShotResult.HIT: "Opponent hit a ship at {}",
    ShotResult.KILL: "Opponent sank a ship at {}",
}


def _board_lines(field: Field) -> list[str]:
    header = f"  {_COLUMNS}  "
    lines = [header]
    for y, row in enumerate(field.rows(), start=1):
        lines.append(f"{y} {row} {y}")
    lines.append(header)
    return lines


def render_pair(
    own: Field,
    view: Field,
    *,
    header_left: str = "Your Fleet",
    header_right: str = "Opponent Fleet",
) -> str:
    """Return both boards side-by-side with column letters and row numbers."""
    left = _board_lines(own)
    right = _board_lines(view)
    width = len(left[0])
    titles = f"[{header_left}]".center(width) + _GAP + f"[{header_right}]".center(width)
    body = [f"{lhs}{_GAP}{rhs}" for lhs, rhs in zip(left, right)]
    return "\n".join([titles, *body])


class ConsoleReporter:
    """TurnSession subscriber printing boards and shot messages to the terminal."""

    def __init__(self, output: Callable[[str], None] = print, *, show_boards: bool = True) -> None:
        self._out = output
        self.show_boards = show_boards
        self._handlers: Dict[str, Callable[[dict], None]] = {
            "round": self._h_round,
            "shot": self._h_shot,
            "incoming": self._h_incoming,
            "end": self._h_end,
            "abort": self._h_abort,
        }

    def __call__(self, ev: Event) -> None:
        handler = self._handlers.get(ev.type)
        if handler is None:
            logger.debug("Ignoring event %s", ev)
            return
        handler(ev.payload)

    # ---------------- Handler helpers ----------------

    def _h_round(self, p: dict) -> None:
        if self.show_boards:
            self._out("\n" + render_pair(p["own"], p["view"]))
        if not p["my_turn"]:
            self._out("Waiting for the opponent's move...")

    def _h_shot(self, p: dict) -> None:
        self._out(_MY_SHOT_TEXT[p["result"]].format(p["coord"]))

    def _h_incoming(self, p: dict) -> None:
        self._out(_INCOMING_TEXT[p["result"]].format(p["coord"]))

    def _h_end(self, p: dict) -> None:
        outcome = p["outcome"]
        if outcome is Outcome.ABORTED:
            self._out(f"Game aborted ({p['reason']}).")
            return
        if self.show_boards:
            self._out("\n" + render_pair(p["own"], p["view"]))
        self._out("Game over! " + ("You won!" if outcome is Outcome.WON else "You lost."))

    def _h_abort(self, p: dict) -> None:
        self._out(f"[WARN] {p['reason']}: {p['error']}")
