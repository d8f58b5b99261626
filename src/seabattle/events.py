"""Lightweight event model used by TurnSession to decouple game logic from the console.

The session emits typed events; the console reporter (or a test, or an
automated driver) subscribes to them instead of parsing printed text.

TURN events
-----------
round     {"own": Field, "view": Field, "my_turn": bool}   before every round
shot      {"coord": "C4", "result": ShotResult}             our shot was answered
incoming  {"coord": "C4", "result": ShotResult}             we answered their shot
end       {"outcome": Outcome, "reason": str}               game finished or aborted

SYSTEM events
-------------
abort     {"reason": str, "error": Exception | None}        connection/protocol failure
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict


class Category(Enum):
    """High-level event categories."""

    TURN = auto()  # per-round lifecycle (round, shot, incoming, end)
    SYSTEM = auto()  # disconnects and protocol errors


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable event emitted by TurnSession."""

    category: Category
    type: str  # finer-grained identifier, e.g. "shot", "incoming"
    payload: Dict[str, Any]
