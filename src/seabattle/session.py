"""Two-player turn session between this process and one remote opponent.

The class in this module owns both fields of a single game: the player's own
field and the tracked view of the opponent's field.  Each side runs one
TurnSession; the two exchange raw fixed-size messages over a single TCP
connection:

Shooter → Defender
------------------
<move>      2 bytes, column letter + row digit (e.g. b"C4")

Defender → Shooter
------------------
<result>    1 byte, b"0" miss, b"1" hit, b"2" kill

Turn rules
----------
• The connecting side shoots first; the host waits for the first move.
• A hit or a kill keeps the turn with the shooter; only a miss passes it.
• The game is over as soon as either field has no ship segments left.
• Any connection or protocol failure ends the loop with Outcome.ABORTED,
  which is neither a win nor a loss.

The two transitions (:meth:`TurnSession.record_my_shot` and
:meth:`TurnSession.receive_shot`) are public so that tests or an automated
driver can run the state machine without a socket.
"""

from __future__ import annotations

import enum
import logging
from typing import BinaryIO, Callable, List, Optional, Protocol

from .coord_utils import format_coord
from .events import Category, Event
from .field import Coord, Field, ShotResult
from .protocol import ProtocolError, recv_move, recv_result, send_move, send_result

logger = logging.getLogger(__name__)


class TurnState(enum.Enum):
    MY_TURN = "my_turn"
    OPPONENT_TURN = "opponent_turn"
    GAME_OVER = "game_over"


class Outcome(enum.Enum):
    WON = "won"
    LOST = "lost"
    ABORTED = "aborted"


class Player(Protocol):
    """Anything that can pick the next cell to fire at, or ``None`` to give up."""

    def choose_move(self, view: Field) -> Optional[Coord]: ...


class TurnSession:
    """State machine plus game loop for one side of a match."""

    def __init__(self, own: Field, *, my_turn: bool, view: Optional[Field] = None):
        """Create a session that takes ownership of *own*.

        Args:
            own: This player's fully placed field.
            my_turn: Initiative flag; True if we fire the first shot.
            view: Starting opponent view, a fresh all-unknown field by default.
        """
        self.own = own
        self.view = view if view is not None else Field()
        self.my_turn = my_turn

        # Result reporting, filled in when the loop stops
        self.outcome: Optional[Outcome] = None
        self.reason: Optional[str] = None
        self.error: Optional[Exception] = None

        self.shots_fired = 0
        self.shots_received = 0

        # Event subscribers
        self._subs: List[Callable[[Event], None]] = []

    # -------------------- state --------------------
    @property
    def state(self) -> TurnState:
        if self.is_over():
            return TurnState.GAME_OVER
        return TurnState.MY_TURN if self.my_turn else TurnState.OPPONENT_TURN

    def is_over(self) -> bool:
        return self.outcome is not None or self.own.is_loser() or self.view.is_loser()

    # -------------------- transitions --------------------
    def record_my_shot(self, x: int, y: int, result: ShotResult) -> TurnState:
        """Apply the opponent's answer to our shot at (*x*, *y*) and return the new state."""
        if self.state is not TurnState.MY_TURN:
            raise RuntimeError(f"cannot record our shot in state {self.state.name}")
        self.view.apply_result(x, y, result)
        self.shots_fired += 1
        if result is ShotResult.MISS:
            self.my_turn = False
        self._emit(Event(Category.TURN, "shot", {"x": x, "y": y, "coord": format_coord(x, y), "result": result}))
        return self.state

    def receive_shot(self, x: int, y: int) -> ShotResult:
        """Resolve the opponent's shot at (*x*, *y*) against our own field."""
        if self.state is not TurnState.OPPONENT_TURN:
            raise RuntimeError(f"cannot receive a shot in state {self.state.name}")
        result = self.own.shoot(x, y)
        self.shots_received += 1
        if result is ShotResult.MISS:
            self.my_turn = True
        self._emit(Event(Category.TURN, "incoming", {"x": x, "y": y, "coord": format_coord(x, y), "result": result}))
        return result

    # -------------------- gameplay --------------------
    def play(self, player: Player, r: BinaryIO, w: BinaryIO) -> Outcome:
        """Main game loop; blocks on every network exchange until the game ends."""
        logger.info("Game started – %s", "we fire first" if self.my_turn else "opponent fires first")
        try:
            while not self.is_over():
                self._emit(Event(Category.TURN, "round", {"own": self.own, "view": self.view, "my_turn": self.my_turn}))
                if self.my_turn:
                    if not self._play_my_turn(player, r, w):
                        return self._abort("quit")
                else:
                    self._play_opponent_turn(r, w)
        except (ProtocolError, OSError) as exc:
            logger.warning("Game aborted – %s", exc)
            self._emit(Event(Category.SYSTEM, "abort", {"reason": "connection failure", "error": exc}))
            return self._abort("connection failure", exc)
        return self._conclude()

    def _play_my_turn(self, player: Player, r: BinaryIO, w: BinaryIO) -> bool:
        move = player.choose_move(self.view)
        if move is None:
            logger.info("Local player gave up")
            return False
        x, y = move
        if not send_move(w, x, y):
            raise ProtocolError(f"connection lost while sending move {format_coord(x, y)}")
        result = recv_result(r)
        logger.debug("shot %s answered with %s", format_coord(x, y), result.name)
        self.record_my_shot(x, y, result)
        return True

    def _play_opponent_turn(self, r: BinaryIO, w: BinaryIO) -> None:
        x, y = recv_move(r)
        result = self.receive_shot(x, y)
        logger.debug("incoming shot %s resolved as %s", format_coord(x, y), result.name)
        if not send_result(w, result):
            raise ProtocolError(f"connection lost while answering {format_coord(x, y)}")

    def _conclude(self) -> Outcome:
        self.outcome = Outcome.LOST if self.own.is_loser() else Outcome.WON
        self.reason = "fleet destroyed"
        logger.info(
            "Game over – %s (fired %d, received %d)",
            self.outcome.value,
            self.shots_fired,
            self.shots_received,
        )
        self._emit_end()
        return self.outcome

    def _abort(self, reason: str, error: Optional[Exception] = None) -> Outcome:
        self.outcome = Outcome.ABORTED
        self.reason = reason
        self.error = error
        self._emit_end()
        return self.outcome

    def _emit_end(self) -> None:
        self._emit(
            Event(
                Category.TURN,
                "end",
                {"outcome": self.outcome, "reason": self.reason, "own": self.own, "view": self.view},
            )
        )

    # -------------------- event bus --------------------
    def subscribe(self, cb: Callable[[Event], None]) -> None:
        """Allow external components (console/logger/tests) to receive game events."""
        self._subs.append(cb)

    def _emit(self, ev: Event) -> None:
        for cb in tuple(self._subs):
            try:
                cb(ev)
            except Exception:
                # A misbehaving subscriber must not kill the game
                logger.exception("Event subscriber failed for %s/%s", ev.category.name, ev.type)
