import logging
import socket
import threading
from typing import Callable, Iterable, Optional

import pytest

from seabattle.field import CellState, Field
from seabattle.io_utils import open_streams
from seabattle.session import Outcome, TurnSession

# Suppress INFO & DEBUG logs from session threads during tests
logging.basicConfig(level=logging.WARNING)


class ScriptedPlayer:
    """Player that fires at a fixed list of cells, then gives up."""

    def __init__(self, moves: Iterable[tuple[int, int]]) -> None:
        self.moves = list(moves)
        self.asked = 0

    def choose_move(self, view: Field) -> Optional[tuple[int, int]]:
        self.asked += 1
        if not self.moves:
            return None
        return self.moves.pop(0)


def _ship_runs(field: Field) -> list[list[tuple[int, int]]]:
    """Group SHIP/KILLED cells into orthogonally connected ships."""
    seen: set[tuple[int, int]] = set()
    runs: list[list[tuple[int, int]]] = []
    occupied = {
        (x, y)
        for y in range(field.size)
        for x in range(field.size)
        if field.cell(x, y) in (CellState.SHIP, CellState.KILLED)
    }
    for start in sorted(occupied):
        if start in seen:
            continue
        stack, run = [start], []
        seen.add(start)
        while stack:
            x, y = stack.pop()
            run.append((x, y))
            for nxt in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if nxt in occupied and nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        runs.append(sorted(run))
    return runs


def _make_field(cells: Iterable[tuple[int, int]], *, segments: Optional[int] = None) -> Field:
    cells = set(cells)
    rows = [
        " ".join("o" if (x, y) in cells else "." for x in range(8))
        for y in range(8)
    ]
    return Field.from_rows(rows, segments=segments)


@pytest.fixture
def ship_runs() -> Callable[[Field], list[list[tuple[int, int]]]]:
    return _ship_runs


@pytest.fixture
def make_field() -> Callable[..., Field]:
    """Factory for an own field with ships exactly on the given cells."""
    return _make_field


@pytest.fixture
def scripted_player() -> Callable[[Iterable[tuple[int, int]]], ScriptedPlayer]:
    return ScriptedPlayer


@pytest.fixture
def session_pair() -> Callable[..., tuple[Outcome, Outcome]]:
    """Factory that plays two TurnSessions against each other over a socketpair.

    The first session fires first.  Returns both outcomes once both loops end.
    """

    def _play(first: TurnSession, second: TurnSession, player_a, player_b, timeout: float = 10.0):
        sock_a, sock_b = socket.socketpair()
        outcomes: dict[str, Outcome] = {}

        def _run(name: str, session: TurnSession, player, sock: socket.socket) -> None:
            r, w = open_streams(sock)
            try:
                outcomes[name] = session.play(player, r, w)
            finally:
                r.close()
                w.close()
                sock.close()

        threads = [
            threading.Thread(target=_run, args=("a", first, player_a, sock_a), daemon=True),
            threading.Thread(target=_run, args=("b", second, player_b, sock_b), daemon=True),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=timeout)
        assert not any(t.is_alive() for t in threads), "session threads did not finish"
        return outcomes["a"], outcomes["b"]

    return _play


@pytest.fixture
def peer_socket():
    """Socketpair whose first end is wrapped for a session; the second end is a raw peer."""
    local, peer = socket.socketpair()
    r, w = open_streams(local)
    yield r, w, peer
    r.close()
    w.close()
    local.close()
    peer.close()
