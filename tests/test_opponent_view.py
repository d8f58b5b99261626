"""Opponent-view updates: miss/hit marking and the empty border deduced on a kill."""

from __future__ import annotations

import numpy as np

from seabattle.field import CellState, Field, ShotResult


def _unknown_except(*marks: tuple[int, int, str]) -> Field:
    grid = [["?"] * 8 for _ in range(8)]
    for x, y, ch in marks:
        grid[y][x] = ch
    return Field.from_rows([" ".join(row) for row in grid], segments=20)


def test_mark_miss_only_touches_unknown_cells() -> None:
    view = _unknown_except((1, 1, "x"))
    view.mark_miss(0, 0)
    view.mark_miss(0, 0)
    view.mark_miss(1, 1)
    assert view.cell(0, 0) is CellState.EMPTY
    assert view.cell(1, 1) is CellState.KILLED
    assert view.remaining_segments == 20


def test_mark_hit_decrements_once() -> None:
    view = Field()
    view.mark_hit(4, 4)
    view.mark_hit(4, 4)
    assert view.cell(4, 4) is CellState.KILLED
    assert view.remaining_segments == 19
    # neighbours are not deduced on a plain hit
    assert view.count(CellState.EMPTY) == 0


def test_mark_kill_clears_border_of_vertical_ship() -> None:
    view = Field()
    view.mark_hit(2, 2)
    view.mark_hit(2, 3)
    view.mark_kill(2, 4)

    assert view.remaining_segments == 17
    for y in range(8):
        for x in range(8):
            if x == 2 and 2 <= y <= 4:
                expected = CellState.KILLED
            elif 1 <= x <= 3 and 1 <= y <= 5:
                expected = CellState.EMPTY
            else:
                expected = CellState.UNKNOWN
            assert view.cell(x, y) is expected, (x, y)


def test_mark_kill_in_the_middle_walks_both_ways() -> None:
    view = Field()
    view.mark_hit(3, 6)
    view.mark_hit(5, 6)
    view.mark_kill(4, 6)

    assert [view.cell(x, 6) for x in range(3, 6)] == [CellState.KILLED] * 3
    for x in range(2, 7):
        assert view.cell(x, 5) is CellState.EMPTY
        assert view.cell(x, 7) is CellState.EMPTY
    assert view.cell(2, 6) is CellState.EMPTY
    assert view.cell(6, 6) is CellState.EMPTY
    assert view.cell(1, 6) is CellState.UNKNOWN
    assert view.cell(4, 4) is CellState.UNKNOWN


def test_mark_kill_in_corner() -> None:
    view = Field()
    view.mark_kill(0, 0)
    assert view.cell(0, 0) is CellState.KILLED
    assert {view.cell(1, 0), view.cell(0, 1), view.cell(1, 1)} == {CellState.EMPTY}
    assert view.count(CellState.EMPTY) == 3
    assert view.remaining_segments == 19


def test_mark_kill_replay_is_harmless() -> None:
    view = Field()
    view.mark_hit(5, 1)
    view.mark_kill(6, 1)
    snapshot = view.as_array()
    segments = view.remaining_segments

    view.mark_kill(6, 1)
    view.mark_kill(5, 1)
    view.mark_kill(7, 1)  # already deduced empty
    assert np.array_equal(view.as_array(), snapshot)
    assert view.remaining_segments == segments
    assert view.cell(7, 1) is CellState.EMPTY


def test_mark_kill_keeps_resolved_neighbours() -> None:
    view = _unknown_except((4, 3, "x"), (5, 3, "."))
    view.mark_kill(4, 4)
    assert view.cell(4, 3) is CellState.KILLED
    assert view.cell(5, 3) is CellState.EMPTY
    assert view.cell(3, 5) is CellState.EMPTY
    assert view.cell(3, 2) is CellState.EMPTY
    assert view.remaining_segments == 19


def test_apply_result_dispatches() -> None:
    view = Field()
    view.apply_result(0, 7, ShotResult.MISS)
    view.apply_result(7, 7, ShotResult.HIT)
    view.apply_result(3, 3, ShotResult.KILL)
    assert view.cell(0, 7) is CellState.EMPTY
    assert view.cell(7, 7) is CellState.KILLED
    assert view.cell(3, 3) is CellState.KILLED
    assert view.cell(2, 2) is CellState.EMPTY
    assert view.remaining_segments == 18


def test_view_never_contains_ships() -> None:
    view = Field()
    for x, y, result in [(0, 0, ShotResult.HIT), (1, 0, ShotResult.KILL), (5, 5, ShotResult.MISS)]:
        view.apply_result(x, y, result)
    assert view.count(CellState.SHIP) == 0
