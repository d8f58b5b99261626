from seabattle.console import ConsoleReporter, render_pair
from seabattle.events import Category, Event
from seabattle.field import Field, ShotResult
from seabattle.session import Outcome


def test_render_pair_layout(make_field):
    own = make_field([(0, 0)])
    view = Field()
    view.mark_hit(7, 7)
    lines = render_pair(own, view).splitlines()

    assert len(lines) == 1 + 1 + 8 + 1
    assert "[Your Fleet]" in lines[0] and "[Opponent Fleet]" in lines[0]
    assert lines[1].count("A B C D E F G H") == 2
    assert lines[2].startswith("1 o . . . . . . . 1")
    assert lines[2].endswith("1 ? ? ? ? ? ? ? ? 1")
    assert lines[9].endswith("8 ? ? ? ? ? ? ? x 8")
    assert lines[10] == lines[1]


def test_reporter_messages(make_field):
    printed = []
    reporter = ConsoleReporter(printed.append, show_boards=False)
    reporter(Event(Category.TURN, "round", {"own": Field(), "view": Field(), "my_turn": False}))
    reporter(Event(Category.TURN, "shot", {"coord": "C4", "result": ShotResult.HIT}))
    reporter(Event(Category.TURN, "incoming", {"coord": "A1", "result": ShotResult.KILL}))
    reporter(Event(Category.TURN, "end", {"outcome": Outcome.WON, "reason": "fleet destroyed", "own": Field(), "view": Field()}))
    reporter(Event(Category.TURN, "end", {"outcome": Outcome.ABORTED, "reason": "quit", "own": Field(), "view": Field()}))
    reporter(Event(Category.TURN, "unheard-of", {}))

    assert printed == [
        "Waiting for the opponent's move...",
        "You hit a ship at C4",
        "Opponent sank a ship at A1",
        "Game over! You won!",
        "Game aborted (quit).",
    ]


def test_reporter_renders_boards_each_round(make_field):
    printed = []
    reporter = ConsoleReporter(printed.append)
    reporter(Event(Category.TURN, "round", {"own": make_field([(2, 2)]), "view": Field(), "my_turn": True}))
    assert len(printed) == 1
    assert "[Your Fleet]" in printed[0]
