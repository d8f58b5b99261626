import pytest

from seabattle.commands import (
    parse_command,
    FireCommand,
    QuitCommand,
    CommandParseError,
)


def test_fire_valid_A1():
    cmd = parse_command("A1")
    assert isinstance(cmd, FireCommand)
    assert (cmd.x, cmd.y) == (0, 0)


def test_fire_valid_H8():
    cmd = parse_command("H8")
    assert isinstance(cmd, FireCommand)
    assert (cmd.x, cmd.y) == (7, 7)


def test_fire_whitespace_and_case():
    cmd = parse_command("  c4 \n")
    assert isinstance(cmd, FireCommand)
    assert (cmd.x, cmd.y) == (2, 3)


@pytest.mark.parametrize("line", ["I1", "A9", "A0", "11", "AA", "A10", "A", "FIRE A1"])
def test_fire_invalid_coord(line):
    with pytest.raises(CommandParseError):
        parse_command(line)


def test_quit():
    cmd = parse_command("quit")
    assert isinstance(cmd, QuitCommand)


def test_empty_line():
    with pytest.raises(CommandParseError):
        parse_command("    ")


@pytest.mark.parametrize("line", ["A10", "Z", "C 4"])
def test_bad_coordinate_message_names_the_input(line):
    with pytest.raises(CommandParseError, match="Invalid coordinate"):
        parse_command(line)
