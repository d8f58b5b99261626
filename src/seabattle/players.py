"""Move sources that TurnSession can ask for the next shot."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from . import config as _cfg
from .bot_logic import BotLogic
from .commands import CommandParseError, QuitCommand, parse_command
from .coord_utils import format_coord
from .field import CellState, Coord, Field

logger = logging.getLogger(__name__)

PROMPT = "Your move! Enter coordinates to shoot (e.g. C4, or QUIT): "


class ConsolePlayer:
    """Human player typing coordinates; malformed input is rejected and asked again."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output

    def choose_move(self, view: Field) -> Optional[Coord]:
        while True:
            try:
                line = self._input(PROMPT)
            except EOFError:
                logger.info("stdin closed – treating as QUIT")
                return None
            try:
                cmd = parse_command(line)
            except CommandParseError as e:
                self._output(f"  [!] {e}")
                continue
            if isinstance(cmd, QuitCommand):
                return None
            if view.cell(cmd.x, cmd.y) is not CellState.UNKNOWN:
                self._output(f"  [!] {format_coord(cmd.x, cmd.y)} is already known – pick another cell")
                continue
            return cmd.x, cmd.y


class BotPlayer:
    """Automated player driven by :class:`BotLogic`."""

    def __init__(self, logic: BotLogic, *, delay: float = _cfg.BOT_DELAY) -> None:
        self.logic = logic
        self.delay = delay

    def choose_move(self, view: Field) -> Optional[Coord]:
        if self.delay > 0:
            time.sleep(self.delay)
        move = self.logic.choose_shot(view)
        if move is None:
            logger.warning("Bot has no unknown cells left to fire at")
            return None
        logger.info("Bot fires at %s", format_coord(*move))
        return move
