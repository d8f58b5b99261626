"""Command-line entry point: place a fleet, connect, play one game."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from . import config as _cfg
from .bot_logic import BotLogic
from .console import ConsoleReporter
from .field import generate_random_field
from .io_utils import connect, listen_and_accept, open_streams
from .players import BotPlayer, ConsolePlayer
from .session import Outcome, TurnSession

logger = logging.getLogger(__name__)

EXIT_DECIDED = 0
EXIT_ABORTED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seabattle",
        description="Two-player 8x8 sea battle over a direct TCP connection.",
        epilog="Host a game with 'seabattle SEED PORT', join one with 'seabattle SEED HOST PORT'.",
    )
    parser.add_argument("seed", type=int, help="Seed for the random fleet placement.")
    parser.add_argument(
        "address",
        nargs="*",
        metavar="ADDRESS",
        help="PORT to listen on (SEABATTLE_PORT when omitted), or HOST PORT of the game to join.",
    )
    parser.add_argument(
        "--auto",
        action="store_true",
        help="Let the built-in bot choose every shot.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress log output and board rendering.",
    )
    return parser


def _parse_address(parser: argparse.ArgumentParser, address: Sequence[str]) -> tuple[Optional[str], int]:
    if not address:
        return None, _cfg.DEFAULT_PORT
    if len(address) == 1:
        host, port_txt = None, address[0]
    elif len(address) == 2:
        host, port_txt = address
    else:
        parser.error("expected PORT (host role) or HOST PORT (connecting role)")
    try:
        port = int(port_txt)
    except ValueError:
        parser.error(f"invalid port: {port_txt!r}")
    if not 0 < port < 65536:
        parser.error(f"port out of range: {port}")
    return host, port


def _configure_logging(args: argparse.Namespace) -> None:
    # Determine log level from CLI flags:
    if args.quiet:
        level = logging.ERROR
    elif args.debug or _cfg.DEBUG:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=_cfg.LOG_FORMAT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Interactive game client for either role."""
    parser = build_parser()
    args = parser.parse_args(argv)
    host, port = _parse_address(parser, args.address)
    _configure_logging(args)

    own = generate_random_field(random.Random(args.seed))
    player = BotPlayer(BotLogic(seed=args.seed)) if args.auto else ConsolePlayer()

    try:
        sock = listen_and_accept(port) if host is None else connect(host, port)
    except OSError as exc:
        logger.error("Could not establish connection: %s", exc)
        return EXIT_ABORTED
    except KeyboardInterrupt:
        logger.info("Exiting before a game started")
        return EXIT_ABORTED

    r, w = open_streams(sock)
    with sock, r, w:
        # The joining side fires first
        session = TurnSession(own, my_turn=host is not None)
        session.subscribe(ConsoleReporter(show_boards=not args.quiet))
        try:
            outcome = session.play(player, r, w)
        except KeyboardInterrupt:
            logger.info("Game interrupted")
            return EXIT_ABORTED

    return EXIT_ABORTED if outcome is Outcome.ABORTED else EXIT_DECIDED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
