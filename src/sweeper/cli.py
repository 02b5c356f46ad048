"""
Terminal Minesweeper - command line entry point.

Usage:
    termsweeper [easy|normal|hard] [--seed N] [--log-file PATH]
"""
import argparse
import logging
import random
import sys
import termios
from typing import List, Optional

from rich.console import Console

from .game import PRESETS, Board, Game, get_preset
from .tui import BoardRenderer, KeyboardInput, TerminalSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="termsweeper",
        description="Minesweeper in the terminal",
        epilog=(
            "Keys: arrows/WASD move, SPACE reveals, F flags, R restarts, "
            "ESC or END quits."
        ),
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default=None,
        help=f"Board preset ({', '.join(PRESETS)}); anything else uses 9x9",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--log-file", default=None, help="Write logs to this file"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level used with --log-file",
    )
    return parser


def configure_logging(log_file: Optional[str], level: str) -> None:
    """Send logs to a file; the terminal is reserved for the game."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def play(board: Board, console: Console) -> None:
    """Run one interactive session on the given board."""
    game = Game(board)
    with TerminalSession(console) as session:
        game.run(KeyboardInput(session), BoardRenderer(console))


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and play until the player quits."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if args.mode is not None and args.mode not in PRESETS:
        logger.warning("Unknown mode %r, using default board", args.mode)
    config = get_preset(args.mode)
    logger.info(
        "Starting %dx%d board with %d mines",
        config.width,
        config.height,
        config.num_mines,
    )

    board = Board(config, rng=random.Random(args.seed))
    try:
        play(board, Console())
    except (OSError, EOFError, termios.error) as exc:
        logger.exception("Terminal session failed")
        print(f"termsweeper: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
