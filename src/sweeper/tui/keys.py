"""
Keyboard decoding for the terminal front end.

Maps raw key sequences read from a cbreak-mode terminal to game actions.
"""
from typing import Dict, Optional, Protocol

from ..game.controller import Action

ESC = "\x1b"

KEYMAP: Dict[str, Action] = {
    # Arrow keys, normal and application cursor mode
    ESC + "[D": Action.LEFT,
    ESC + "[C": Action.RIGHT,
    ESC + "[A": Action.UP,
    ESC + "[B": Action.DOWN,
    ESC + "OD": Action.LEFT,
    ESC + "OC": Action.RIGHT,
    ESC + "OA": Action.UP,
    ESC + "OB": Action.DOWN,
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "w": Action.UP,
    "s": Action.DOWN,
    " ": Action.REVEAL,
    "f": Action.FLAG,
    "r": Action.RESTART,
    # Esc and End both quit
    ESC: Action.QUIT,
    ESC + "[F": Action.QUIT,
    ESC + "OF": Action.QUIT,
    ESC + "[4~": Action.QUIT,
    ESC + "[8~": Action.QUIT,
}


def parse_key(sequence: str) -> Optional[Action]:
    """
    Decode one key press.

    Args:
        sequence: A single character or a complete escape sequence.

    Returns:
        The matching action, or None for unbound keys.
    """
    if len(sequence) == 1:
        sequence = sequence.lower()
    return KEYMAP.get(sequence)


class KeyReader(Protocol):
    """Blocking source of raw key sequences."""

    def read_key(self) -> str:
        """Wait for one key press and return its character or sequence."""
        ...


class KeyboardInput:
    """Turns a raw key reader into a blocking source of actions."""

    def __init__(self, reader: KeyReader) -> None:
        self.reader = reader

    def read_action(self) -> Optional[Action]:
        """Read one key and decode it; None for unbound keys."""
        return parse_key(self.reader.read_key())
