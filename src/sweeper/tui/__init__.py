"""
Terminal front end.

Key decoding, rich rendering and the scoped terminal session.
"""
from .keys import KEYMAP, KeyboardInput, parse_key
from .render import BoardRenderer, cell_text
from .terminal import TerminalSession

__all__ = [
    "KEYMAP",
    "KeyboardInput",
    "parse_key",
    "BoardRenderer",
    "cell_text",
    "TerminalSession",
]
