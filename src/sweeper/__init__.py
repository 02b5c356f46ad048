"""
Terminal Minesweeper.

Keyboard-driven Minesweeper drawn in the terminal with rich.
"""
import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
