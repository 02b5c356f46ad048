"""
Minesweeper game module.

Provides core game logic including board management, cell state
and the round controller.
"""
from .cell import Cell, CellKind, CellState
from .board import (
    Board,
    BoardConfig,
    Coord,
    DEFAULT,
    EASY,
    HARD,
    NORMAL,
    PRESETS,
    get_preset,
)
from .controller import Action, Game, GamePhase

__all__ = [
    "Cell",
    "CellKind",
    "CellState",
    "Board",
    "BoardConfig",
    "Coord",
    "DEFAULT",
    "EASY",
    "HARD",
    "NORMAL",
    "PRESETS",
    "get_preset",
    "Action",
    "Game",
    "GamePhase",
]
