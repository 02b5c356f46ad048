"""
Cell module for Minesweeper game.

A cell is classified once, when mines are placed (mine, empty, or
neighbouring ``n`` mines), and only its visibility changes afterwards.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visibility of a cell. OPEN is terminal."""

    HIDDEN = auto()
    OPEN = auto()
    FLAGGED = auto()


class CellKind(Enum):
    """What a cell holds once mines have been placed."""

    EMPTY = auto()
    MINE = auto()
    NEIGHBOURING = auto()


HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single grid position.

    Attributes:
        kind: Mine, empty, or neighbouring a mine.
        adjacent_mines: Mines around the cell; 1-8 for NEIGHBOURING,
            0 otherwise.
        state: Current visibility (hidden, open, or flagged).
    """

    kind: CellKind = CellKind.EMPTY
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    # ========================================================================
    # Classification (set during mine placement)
    # ========================================================================

    def mark_mine(self) -> None:
        """Turn this cell into a mine."""
        self.kind = CellKind.MINE
        self.adjacent_mines = 0

    def set_adjacent_mines(self, count: int) -> None:
        """
        Record the neighbouring mine count of a non-mine cell.

        Args:
            count: Mines among the eight neighbours. Zero leaves the
                cell EMPTY.
        """
        self.adjacent_mines = count
        self.kind = CellKind.NEIGHBOURING if count else CellKind.EMPTY

    @property
    def is_mine(self) -> bool:
        return self.kind == CellKind.MINE

    # ========================================================================
    # Visibility
    # ========================================================================

    def open(self) -> bool:
        """
        Open a hidden cell.

        Returns:
            True if the cell went from hidden to open.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.OPEN
        return True

    def toggle_flag(self) -> bool:
        """
        Flag a hidden cell or unflag a flagged one.

        Returns:
            False for an open cell, which cannot carry a flag.
        """
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        elif self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN
        else:
            return False
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_open(self) -> bool:
        return self.state == CellState.OPEN

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def code(self) -> int:
        """
        Render hint for this cell.

        Returns:
            -1 hidden, -2 flagged, 0 open empty, 1-8 open count,
            9 open mine.
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            return FLAGGED_CODE
        if self.kind == CellKind.MINE:
            return MINE_CODE
        return self.adjacent_mines
