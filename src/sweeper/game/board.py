"""
Board module for Minesweeper game.

Implements the game board with lazy mine placement, flood-fill opening,
flag bookkeeping and the win predicates the controller checks.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellKind, CellState

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place. Clamped so the first opened cell
            can always stay safe.
        num_flags: Flags the player may place. Raised to at least
            ``num_mines``.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    num_flags: int = 12

    def __post_init__(self) -> None:
        """Validate and normalise configuration after initialization."""
        self._validate()
        # One cell fewer than the board: the first opened cell never holds
        # a mine, so a board full of mines could not be placed.
        self.num_mines = min(self.num_mines, self.width * self.height - 1)
        self.num_flags = max(self.num_flags, self.num_mines)

    def _validate(self) -> None:
        """Ensure configuration values are usable."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.num_flags < 0:
            raise ValueError("Number of flags cannot be negative")


def _preset(width: int, height: int, num_mines: int) -> BoardConfig:
    return BoardConfig(width, height, num_mines, num_mines + 2)


# Preset difficulty levels
EASY = _preset(9, 9, 10)
NORMAL = _preset(16, 16, 40)
HARD = _preset(30, 16, 99)
DEFAULT = _preset(9, 9, 10)

PRESETS: Dict[str, BoardConfig] = {
    "easy": EASY,
    "normal": NORMAL,
    "hard": HARD,
}


def get_preset(name: Optional[str]) -> BoardConfig:
    """Look up a preset by name, falling back to ``DEFAULT``."""
    if name is None:
        return DEFAULT
    return PRESETS.get(name, DEFAULT)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Cells live in a flat list indexed by ``y * width + x``. Mines are
    placed on the first opening so the first cell is never a mine.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: random.Random = field(default_factory=random.Random, repr=False)
    cells: List[Cell] = field(default_factory=list, repr=False)
    mine_positions: Set[int] = field(default_factory=set)
    num_used_flags: int = 0
    mines_flagged: int = 0
    _started: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_cells()

    # ========================================================================
    # Dimensions (Low-level)
    # ========================================================================

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.config.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.config.height

    @property
    def resolution(self) -> int:
        """Total number of cells."""
        return self.config.width * self.config.height

    @property
    def num_mines(self) -> int:
        """Mines placed when the round starts."""
        return self.config.num_mines

    @property
    def num_allowed_flags(self) -> int:
        """Flags the player may have on the board at once."""
        return self.config.num_flags

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_cells(self) -> None:
        """Create a grid of empty hidden cells."""
        self.cells = [Cell() for _ in range(self.resolution)]

    def reset(self) -> None:
        """Reset board to its pre-start state for a new round."""
        self._init_cells()
        self.mine_positions = set()
        self.num_used_flags = 0
        self.mines_flagged = 0
        self._started = False

    @property
    def is_started(self) -> bool:
        """Check if mines have been placed."""
        return self._started

    def start_at(self, origin: Coord) -> None:
        """
        Place mines randomly, keeping ``origin`` safe.

        Args:
            origin: (x, y) coordinate of the first opened cell.

        Raises:
            RuntimeError: If mines were already placed.
        """
        if self._started:
            raise RuntimeError("Mines have already been placed")
        origin_index = self.coord_to_index(origin)
        candidates = [i for i in range(self.resolution) if i != origin_index]
        self.place_mines(self.rng.sample(candidates, self.num_mines))
        logger.debug(
            "Placed %d mines avoiding %s", self.num_mines, origin
        )

    def place_mines(self, indices: Iterable[int]) -> None:
        """
        Mark the given cells as mines and compute neighbour counts.

        Args:
            indices: Flat cell indices to hold mines.
        """
        for index in indices:
            self.cells[index].mark_mine()
            self.mine_positions.add(index)
        self._started = True
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for index, cell in enumerate(self.cells):
            if not cell.is_mine:
                cell.set_adjacent_mines(self._count_adjacent_mines(index))

    def _count_adjacent_mines(self, index: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for neighbour in self.get_neighbours(index)
            if self.cells[neighbour].is_mine
        )

    # ========================================================================
    # Neighbour Utilities (Low-level)
    # ========================================================================

    def get_neighbours(self, index: int) -> List[int]:
        """
        Get valid neighbouring cell indices.

        Args:
            index: Flat index of center cell.

        Returns:
            Indices of the in-bounds cells among the eight around it.
        """
        x, y = self.index_to_coord(index)
        neighbours = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_coord(new_x, new_y):
                    neighbours.append(new_y * self.width + new_x)
        return neighbours

    def _is_valid_coord(self, x: int, y: int) -> bool:
        """Check if coordinate is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def coord_to_index(self, coord: Coord) -> int:
        """Flat index of an (x, y) coordinate."""
        x, y = coord
        return y * self.width + x

    def index_to_coord(self, index: int) -> Coord:
        """(x, y) coordinate of a flat index."""
        return index % self.width, index // self.width

    def get(self, coord: Coord) -> Cell:
        """Get the cell at an (x, y) coordinate."""
        return self.cells[self.coord_to_index(coord)]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, index: int) -> bool:
        """
        Open a cell, flooding outwards through empty cells.

        Empty cells open all their neighbours; numbered cells and mines
        open only themselves. Open and flagged cells are left alone.

        Args:
            index: Flat index of the cell to open.

        Returns:
            True if a mine was opened, False otherwise.
        """
        stack = [index]
        while stack:
            current = stack.pop()
            cell = self.cells[current]
            if not cell.open():
                continue
            if cell.is_mine:
                # Unreachable through the flood itself: mines never
                # border an empty cell.
                return True
            if cell.kind == CellKind.EMPTY:
                stack.extend(self.get_neighbours(current))
        return False

    def flag(self, index: int) -> bool:
        """
        Toggle flag on a cell, respecting the flag allowance.

        Args:
            index: Flat index of the cell.

        Returns:
            True if the flag was placed or removed, False otherwise.
        """
        cell = self.cells[index]
        if cell.state == CellState.FLAGGED:
            cell.toggle_flag()
            self.num_used_flags -= 1
            if index in self.mine_positions:
                self.mines_flagged -= 1
            return True
        if cell.state == CellState.HIDDEN and (
            self.num_used_flags < self.num_allowed_flags
        ):
            cell.toggle_flag()
            self.num_used_flags += 1
            if index in self.mine_positions:
                self.mines_flagged += 1
            return True
        return False

    def open_all_bombs(self) -> None:
        """Open every mine, used to show the board after a loss."""
        for index in sorted(self.mine_positions):
            self.open(index)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def all_mines_flagged(self) -> bool:
        """Check if every mine carries a flag."""
        return self.mines_flagged == self.num_mines

    def snapshot(self) -> np.ndarray:
        """
        Get board state as a numpy array for rendering.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = open with adjacent count
                9 = open mine
        """
        codes = np.fromiter(
            (cell.code() for cell in self.cells),
            dtype=np.int8,
            count=self.resolution,
        )
        return codes.reshape(self.height, self.width)
