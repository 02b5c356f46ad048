"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper.game import Board, BoardConfig, Cell, CellKind, Game, GamePhase


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines and a fixed seed."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with 1 mine, not yet started."""
    return Board(BoardConfig(3, 3, 1, 1))


@pytest.fixture
def corner_mine_board(small_board: Board) -> Board:
    """3x3 board with its only mine in the bottom-right corner (index 8)."""
    small_board.place_mines([8])
    return small_board


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for flood fill testing."""
    return Board(BoardConfig(5, 5, 0, 0))


@pytest.fixture
def strip_board() -> Board:
    """
    5x1 board laid out as: empty, neighbouring, mine, neighbouring, empty.
    """
    board = Board(BoardConfig(5, 1, 1, 1))
    board.place_mines([2])
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(kind=CellKind.MINE)


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def game() -> Game:
    """Controller over a seeded default board."""
    return Game(Board(rng=random.Random(99)))


@pytest.fixture
def corner_mine_game(corner_mine_board: Board) -> Game:
    """Controller already playing on the corner-mine board."""
    game = Game(corner_mine_board)
    game.phase = GamePhase.PLAYING
    return game
