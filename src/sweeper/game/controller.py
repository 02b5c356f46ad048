"""
Game controller for Minesweeper.

Owns the board, the game phase and the cursor, and turns player actions
into board operations. Drawing and key reading are handed in by the
caller so the controller never touches the terminal itself.
"""
import logging
from enum import Enum, auto
from typing import Optional, Protocol

from .board import Board, Coord

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Each cell is drawn two columns wide (glyph plus spacer).
CELL_COLUMNS = 2


class GamePhase(Enum):
    """Overall state of a round."""

    PRE_INIT = auto()
    PLAYING = auto()
    LOST = auto()
    WON = auto()


class Action(Enum):
    """Player intents decoded from key presses."""

    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    REVEAL = auto()
    FLAG = auto()
    RESTART = auto()
    QUIT = auto()


class ActionSource(Protocol):
    """Blocking supplier of player actions."""

    def read_action(self) -> Optional["Action"]:
        """Wait for the next key; None if it maps to no action."""
        ...


class Renderer(Protocol):
    """Draws the game after every change."""

    def draw(self, game: "Game") -> None:
        """Redraw the whole screen for the current state."""
        ...


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Minesweeper round controller.

    Attributes:
        board: The board being played.
        phase: Current game phase.
        cursor_x: Cursor column in screen columns (two per cell).
        cursor_y: Cursor row.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.phase = GamePhase.PRE_INIT
        self.cursor_x = 0
        self.cursor_y = 0

    @property
    def selected(self) -> Coord:
        """Board coordinate under the cursor."""
        return self.cursor_x // CELL_COLUMNS, self.cursor_y

    @property
    def is_over(self) -> bool:
        """Check if the round was won or lost."""
        return self.phase in (GamePhase.LOST, GamePhase.WON)

    def reset(self) -> None:
        """Start a fresh round on the same board."""
        self.board.reset()
        self.phase = GamePhase.PRE_INIT
        logger.info("Round restarted")

    # ========================================================================
    # Cursor Movement
    # ========================================================================

    def _move(self, action: Action) -> None:
        max_x = (self.board.width - 1) * CELL_COLUMNS
        max_y = self.board.height - 1
        if action == Action.LEFT:
            self.cursor_x = max(self.cursor_x - CELL_COLUMNS, 0)
        elif action == Action.RIGHT:
            self.cursor_x = min(self.cursor_x + CELL_COLUMNS, max_x)
        elif action == Action.UP:
            self.cursor_y = max(self.cursor_y - 1, 0)
        elif action == Action.DOWN:
            self.cursor_y = min(self.cursor_y + 1, max_y)

    # ========================================================================
    # Actions
    # ========================================================================

    def handle(self, action: Action) -> bool:
        """
        Apply one player action.

        Args:
            action: Decoded player intent. ``QUIT`` is left to ``run``.

        Returns:
            True if this action ended the round (won or lost).
        """
        if action in (Action.LEFT, Action.RIGHT, Action.UP, Action.DOWN):
            self._move(action)
        elif action == Action.REVEAL:
            return self._reveal()
        elif action == Action.FLAG and self.phase == GamePhase.PLAYING:
            return self._flag()
        elif action == Action.RESTART and self.phase != GamePhase.PRE_INIT:
            self.reset()
        return False

    def _reveal(self) -> bool:
        index = self.board.coord_to_index(self.selected)
        if self.phase == GamePhase.PRE_INIT:
            self.board.start_at(self.selected)
            self.board.open(index)
            self.phase = GamePhase.PLAYING
        elif self.phase == GamePhase.PLAYING and self.board.open(index):
            self.phase = GamePhase.LOST
            self.board.open_all_bombs()
            logger.info("Mine hit at %s", self.selected)
            return True
        return False

    def _flag(self) -> bool:
        self.board.flag(self.board.coord_to_index(self.selected))
        if self.board.all_mines_flagged:
            self.phase = GamePhase.WON
            logger.info("All mines flagged")
            return True
        return False

    # ========================================================================
    # Main Loop
    # ========================================================================

    def run(self, actions: ActionSource, renderer: Renderer) -> None:
        """
        Play until the quit key is pressed.

        Args:
            actions: Blocking source of decoded player actions; None
                stands for a key that maps to nothing.
            renderer: Collaborator that draws the game after each change.
        """
        renderer.draw(self)
        while True:
            action = actions.read_action()
            if action is None:
                continue
            if action == Action.QUIT:
                logger.info("Quit requested")
                break
            self.handle(action)
            renderer.draw(self)
