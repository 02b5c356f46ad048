"""
Rendering of the game state with rich.

Turns the board snapshot, cursor and phase into styled text and draws
it on a rich Console.
"""
from typing import Dict, List

from rich.console import Console, Group
from rich.control import Control
from rich.style import Style
from rich.text import Text

from ..game.cell import FLAGGED_CODE, HIDDEN_CODE, MINE_CODE
from ..game.controller import Game, GamePhase


# ============================================================================
# Cell Glyphs
# ============================================================================

HIDDEN_STYLE = Style(color="white", bold=True)
FLAGGED_STYLE = Style(color="rgb(255,127,80)", bold=True, italic=True)
EMPTY_STYLE = Style(color="bright_black")
MINE_STYLE = Style(color="red", bold=True, italic=True)

# Counts of 5 and above share one colour band.
COUNT_STYLES: Dict[int, Style] = {
    1: Style(color="blue"),
    2: Style(color="green"),
    3: Style(color="yellow"),
    4: Style(color="magenta"),
}
HIGH_COUNT_STYLE = Style(color="dark_red")


def cell_text(code: int) -> Text:
    """
    Build the glyph for one cell.

    Args:
        code: Cell code as produced by ``Cell.code``.

    Returns:
        Styled single-character text.
    """
    if code == HIDDEN_CODE:
        return Text("X", style=HIDDEN_STYLE)
    if code == FLAGGED_CODE:
        return Text("F", style=FLAGGED_STYLE)
    if code == MINE_CODE:
        return Text("B", style=MINE_STYLE)
    if code == 0:
        return Text("#", style=EMPTY_STYLE)
    return Text(str(code), style=COUNT_STYLES.get(code, HIGH_COUNT_STYLE))


# ============================================================================
# Board Renderer
# ============================================================================

class BoardRenderer:
    """Draws a ``Game`` onto a rich Console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def _grid_lines(self, game: Game) -> List[Text]:
        lines = []
        for row in game.board.snapshot():
            line = Text()
            for code in row:
                line.append_text(cell_text(int(code)))
                line.append(" ")
            lines.append(line)
        return lines

    def _status_lines(self, game: Game) -> List[Text]:
        board = game.board
        if game.phase == GamePhase.WON:
            headline = Text("YOU WON!", style="bold italic green")
        elif game.phase == GamePhase.LOST:
            headline = Text("YOU LOST!", style="bold italic red")
        else:
            selected = Text(f"Selected tile: {game.selected} [")
            selected.append_text(cell_text(board.get(game.selected).code()))
            selected.append("]")
            return [
                Text(
                    f"Flags Used: {board.num_used_flags}"
                    f"/{board.num_allowed_flags}"
                ),
                selected,
            ]
        return [
            headline,
            Text("Hit R to restart!", style="bold italic blue"),
            Text("Hit ESC to quit!", style="bold italic white"),
        ]

    def render(self, game: Game) -> Group:
        """Build the full screen for the current game state."""
        return Group(*self._grid_lines(game), *self._status_lines(game))

    def draw(self, game: Game) -> None:
        """Redraw the screen and park the terminal cursor on the selection."""
        self.console.clear()
        self.console.print(self.render(game), soft_wrap=True)
        self.console.control(Control.move_to(game.cursor_x, game.cursor_y))
        self.console.show_cursor(not game.is_over)
