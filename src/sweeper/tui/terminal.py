"""
Terminal session handling.

Puts the controlling terminal into cbreak mode for the lifetime of a
``with`` block and reads single key presses from it. The previous
terminal settings are restored however the block is left.
"""
import logging
import os
import select
import sys
import termios
import tty
from types import TracebackType
from typing import Any, List, Optional, Type

from rich.console import Console

from .keys import ESC

logger = logging.getLogger(__name__)

# DECSCUSR cursor shapes
BLINKING_UNDERSCORE = ESC + "[3 q"
DEFAULT_CURSOR = ESC + "[0 q"

# Seconds to wait for the rest of an escape sequence after ESC.
ESCAPE_TIMEOUT = 0.05


class TerminalSession:
    """
    Scoped cbreak-mode terminal.

    Attributes:
        console: rich Console that output is drawn on.
        fd: File descriptor keys are read from.
    """

    def __init__(
        self, console: Optional[Console] = None, fd: Optional[int] = None
    ) -> None:
        self.console = console or Console()
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved: Optional[List[Any]] = None

    def __enter__(self) -> "TerminalSession":
        self._saved = termios.tcgetattr(self.fd)
        try:
            tty.setcbreak(self.fd)
            self._set_cursor_shape(BLINKING_UNDERSCORE)
        except BaseException:
            self.restore()
            raise
        logger.debug("Terminal in cbreak mode")
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.restore()

    def _set_cursor_shape(self, sequence: str) -> None:
        if self.console.is_terminal:
            self.console.file.write(sequence)
            self.console.file.flush()

    def restore(self) -> None:
        """Put the terminal back the way it was found."""
        if self._saved is None:
            return
        try:
            self._set_cursor_shape(DEFAULT_CURSOR)
            self.console.clear()
            self.console.show_cursor(True)
        finally:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None
            logger.debug("Terminal restored")

    # ========================================================================
    # Input
    # ========================================================================

    def _read_char(self) -> str:
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("Terminal input closed")
        return data.decode("utf-8", errors="replace")

    def _pending(self) -> bool:
        ready, _, _ = select.select([self.fd], [], [], ESCAPE_TIMEOUT)
        return bool(ready)

    def read_key(self) -> str:
        """
        Block until a key is pressed.

        Returns:
            A single character, or a whole escape sequence for keys such
            as the arrows. A lone ESC is returned as is.
        """
        key = self._read_char()
        if key != ESC or not self._pending():
            return key
        key += self._read_char()
        if key[-1] not in "[O":
            return key
        # CSI/SS3: parameters run until a final byte in @..~
        while self._pending():
            char = self._read_char()
            key += char
            if "@" <= char <= "~":
                break
        return key
