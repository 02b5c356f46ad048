"""
Unit tests for the terminal session.

termios and tty are patched out so the tests run without a TTY; key
reads go through a pipe.
"""
import io
import os
from typing import Iterator, List, Tuple

import pytest
from rich.console import Console
from sweeper.tui import TerminalSession
from sweeper.tui import terminal


@pytest.fixture
def fake_tty(monkeypatch) -> List[Tuple[str, object]]:
    """Record termios/tty calls instead of touching a real terminal."""
    calls: List[Tuple[str, object]] = []
    saved = ["saved", "attributes"]

    def tcgetattr(fd):
        calls.append(("tcgetattr", fd))
        return saved

    def tcsetattr(fd, when, attributes):
        calls.append(("tcsetattr", attributes))

    def setcbreak(fd):
        calls.append(("setcbreak", fd))

    monkeypatch.setattr(terminal.termios, "tcgetattr", tcgetattr)
    monkeypatch.setattr(terminal.termios, "tcsetattr", tcsetattr)
    monkeypatch.setattr(terminal.tty, "setcbreak", setcbreak)
    return calls


@pytest.fixture
def pipe() -> Iterator[Tuple[int, int]]:
    """Read and write ends of an OS pipe standing in for stdin."""
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


# ============================================================================
# Terminal Mode Tests
# ============================================================================

class TestTerminalMode:
    """Test entering and restoring terminal mode."""

    def test_enter_saves_and_sets_cbreak(self, fake_tty) -> None:
        """Entering saves attributes and switches to cbreak."""
        console = Console(file=io.StringIO())
        with TerminalSession(console, fd=5):
            assert fake_tty == [("tcgetattr", 5), ("setcbreak", 5)]

    def test_exit_restores_attributes(self, fake_tty) -> None:
        """Leaving puts the saved attributes back."""
        with TerminalSession(Console(file=io.StringIO()), fd=5):
            pass
        assert fake_tty[-1] == ("tcsetattr", ["saved", "attributes"])

    @pytest.mark.parametrize("error", [RuntimeError, KeyboardInterrupt])
    def test_restores_on_error(self, fake_tty, error) -> None:
        """Terminal is restored even when the body blows up."""
        with pytest.raises(error):
            with TerminalSession(Console(file=io.StringIO()), fd=5):
                raise error()
        assert ("tcsetattr", ["saved", "attributes"]) in fake_tty

    def test_failed_setup_restores_attributes(
        self, fake_tty, monkeypatch
    ) -> None:
        """A failure after saving the attributes still restores them."""
        def setcbreak(fd):
            fake_tty.append(("setcbreak", fd))
            raise terminal.termios.error("cbreak refused")

        monkeypatch.setattr(terminal.tty, "setcbreak", setcbreak)
        with pytest.raises(terminal.termios.error):
            with TerminalSession(Console(file=io.StringIO()), fd=5):
                pass
        assert fake_tty[-1] == ("tcsetattr", ["saved", "attributes"])

    def test_restore_runs_once(self, fake_tty) -> None:
        """A second restore is a no-op."""
        session = TerminalSession(Console(file=io.StringIO()), fd=5)
        with session:
            pass
        session.restore()
        assert [c for c in fake_tty if c[0] == "tcsetattr"] == [
            ("tcsetattr", ["saved", "attributes"])
        ]

    def test_cursor_shape_set_and_reset(self, fake_tty) -> None:
        """Blinking underscore while playing, default shape afterwards."""
        output = io.StringIO()
        console = Console(file=output, force_terminal=True)
        with TerminalSession(console, fd=5):
            assert terminal.BLINKING_UNDERSCORE in output.getvalue()
        assert terminal.DEFAULT_CURSOR in output.getvalue()

    def test_setup_failure_propagates(self, monkeypatch) -> None:
        """No terminal means tcgetattr fails and nothing is changed."""

        def tcgetattr(fd):
            raise terminal.termios.error(25, "Inappropriate ioctl")

        monkeypatch.setattr(terminal.termios, "tcgetattr", tcgetattr)
        with pytest.raises(terminal.termios.error):
            with TerminalSession(Console(file=io.StringIO()), fd=5):
                pass


# ============================================================================
# Key Read Tests
# ============================================================================

class TestReadKey:
    """Test reading single keys and escape sequences."""

    def test_plain_character(self, pipe) -> None:
        """Ordinary keys come back one at a time."""
        read_fd, write_fd = pipe
        os.write(write_fd, b"fx")
        session = TerminalSession(Console(file=io.StringIO()), fd=read_fd)
        assert session.read_key() == "f"
        assert session.read_key() == "x"

    def test_arrow_sequence(self, pipe) -> None:
        """Arrow keys arrive as one three-byte sequence."""
        read_fd, write_fd = pipe
        os.write(write_fd, b"\x1b[A ")
        session = TerminalSession(Console(file=io.StringIO()), fd=read_fd)
        assert session.read_key() == "\x1b[A"
        assert session.read_key() == " "

    def test_tilde_sequence(self, pipe) -> None:
        """End on some terminals is ESC [ 4 ~."""
        read_fd, write_fd = pipe
        os.write(write_fd, b"\x1b[4~")
        session = TerminalSession(Console(file=io.StringIO()), fd=read_fd)
        assert session.read_key() == "\x1b[4~"

    def test_lone_escape(self, pipe) -> None:
        """Esc on its own is returned after a short wait."""
        read_fd, write_fd = pipe
        os.write(write_fd, b"\x1b")
        session = TerminalSession(Console(file=io.StringIO()), fd=read_fd)
        assert session.read_key() == "\x1b"

    def test_closed_input_raises_eof(self, pipe) -> None:
        """End of input is an error for the game loop."""
        read_fd, write_fd = pipe
        os.close(write_fd)
        session = TerminalSession(Console(file=io.StringIO()), fd=read_fd)
        with pytest.raises(EOFError):
            session.read_key()
