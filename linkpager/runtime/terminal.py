"""Terminal control helpers for the pager session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
Keys are read from the controlling tty because stdin carries the document.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

CONTROLLING_TTY = "/dev/tty"


def open_keyboard_tty(path: str = CONTROLLING_TTY) -> int:
    """Open the controlling terminal for key input and return its fd."""
    return os.open(path, os.O_RDWR | os.O_NOCTTY)


def terminal_size(fd: int | None = None) -> os.terminal_size:
    """Return the terminal size, falling back to 80x24 when unknown."""
    if fd is not None:
        try:
            return os.get_terminal_size(fd)
        except OSError:
            pass
    return shutil.get_terminal_size((80, 24))


class TerminalController:
    """Manage terminal mode transitions for the pager screen."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind keyboard/screen file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty state."""
        # Reset attributes, show cursor, and leave the alternate screen.
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        return terminal_size(self.stdout_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
