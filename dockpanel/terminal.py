"""Raw terminal session for the dashboard.

Key reading needs raw mode so single bytes arrive unbuffered, and frames are
drawn on the alternate screen so quitting gives the shell back untouched.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_DASHBOARD = b"\x1b[?1049h\x1b[?25l"
LEAVE_DASHBOARD = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switch the controlling terminal in and out of dashboard mode."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        # Settings to put back when the dashboard exits.
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Raw keys, alternate screen, hidden cursor."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_DASHBOARD)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_DASHBOARD)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Hold dashboard mode for the main loop; always restored, even on a crash."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_DASHBOARD", "LEAVE_DASHBOARD", "TerminalController"]
