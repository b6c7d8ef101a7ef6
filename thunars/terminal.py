"""Terminal control for the browser session.

Owns the raw-mode lifecycle and alternate-screen switching. The saved tty
state is restored on exit, including when the loop raises, and around
foreground programs started from the browser.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_ALT_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_ALT_SCREEN = b"\x1b[?25h\x1b[?1049l"
FALLBACK_SIZE = (80, 24)


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_ALT_SCREEN)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_ALT_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        return shutil.get_terminal_size(FALLBACK_SIZE)

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
