"""Terminal abstraction for the bottom-of-screen grid panel.

Provides a ``Terminal`` protocol and a ``ProcessTerminal`` backed by
``sys.stdin``/``sys.stdout`` that can switch stdin into raw mode and read
key input.
"""

from __future__ import annotations

import os
import sys
import termios
import tty
from typing import Protocol

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal operations the panel needs."""

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's standard streams."""

    def __init__(self) -> None:
        self._original_termios: list | None = None

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Put stdin into raw mode and hide the cursor."""
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        self.write(_HIDE_CURSOR)

    def stop(self) -> None:
        """Restore the saved terminal attributes and show the cursor."""
        self.write(_SHOW_CURSOR)
        if self._original_termios is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()

    # -- I/O ----------------------------------------------------------------

    def read_key(self) -> str:
        """Block until input arrives and return one chunk of it.

        A whole escape sequence normally arrives in a single read.
        """
        data = os.read(sys.stdin.fileno(), 64)
        return data.decode("utf-8", errors="replace")

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()
