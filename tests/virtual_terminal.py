"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

``VirtualTerminal`` satisfies ``gridpick.terminal.Terminal`` without any
real I/O. Everything written is captured for assertions, and keys can be
queued for code that reads input.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    """

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self._rows = rows
        self._columns = columns
        self._buffer: list[str] = []
        self._keys: deque[str] = deque()

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @rows.setter
    def rows(self, value: int) -> None:
        self._rows = value

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = value

    # -- Terminal protocol: output ------------------------------------------

    def write(self, data: str) -> None:
        """Append *data* to the internal buffer."""
        self._buffer.append(data)

    # -- Input --------------------------------------------------------------

    def queue_keys(self, keys: Iterable[str]) -> None:
        self._keys.extend(keys)

    def read_key(self) -> str:
        """Return the next queued key.

        Raises ``RuntimeError`` when the queue is empty.
        """
        if not self._keys:
            raise RuntimeError("No more queued input")
        return self._keys.popleft()

    # -- Test helpers -------------------------------------------------------

    @property
    def output(self) -> str:
        """Return everything written to the terminal as a single string."""
        return "".join(self._buffer)

    @property
    def write_count(self) -> int:
        """Return the number of individual ``write`` calls made."""
        return len(self._buffer)

    def clear_buffer(self) -> None:
        """Discard all recorded output."""
        self._buffer.clear()
