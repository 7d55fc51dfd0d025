"""BottomPanel: a fixed region at the bottom of the terminal.

The panel sizes itself to the number of lines it is given, optionally topped
by a one-row separator, and skips redrawing when nothing changed.
"""

from __future__ import annotations

from typing import Sequence, Union

from gridpick.terminal import Terminal
from gridpick.utils import truncate_to_width

_SAVE_CURSOR = "\x1b7"
_RESTORE_CURSOR = "\x1b8"
_CLEAR_LINE = "\x1b[2K"
_RESET = "\x1b[0m"
_MOVE_FMT = "\x1b[{};1H"

PanelContent = Union[str, Sequence[str]]


class BottomPanel:
    """Rendering surface drawing lines into the bottom rows of a terminal."""

    def __init__(
        self,
        terminal: Terminal,
        *,
        separator: bool = False,
        separator_char: str = "─",
        max_height: int | None = None,
    ) -> None:
        self.terminal = terminal
        self._separator = separator
        self._separator_char = separator_char
        self._max_height = max_height

        self._lines: list[str] | None = None
        self._width = 0
        self._height = 0
        self.redraws = 0

    @property
    def height(self) -> int:
        """Rows currently occupied, separator included."""
        return self._height

    @property
    def lines(self) -> list[str]:
        return list(self._lines or [])

    def show(self, content: PanelContent, force: bool = False) -> bool:
        """Display *content*; returns ``False`` when the redraw was skipped.

        A string is split on newlines. Unless *force* is set, nothing is
        written when the content and terminal width are unchanged.
        """
        lines = content.split("\n") if isinstance(content, str) else list(content)
        width = self.terminal.columns

        if not force and lines == self._lines and width == self._width:
            return False

        body = [truncate_to_width(line, width, "") for line in lines]
        room = self.terminal.rows
        if self._max_height is not None:
            room = min(room, self._max_height)
        if self._separator:
            room -= 1
        body = body[: max(0, room)]
        if self._separator:
            body.insert(0, self._separator_char * width)

        self.terminal.write(self._draw(body))
        self._lines = lines
        self._width = width
        self._height = len(body)
        self.redraws += 1
        return True

    def hide(self) -> None:
        """Clear the region and forget the displayed content."""
        if self._height:
            self.terminal.write(self._draw([]))
        self._lines = None
        self._width = 0
        self._height = 0

    def _draw(self, body: list[str]) -> str:
        rows = self.terminal.rows
        top = rows - len(body) + 1
        out = [_SAVE_CURSOR]

        # Rows the previous, taller panel used that the new one does not
        for row in range(rows - self._height + 1, top):
            out.append(_MOVE_FMT.format(row) + _CLEAR_LINE)

        for offset, line in enumerate(body):
            out.append(_MOVE_FMT.format(top + offset) + _CLEAR_LINE + line + _RESET)

        out.append(_RESTORE_CURSOR)
        return "".join(out)
