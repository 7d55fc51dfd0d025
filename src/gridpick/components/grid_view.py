"""GridView component: renders a browsing session as styled grid rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from gridpick.layout import GridCell
from gridpick.session import Session
from gridpick.utils import drop_cells, truncate_to_width, visible_width


def _identity(text: str) -> str:
    return text


def _sgr(code: str) -> Callable[[str], str]:
    return lambda text: f"\x1b[{code}m{text}\x1b[0m"


@dataclass
class GridViewTheme:
    selected: Callable[[str], str] = _sgr("7")
    label: Callable[[str], str] = _sgr("1;31")
    dimmed: Callable[[str], str] = _sgr("2")
    menu: Callable[[str], str] = _sgr("36")
    error: Callable[[str], str] = _sgr("31")
    no_match: Callable[[str], str] = _sgr("2")

    @classmethod
    def plain(cls) -> GridViewTheme:
        """A theme that leaves text unstyled."""
        return cls(
            selected=_identity,
            label=_identity,
            dimmed=_identity,
            menu=_identity,
            error=_identity,
            no_match=_identity,
        )


class GridView:
    """Component drawing the visible rows of a :class:`Session`.

    While a jump is pending, each labelled cell shows the part of its label
    not yet typed over its first characters, and the other cells are dimmed.
    """

    def __init__(self, session: Session, theme: GridViewTheme | None = None) -> None:
        self.session = session
        self._theme = theme or GridViewTheme()

    def invalidate(self) -> None:
        pass

    def render(self, width: int) -> list[str]:
        session = self.session
        session.set_width(width)
        theme = self._theme
        lines: list[str] = []

        if not session.candidates:
            lines.append(theme.no_match(truncate_to_width("  No candidates", width, "")))
        else:
            start, end = session.viewport()
            by_row: dict[int, list[GridCell]] = {}
            for cell in session.layout.cells_in_rows(start, end):
                by_row.setdefault(cell.row, []).append(cell)
            for row in range(start, end):
                lines.append(self._render_row(by_row.get(row, []), width))

        if session.dispatch_pending and session.actions:
            lines.extend(theme.menu(line) for line in session.actions.render(width))

        if session.last_error:
            lines.append(theme.error(truncate_to_width(session.last_error, width)))

        return lines

    def render_text(self, width: int) -> str:
        return "\n".join(self.render(width))

    def handle_input(self, data: str) -> None:
        self.session.handle_input(data)

    def _render_row(self, cells: list[GridCell], width: int) -> str:
        session = self.session
        theme = self._theme
        selector = session.jump_selector
        selected = session.layout.cell_for(session.index) if session.index >= 0 else None

        labels: dict[int, str] = {}
        if selector.active:
            typed = len(selector.typed)
            labels = {t.index: t.label[typed:] for t in selector.pending_targets()}

        parts: list[str] = []
        used = 0
        for cell in cells:
            parts.append(" " * max(0, cell.column - used))
            drawn = cell.width
            if cell.index in labels:
                remaining = labels[cell.index]
                label_width = visible_width(remaining)
                rest = drop_cells(cell.text, label_width)
                parts.append(theme.label(remaining) + rest)
                drawn = max(cell.width, label_width)
            elif selector.active:
                parts.append(theme.dimmed(cell.text))
            elif cell is selected:
                parts.append(theme.selected(cell.text))
            else:
                parts.append(cell.text)
            used = cell.column + drawn

        return truncate_to_width("".join(parts), width, "")
