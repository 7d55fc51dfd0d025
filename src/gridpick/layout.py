"""Grid layout of completion candidates.

Lays a flat candidate list out as column-aligned rows that fit a given
width. The result keeps the rendered text and, beside it, a side table from
on-screen cell position to logical candidate index.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from gridpick.utils import visible_width

DEFAULT_COLUMN_CAP = 4

# Cells between the longest candidate and the next column
COLUMN_GAP = 2


@dataclass
class GridCell:
    """One rendered candidate."""

    index: int
    row: int
    column: int  # offset in terminal cells from the start of the row
    width: int
    text: str


@dataclass
class GridLayout:
    """Result of :func:`layout_grid`."""

    column_count: int
    column_width: int
    available_width: int
    lines: list[str] = field(default_factory=lambda: [""])
    cells: list[GridCell] = field(default_factory=list)
    cell_positions: dict[tuple[int, int], int] = field(default_factory=dict)
    index_rows: dict[int, int] = field(default_factory=dict)
    # logical index -> index of the cell it renders in (collapsed
    # duplicates point at the entry they were folded into)
    index_cells: dict[int, int] = field(default_factory=dict)

    @property
    def rendered_text(self) -> str:
        return "\n".join(self.lines)

    @property
    def row_count(self) -> int:
        return len(self.lines)

    def row_of(self, index: int) -> int:
        """Return the row showing *index*; the prompt (``-1``) maps to row 0."""
        return self.index_rows.get(index, 0)

    def cell_for(self, index: int) -> GridCell | None:
        """Return the cell showing *index*, or ``None`` for section breaks."""
        position = self.index_cells.get(index)
        if position is None:
            return None
        return self.cells[position]

    def cells_in_rows(self, start: int, end: int) -> list[GridCell]:
        return [cell for cell in self.cells if start <= cell.row < end]


def column_count_for(
    longest_width: int, available_width: int, column_cap: int | None = None
) -> int:
    """Number of columns that fit, never less than one."""
    cap = DEFAULT_COLUMN_CAP if column_cap is None else column_cap
    fit = available_width // (longest_width + COLUMN_GAP)
    return max(1, min(cap, fit))


class _RowBuilder:
    """Accumulates rows of text and the cell side table."""

    def __init__(self, layout: GridLayout) -> None:
        self.layout = layout
        self.layout.lines = []
        self.row = 0
        self.offset = 0
        self.text = ""
        self.text_width = 0
        self.closed_by_break = False

    def place(self, index: int, candidate: str, width: int) -> None:
        self.closed_by_break = False
        self.text += " " * (self.offset - self.text_width) + candidate
        self.text_width = self.offset + width
        cell = GridCell(
            index=index, row=self.row, column=self.offset, width=width, text=candidate
        )
        self.layout.index_cells[index] = len(self.layout.cells)
        self.layout.cells.append(cell)
        self.layout.cell_positions[(self.row, self.offset)] = index
        self.layout.index_rows[index] = self.row

    def break_row(self) -> None:
        self.layout.lines.append(self.text)
        self.row += 1
        self.offset = 0
        self.text = ""
        self.text_width = 0

    def finish(self) -> None:
        # A trailing section break already ended the last row
        if self.closed_by_break and self.layout.lines:
            return
        self.layout.lines.append(self.text)


def layout_grid(
    candidates: Sequence[str],
    available_width: int,
    column_cap: int | None = None,
    *,
    collapse_duplicates: bool = True,
) -> GridLayout:
    """Lay *candidates* out in columns fitting *available_width* cells.

    The column count is ``max(1, min(column_cap or 4, width // (longest + 2)))``
    and each column is ``width // column_count`` cells wide. Candidates are
    placed left to right; a candidate wider than a column spans as many
    columns as it needs so that later cells stay on column boundaries.

    A zero-width candidate is a section break: it ends the current row and
    adds a blank row, which is the last row when the break comes last. With
    *collapse_duplicates*, an entry equal to the one just before it is not
    drawn and maps to the earlier entry's cell.

    Never raises; a width below one is treated as one.
    """
    width = max(1, available_width)
    widths = [visible_width(c) for c in candidates]
    longest = max(widths, default=0)

    column_count = column_count_for(longest, width, column_cap)
    column_width = width // column_count

    layout = GridLayout(
        column_count=column_count, column_width=column_width, available_width=width
    )
    rows = _RowBuilder(layout)

    for index, candidate in enumerate(candidates):
        if collapse_duplicates and index > 0 and candidate == candidates[index - 1]:
            layout.index_rows[index] = layout.index_rows[index - 1]
            previous = layout.index_cells.get(index - 1)
            if previous is not None:
                layout.index_cells[index] = previous
            continue

        cand_width = widths[index]
        if cand_width == 0:
            if rows.offset > 0:
                rows.break_row()
            layout.index_rows[index] = rows.row
            rows.break_row()
            rows.closed_by_break = True
            continue

        if rows.offset > 0 and rows.offset + max(column_width, cand_width) > width:
            rows.break_row()

        rows.place(index, candidate, cand_width)
        rows.offset += column_width * math.ceil(cand_width / column_width)

    rows.finish()
    return layout
