"""Selection index arithmetic over a grid that is logically a flat list."""

from __future__ import annotations

PROMPT_INDEX = -1


class NavigationIndexer:
    """Holds the selected candidate index and computes grid moves.

    Index ``-1`` selects the input prompt itself and is only reachable when
    *prompt_selectable* is set. Every operation clamps into range instead of
    rejecting input, and no movement wraps around.
    """

    def __init__(
        self,
        count: int = 0,
        column_count: int = 1,
        *,
        prompt_selectable: bool = False,
        index: int = 0,
    ) -> None:
        self._count = max(0, count)
        self._column_count = max(1, column_count)
        self._prompt_selectable = prompt_selectable
        self._index = self._clamp(index)

    # -- properties ---------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def count(self) -> int:
        return self._count

    @property
    def column_count(self) -> int:
        return self._column_count

    @property
    def prompt_selectable(self) -> bool:
        return self._prompt_selectable

    @property
    def min_index(self) -> int:
        return PROMPT_INDEX if self._prompt_selectable else 0

    @property
    def max_index(self) -> int:
        return max(self.min_index, self._count - 1)

    # -- state updates ------------------------------------------------------

    def _clamp(self, index: int) -> int:
        return max(self.min_index, min(index, self.max_index))

    def set_count(self, count: int) -> int:
        """Replace the candidate count, clamping the selection into range."""
        self._count = max(0, count)
        self._index = self._clamp(self._index)
        return self._index

    def set_column_count(self, column_count: int) -> None:
        self._column_count = max(1, column_count)

    def set_prompt_selectable(self, selectable: bool) -> int:
        self._prompt_selectable = selectable
        self._index = self._clamp(self._index)
        return self._index

    def select(self, index: int) -> int:
        """Select *index*, clamped into the valid range."""
        self._index = self._clamp(index)
        return self._index

    # -- movement -----------------------------------------------------------

    def move_vertically_by(self, step: int, column_count: int | None = None) -> int:
        """Move *step* grid rows down (positive) or up (negative).

        A move stays in the same column, jumping ``|step| * column_count``
        candidates at a time. Moving down stops at the last cell of the
        column; moving up stops at the first, except that row 0 column 0
        moves up onto the prompt when it is selectable.
        """
        if column_count is not None:
            self.set_column_count(column_count)
        if step == 0 or self._count == 0:
            return self._index

        span = abs(step) * self._column_count
        current = self._index
        last = self._count - 1

        if step > 0:
            if current == PROMPT_INDEX:
                result = 0
            else:
                col_max = last - ((last - current) % span)
                result = min(col_max, current + span)
        else:
            if current == 0 and self._prompt_selectable:
                result = PROMPT_INDEX
            elif current == PROMPT_INDEX:
                result = PROMPT_INDEX
            else:
                col_min = current % span
                result = max(col_min, current - span)

        return self.select(result)

    def move_horizontally_by(self, step: int) -> int:
        """Shift the selection *step* candidates along the flat list."""
        return self.select(self._index + step)

    # Convenience wrappers used by the session bindings

    def down(self, step: int = 1) -> int:
        return self.move_vertically_by(abs(step))

    def up(self, step: int = 1) -> int:
        return self.move_vertically_by(-abs(step))

    def forward(self, step: int = 1) -> int:
        return self.move_horizontally_by(abs(step))

    def backward(self, step: int = 1) -> int:
        return self.move_horizontally_by(-abs(step))
