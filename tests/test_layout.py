"""Tests for gridpick.layout -- candidate grid layout."""

from __future__ import annotations

from gridpick.layout import column_count_for, layout_grid


class TestColumnCount:
    def test_capped_at_four(self) -> None:
        assert column_count_for(1, 200) == 4

    def test_explicit_cap(self) -> None:
        assert column_count_for(1, 200, 2) == 2

    def test_never_below_one(self) -> None:
        assert column_count_for(50, 10) == 1


class TestLayoutGrid:
    """Candidates are laid out left to right in fixed-width columns."""

    def test_five_short_candidates(self) -> None:
        layout = layout_grid(["a", "b", "c", "d", "e"], 20)
        assert layout.column_count == 4
        assert layout.column_width == 5
        assert layout.lines == ["a    b    c    d", "e"]
        assert layout.row_of(3) == 0
        assert layout.row_of(4) == 1

    def test_cell_positions_side_table(self) -> None:
        layout = layout_grid(["a", "b", "c", "d", "e"], 20)
        assert layout.cell_positions[(0, 0)] == 0
        assert layout.cell_positions[(0, 5)] == 1
        assert layout.cell_positions[(1, 0)] == 4
        # Metadata stays out of the text
        assert layout.rendered_text == "a    b    c    d\ne"

    def test_empty_candidates(self) -> None:
        layout = layout_grid([], 20)
        assert layout.cells == []
        assert layout.rendered_text == ""

    def test_width_one(self) -> None:
        layout = layout_grid(["abc", "de"], 1)
        assert layout.column_count == 1
        assert layout.lines == ["abc", "de"]

    def test_width_below_one_treated_as_one(self) -> None:
        layout = layout_grid(["abc"], 0)
        assert layout.available_width == 1
        assert layout.lines == ["abc"]

    def test_column_cap(self) -> None:
        layout = layout_grid(["a", "b", "c"], 80, 2)
        assert layout.column_count == 2
        assert layout.lines == ["a" + " " * 39 + "b", "c"]

    def test_zero_width_candidate_breaks_section(self) -> None:
        layout = layout_grid(["a", "b", "", "c"], 20)
        assert layout.lines == ["a    b", "", "c"]
        assert layout.row_of(2) == 1
        assert layout.row_of(3) == 2
        assert layout.cell_for(2) is None

    def test_trailing_section_break_adds_one_blank_row(self) -> None:
        layout = layout_grid(["a", "b", ""], 20)
        assert layout.lines == ["a    b", ""]
        assert layout.row_count == 2
        assert layout.row_of(2) == 1

    def test_lone_section_break(self) -> None:
        assert layout_grid([""], 20).lines == [""]

    def test_duplicates_collapse(self) -> None:
        layout = layout_grid(["a", "a", "b"], 20)
        assert layout.lines == ["a    b"]
        assert layout.cell_for(1) is layout.cell_for(0)
        assert layout.cell_positions[(0, 5)] == 2

    def test_duplicates_kept_without_collapse(self) -> None:
        layout = layout_grid(["a", "a", "b"], 20, collapse_duplicates=False)
        assert layout.lines == ["a    a    b"]

    def test_wide_characters_keep_columns_aligned(self) -> None:
        layout = layout_grid(["日本語", "ab", "c"], 20)
        assert layout.column_count == 2
        assert layout.lines == ["日本語    ab", "c"]
        assert layout.cell_for(1).column == 10

    def test_deterministic(self) -> None:
        candidates = ["alpha", "beta", "", "gamma", "gamma", "delta"]
        assert layout_grid(candidates, 30) == layout_grid(candidates, 30)

    def test_cells_in_rows(self) -> None:
        layout = layout_grid(list("abcdefghij"), 20)
        assert [c.index for c in layout.cells_in_rows(1, 2)] == [4, 5, 6, 7]
