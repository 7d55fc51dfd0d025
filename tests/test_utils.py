"""Tests for gridpick.utils -- display width helpers."""

from __future__ import annotations

from gridpick.utils import (
    drop_cells,
    pad_to_width,
    strip_ansi,
    take_cells,
    truncate_to_width,
    visible_width,
)


class TestVisibleWidth:
    def test_ascii(self) -> None:
        assert visible_width("abc") == 3

    def test_empty(self) -> None:
        assert visible_width("") == 0

    def test_escape_sequences_ignored(self) -> None:
        assert visible_width("\x1b[31mabc\x1b[0m") == 3

    def test_wide_characters(self) -> None:
        assert visible_width("日本") == 4

    def test_combining_mark(self) -> None:
        assert visible_width("é") == 1

    def test_tab_counts_three(self) -> None:
        assert visible_width("a\tb") == 5


class TestStripAnsi:
    def test_removes_sgr(self) -> None:
        assert strip_ansi("\x1b[1;31mhi\x1b[0m") == "hi"


class TestTakeCells:
    def test_cuts_at_cell_budget(self) -> None:
        assert take_cells("abcdef", 3) == "abc"

    def test_does_not_split_wide_character(self) -> None:
        assert take_cells("日本語", 5) == "日本"

    def test_keeps_escape_sequences(self) -> None:
        assert take_cells("\x1b[31mabc", 2) == "\x1b[31mab"

    def test_zero_budget(self) -> None:
        assert take_cells("abc", 0) == ""


class TestDropCells:
    def test_drops_prefix(self) -> None:
        assert drop_cells("abcdef", 2) == "cdef"

    def test_half_wide_character_leaves_space(self) -> None:
        assert drop_cells("日本", 1) == " 本"

    def test_dropping_more_than_text(self) -> None:
        assert drop_cells("ab", 5) == ""

    def test_zero_keeps_text(self) -> None:
        assert drop_cells("ab", 0) == "ab"


class TestTruncateToWidth:
    def test_fits_unchanged(self) -> None:
        assert truncate_to_width("hello", 10) == "hello"

    def test_truncates_with_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 8) == "hello..."

    def test_custom_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 5, "") == "hello"

    def test_pads(self) -> None:
        assert truncate_to_width("hi", 5, pad=True) == "hi   "

    def test_non_positive_width(self) -> None:
        assert truncate_to_width("hi", 0) == ""

    def test_result_never_exceeds_width(self) -> None:
        for width in range(1, 12):
            assert visible_width(truncate_to_width("日本語のテキスト", width)) <= width


class TestPadToWidth:
    def test_pads_short_text(self) -> None:
        assert pad_to_width("ab", 4) == "ab  "

    def test_leaves_long_text(self) -> None:
        assert pad_to_width("abcdef", 4) == "abcdef"
