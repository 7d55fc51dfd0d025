"""Tests for gridpick.keys -- raw input parsing."""

from __future__ import annotations

import pytest

from gridpick.keys import Key, key_char, matches_key, normalize_key_id, parse_key


class TestParseKey:
    """parse_key maps raw terminal input to key identifiers."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1bOC", "right"),
            ("\x1b[D", "left"),
            ("\x1b[6~", "pageDown"),
            ("\x1b", "escape"),
            ("\r", "enter"),
            ("\t", "tab"),
            (" ", "space"),
            ("\x7f", "backspace"),
            ("\x0e", "ctrl+n"),
            ("\x10", "ctrl+p"),
            ("\x1bj", "alt+j"),
            ("\x1bJ", "shift+alt+j"),
            ("\x1b\x06", "ctrl+alt+f"),
            ("\x1b[1;5A", "ctrl+up"),
            ("\x1b[1;3B", "alt+down"),
            ("\x1b[Z", "shift+tab"),
            ("x", "x"),
        ],
    )
    def test_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_empty_is_none(self) -> None:
        assert parse_key("") is None

    def test_unknown_sequence_is_none(self) -> None:
        assert parse_key("\x1b[99X") is None


class TestNormalizeKeyId:
    def test_modifier_order(self) -> None:
        assert normalize_key_id("alt+ctrl+f") == "ctrl+alt+f"

    def test_aliases(self) -> None:
        assert normalize_key_id("esc") == "escape"
        assert normalize_key_id("return") == "enter"

    def test_plus_key(self) -> None:
        assert normalize_key_id("+") == "+"


class TestMatchesKey:
    def test_matches_named_key(self) -> None:
        assert matches_key("\x1b[B", Key.down)

    def test_matches_alias(self) -> None:
        assert matches_key("\x1b", "esc")

    def test_matches_modifier_helpers(self) -> None:
        assert matches_key("\x1bj", Key.alt("j"))
        assert matches_key("\x0e", Key.ctrl("n"))
        assert matches_key("\x1b\x0e", Key.ctrl_alt("n"))

    def test_rejects_other_key(self) -> None:
        assert not matches_key("\x1b[A", Key.down)


class TestKeyChar:
    def test_printable(self) -> None:
        assert key_char("a") == "a"

    def test_space(self) -> None:
        assert key_char(" ") == " "

    def test_named_keys_are_not_characters(self) -> None:
        assert key_char("\x1b[A") is None
        assert key_char("\r") is None
        assert key_char("\x1bj") is None
