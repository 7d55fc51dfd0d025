"""Tests for gridpick.sources -- directory candidates."""

from __future__ import annotations

import os

import pytest

from gridpick.sources import DirectoryCandidates


@pytest.fixture
def listing(tmp_path):
    (tmp_path / "src").mkdir()
    for name in ("b.txt", "A.md", ".hidden"):
        (tmp_path / name).write_text("x")
    return tmp_path


class TestDirectoryCandidates:
    def test_lists_markers_then_sorted_entries(self, listing) -> None:
        source = DirectoryCandidates(str(listing))
        assert source.candidates() == ["./", "../", "A.md", "b.txt", "src/"]

    def test_prefix_narrowing(self, listing) -> None:
        source = DirectoryCandidates(str(listing))
        assert source.candidates("s") == ["src/"]
        assert source.candidates("B") == ["b.txt"]

    def test_dot_query_shows_hidden(self, listing) -> None:
        source = DirectoryCandidates(str(listing))
        assert source.candidates(".") == ["./", "../", ".hidden"]

    def test_show_hidden(self, listing) -> None:
        source = DirectoryCandidates(str(listing), show_hidden=True)
        assert ".hidden" in source.candidates()

    def test_refresh_picks_up_new_entries(self, listing) -> None:
        source = DirectoryCandidates(str(listing))
        source.candidates()
        (listing / "c.py").write_text("x")
        assert "c.py" not in source.candidates()
        source.refresh()
        assert "c.py" in source.candidates()

    def test_resolve(self, listing) -> None:
        source = DirectoryCandidates(str(listing))
        assert source.resolve("src/") == os.path.join(str(listing), "src")
        assert source.resolve("./") == str(listing)

    def test_missing_directory(self, tmp_path) -> None:
        source = DirectoryCandidates(str(tmp_path / "missing"))
        assert source.candidates() == ["./", "../"]
