"""Tests for gridpick.labels -- jump label generation."""

from __future__ import annotations

import pytest

from gridpick.labels import DEFAULT_LABEL_KEYS, tree_labels


class TestTreeLabels:
    def test_single_keys_when_enough(self) -> None:
        assert tree_labels(5) == ["a", "s", "d", "f", "g"]

    def test_expands_last_key(self) -> None:
        assert tree_labels(5, "abc") == ["a", "b", "ca", "cb", "cc"]

    def test_trims_unused_leaves(self) -> None:
        assert tree_labels(4, "abc") == ["a", "b", "ca", "cb"]

    def test_two_keys(self) -> None:
        assert tree_labels(4, "ab") == ["aa", "ab", "ba", "bb"]

    def test_zero(self) -> None:
        assert tree_labels(0) == []

    def test_single_label_from_single_key(self) -> None:
        assert tree_labels(1, "a") == ["a"]

    def test_prefix_free_and_unique(self) -> None:
        for count in range(1, 60):
            labels = tree_labels(count, "asdf")
            assert len(labels) == count
            assert len(set(labels)) == count
            for a in labels:
                for b in labels:
                    if a != b:
                        assert not b.startswith(a)

    def test_shorter_labels_first(self) -> None:
        labels = tree_labels(40, DEFAULT_LABEL_KEYS)
        lengths = [len(label) for label in labels]
        assert lengths == sorted(lengths)

    def test_duplicate_keys_rejected(self) -> None:
        with pytest.raises(ValueError):
            tree_labels(3, "aab")

    def test_alphabet_too_small(self) -> None:
        with pytest.raises(ValueError):
            tree_labels(2, "a")
