"""Jump label generation.

A label generator assigns each of *count* targets a key sequence drawn from
an alphabet so that no label is a prefix of another. Shorter labels go to
earlier targets.
"""

from __future__ import annotations

from typing import Protocol

DEFAULT_LABEL_KEYS = "asdfghjkl"


class LabelGenerator(Protocol):
    """Callable producing *count* prefix-free labels over *keys*."""

    def __call__(self, count: int, keys: str) -> list[str]: ...


def tree_labels(count: int, keys: str = DEFAULT_LABEL_KEYS) -> list[str]:
    """Generate *count* minimal-length, prefix-free labels from *keys*.

    Starts from the single keys and, while more labels are needed, replaces
    the last of the shortest labels by its children (the label extended by
    every key). The list stays in key order, so with ``keys="abc"`` and
    ``count=5`` the labels are ``a, b, ca, cb, cc``.

    Raises ``ValueError`` if *keys* repeats a key, or has fewer than two keys
    while more than one label is needed.
    """
    if count <= 0:
        return []
    if len(set(keys)) != len(keys):
        raise ValueError(f"Label keys must be unique: {keys!r}")
    if not keys or (count > 1 and len(keys) < 2):
        raise ValueError(f"Cannot build {count} labels from keys {keys!r}")

    labels = list(keys)
    while len(labels) < count:
        shortest = min(len(label) for label in labels)
        position = max(i for i, label in enumerate(labels) if len(label) == shortest)
        parent = labels[position]
        labels[position : position + 1] = [parent + key for key in keys]

    # Dropping trailing leaves keeps the set prefix-free
    return labels[:count]
