"""Candidate sources feeding a session."""

from __future__ import annotations

import logging
import os
from typing import Protocol

logger = logging.getLogger(__name__)

SELF_CANDIDATE = "./"
PARENT_CANDIDATE = "../"


class CandidateSource(Protocol):
    """Produces the candidate list for a query typed at the prompt."""

    def candidates(self, query: str = "") -> list[str]: ...


class DirectoryCandidates:
    """Lists one directory: ``./`` and ``../`` first, then sorted entries.

    Directories carry a trailing ``/``. Hidden entries are left out unless
    *show_hidden* is set or the query itself starts with a dot.
    """

    def __init__(self, path: str, show_hidden: bool = False) -> None:
        self.path = os.path.abspath(path)
        self.show_hidden = show_hidden
        self._entries: list[str] | None = None

    def refresh(self) -> None:
        self._entries = None

    def _list(self) -> list[str]:
        if self._entries is None:
            try:
                found = list(os.scandir(self.path))
            except OSError as e:
                logger.warning("Cannot list %s: %s", self.path, e)
                found = []
            entries = [e.name + "/" if e.is_dir() else e.name for e in found]
            self._entries = sorted(entries, key=lambda n: (n.lower(), n))
        return self._entries

    def candidates(self, query: str = "") -> list[str]:
        lowered = query.lower()
        hidden_ok = self.show_hidden or query.startswith(".")
        matches = [
            name
            for name in self._list()
            if name.lower().startswith(lowered) and (hidden_ok or not name.startswith("."))
        ]
        markers = [m for m in (SELF_CANDIDATE, PARENT_CANDIDATE) if m.startswith(query)]
        return markers + matches

    def resolve(self, candidate: str) -> str:
        """Return the filesystem path a candidate names."""
        return os.path.normpath(os.path.join(self.path, candidate))
