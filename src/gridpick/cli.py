"""Entry point for the gridpick CLI.

``gridpick DIR --print`` writes the directory as a grid and exits. Without
``--print`` the directory is browsed interactively in a panel at the bottom
of the terminal and the chosen path is printed on exit.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable

from gridpick.components import BottomPanel, GridView
from gridpick.dispatch import ActionMenu
from gridpick.keys import Key, key_char, matches_key
from gridpick.layout import layout_grid
from gridpick.session import Session, SessionStack
from gridpick.settings import GridSettings, apply_overrides, load_settings
from gridpick.sources import SELF_CANDIDATE, DirectoryCandidates
from gridpick.terminal import ProcessTerminal, Terminal
from gridpick.utils import truncate_to_width

logger = logging.getLogger(__name__)


class Browser:
    """Interactive directory browser built on nested sessions.

    Confirming a directory opens a nested session for it; cancelling a nested
    session returns to the one below. Typing narrows the listing by prefix.
    """

    def __init__(self, terminal: Terminal, settings: GridSettings) -> None:
        self.terminal = terminal
        self.settings = settings
        self.stack = SessionStack()
        self.panel = BottomPanel(
            terminal,
            separator=settings.show_separator,
            max_height=settings.max_rows + 4,
        )
        self.result: str | None = None

        self._sources: dict[int, DirectoryCandidates] = {}
        self._queries: dict[int, str] = {}
        self._views: dict[int, GridView] = {}
        self._status = ""
        self._descend: str | None = None

    # -- sessions -----------------------------------------------------------

    def open(self, path: str) -> Session:
        source = DirectoryCandidates(path)
        session = Session(
            source.candidates(),
            width=self.terminal.columns,
            settings=self.settings,
            directory=source.path,
            name=source.path,
            actions=ActionMenu(
                [
                    ("p", self._pick, "pick"),
                    ("e", self._enter, "enter"),
                ]
            ),
            on_confirm=self._pick,
            on_act=self._preview,
            on_open_directory=self._pick_path,
        )
        session.on_unhandled = lambda data: self._narrow(session, data)
        self._sources[id(session)] = source
        self._queries[id(session)] = ""
        self._views[id(session)] = GridView(session)
        return self.stack.push(session)

    def _path_for(self, index: int) -> str | None:
        session = self.stack.current
        if session is None:
            return None
        source = self._sources[id(session)]
        if index < 0:
            return source.resolve(self._queries[id(session)])
        return source.resolve(session.candidates[index])

    def _pick(self, index: int) -> None:
        session = self.stack.current
        if session is None or index >= len(session.candidates):
            return
        candidate = session.candidates[index] if index >= 0 else ""
        path = self._path_for(index)
        if candidate.endswith("/") and candidate != SELF_CANDIDATE:
            self._descend = path
        else:
            self.result = path

    def _pick_path(self, path: str) -> None:
        self.result = path

    def _enter(self, index: int) -> None:
        path = self._path_for(index)
        if path is not None and os.path.isdir(path):
            self._descend = path
        else:
            self.result = path

    def _preview(self, index: int) -> None:
        self._status = self._path_for(index) or ""

    def _narrow(self, session: Session, data: str) -> None:
        query = self._queries[id(session)]
        if matches_key(data, Key.backspace):
            query = query[:-1]
        else:
            char = key_char(data)
            if char is None:
                return
            query += char
        self._queries[id(session)] = query
        session.set_candidates(self._sources[id(session)].candidates(query))

    # -- loop ---------------------------------------------------------------

    def render(self) -> list[str]:
        session = self.stack.current
        if session is None:
            return []
        width = self.terminal.columns
        lines = self._views[id(session)].render(width)
        if self._status:
            lines.append(truncate_to_width(self._status, width))
        prompt = f"{session.directory}/ > {self._queries[id(session)]}"
        if session.index < 0:
            prompt = f"\x1b[7m{prompt}\x1b[0m"
        lines.append(truncate_to_width(prompt, width))
        return lines

    def _entering_directory(self, session: Session, data: str) -> bool:
        if session.input_pending or session.keybindings.action_for(data) != "confirm":
            return False
        candidate = session.selected_candidate
        return candidate is not None and candidate.endswith("/") and candidate != SELF_CANDIDATE

    def feed(self, data: str) -> bool:
        """Handle one chunk of input; returns ``False`` once browsing is over."""
        self._status = ""
        session = self.stack.current
        if session is not None and self._entering_directory(session, data):
            self.open(self._path_for(session.index) or session.directory or ".")
            return True

        for finished in self.stack.handle_input(data):
            self._sources.pop(id(finished), None)
            self._queries.pop(id(finished), None)
            self._views.pop(id(finished), None)
            logger.debug("Session %r %s", finished.name, finished.status.value)

        if self._descend is not None:
            # Jumped or dispatched onto a directory: list it at the same depth
            path, self._descend = self._descend, None
            self.open(path)

        return self.result is None and len(self.stack) > 0

    def run(self, read_key: Callable[[], str]) -> str | None:
        while True:
            self.panel.show(self.render())
            if not self.feed(read_key()):
                break
        self.panel.hide()
        return self.result


def print_grid(path: str, width: int, settings: GridSettings) -> None:
    source = DirectoryCandidates(path)
    layout = layout_grid(
        source.candidates(),
        width,
        settings.max_columns,
        collapse_duplicates=settings.collapse_duplicates,
    )
    print(layout.rendered_text)


def main() -> None:
    parser = argparse.ArgumentParser(description="gridpick: browse a directory as a candidate grid")
    parser.add_argument("directory", nargs="?", default=".", help="Directory to list (default: .)")
    parser.add_argument("--width", type=int, default=None, help="Layout width (default: terminal width)")
    parser.add_argument("--columns", type=int, default=None, help="Maximum number of columns")
    parser.add_argument("--rows", type=int, default=None, help="Maximum visible rows")
    parser.add_argument("--labels", default=None, help="Jump label keys")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the grid and exit")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = apply_overrides(
        load_settings(cwd=os.getcwd()),
        max_columns=args.columns,
        max_rows=args.rows,
        label_keys=args.labels,
    )

    if not os.path.isdir(args.directory):
        parser.error(f"not a directory: {args.directory}")

    terminal = ProcessTerminal()
    if args.print_only:
        print_grid(args.directory, args.width or terminal.columns, settings)
        return

    browser = Browser(terminal, settings)
    browser.open(args.directory)
    with terminal:
        result = browser.run(terminal.read_key)

    if result is None:
        sys.exit(1)
    print(result)


if __name__ == "__main__":
    main()
