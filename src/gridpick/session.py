"""Browsing sessions and the stack that nests them.

A :class:`Session` owns one candidate list, its grid layout and the
selection index, and exposes the named grid operations. Sessions nest on a
:class:`SessionStack`: pushing suspends the outer session, popping resumes it
exactly as it was.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence

from gridpick.dispatch import ActionMenu
from gridpick.jump import JumpLabelSelector, Position
from gridpick.keybindings import GridAction, GridKeybindingsManager, get_grid_keybindings
from gridpick.keys import matches_key
from gridpick.labels import LabelGenerator, tree_labels
from gridpick.layout import GridLayout, layout_grid
from gridpick.navigation import PROMPT_INDEX, NavigationIndexer
from gridpick.settings import GridSettings

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    OPEN = "open"
    SUSPENDED = "suspended"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


_FINISHED = (SessionStatus.CONFIRMED, SessionStatus.CANCELLED)


class Session:
    """One open-to-close lifecycle of the grid widget.

    Optional collaborators are passed in; ``None`` marks one as absent. An
    operation that needs an absent collaborator sets :attr:`last_error` and
    does nothing else, so plain navigation keeps working.
    """

    def __init__(
        self,
        candidates: Sequence[str] = (),
        *,
        width: int = 80,
        settings: GridSettings | None = None,
        label_generator: LabelGenerator | None = tree_labels,
        actions: ActionMenu | None = None,
        keybindings: GridKeybindingsManager | None = None,
        directory: str | None = None,
        name: str = "",
        on_confirm: Callable[[int], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
        on_act: Callable[[int], None] | None = None,
        on_open_directory: Callable[[str], None] | None = None,
        on_unhandled: Callable[[str], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings or GridSettings()
        self.name = name
        self.directory = directory

        self._candidates: list[str] = list(candidates)
        self._width = max(1, width)
        self._column_cap = self.settings.max_columns
        self._actions = actions
        if keybindings is not None:
            self._keybindings = keybindings
        elif self.settings.keybindings:
            self._keybindings = GridKeybindingsManager(self.settings.keybindings)
        else:
            self._keybindings = get_grid_keybindings()

        self.on_confirm = on_confirm
        self.on_cancel = on_cancel
        self.on_act = on_act
        self.on_open_directory = on_open_directory
        self.on_unhandled = on_unhandled
        self.on_change = on_change

        self._status = SessionStatus.OPEN
        self._dispatch_index: int | None = None
        self.last_error: str | None = None

        self._navigator = NavigationIndexer(
            len(self._candidates),
            prompt_selectable=self.settings.prompt_selectable,
        )
        self._jump = JumpLabelSelector(
            self._navigator,
            keys=self.settings.label_keys,
            generator=label_generator,
            cancel_key=self.settings.cancel_key,
            single_candidate_jump=self.settings.single_candidate_jump,
        )
        self._layout = self._relayout()

        self._bound: dict[GridAction, Callable[[], object]] = {
            "forward": self.forward,
            "backward": self.backward,
            "forwardAndAct": self.forward_and_act,
            "backwardAndAct": self.backward_and_act,
            "down": self.down,
            "up": self.up,
            "downAndAct": self.down_and_act,
            "upAndAct": self.up_and_act,
            "jump": self.jump,
            "jumpAndDispatch": self.jump_and_dispatch,
            "openAsDirectory": self.open_as_directory,
            "confirm": self.confirm,
            "cancel": self.cancel,
        }

    # -- properties ---------------------------------------------------------

    @property
    def candidates(self) -> tuple[str, ...]:
        return tuple(self._candidates)

    @property
    def layout(self) -> GridLayout:
        return self._layout

    @property
    def width(self) -> int:
        return self._width

    @property
    def index(self) -> int:
        return self._navigator.current_index

    @property
    def navigator(self) -> NavigationIndexer:
        return self._navigator

    @property
    def jump_selector(self) -> JumpLabelSelector:
        return self._jump

    @property
    def actions(self) -> ActionMenu | None:
        return self._actions

    @property
    def keybindings(self) -> GridKeybindingsManager:
        return self._keybindings

    @property
    def input_pending(self) -> bool:
        """True while a jump or the dispatch menu is waiting for a key."""
        return self._jump.active or self._dispatch_index is not None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_open(self) -> bool:
        return self._status is SessionStatus.OPEN

    @property
    def is_finished(self) -> bool:
        return self._status in _FINISHED

    @property
    def dispatch_pending(self) -> bool:
        return self._dispatch_index is not None

    @property
    def selected_candidate(self) -> str | None:
        index = self.index
        if 0 <= index < len(self._candidates):
            return self._candidates[index]
        return None

    # -- candidate and geometry updates -------------------------------------

    def _relayout(self) -> GridLayout:
        layout = layout_grid(
            self._candidates,
            self._width,
            self._column_cap,
            collapse_duplicates=self.settings.collapse_duplicates,
        )
        self._navigator.set_column_count(layout.column_count)
        return layout

    def set_candidates(self, candidates: Sequence[str]) -> None:
        """Replace the candidate list; the selection is kept and clamped."""
        self._candidates = list(candidates)
        self._navigator.set_count(len(self._candidates))
        if self._jump.active:
            self._jump.cancel()
        if self._dispatch_index is not None and self._dispatch_index >= len(self._candidates):
            self._dispatch_index = None
        self._layout = self._relayout()
        self._changed()

    def set_width(self, width: int) -> None:
        width = max(1, width)
        if width == self._width:
            return
        self._width = width
        self._layout = self._relayout()
        self._changed()

    def set_column_cap(self, column_cap: int | None) -> None:
        if column_cap == self._column_cap:
            return
        self._column_cap = column_cap
        self._layout = self._relayout()
        self._changed()

    # -- viewport -----------------------------------------------------------

    def viewport(self) -> tuple[int, int]:
        """Return the ``[start, end)`` layout rows currently shown.

        The window is centred on the selected row and clamped to the grid.
        """
        rows = self._layout.row_count
        max_rows = max(1, self.settings.max_rows)
        if rows <= max_rows:
            return 0, rows

        selected_row = self._layout.row_of(self.index) if self.index >= 0 else 0
        start = max(0, min(selected_row - max_rows // 2, rows - max_rows))
        return start, start + max_rows

    def visible_targets(self) -> list[tuple[Position, int]]:
        """``(position, index)`` pairs for jumpable cells in the viewport.

        The "directory itself" candidate is left out.
        """
        start, end = self.viewport()
        return [
            ((cell.row - start, cell.column), cell.index)
            for cell in self._layout.cells_in_rows(start, end)
            if cell.text != self.settings.self_candidate
        ]

    # -- movement -----------------------------------------------------------

    def _move(self, move: Callable[[], int], act: bool = False) -> int:
        if not self.is_open:
            return self.index
        move()
        if act:
            self._act()
        self._changed()
        return self.index

    def _act(self) -> None:
        if self.on_act is not None and self.selected_candidate is not None:
            self.on_act(self.index)

    def forward(self) -> int:
        return self._move(self._navigator.forward)

    def backward(self) -> int:
        return self._move(self._navigator.backward)

    def forward_and_act(self) -> int:
        return self._move(self._navigator.forward, act=True)

    def backward_and_act(self) -> int:
        return self._move(self._navigator.backward, act=True)

    def down(self) -> int:
        return self._move(lambda: self._navigator.move_vertically_by(1, self._layout.column_count))

    def up(self) -> int:
        return self._move(lambda: self._navigator.move_vertically_by(-1, self._layout.column_count))

    def down_and_act(self) -> int:
        return self._move(
            lambda: self._navigator.move_vertically_by(1, self._layout.column_count), act=True
        )

    def up_and_act(self) -> int:
        return self._move(
            lambda: self._navigator.move_vertically_by(-1, self._layout.column_count), act=True
        )

    # -- jumping and dispatch -----------------------------------------------

    def jump(self) -> bool:
        """Label the visible cells; the chosen one is selected and confirmed."""
        return self._start_jump(self._confirm_after_jump)

    def jump_and_dispatch(self) -> bool:
        """Label the visible cells; the chosen one opens the action menu."""
        if not self.is_open:
            return False
        if not self._actions:
            self._report_error("No actions available for dispatch")
            return False
        return self._start_jump(self._open_dispatch)

    def _start_jump(self, continuation: Callable[[int], None]) -> bool:
        if not self.is_open:
            return False
        try:
            self._jump.begin(self.visible_targets(), continuation)
        except (RuntimeError, ValueError) as e:
            self._report_error(str(e))
            return False
        self._changed()
        return True

    def _confirm_after_jump(self, index: int) -> None:
        self.confirm()

    def _open_dispatch(self, index: int) -> None:
        self._dispatch_index = index
        logger.debug("Session %r awaiting dispatch on index %d", self.name, index)

    def _handle_dispatch(self, data: str) -> None:
        index = self._dispatch_index
        self._dispatch_index = None
        if index is None or self._actions is None:
            return

        if matches_key(data, self.settings.cancel_key):
            logger.debug("Dispatch cancelled")
            self._changed()
            return

        action = self._actions.dispatch(data, index)
        if action is None:
            logger.debug("No action bound to %r", data)
            self._changed()
            return
        self._finish(SessionStatus.CONFIRMED)

    # -- hand-off and termination -------------------------------------------

    def open_as_directory(self) -> bool:
        """Hand the session's directory to the directory opener and finish."""
        if not self.is_open:
            return False
        if self.on_open_directory is None or self.directory is None:
            self._report_error("Opening as a directory is not available")
            return False
        self._finish(SessionStatus.CONFIRMED)
        self.on_open_directory(self.directory)
        return True

    def confirm(self) -> None:
        """Finish with the current selection.

        With no candidate selected (an empty list and no selectable prompt)
        an error is reported and the session stays open.
        """
        if not self.is_open:
            return
        index = self.index
        if index != PROMPT_INDEX and self.selected_candidate is None:
            self._report_error("No candidate to confirm")
            return
        self._finish(SessionStatus.CONFIRMED)
        if self.on_confirm is not None:
            self.on_confirm(index)

    def cancel(self) -> None:
        """Close the session, abandoning any pending jump or dispatch."""
        if self.is_finished:
            return
        self._finish(SessionStatus.CANCELLED)
        if self.on_cancel is not None:
            self.on_cancel()

    def suspend(self) -> None:
        if self.is_open:
            if self._jump.active:
                self._jump.cancel()
            self._status = SessionStatus.SUSPENDED
            logger.debug("Session %r suspended", self.name)

    def resume(self) -> None:
        if self._status is SessionStatus.SUSPENDED:
            self._status = SessionStatus.OPEN
            logger.debug("Session %r resumed", self.name)
            self._changed()

    def _finish(self, status: SessionStatus) -> None:
        if self._jump.active:
            self._jump.cancel()
        self._dispatch_index = None
        self._status = status
        logger.debug("Session %r %s at index %d", self.name, status.value, self.index)
        self._changed()

    # -- input --------------------------------------------------------------

    def handle_input(self, data: str) -> None:
        """Route raw input to the pending jump, the dispatch menu or a binding."""
        if not self.is_open:
            logger.debug("Ignoring input for %s session %r", self._status.value, self.name)
            return

        self.last_error = None

        if self._jump.active:
            self._jump.feed(data)
            self._changed()
            return

        if self._dispatch_index is not None:
            self._handle_dispatch(data)
            return

        action = self._keybindings.action_for(data)
        if action is not None:
            self._bound[action]()
        elif self.on_unhandled is not None:
            self.on_unhandled(data)

    # -- helpers ------------------------------------------------------------

    def _report_error(self, message: str) -> None:
        logger.warning("Session %r: %s", self.name, message)
        self.last_error = message
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()


class SessionStack:
    """Nested sessions; only the top one receives input.

    Cancelling a session that has nested sessions above it cancels those
    first, innermost first, then the session itself.
    """

    def __init__(self) -> None:
        self._sessions: list[Session] = []

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def sessions(self) -> list[Session]:
        return list(self._sessions)

    @property
    def current(self) -> Session | None:
        return self._sessions[-1] if self._sessions else None

    def push(self, session: Session) -> Session:
        """Start *session* on top, suspending the current one."""
        outer = self.current
        if outer is not None:
            outer.suspend()
        self._sessions.append(session)
        logger.debug("Pushed session %r (depth %d)", session.name, len(self._sessions))
        return session

    def pop(self) -> Session | None:
        """Remove the top session, cancelling it if still open, and resume the outer one."""
        if not self._sessions:
            return None
        session = self._sessions.pop()
        if not session.is_finished:
            session.cancel()
        logger.debug("Popped session %r (depth %d)", session.name, len(self._sessions))
        outer = self.current
        if outer is not None:
            outer.resume()
        return session

    def cancel(self, session: Session | None = None) -> None:
        """Cancel *session* (default: the top one) and everything nested in it."""
        target = session if session is not None else self.current
        if target is None:
            return
        if target not in self._sessions:
            raise ValueError(f"Session {target.name!r} is not on this stack")
        while self._sessions:
            popped = self.pop()
            if popped is target:
                break

    def collect(self) -> list[Session]:
        """Pop finished sessions off the top; returns them innermost first."""
        finished: list[Session] = []
        while self._sessions and self._sessions[-1].is_finished:
            popped = self.pop()
            if popped is not None:
                finished.append(popped)
        return finished

    def handle_input(self, data: str) -> list[Session]:
        """Feed *data* to the top session and collect any that finished."""
        session = self.current
        if session is None:
            return []
        session.handle_input(data)
        return self.collect()
