"""Jump-label selection of visible grid candidates.

Each candidate in the viewport gets a short key-sequence label. Typing a
label selects that candidate through the :class:`NavigationIndexer` and hands
the index to a continuation; the cancel key, or a sequence that matches no
label, abandons the jump without touching the selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from gridpick.keys import key_char, matches_key
from gridpick.labels import DEFAULT_LABEL_KEYS, LabelGenerator, tree_labels
from gridpick.navigation import NavigationIndexer

logger = logging.getLogger(__name__)

Position = tuple[int, int]


@dataclass
class JumpTarget:
    label: str
    index: int
    position: Position  # (row, column) inside the viewport


@dataclass
class JumpResult:
    """Outcome of a jump; ``index is None`` means it was cancelled."""

    index: int | None
    label: str | None = None

    @property
    def cancelled(self) -> bool:
        return self.index is None


class JumpLabelSelector:
    """Labels visible candidates and resolves typed labels to indices."""

    def __init__(
        self,
        navigator: NavigationIndexer,
        *,
        keys: str = DEFAULT_LABEL_KEYS,
        generator: LabelGenerator | None = tree_labels,
        cancel_key: str = "escape",
        single_candidate_jump: bool = True,
    ) -> None:
        self._navigator = navigator
        self._keys = keys
        self._generator = generator
        self._cancel_key = cancel_key
        self._single_candidate_jump = single_candidate_jump

        self._targets: dict[str, JumpTarget] = {}
        self._typed = ""
        self._active = False
        self._continuation: Callable[[int], None] | None = None
        self._last_result: JumpResult | None = None

    # -- properties ---------------------------------------------------------

    @property
    def available(self) -> bool:
        return self._generator is not None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def typed(self) -> str:
        return self._typed

    @property
    def targets(self) -> dict[str, JumpTarget]:
        return dict(self._targets)

    @property
    def last_result(self) -> JumpResult | None:
        return self._last_result

    def pending_targets(self) -> list[JumpTarget]:
        """Targets whose label still starts with what has been typed."""
        return [t for t in self._targets.values() if t.label.startswith(self._typed)]

    # -- protocol -----------------------------------------------------------

    def begin(
        self,
        visible: Sequence[tuple[Position, int]],
        continuation: Callable[[int], None] | None = None,
    ) -> dict[str, JumpTarget]:
        """Label *visible* ``(position, index)`` pairs and wait for input.

        With no targets the jump is cancelled at once; with a single target
        and single-candidate jumping enabled it resolves at once. Check
        :attr:`active` afterwards. Raises ``RuntimeError`` when no label
        generator is configured.
        """
        if self._generator is None:
            raise RuntimeError("No jump label generator configured")

        self._reset()
        self._continuation = continuation
        labels = self._generator(len(visible), self._keys)
        self._targets = {
            label: JumpTarget(label=label, index=index, position=position)
            for label, (position, index) in zip(labels, visible)
        }
        self._active = True
        logger.debug("Jump started with %d targets", len(self._targets))

        if not self._targets:
            self._finish(JumpResult(index=None))
        elif len(self._targets) == 1 and self._single_candidate_jump:
            (target,) = self._targets.values()
            self._resolve(target)
        return self.targets

    def feed(self, data: str) -> JumpResult | None:
        """Consume one key of input.

        Returns ``None`` while a label prefix is still pending, otherwise the
        final :class:`JumpResult`.
        """
        if not self._active:
            return self._last_result

        if matches_key(data, self._cancel_key):
            return self._finish(JumpResult(index=None))

        char = key_char(data)
        if char is None:
            logger.debug("Jump aborted by non-label key %r", data)
            return self._finish(JumpResult(index=None))

        self._typed += char
        target = self._targets.get(self._typed)
        if target is not None:
            return self._resolve(target)
        if self.pending_targets():
            return None

        logger.debug("No jump label matches %r", self._typed)
        return self._finish(JumpResult(index=None))

    def cancel(self) -> JumpResult:
        """Abandon a pending jump."""
        return self._finish(JumpResult(index=None))

    async def run(
        self,
        visible: Sequence[tuple[Position, int]],
        read_key: Callable[[], Awaitable[str]],
        continuation: Callable[[int], None] | None = None,
    ) -> JumpResult:
        """Label *visible* and await keys from *read_key* until resolved."""
        self.begin(visible, continuation)
        while self._active:
            result = self.feed(await read_key())
            if result is not None:
                return result
        assert self._last_result is not None
        return self._last_result

    # -- internals ----------------------------------------------------------

    def _reset(self) -> None:
        self._targets = {}
        self._typed = ""
        self._continuation = None
        self._last_result = None

    def _resolve(self, target: JumpTarget) -> JumpResult:
        self._navigator.select(target.index)
        continuation = self._continuation
        result = self._finish(JumpResult(index=target.index, label=target.label))
        logger.debug("Jump resolved %r -> %d", target.label, target.index)
        if continuation is not None:
            continuation(target.index)
        return result

    def _finish(self, result: JumpResult) -> JumpResult:
        if result.cancelled:
            logger.debug("Jump cancelled")
        self._active = False
        self._targets = {}
        self._typed = ""
        self._continuation = None
        self._last_result = result
        return result
