"""Multi-action dispatch menu offered after a jump."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Union

from gridpick.keys import key_char
from gridpick.utils import truncate_to_width

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """A dispatchable action, called with the resolved candidate index."""

    key: str
    handler: Callable[[int], None]
    description: str = ""


ActionSpec = Union[Action, tuple[str, Callable[[int], None], str]]


class ActionMenu:
    """An ordered set of actions, each picked by a single key."""

    def __init__(self, actions: Iterable[ActionSpec]) -> None:
        self._actions: list[Action] = []
        for spec in actions:
            action = spec if isinstance(spec, Action) else Action(*spec)
            if len(action.key) != 1:
                raise ValueError(f"Action key must be a single character: {action.key!r}")
            if self.find(action.key) is not None:
                raise ValueError(f"Duplicate action key: {action.key!r}")
            self._actions.append(action)

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self):
        return iter(self._actions)

    @property
    def actions(self) -> list[Action]:
        return list(self._actions)

    def find(self, key: str) -> Action | None:
        for action in self._actions:
            if action.key == key:
                return action
        return None

    def action_for_input(self, data: str) -> Action | None:
        """Return the action picked by raw input *data*, if any."""
        char = key_char(data)
        return self.find(char) if char is not None else None

    def dispatch(self, data: str, index: int) -> Action | None:
        """Run the action picked by *data* on *index*; ``None`` if none matched."""
        action = self.action_for_input(data)
        if action is None:
            return None
        logger.debug("Dispatching %r (%s) on index %d", action.key, action.description, index)
        action.handler(index)
        return action

    def render(self, width: int) -> list[str]:
        """One line listing ``[key] description`` pairs."""
        entries = [f"[{a.key}] {a.description or a.key}" for a in self._actions]
        return [truncate_to_width("  ".join(entries), width)]
