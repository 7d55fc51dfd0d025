"""Grid keybindings manager."""

from __future__ import annotations

import logging
from typing import Literal

from gridpick.keys import KeyId, matches_key

logger = logging.getLogger(__name__)

GridAction = Literal[
    # Sequential movement
    "forward",
    "backward",
    "forwardAndAct",
    "backwardAndAct",
    # Grid movement
    "down",
    "up",
    "downAndAct",
    "upAndAct",
    # Jump labels
    "jump",
    "jumpAndDispatch",
    # Hand-off
    "openAsDirectory",
    # Session
    "confirm",
    "cancel",
]

GridKeybindingsConfig = dict[GridAction, KeyId | list[KeyId]]

DEFAULT_GRID_KEYBINDINGS: dict[GridAction, KeyId | list[KeyId]] = {
    # Sequential movement
    "forward": ["right", "ctrl+f"],
    "backward": ["left", "ctrl+b"],
    "forwardAndAct": "ctrl+alt+f",
    "backwardAndAct": "ctrl+alt+b",
    # Grid movement
    "down": ["down", "ctrl+n"],
    "up": ["up", "ctrl+p"],
    "downAndAct": "ctrl+alt+n",
    "upAndAct": "ctrl+alt+p",
    # Jump labels
    "jump": "alt+j",
    "jumpAndDispatch": "alt+o",
    # Hand-off
    "openAsDirectory": "alt+d",
    # Session
    "confirm": "enter",
    "cancel": ["escape", "ctrl+g", "ctrl+c"],
}


class GridKeybindingsManager:
    """Maps raw input to grid actions."""

    def __init__(self, config: GridKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[GridAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: GridKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_GRID_KEYBINDINGS.items():
            self._action_to_keys[action] = list(keys if isinstance(keys, list) else [keys])

        # User config replaces the whole key list of an action
        for action, keys in config.items():
            if action not in DEFAULT_GRID_KEYBINDINGS:
                logger.warning("Ignoring keybinding for unknown action %r", action)
                continue
            key_list = keys if isinstance(keys, list) else [keys]
            if not all(isinstance(key, str) for key in key_list):
                logger.warning("Ignoring keybinding %s=%r: keys must be strings", action, keys)
                continue
            self._action_to_keys[action] = list(key_list)

    def matches(self, data: str, action: GridAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self._action_to_keys.get(action, []))

    def action_for(self, data: str) -> GridAction | None:
        """Return the first action bound to *data*, in declaration order."""
        for action in self._action_to_keys:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: GridAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: GridKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_grid_keybindings: GridKeybindingsManager | None = None


def get_grid_keybindings() -> GridKeybindingsManager:
    global _global_grid_keybindings
    if _global_grid_keybindings is None:
        _global_grid_keybindings = GridKeybindingsManager()
    return _global_grid_keybindings


def set_grid_keybindings(manager: GridKeybindingsManager) -> None:
    global _global_grid_keybindings
    _global_grid_keybindings = manager
