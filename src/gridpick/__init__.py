"""gridpick: completion-candidate grid with jump-label selection."""

# Components (re-exported from components package)
from gridpick.components import BottomPanel, GridView, GridViewTheme

# Action dispatch
from gridpick.dispatch import Action, ActionMenu

# Jump-label selection
from gridpick.jump import JumpLabelSelector, JumpResult, JumpTarget

# Keybindings
from gridpick.keybindings import (
    DEFAULT_GRID_KEYBINDINGS,
    GridAction,
    GridKeybindingsManager,
    get_grid_keybindings,
    set_grid_keybindings,
)

# Keyboard input handling
from gridpick.keys import Key, KeyId, matches_key, parse_key

# Labels
from gridpick.labels import DEFAULT_LABEL_KEYS, LabelGenerator, tree_labels

# Layout
from gridpick.layout import GridCell, GridLayout, layout_grid

# Navigation
from gridpick.navigation import PROMPT_INDEX, NavigationIndexer

# Sessions
from gridpick.session import Session, SessionStack, SessionStatus

# Settings
from gridpick.settings import GridSettings, load_settings

# Candidate sources
from gridpick.sources import CandidateSource, DirectoryCandidates

# Terminal
from gridpick.terminal import ProcessTerminal, Terminal

# Utilities
from gridpick.utils import truncate_to_width, visible_width

__all__ = [
    # Components
    "BottomPanel",
    "GridView",
    "GridViewTheme",
    # Dispatch
    "Action",
    "ActionMenu",
    # Jump
    "JumpLabelSelector",
    "JumpResult",
    "JumpTarget",
    # Keybindings
    "DEFAULT_GRID_KEYBINDINGS",
    "GridAction",
    "GridKeybindingsManager",
    "get_grid_keybindings",
    "set_grid_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Labels
    "DEFAULT_LABEL_KEYS",
    "LabelGenerator",
    "tree_labels",
    # Layout
    "GridCell",
    "GridLayout",
    "layout_grid",
    # Navigation
    "PROMPT_INDEX",
    "NavigationIndexer",
    # Sessions
    "Session",
    "SessionStack",
    "SessionStatus",
    # Settings
    "GridSettings",
    "load_settings",
    # Sources
    "CandidateSource",
    "DirectoryCandidates",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utils
    "truncate_to_width",
    "visible_width",
]
