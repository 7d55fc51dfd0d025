"""Grid settings with JSON file loading.

Two-level precedence: project settings override global settings; callers
apply CLI overrides on top with :func:`apply_overrides`.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from gridpick.labels import DEFAULT_LABEL_KEYS

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".gridpick"


@dataclass
class GridSettings:
    """Settings for one browsing session."""

    max_columns: int | None = None
    max_rows: int = 8
    label_keys: str = DEFAULT_LABEL_KEYS
    cancel_key: str = "escape"
    prompt_selectable: bool = False
    single_candidate_jump: bool = True
    collapse_duplicates: bool = True
    self_candidate: str = "./"
    show_separator: bool = False
    keybindings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GridSettings:
        """Build settings from a camelCase JSON mapping.

        Unknown keys are ignored; values of the wrong type are skipped with a
        warning.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            json_key = _JSON_KEYS[f.name]
            if json_key not in data:
                continue
            value = data[json_key]
            if not _type_ok(f.name, value):
                logger.warning("Ignoring setting %s=%r: wrong type", json_key, value)
                continue
            values[f.name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {_JSON_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_JSON_KEYS: dict[str, str] = {f.name: _camel(f.name) for f in fields(GridSettings)}

_EXPECTED_TYPES: dict[str, tuple[type, ...]] = {
    "max_columns": (int, type(None)),
    "max_rows": (int,),
    "label_keys": (str,),
    "cancel_key": (str,),
    "prompt_selectable": (bool,),
    "single_candidate_jump": (bool,),
    "collapse_duplicates": (bool,),
    "self_candidate": (str,),
    "show_separator": (bool,),
    "keybindings": (dict,),
}


def _type_ok(name: str, value: Any) -> bool:
    expected = _EXPECTED_TYPES[name]
    # bool is an int subclass; don't accept true/false for counts
    if isinstance(value, bool) and bool not in expected:
        return False
    return isinstance(value, expected)


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    Nested dicts merge key by key; any other override value replaces the
    base value. ``None`` overrides are skipped.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Loading ---


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a settings file; a missing or unreadable file yields ``{}``."""
    if not os.path.exists(path):
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to load settings from %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings in %s: expected a JSON object", path)
        return {}
    return data


def _default_config_dir() -> str:
    """Default global config directory (~/.gridpick)."""
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)


def load_settings(cwd: str | None = None, config_dir: str | None = None) -> GridSettings:
    """Load global settings, then project settings from *cwd* over them."""
    global_path = os.path.join(config_dir or _default_config_dir(), "settings.json")
    merged = _load_from_file(global_path)

    if cwd is not None:
        project_path = os.path.join(cwd, CONFIG_DIR_NAME, "settings.json")
        merged = deep_merge_settings(merged, _load_from_file(project_path))

    return GridSettings.from_dict(merged)


def apply_overrides(settings: GridSettings, **overrides: Any) -> GridSettings:
    """Return a copy of *settings* with non-``None`` overrides applied."""
    return replace(settings, **{k: v for k, v in overrides.items() if v is not None})
