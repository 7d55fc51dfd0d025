"""Keyboard input parsing and matching for the grid widget.

Turns raw terminal input (legacy escape sequences, control bytes, ESC-prefixed
alt keys, printable characters) into key identifiers such as ``"down"``,
``"ctrl+n"`` or ``"alt+j"``, and checks input against those identifiers.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def ctrl_alt(key: str) -> str:
        return f"ctrl+alt+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_MODIFIER_ORDER = ("ctrl", "shift", "alt")

# Unmodified navigation keys, in both CSI and SS3 forms
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
}

# xterm modifier parameter -> prefix, for ``CSI 1;<mod><final>``
_MODIFIER_PARAMS: dict[str, str] = {
    "2": "shift+",
    "3": "alt+",
    "4": "shift+alt+",
    "5": "ctrl+",
    "6": "ctrl+shift+",
    "7": "ctrl+alt+",
    "8": "ctrl+shift+alt+",
}

_CSI_FINALS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_CODES: dict[str, str] = {
    "2": "insert",
    "3": "delete",
    "5": "pageUp",
    "6": "pageDown",
}


def _modified_sequences() -> dict[str, str]:
    table: dict[str, str] = {}
    for param, prefix in _MODIFIER_PARAMS.items():
        for final, name in _CSI_FINALS.items():
            table[f"\x1b[1;{param}{final}"] = prefix + name
        for code, name in _TILDE_CODES.items():
            table[f"\x1b[{code};{param}~"] = prefix + name
    table["\x1b[Z"] = "shift+tab"
    return table


MODIFIED_KEY_SEQUENCES: dict[str, str] = _modified_sequences()


# ---------------------------------------------------------------------------
# Key id normalisation
# ---------------------------------------------------------------------------


def normalize_key_id(key_id: KeyId) -> KeyId:
    """Return *key_id* with modifiers in canonical ``ctrl+shift+alt`` order.

    ``"alt+ctrl+f"`` and ``"ctrl+alt+f"`` both normalise to
    ``"ctrl+alt+f"``. ``"esc"`` is an alias for ``"escape"`` and
    ``"return"`` for ``"enter"``.
    """
    if key_id == "+":
        return key_id
    parts = key_id.split("+")
    # "ctrl++" names the plus key
    if key_id.endswith("++"):
        parts = parts[:-2] + ["+"]
    base = parts[-1]
    modifiers = {p.lower() for p in parts[:-1]}

    aliases = {"esc": "escape", "return": "enter"}
    base = aliases.get(base.lower(), base) if len(base) > 1 else base

    prefix = "".join(f"{m}+" for m in _MODIFIER_ORDER if m in modifiers)
    return prefix + base


# ---------------------------------------------------------------------------
# parse_key / matches_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return its key identifier, or ``None``.

    The identifier format matches what :func:`matches_key` expects, e.g.
    ``"a"``, ``"ctrl+n"``, ``"alt+j"``, ``"ctrl+alt+f"``, ``"pageDown"``.
    """
    if not data:
        return None

    if data in MODIFIED_KEY_SEQUENCES:
        return MODIFIED_KEY_SEQUENCES[data]
    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key arrives ESC-prefixed
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is None:
            return None
        if data[1].isupper():
            return "shift+alt+" + data[1].lower()
        if inner.startswith("ctrl+"):
            return "ctrl+alt+" + inner[len("ctrl+"):]
        return "alt+" + inner

    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw input *data* is the key named by *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)


def key_char(data: str) -> str | None:
    """Return the single printable character typed, or ``None``.

    Used for label input, where only unmodified character keys count.
    ``space`` maps to ``" "``.
    """
    parsed = parse_key(data)
    if parsed is None:
        return None
    if parsed == "space":
        return " "
    if len(parsed) == 1:
        return parsed
    return None
