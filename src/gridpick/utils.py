"""Display-width utilities for grid cells.

Measures how many terminal cells a candidate occupies (grapheme clusters,
wide CJK characters, emoji, ANSI escapes) and fits text into a fixed number
of cells by truncating or padding.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

# CSI, OSC 8 hyperlinks and APC payloads carry no visible width
_ESCAPE_RE = re.compile(
    r"\x1b\[[0-9;]*[A-Za-z]"
    r"|\x1b\]8;;[^\x07]*\x07"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

_TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 1024


def _remember(text: str, width: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[text] = width
    return width


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from *text*."""
    return _ESCAPE_RE.sub("", text)


# ---------------------------------------------------------------------------
# Cluster width
# ---------------------------------------------------------------------------


def cluster_width(cluster: str) -> int:
    """Return the number of terminal cells taken by one grapheme cluster.

    Control characters, combining marks and format characters take no
    cells. Emoji sequences (VS16, ZWJ, skin tones, flags) take two. Anything
    else is measured by ``wcwidth`` on its base codepoint.
    """
    if not cluster:
        return 0

    base = cluster[0]
    cp = ord(base)

    if len(cluster) == 1:
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(base), 0)

    for ch in cluster[1:]:
        mark = ord(ch)
        # VS16, ZWJ, skin tone modifiers, regional indicator pairs
        if mark in (0xFE0F, 0x200D) or 0x1F3FB <= mark <= 0x1F3FF:
            return 2
        if 0x1F1E6 <= mark <= 0x1F1FF:
            return 2

    if cp >= 0x1F000 or 0x2600 <= cp <= 0x27BF:
        return 2

    category = unicodedata.category(base)
    if category.startswith("M") or category == "Cf":
        return 0

    return max(_wcwidth.wcwidth(base), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Return the number of terminal cells *text* occupies.

    Escape sequences are ignored and tabs count as three cells. Plain
    printable ASCII is measured by length; everything else is segmented into
    grapheme clusters and cached.
    """
    if not text:
        return 0

    plain = strip_ansi(text)
    if not plain:
        return 0
    plain = plain.replace("\t", " " * _TAB_WIDTH)

    if all(0x20 <= ord(ch) <= 0x7E for ch in plain):
        return len(plain)

    cached = _width_cache.get(plain)
    if cached is not None:
        return cached

    return _remember(
        plain, sum(cluster_width(g) for g in grapheme.graphemes(plain))
    )


# ---------------------------------------------------------------------------
# Fitting text into cells
# ---------------------------------------------------------------------------


def take_cells(text: str, max_cells: int) -> str:
    """Return the longest prefix of *text* that fits in *max_cells* cells.

    Cuts only at grapheme boundaries and keeps escape sequences intact.
    """
    if max_cells <= 0:
        return ""

    out: list[str] = []
    used = 0
    pos = 0
    while pos < len(text):
        escape = _ESCAPE_RE.match(text, pos)
        if escape is not None:
            out.append(escape.group(0))
            pos = escape.end()
            continue

        cluster = next(grapheme.graphemes(text[pos:]))
        width = cluster_width(cluster)
        if used + width > max_cells:
            break
        out.append(cluster)
        used += width
        pos += len(cluster)

    return "".join(out)


def drop_cells(text: str, cells: int) -> str:
    """Return what is left of *text* after its first *cells* cells.

    Escape sequences are dropped. A wide cluster cut in half leaves a space
    for its right-hand cell.
    """
    if cells <= 0:
        return text

    skipped = 0
    rest: list[str] = []
    for cluster in grapheme.graphemes(strip_ansi(text)):
        if skipped >= cells:
            rest.append(cluster)
            continue
        skipped += cluster_width(cluster)
        if skipped > cells:
            rest.append(" " * (skipped - cells))
    return "".join(rest)


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Fit *text* into *max_width* cells, appending *ellipsis* when cut.

    With *pad* the result is right-padded with spaces to exactly
    *max_width* cells.
    """
    if max_width <= 0:
        return ""

    width = visible_width(text)
    if width <= max_width:
        return text + " " * (max_width - width) if pad else text

    room = max_width - visible_width(ellipsis)
    if room <= 0:
        result = take_cells(ellipsis, max_width)
    else:
        result = take_cells(text, room) + ellipsis

    if pad:
        result += " " * (max_width - visible_width(result))
    return result


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces until it occupies *width* cells."""
    missing = width - visible_width(text)
    if missing <= 0:
        return text
    return text + " " * missing
