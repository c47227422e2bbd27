"""ANSI-aware text measurement and line shaping utilities.

Escape sequences are preserved verbatim and never count toward width; wide
glyphs (tree icons) take two columns and zero-width marks take none.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
_ZERO_WIDTH_CATEGORIES = frozenset({"Mn", "Me", "Cf"})


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks and variation
    selectors consume no columns, and East Asian wide/fullwidth characters
    consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch) or unicodedata.category(ch) in _ZERO_WIDTH_CATEGORIES:
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad it with spaces to exactly ``width``."""
    clipped = clip_ansi_line(text, width)
    padding = max(0, width - display_width(clipped))
    suffix = "\033[0m" if "\033" in clipped else ""
    return clipped + suffix + " " * padding


def highlight_positions(
    text: str, positions: tuple[int, ...], style: str, reset: str, base: str = ""
) -> str:
    """Wrap characters of plain ``text`` at ``positions`` in ``style``, then restore ``base``."""
    if not positions or not style:
        return text
    wanted = set(positions)
    out: list[str] = []
    for index, ch in enumerate(text):
        if index in wanted:
            out.append(f"{style}{ch}{reset}{base}")
        else:
            out.append(ch)
    return "".join(out)
