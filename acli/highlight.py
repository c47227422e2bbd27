"""Command-line preview highlighting and terminal-safe output text.

Command previews are shell lines, highlighted with Pygments' Bash lexer.
Captured child output is neutralized before it is drawn so stray control
bytes cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import BashLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_ANSI_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()
_LEXER = BashLexer()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    source = _ANSI_SGR_RE.sub("", source)
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_command(command: str, style: str | None = DEFAULT_STYLE, *, enabled: bool = True) -> str:
    """Return ``command`` with ANSI colors for a one-line preview."""
    if not enabled or not command:
        return command
    rendered = highlight(command, _LEXER, _formatter_for_style(normalize_style(style)))
    return rendered.rstrip("\n")
