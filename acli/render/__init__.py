"""Frame composition and ANSI helpers for the interactive session."""

from __future__ import annotations

from .ansi import ANSI_ESCAPE_RE, char_display_width, clip_ansi_line, display_width, fit_ansi_line, strip_ansi
from .frame import render_frame, scroll_window, tree_pane_width, write_frame

__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_ansi_line",
    "render_frame",
    "scroll_window",
    "strip_ansi",
    "tree_pane_width",
    "write_frame",
]
