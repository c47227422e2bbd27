"""Main interactive event loop for the terminal UI.

Each iteration keeps the tree window around the cursor, composes and writes a
full frame, then waits a bounded time for one key. The loop redraws on every
tick, input or not. Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input.keys import read_key
from ..render.frame import CHROME_ROWS, scroll_window
from ..screen.state import AppState
from .terminal import TerminalController

POLL_TIMEOUT_MS = 100


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int = POLL_TIMEOUT_MS


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render_rows: Callable[[int, int], list[str]]
    write_rows: Callable[[list[str]], None]
    handle_key: Callable[[str], None]
    read_key: Callable[[int, int | None], str] = read_key
    terminal_size: Callable[[], tuple[int, int]] | None = None


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until ``state.quit_requested`` is set.

    ``state.dirty`` is only a hint for callers; every iteration writes a frame
    and clears it.
    """
    size_of = callbacks.terminal_size or _terminal_size
    with terminal.raw_mode():
        while not state.quit_requested:
            columns, lines = size_of()

            tree_rows = max(1, lines - CHROME_ROWS)
            state.tree_start = scroll_window(
                state.navigator.cursor,
                state.tree_start,
                tree_rows,
                state.tree.visible_count(),
            )

            callbacks.write_rows(callbacks.render_rows(columns, lines))
            state.dirty = False

            key = callbacks.read_key(stdin_fd, timing.poll_timeout_ms)
            if key:
                callbacks.handle_key(key)
