"""Interactive runtime: terminal control, event loop, and session bootstrap."""

from __future__ import annotations

from .app import Session, build_session, run_app
from .loop import POLL_TIMEOUT_MS, RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController, exit_on_signals

__all__ = [
    "POLL_TIMEOUT_MS",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "Session",
    "TerminalController",
    "build_session",
    "exit_on_signals",
    "run_app",
    "run_main_loop",
]
