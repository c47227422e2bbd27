"""Interactive session bootstrap: discovery, state wiring, and the loop.

``build_session`` is terminal-free so it can be driven from tests;
``run_app`` adds the terminal, signal handling and the event loop.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from ..command.executor import CommandExecutor
from ..config import Settings
from ..domain.loader import DomainLoader
from ..highlight import normalize_style
from ..navigation.navigator import TreeNavigator
from ..remote.client import ConfluenceClient
from ..render.frame import render_frame, write_frame
from ..screen.keymap import translate_key
from ..screen.machine import ScreenStateMachine
from ..screen.state import AppState
from ..tree_model.build import build_tree
from ..ui_theme import UITheme, resolve_theme
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController, exit_on_signals

logger = logging.getLogger(__name__)


@dataclass
class Session:
    state: AppState
    machine: ScreenStateMachine
    executor: CommandExecutor
    theme: UITheme
    style: str
    color: bool

    def handle_key(self, key: str) -> None:
        intent = translate_key(key, self.state)
        if intent is not None:
            self.machine.dispatch(intent)

    def command_preview(self) -> str:
        builder = self.state.command
        operation = None if builder is None else builder.operation
        if builder is None or operation is None:
            return ""
        return self.executor.preview(
            self.state.navigator.context,
            operation.name,
            builder.arguments.text,
            builder.dry_run,
        )

    def render_rows(self, width: int, height: int) -> list[str]:
        return render_frame(
            self.state,
            width,
            height,
            self.theme,
            command_preview=self.command_preview(),
            style=self.style,
            color=self.color,
        )


def build_session(
    client: ConfluenceClient,
    base_url: str,
    *,
    executor: CommandExecutor | None = None,
    theme_name: str | None = None,
    style: str = "monokai",
    no_color: bool = False,
) -> Session:
    domain = DomainLoader(client, base_url).load_domain()
    tree = build_tree(domain)
    navigator = TreeNavigator(tree, domain)
    state = AppState.for_tree(navigator)
    executor = executor or CommandExecutor()
    available = sum(len(product.projects) for product in domain.products)
    state.status_message = f"Loaded {available} projects from {domain.name}"
    return Session(
        state=state,
        machine=ScreenStateMachine(state, executor),
        executor=executor,
        theme=resolve_theme(theme_name, no_color=no_color),
        style=normalize_style(style),
        color=not no_color,
    )


def run_app(
    settings: Settings,
    *,
    theme_name: str | None = None,
    style: str = "monokai",
    no_color: bool = False,
) -> None:
    """Discover the instance behind ``settings`` and run the interactive browser."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        raise SystemExit("acli: interactive mode requires a terminal")

    with ConfluenceClient(settings.base_url, settings.username, settings.api_token) as client:
        session = build_session(
            client,
            settings.base_url,
            theme_name=theme_name,
            style=style,
            no_color=no_color,
        )
    terminal = TerminalController(stdin_fd, stdout_fd)
    callbacks = RuntimeLoopCallbacks(
        render_rows=session.render_rows,
        write_rows=lambda rows: write_frame(rows, stdout_fd),
        handle_key=session.handle_key,
    )
    logger.info("starting interactive session")
    with exit_on_signals():
        run_main_loop(session.state, terminal, stdin_fd, RuntimeLoopTiming(), callbacks)
    logger.info("interactive session ended")
