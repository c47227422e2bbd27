"""Screen reducer: one transition table keyed by ``(screen, intent type)``.

Every state change of the interactive session goes through
``ScreenStateMachine.dispatch``. Pairs missing from the table are ignored, so
an intent that makes no sense on the current screen is a no-op. Guards are
attached to table entries; a failing guard leaves the screen unchanged and
reports its reason on the status line.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..command.executor import CommandExecutor
from ..command.operations import available_operations
from ..errors import CommandNonZeroExit, CommandSpawnFailed, IncompleteContext
from ..navigation.navigator import PAGE_SIZE
from .intents import (
    ActivateSearch,
    Cancel,
    ChooseOperation,
    Collapse,
    Confirm,
    DeleteText,
    Expand,
    InsertText,
    Intent,
    MoveCursor,
    MoveTextCursor,
    OpenCommands,
    PageCursor,
    Quit,
    ScrollOutput,
    Select,
    SetQuery,
    ToggleDryRun,
)
from .state import AppState, CommandBuilder, CommandStep, Screen

logger = logging.getLogger(__name__)

SEARCH_STATUS = "Search mode: type to filter, Esc to exit"
COMMAND_SUCCESS_STATUS = "Command completed successfully"

Handler = Callable[["ScreenStateMachine", Intent], None]
Guard = Callable[["ScreenStateMachine"], "str | None"]


@dataclass(frozen=True)
class Transition:
    handler: Handler
    guard: Guard | None = None


class ScreenStateMachine:
    def __init__(self, state: AppState, executor: CommandExecutor) -> None:
        self.state = state
        self.executor = executor

    @property
    def screen(self) -> Screen:
        return self.state.screen

    def dispatch(self, intent: Intent) -> bool:
        """Apply ``intent``; return ``False`` when the current screen ignores it."""
        transition = TRANSITIONS.get((self.state.screen, type(intent)))
        if transition is None:
            return False
        if transition.guard is not None:
            reason = transition.guard(self)
            if reason is not None:
                self.state.status_message = reason
                self.state.dirty = True
                return True
        transition.handler(self, intent)
        self.state.dirty = True
        return True

    # Guards

    def _require_complete_context(self) -> str | None:
        context = self.state.navigator.context
        if not context.is_complete():
            return "Select a project first to run commands"
        if not available_operations(context):
            return f"No commands available for {context.display_path()}"
        return None

    # Shared

    def _quit(self, intent: Intent) -> None:
        self.state.quit_requested = True

    def _enter_browsing(self) -> None:
        self.state.screen = Screen.BROWSING
        self.state.command = None
        self.state.search.reset()
        self.state.navigator.clamp_cursor()

    # Browsing

    def _move_tree_cursor(self, intent: MoveCursor) -> None:
        self.state.navigator.move_selection(intent.delta)

    def _page_tree_cursor(self, intent: PageCursor) -> None:
        if intent.direction < 0:
            self.state.navigator.page_up()
        else:
            self.state.navigator.page_down()

    def _expand(self, intent: Expand) -> None:
        self.state.navigator.set_expanded(intent.path, intent.expanded)

    def _collapse(self, intent: Collapse) -> None:
        self.state.navigator.collapse(intent.path)

    def _select(self, intent: Select) -> None:
        navigator = self.state.navigator
        navigator.select(intent.path)
        self.state.status_message = f"Selected: {navigator.context.display_path()}"

    def _activate_search(self, intent: ActivateSearch) -> None:
        self.state.search.reset()
        self.state.screen = Screen.SEARCHING
        self.state.status_message = SEARCH_STATUS

    def _open_commands(self, intent: OpenCommands) -> None:
        operations = available_operations(self.state.navigator.context)
        self.state.command = CommandBuilder(operations=operations)
        self.state.screen = Screen.BUILDING_COMMAND
        self.state.status_message = "Choose an operation"

    def _clear_status(self, intent: Cancel) -> None:
        self.state.status_message = ""

    # Searching

    def _set_query(self, intent: SetQuery) -> None:
        self.state.search.set_query(intent.query)

    def _move_search_cursor(self, intent: MoveCursor) -> None:
        self.state.search.move_cursor(intent.delta)

    def _page_search_cursor(self, intent: PageCursor) -> None:
        self.state.search.move_cursor(PAGE_SIZE if intent.direction > 0 else -PAGE_SIZE)

    def _commit_search(self, intent: Select) -> None:
        navigator = self.state.navigator
        navigator.select_with_parent_expansion(intent.path)
        self._enter_browsing()
        self.state.status_message = f"Selected: {navigator.context.display_path()}"

    def _cancel_search(self, intent: Cancel) -> None:
        self._enter_browsing()
        self.state.status_message = ""

    # Building command

    def _builder(self) -> CommandBuilder | None:
        return self.state.command

    def _command_move(self, intent: MoveCursor) -> None:
        builder = self._builder()
        if builder is None:
            return
        if builder.step is CommandStep.SELECTING_OPERATION and builder.operations:
            builder.highlighted = max(0, min(len(builder.operations) - 1, builder.highlighted + intent.delta))
        elif builder.step is CommandStep.READY:
            builder.scroll_output(intent.delta)

    def _command_page(self, intent: PageCursor) -> None:
        builder = self._builder()
        if builder is not None and builder.step is CommandStep.READY:
            builder.scroll_output(PAGE_SIZE if intent.direction > 0 else -PAGE_SIZE)

    def _choose_operation(self, intent: ChooseOperation) -> None:
        builder = self._builder()
        if builder is None or builder.step is not CommandStep.SELECTING_OPERATION:
            return
        if not 0 <= intent.index < len(builder.operations):
            return
        builder.highlighted = intent.index
        self._begin_arguments(builder)

    def _begin_arguments(self, builder: CommandBuilder) -> None:
        builder.step = CommandStep.TYPING_ARGUMENTS
        builder.arguments.clear()
        operation = builder.operation
        hint = f" ({operation.argument_hint})" if operation is not None and operation.argument_hint else ""
        self.state.status_message = f"Type arguments{hint}, Enter when done"

    def _confirm_command(self, intent: Confirm) -> None:
        builder = self._builder()
        if builder is None:
            return
        if builder.step is CommandStep.SELECTING_OPERATION:
            if builder.operation is not None:
                self._begin_arguments(builder)
        elif builder.step is CommandStep.TYPING_ARGUMENTS:
            builder.step = CommandStep.READY
            self.state.status_message = "Ready: Enter to run, d to toggle dry-run"
        else:
            self._execute(builder)

    def _insert_text(self, intent: InsertText) -> None:
        builder = self._builder()
        if builder is not None and builder.step is CommandStep.TYPING_ARGUMENTS:
            builder.arguments.insert(intent.text)

    def _delete_text(self, intent: DeleteText) -> None:
        builder = self._builder()
        if builder is None or builder.step is not CommandStep.TYPING_ARGUMENTS:
            return
        if intent.forward:
            builder.arguments.delete_forward()
        else:
            builder.arguments.delete_back()

    def _move_text_cursor(self, intent: MoveTextCursor) -> None:
        builder = self._builder()
        if builder is not None and builder.step is CommandStep.TYPING_ARGUMENTS:
            builder.arguments.move(intent.delta)

    def _toggle_dry_run(self, intent: ToggleDryRun) -> None:
        builder = self._builder()
        if builder is not None and builder.step is CommandStep.READY:
            builder.dry_run = not builder.dry_run
            self.state.status_message = f"Dry run {'on' if builder.dry_run else 'off'}"

    def _scroll_output(self, intent: ScrollOutput) -> None:
        builder = self._builder()
        if builder is not None:
            builder.scroll_output(intent.delta)

    def _cancel_command(self, intent: Cancel) -> None:
        self._enter_browsing()
        self.state.status_message = "Command cancelled"

    def _execute(self, builder: CommandBuilder) -> None:
        operation = builder.operation
        if operation is None:
            return
        context = self.state.navigator.context
        builder.output_scroll = 0
        try:
            result = self.executor.execute(context, operation.name, builder.arguments.text, builder.dry_run)
        except IncompleteContext as exc:
            self.state.status_message = str(exc)
            return
        except CommandSpawnFailed as exc:
            builder.output = [str(exc)]
            self.state.status_message = str(exc)
            return
        builder.last_result = result
        builder.output = [f"$ {result.command}", *result.stdout.splitlines(), *result.stderr.splitlines()]
        try:
            result.check()
        except CommandNonZeroExit as exc:
            logger.warning("%s", exc)
            self.state.status_message = str(exc)
            return
        self.state.status_message = COMMAND_SUCCESS_STATUS


_M = ScreenStateMachine
_B = Screen.BROWSING
_S = Screen.SEARCHING
_C = Screen.BUILDING_COMMAND

TRANSITIONS: dict[tuple[Screen, type], Transition] = {
    (_B, MoveCursor): Transition(_M._move_tree_cursor),
    (_B, PageCursor): Transition(_M._page_tree_cursor),
    (_B, Expand): Transition(_M._expand),
    (_B, Collapse): Transition(_M._collapse),
    (_B, Select): Transition(_M._select),
    (_B, ActivateSearch): Transition(_M._activate_search),
    (_B, OpenCommands): Transition(_M._open_commands, guard=_M._require_complete_context),
    (_B, Cancel): Transition(_M._clear_status),
    (_B, Quit): Transition(_M._quit),
    (_S, SetQuery): Transition(_M._set_query),
    (_S, MoveCursor): Transition(_M._move_search_cursor),
    (_S, PageCursor): Transition(_M._page_search_cursor),
    (_S, Select): Transition(_M._commit_search),
    (_S, Cancel): Transition(_M._cancel_search),
    (_S, Quit): Transition(_M._quit),
    (_C, MoveCursor): Transition(_M._command_move),
    (_C, PageCursor): Transition(_M._command_page),
    (_C, ChooseOperation): Transition(_M._choose_operation),
    (_C, Confirm): Transition(_M._confirm_command),
    (_C, InsertText): Transition(_M._insert_text),
    (_C, DeleteText): Transition(_M._delete_text),
    (_C, MoveTextCursor): Transition(_M._move_text_cursor),
    (_C, ToggleDryRun): Transition(_M._toggle_dry_run),
    (_C, ScrollOutput): Transition(_M._scroll_output),
    (_C, Cancel): Transition(_M._cancel_command),
    (_C, Quit): Transition(_M._quit),
}
