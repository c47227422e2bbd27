"""Key-token to intent translation, one dispatch table per screen.

Path-carrying intents are resolved here against the current tree (or the
current filtered results), so the reducer receives concrete paths.
"""

from __future__ import annotations

from ..command.operations import operation_by_shortcut
from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from ..input.keys import is_printable_key
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
from .state import AppState, CommandStep, Screen

ENTER_KEYS = ("ENTER_CR", "ENTER_LF")
WHEEL_STEP = 3

BROWSING_HINTS = (
    "↑↓: Navigate | ←→: Expand/Collapse | /: Search | PgUp/PgDn: Scroll | "
    "Enter: Select | c: Commands | q: Quit"
)
SEARCH_HINTS = "Type to filter | ↑↓: Navigate | Enter: Select | Esc: Exit search"
SELECTING_HINTS = "↑↓: Choose | Enter or letter: Pick operation | Esc: Cancel"
TYPING_HINTS = "Type arguments | ←→/Home/End: Move | Backspace: Delete | Enter: Done | Esc: Cancel"
READY_HINTS = "Enter: Run | d: Toggle dry-run | ↑↓/PgUp/PgDn: Scroll output | Esc: Cancel"


def _wheel_delta(key: str) -> int:
    if key.startswith("MOUSE_WHEEL_UP"):
        return -WHEEL_STEP
    if key.startswith("MOUSE_WHEEL_DOWN"):
        return WHEEL_STEP
    return 0


def _browsing_registry(state: AppState) -> KeyComboRegistry[Intent]:
    navigator = state.navigator

    def expand() -> Intent | None:
        path = navigator.current_path()
        return None if path is None else Expand(path, True)

    def collapse() -> Intent | None:
        path = navigator.current_path()
        return None if path is None else Collapse(path)

    def toggle() -> Intent | None:
        path = navigator.current_path()
        node = None if path is None else state.tree.node_at_path(path)
        if path is None or node is None:
            return None
        return Expand(path, not node.expanded)

    def select() -> Intent | None:
        path = navigator.current_path()
        return None if path is None else Select(path)

    return KeyComboRegistry[Intent]().register_bindings(
        KeyComboBinding(("UP", "k"), lambda: MoveCursor(-1)),
        KeyComboBinding(("DOWN", "j"), lambda: MoveCursor(1)),
        KeyComboBinding(("PAGE_UP",), lambda: PageCursor(-1)),
        KeyComboBinding(("PAGE_DOWN",), lambda: PageCursor(1)),
        KeyComboBinding(("RIGHT", "l"), expand),
        KeyComboBinding(("LEFT", "h"), collapse),
        KeyComboBinding((" ",), toggle),
        KeyComboBinding(ENTER_KEYS, select),
        KeyComboBinding(("/",), ActivateSearch),
        KeyComboBinding(("c",), OpenCommands),
        KeyComboBinding(("ESC",), Cancel),
        KeyComboBinding(("q", "CTRL_C"), Quit),
    )


def _search_registry(state: AppState) -> KeyComboRegistry[Intent]:
    search = state.search

    def commit() -> Intent | None:
        original_index = search.original_index_for(search.cursor)
        if original_index is None:
            return None
        path = state.tree.resolve_path(original_index)
        return None if path is None else Select(path)

    return KeyComboRegistry[Intent]().register_bindings(
        KeyComboBinding(("UP", "CTRL_P"), lambda: MoveCursor(-1)),
        KeyComboBinding(("DOWN", "CTRL_N"), lambda: MoveCursor(1)),
        KeyComboBinding(("PAGE_UP",), lambda: PageCursor(-1)),
        KeyComboBinding(("PAGE_DOWN",), lambda: PageCursor(1)),
        KeyComboBinding(ENTER_KEYS, commit),
        KeyComboBinding(("BACKSPACE",), lambda: SetQuery(search.query[:-1])),
        KeyComboBinding(("CTRL_U",), lambda: SetQuery("")),
        KeyComboBinding(("ESC",), Cancel),
        KeyComboBinding(("CTRL_C",), Quit),
    )


def _command_registry(state: AppState, step: CommandStep) -> KeyComboRegistry[Intent]:
    registry = KeyComboRegistry[Intent]().register_bindings(
        KeyComboBinding(ENTER_KEYS, Confirm),
        KeyComboBinding(("ESC",), Cancel),
        KeyComboBinding(("CTRL_C",), Quit),
    )
    if step is CommandStep.SELECTING_OPERATION:
        registry.register_bindings(
            KeyComboBinding(("UP", "k"), lambda: MoveCursor(-1)),
            KeyComboBinding(("DOWN", "j"), lambda: MoveCursor(1)),
            KeyComboBinding(("BACKSPACE",), Cancel),
        )
    elif step is CommandStep.TYPING_ARGUMENTS:
        arguments = state.command.arguments if state.command is not None else None

        def to_start() -> Intent | None:
            return None if arguments is None else MoveTextCursor(-arguments.cursor)

        def to_end() -> Intent | None:
            return None if arguments is None else MoveTextCursor(len(arguments.text) - arguments.cursor)

        registry.register_bindings(
            KeyComboBinding(("HOME", "CTRL_A"), to_start),
            KeyComboBinding(("END", "CTRL_E"), to_end),
            KeyComboBinding(("BACKSPACE",), DeleteText),
            KeyComboBinding(("DELETE",), lambda: DeleteText(forward=True)),
            KeyComboBinding(("LEFT",), lambda: MoveTextCursor(-1)),
            KeyComboBinding(("RIGHT",), lambda: MoveTextCursor(1)),
        )
    else:
        registry.register_bindings(
            KeyComboBinding(("UP", "k"), lambda: ScrollOutput(-1)),
            KeyComboBinding(("DOWN", "j"), lambda: ScrollOutput(1)),
            KeyComboBinding(("PAGE_UP",), lambda: PageCursor(-1)),
            KeyComboBinding(("PAGE_DOWN",), lambda: PageCursor(1)),
            KeyComboBinding(("d",), ToggleDryRun),
            KeyComboBinding(("q",), Quit),
        )
    return registry


def translate_key(key: str, state: AppState) -> Intent | None:
    """Return the intent ``key`` stands for on the current screen, if any."""
    if not key:
        return None
    wheel = _wheel_delta(key)
    if state.screen is Screen.BROWSING:
        if wheel:
            return MoveCursor(wheel)
        return _browsing_registry(state).dispatch(key)
    if state.screen is Screen.SEARCHING:
        if wheel:
            return MoveCursor(wheel)
        registry = _search_registry(state)
        if key in registry:
            return registry.dispatch(key)
        if is_printable_key(key):
            return SetQuery(state.search.query + key)
        return None

    builder = state.command
    if builder is None:
        return Cancel()
    if wheel and builder.step is CommandStep.READY:
        return ScrollOutput(wheel)
    registry = _command_registry(state, builder.step)
    if key in registry:
        return registry.dispatch(key)
    if builder.step is CommandStep.SELECTING_OPERATION and is_printable_key(key):
        index = operation_by_shortcut(builder.operations, key)
        return None if index is None else ChooseOperation(index)
    if builder.step is CommandStep.TYPING_ARGUMENTS and is_printable_key(key):
        return InsertText(key)
    return None


def key_hints(state: AppState) -> str:
    if state.screen is Screen.BROWSING:
        return BROWSING_HINTS
    if state.screen is Screen.SEARCHING:
        return SEARCH_HINTS
    builder = state.command
    if builder is None or builder.step is CommandStep.SELECTING_OPERATION:
        return SELECTING_HINTS
    if builder.step is CommandStep.TYPING_ARGUMENTS:
        return TYPING_HINTS
    return READY_HINTS
