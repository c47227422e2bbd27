"""Tests for the screen reducer and per-screen key translation."""

from __future__ import annotations

import dataclasses
import subprocess
import unittest
from unittest import mock

from acli.command import CommandExecutor
from acli.domain.models import AtlassianDomain, AtlassianProduct, ProductType, Project
from acli.navigation import TreeNavigator
from acli.screen import TRANSITIONS, AppState, CommandStep, Screen, ScreenStateMachine, intents, key_hints, translate_key
from acli.screen.intents import (
    ActivateSearch,
    Cancel,
    ChooseOperation,
    Confirm,
    DeleteText,
    Expand,
    InsertText,
    MoveCursor,
    OpenCommands,
    Quit,
    Select,
    SetQuery,
    ToggleDryRun,
)
from acli.tree_model import build_tree

WIKI = AtlassianProduct(
    ProductType.CONFLUENCE,
    "Wiki",
    (Project("1", "DOCS", "DOCS"), Project("2", "ENG", "ENG")),
)
JIRA = AtlassianProduct(ProductType.JIRA, "Jira", (Project("10", "CORE", "Core", project_type="project"),))
DOMAIN = AtlassianDomain("example.atlassian.net", "https://example.atlassian.net", (WIKI, JIRA))


def _machine(runner=None) -> ScreenStateMachine:
    navigator = TreeNavigator(build_tree(DOMAIN), DOMAIN)
    state = AppState.for_tree(navigator)
    if runner is None:
        runner = mock.Mock(
            return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout="Page A\n", stderr="")
        )
    return ScreenStateMachine(state, CommandExecutor(command_prefix=["acli"], runner=runner))


def _press(machine: ScreenStateMachine, *keys: str) -> None:
    for key in keys:
        intent = translate_key(key, machine.state)
        if intent is not None:
            machine.dispatch(intent)


class TransitionTableTests(unittest.TestCase):
    def test_every_intent_is_handled_on_some_screen(self) -> None:
        handled = {intent_type for _screen, intent_type in TRANSITIONS}
        declared = {
            value
            for value in vars(intents).values()
            if isinstance(value, type) and dataclasses.is_dataclass(value) and value.__module__ == intents.__name__
        }

        self.assertEqual(declared - handled, set())

    def test_unhandled_pair_is_ignored(self) -> None:
        machine = _machine()
        machine.state.dirty = False

        self.assertFalse(machine.dispatch(InsertText("x")))
        self.assertFalse(machine.dispatch(SetQuery("eng")))
        self.assertFalse(machine.state.dirty)
        self.assertIs(machine.screen, Screen.BROWSING)

    def test_quit_is_accepted_on_every_screen(self) -> None:
        for screen in Screen:
            self.assertIn((screen, Quit), TRANSITIONS)


class BrowsingTests(unittest.TestCase):
    def test_select_updates_context_and_status(self) -> None:
        machine = _machine()

        machine.dispatch(Select((0, 1)))

        self.assertEqual(machine.state.navigator.context.cql_context(), 'space = "ENG"')
        self.assertEqual(machine.state.status_message, "Selected: example.atlassian.net > Wiki > ENG")

    def test_open_commands_is_guarded_without_project(self) -> None:
        machine = _machine()
        machine.dispatch(Select((0,)))

        machine.dispatch(OpenCommands())

        self.assertIs(machine.screen, Screen.BROWSING)
        self.assertIsNone(machine.state.command)
        self.assertEqual(machine.state.status_message, "Select a project first to run commands")

    def test_open_commands_is_guarded_for_tracker_project(self) -> None:
        machine = _machine()
        machine.state.tree.set_expanded((1,), True)
        machine.dispatch(Select((1, 0)))

        machine.dispatch(OpenCommands())

        self.assertIs(machine.screen, Screen.BROWSING)
        self.assertEqual(
            machine.state.status_message,
            "No commands available for example.atlassian.net > Jira > Core",
        )

    def test_open_commands_with_complete_context(self) -> None:
        machine = _machine()
        machine.dispatch(Select((0, 0)))

        machine.dispatch(OpenCommands())

        self.assertIs(machine.screen, Screen.BUILDING_COMMAND)
        self.assertEqual(len(machine.state.command.operations), 4)
        self.assertIs(machine.state.command.step, CommandStep.SELECTING_OPERATION)

    def test_expand_clamps_cursor_after_collapse(self) -> None:
        machine = _machine()
        machine.state.navigator.cursor = 2

        machine.dispatch(Expand((0,), False))

        self.assertEqual(machine.state.tree.visible_count(), 2)
        self.assertEqual(machine.state.navigator.cursor, 1)

    def test_left_on_leaf_jumps_to_product_row(self) -> None:
        machine = _machine()
        machine.state.navigator.cursor = 2

        _press(machine, "LEFT")
        self.assertEqual(machine.state.navigator.cursor, 0)
        self.assertEqual(machine.state.tree.visible_count(), 4)

        _press(machine, "LEFT")
        self.assertEqual(machine.state.tree.visible_count(), 2)

    def test_browsing_keys(self) -> None:
        machine = _machine()

        _press(machine, "DOWN", "j", "ENTER_CR")
        self.assertEqual(machine.state.navigator.context.project, WIKI.projects[1])

        _press(machine, "q")
        self.assertTrue(machine.state.quit_requested)

    def test_mouse_wheel_moves_cursor(self) -> None:
        machine = _machine()

        self.assertEqual(translate_key("MOUSE_WHEEL_DOWN:4:7", machine.state), MoveCursor(3))
        self.assertEqual(translate_key("MOUSE_WHEEL_UP:4:7", machine.state), MoveCursor(-3))


class SearchingTests(unittest.TestCase):
    def test_typed_query_filters_and_enter_commits_selection(self) -> None:
        machine = _machine()
        machine.dispatch(ActivateSearch())
        self.assertIs(machine.screen, Screen.SEARCHING)

        _press(machine, "e", "n", "g")
        self.assertEqual(machine.state.search.query, "eng")
        self.assertEqual([row.text for row in machine.state.search.results][0].strip()[-3:], "ENG")

        _press(machine, "ENTER_CR")

        self.assertIs(machine.screen, Screen.BROWSING)
        self.assertEqual(machine.state.navigator.context.cql_context(), 'space = "ENG"')
        self.assertEqual(machine.state.search.query, "")

    def test_committing_product_row_moves_browsing_cursor(self) -> None:
        machine = _machine()
        machine.state.navigator.cursor = 1

        _press(machine, "/", "j", "i", "r", "a", "ENTER_CR")

        self.assertIs(machine.screen, Screen.BROWSING)
        self.assertEqual(machine.state.navigator.context.product, JIRA)
        self.assertEqual(machine.state.navigator.cursor, 3)
        self.assertEqual(machine.state.navigator.current_path(), (1,))

        _press(machine, "ENTER_CR")
        self.assertEqual(machine.state.navigator.context.product, JIRA)

    def test_backspace_and_ctrl_u_edit_query(self) -> None:
        machine = _machine()
        machine.dispatch(ActivateSearch())
        _press(machine, "d", "o", "c", "BACKSPACE")
        self.assertEqual(machine.state.search.query, "do")

        _press(machine, "CTRL_U")
        self.assertEqual(machine.state.search.query, "")

    def test_enter_with_no_results_does_nothing(self) -> None:
        machine = _machine()
        machine.dispatch(ActivateSearch())
        _press(machine, "z", "z", "z")

        self.assertIsNone(translate_key("ENTER_CR", machine.state))
        self.assertIs(machine.screen, Screen.SEARCHING)

    def test_escape_returns_to_browsing_without_selecting(self) -> None:
        machine = _machine()
        machine.dispatch(ActivateSearch())
        _press(machine, "e", "ESC")

        self.assertIs(machine.screen, Screen.BROWSING)
        self.assertIsNone(machine.state.navigator.context.product)
        self.assertEqual(machine.state.status_message, "")

    def test_search_key_q_is_query_text(self) -> None:
        machine = _machine()
        machine.dispatch(ActivateSearch())

        self.assertEqual(translate_key("q", machine.state), SetQuery("q"))


class CommandFlowTests(unittest.TestCase):
    def _ready_machine(self, runner=None) -> ScreenStateMachine:
        machine = _machine(runner)
        machine.dispatch(Select((0, 1)))
        machine.dispatch(OpenCommands())
        return machine

    def test_full_add_flow_dispatches_ctag_with_dry_run(self) -> None:
        runner = mock.Mock(
            return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout="DRY RUN\n", stderr="")
        )
        machine = self._ready_machine(runner)

        _press(machine, "a")
        self.assertIs(machine.state.command.step, CommandStep.TYPING_ARGUMENTS)
        _press(machine, "f", "o", "o", "ENTER_CR")
        self.assertIs(machine.state.command.step, CommandStep.READY)
        _press(machine, "d", "ENTER_CR")

        runner.assert_called_once()
        self.assertEqual(
            runner.call_args.args[0],
            ["acli", "ctag", "add", 'space = "ENG"', "foo", "--dry-run"],
        )
        self.assertEqual(machine.state.command.output[0], "$ ctag add 'space = \"ENG\"' foo --dry-run")
        self.assertIn("DRY RUN", machine.state.command.output)
        self.assertEqual(machine.state.status_message, "Command completed successfully")

    def test_enter_on_highlighted_operation_begins_arguments(self) -> None:
        machine = self._ready_machine()

        _press(machine, "DOWN", "DOWN", "ENTER_CR")

        self.assertEqual(machine.state.command.operation.name, "update")
        self.assertIs(machine.state.command.step, CommandStep.TYPING_ARGUMENTS)

    def test_failed_command_reports_stderr(self) -> None:
        runner = mock.Mock(
            return_value=subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="Error: nope\n")
        )
        machine = self._ready_machine(runner)
        machine.dispatch(ChooseOperation(0))
        machine.dispatch(Confirm())
        machine.dispatch(Confirm())

        self.assertEqual(machine.state.status_message, "Command failed: Error: nope")
        self.assertIn("Error: nope", machine.state.command.output)
        self.assertFalse(machine.state.command.last_result.success)

    def test_spawn_failure_is_shown_in_output(self) -> None:
        machine = self._ready_machine(mock.Mock(side_effect=FileNotFoundError("missing")))
        machine.dispatch(ChooseOperation(0))
        machine.dispatch(Confirm())
        machine.dispatch(Confirm())

        self.assertIn("Failed to start acli", machine.state.status_message)
        self.assertIs(machine.screen, Screen.BUILDING_COMMAND)

    def test_text_editing_only_in_typing_step(self) -> None:
        machine = self._ready_machine()
        machine.dispatch(InsertText("x"))
        self.assertEqual(machine.state.command.arguments.text, "")

        machine.dispatch(ChooseOperation(1))
        machine.dispatch(InsertText("ab"))
        machine.dispatch(DeleteText())
        self.assertEqual(machine.state.command.arguments.text, "a")

        machine.dispatch(ToggleDryRun())
        self.assertFalse(machine.state.command.dry_run)

    def test_home_and_end_jump_within_arguments(self) -> None:
        machine = self._ready_machine()
        _press(machine, "a", "f", "o", "o", "HOME", "x", "END", "y")

        self.assertEqual(machine.state.command.arguments.text, "xfooy")

    def test_cancel_returns_to_browsing_and_keeps_context(self) -> None:
        machine = self._ready_machine()

        _press(machine, "ESC")

        self.assertIs(machine.screen, Screen.BROWSING)
        self.assertIsNone(machine.state.command)
        self.assertEqual(machine.state.status_message, "Command cancelled")
        self.assertTrue(machine.state.navigator.context.is_complete())

    def test_cancel_intent_from_missing_builder(self) -> None:
        machine = _machine()
        machine.state.screen = Screen.BUILDING_COMMAND

        self.assertEqual(translate_key("x", machine.state), Cancel())


class KeyHintTests(unittest.TestCase):
    def test_hints_follow_screen_and_step(self) -> None:
        machine = _machine()
        self.assertIn("c: Commands", key_hints(machine.state))

        machine.dispatch(Select((0, 0)))
        machine.dispatch(OpenCommands())
        self.assertIn("Pick operation", key_hints(machine.state))

        machine.dispatch(ChooseOperation(0))
        self.assertIn("Type arguments", key_hints(machine.state))

        machine.dispatch(Confirm())
        self.assertIn("Toggle dry-run", key_hints(machine.state))


if __name__ == "__main__":
    unittest.main()
