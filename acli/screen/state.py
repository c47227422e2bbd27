"""Mutable session state shared by the reducer, key translation and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..command.executor import CommandResult
from ..command.input import TextInput
from ..command.operations import Operation
from ..navigation.navigator import TreeNavigator
from ..search.filtering import SearchSession
from ..tree_model.tree import NavigationTree


class Screen(Enum):
    BROWSING = "browsing"
    SEARCHING = "searching"
    BUILDING_COMMAND = "building_command"


class CommandStep(Enum):
    SELECTING_OPERATION = "selecting_operation"
    TYPING_ARGUMENTS = "typing_arguments"
    READY = "ready"


@dataclass
class CommandBuilder:
    """Progress through choosing, parameterizing and running one operation."""

    operations: list[Operation]
    highlighted: int = 0
    step: CommandStep = CommandStep.SELECTING_OPERATION
    arguments: TextInput = field(default_factory=TextInput)
    dry_run: bool = False
    output: list[str] = field(default_factory=list)
    output_scroll: int = 0
    last_result: CommandResult | None = None

    @property
    def operation(self) -> Operation | None:
        if 0 <= self.highlighted < len(self.operations):
            return self.operations[self.highlighted]
        return None

    def scroll_output(self, delta: int) -> None:
        max_scroll = max(0, len(self.output) - 1)
        self.output_scroll = max(0, min(max_scroll, self.output_scroll + delta))


@dataclass
class AppState:
    tree: NavigationTree
    navigator: TreeNavigator
    search: SearchSession
    screen: Screen = Screen.BROWSING
    command: CommandBuilder | None = None
    status_message: str = ""
    tree_start: int = 0
    dirty: bool = True
    quit_requested: bool = False

    @classmethod
    def for_tree(cls, navigator: TreeNavigator) -> AppState:
        return cls(tree=navigator.tree, navigator=navigator, search=SearchSession(navigator.tree))
