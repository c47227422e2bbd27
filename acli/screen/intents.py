"""Closed set of user intents consumed by the screen reducer.

Intents are plain values. Path-carrying intents hold a path resolved against
the tree at key-translation time, so the reducer never reads the cursor to
decide *which* node an action applies to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..tree_model.types import Path


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class PageCursor:
    direction: int


@dataclass(frozen=True)
class Expand:
    path: Path
    expanded: bool = True


@dataclass(frozen=True)
class Collapse:
    path: Path


@dataclass(frozen=True)
class Select:
    path: Path


@dataclass(frozen=True)
class ActivateSearch:
    pass


@dataclass(frozen=True)
class SetQuery:
    query: str


@dataclass(frozen=True)
class OpenCommands:
    pass


@dataclass(frozen=True)
class InsertText:
    text: str


@dataclass(frozen=True)
class DeleteText:
    forward: bool = False


@dataclass(frozen=True)
class MoveTextCursor:
    delta: int


@dataclass(frozen=True)
class ChooseOperation:
    index: int


@dataclass(frozen=True)
class ToggleDryRun:
    pass


@dataclass(frozen=True)
class ScrollOutput:
    delta: int


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Intent = Union[
    MoveCursor,
    PageCursor,
    Expand,
    Collapse,
    Select,
    ActivateSearch,
    SetQuery,
    OpenCommands,
    InsertText,
    DeleteText,
    MoveTextCursor,
    ChooseOperation,
    ToggleDryRun,
    ScrollOutput,
    Confirm,
    Cancel,
    Quit,
]
