"""Catalogue of label operations offered for a navigation context."""

from __future__ import annotations

from dataclasses import dataclass

from ..navigation.context import NavigationContext


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    argument_hint: str = ""

    @property
    def shortcut(self) -> str:
        return self.name[:1]


LABEL_OPERATIONS: tuple[Operation, ...] = (
    Operation("list", "List labels for pages in this space", "[TAGS to highlight] [--tree]"),
    Operation("add", "Add labels to pages in this space", "label1,label2"),
    Operation("update", "Update labels on pages in this space", "old:new,old2:new2"),
    Operation("remove", "Remove labels from pages in this space", "label1,label2"),
)


def available_operations(context: NavigationContext) -> list[Operation]:
    """Return the operations runnable for ``context``; empty unless a wiki space is selected."""
    if not context.is_complete() or context.product is None:
        return []
    if context.product.product_type.is_wiki:
        return list(LABEL_OPERATIONS)
    return []


def operation_by_shortcut(operations: list[Operation], char: str) -> int | None:
    char = char.casefold()
    for index, operation in enumerate(operations):
        if operation.shortcut == char:
            return index
    return None
