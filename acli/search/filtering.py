"""Filtered view over flattened tree rows, traceable back to the full tree.

Filtered rows remember the index they had in the flattened view they came
from. ``SearchSession`` pins results to the tree revision they were computed
against and recomputes when the tree has moved on, so a stored
``original_index`` is never resolved against a different view.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..tree_model.rendering import strip_row_decoration
from ..tree_model.tree import NavigationTree
from ..tree_model.types import FlatRow
from .fuzzy import fuzzy_match


@dataclass(frozen=True)
class FilteredRow:
    """One surviving row; ``match_positions`` index into ``clean_display_text(text)``."""

    text: str
    depth: int
    selected: bool
    score: int
    match_positions: tuple[int, ...]
    original_index: int


def clean_display_text(text: str) -> str:
    """Return the semantic part of a row label (no indent, marker, or icon)."""
    return strip_row_decoration(text)


def label_offset(text: str) -> int:
    """Column in ``text`` where its cleaned label starts."""
    label = clean_display_text(text)
    if not label:
        return 0
    return max(0, text.rfind(label))


def filter_rows(rows: list[FlatRow], query: str) -> list[FilteredRow]:
    """Keep rows whose cleaned label fuzzy-matches ``query``, best first.

    Ties keep flattened order. An empty query yields an empty list; callers
    show the unfiltered tree in that case.
    """
    if not query:
        return []
    matched: list[FilteredRow] = []
    for index, (text, depth, selected) in enumerate(rows):
        label = clean_display_text(text)
        match = fuzzy_match(query, label)
        if match is None:
            continue
        matched.append(
            FilteredRow(
                text=text,
                depth=depth,
                selected=selected,
                score=match.score,
                match_positions=tuple(match.positions),
                original_index=index,
            )
        )
    # list.sort is stable, so equal scores stay in flattened order
    matched.sort(key=lambda row: -row.score)
    return matched


class SearchSession:
    """Query text, cursor, and results of one search-mode visit."""

    def __init__(self, tree: NavigationTree) -> None:
        self.tree = tree
        self.query = ""
        self.cursor = 0
        self._results: list[FilteredRow] = []
        self._revision: int | None = None

    @property
    def results(self) -> list[FilteredRow]:
        if self._revision != self.tree.revision:
            self.refresh()
        return self._results

    def refresh(self) -> None:
        self._results = filter_rows(self.tree.flatten(), self.query)
        self._revision = self.tree.revision
        self.clamp_cursor()

    def set_query(self, query: str) -> None:
        self.query = query
        self.cursor = 0
        self.refresh()

    def append_char(self, char: str) -> None:
        self.set_query(self.query + char)

    def delete_char(self) -> None:
        if self.query:
            self.set_query(self.query[:-1])

    def move_cursor(self, delta: int) -> None:
        self.cursor += delta
        self.clamp_cursor()

    def clamp_cursor(self) -> None:
        count = len(self._results)
        self.cursor = max(0, min(self.cursor, count - 1)) if count else 0

    def original_index_for(self, filtered_index: int) -> int | None:
        """Map a filtered row index to its row index in the unfiltered view."""
        results = self.results
        if not 0 <= filtered_index < len(results):
            return None
        return results[filtered_index].original_index

    def reset(self) -> None:
        self.query = ""
        self.cursor = 0
        self._results = []
        self._revision = None
