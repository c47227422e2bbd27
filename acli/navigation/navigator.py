"""Browsing cursor and selection resolution over the navigation tree.

``TreeNavigator`` is the only writer of the current ``NavigationContext``.
Every method tolerates stale paths and out-of-range cursors by doing nothing.
"""

from __future__ import annotations

import logging

from ..domain.models import AtlassianDomain, AtlassianProduct, Project
from ..tree_model.tree import NavigationTree
from ..tree_model.types import NodeKind, Path
from .context import NavigationContext

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class TreeNavigator:
    def __init__(self, tree: NavigationTree, domain: AtlassianDomain | None = None) -> None:
        self.tree = tree
        self.domain = domain
        self.context = NavigationContext(domain=domain)
        self.cursor = 0

    # Cursor

    def clamp_cursor(self) -> None:
        count = self.tree.visible_count()
        self.cursor = max(0, min(self.cursor, count - 1)) if count else 0

    def move_selection(self, delta: int) -> None:
        self.cursor += delta
        self.clamp_cursor()

    def page_up(self) -> None:
        self.move_selection(-PAGE_SIZE)

    def page_down(self) -> None:
        self.move_selection(PAGE_SIZE)

    def current_path(self) -> Path | None:
        return self.tree.resolve_path(self.cursor)

    def move_cursor_to(self, path: Path) -> None:
        node_id = self.tree.node_id_at_path(path)
        if node_id is None:
            return
        index = self.tree.visible_index_of(node_id)
        if index is not None:
            self.cursor = index

    # Expansion

    def set_expanded(self, path: Path, expanded: bool) -> None:
        self.tree.set_expanded(path, expanded)
        self.clamp_cursor()

    def collapse(self, path: Path) -> None:
        """Collapse the node at ``path``, or jump to its parent when already collapsed."""
        node = self.tree.node_at_path(path)
        if node is None:
            return
        if node.expanded and node.children:
            self.tree.set_expanded(path, False)
        elif len(path) > 1:
            self.move_cursor_to(path[:-1])
        self.clamp_cursor()

    # Selection

    def _resolve(self, path: Path) -> tuple[AtlassianProduct | None, Project | None]:
        product: AtlassianProduct | None = None
        project: Project | None = None
        for node in self.tree.nodes_along_path(path):
            if node.kind is NodeKind.PRODUCT and isinstance(node.payload, AtlassianProduct):
                product = node.payload
                project = None
            elif node.kind is NodeKind.PROJECT and isinstance(node.payload, Project):
                project = node.payload
        return product, project

    def _mark_selected(self, path: Path) -> None:
        self.tree.clear_all_selected()
        self.tree.set_selected(path, True)

    def select(self, path: Path) -> None:
        """Make the node at ``path`` the single selection and rebuild the context."""
        if self.tree.node_at_path(path) is None:
            return
        product, project = self._resolve(path)
        self.context = NavigationContext(domain=self.domain, product=product, project=project)
        self._mark_selected(path)
        logger.debug("selected %s", self.context.display_path())

    def select_with_parent_expansion(self, path: Path) -> None:
        """Select ``path`` after forcing its ancestors open.

        Used when committing a filtered row, whose ancestors may be collapsed
        in the full tree. Only the leaf is marked selected; the product comes
        from the ancestor chain so a project path always yields a complete
        context. The browsing cursor follows the selection at every depth.
        """
        if self.tree.node_at_path(path) is None:
            return
        for depth in range(1, len(path)):
            self.tree.set_expanded(path[:depth], True)
        self.select(path)
        self.move_cursor_to(path)
