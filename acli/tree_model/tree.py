"""Arena-backed navigation tree with path-addressed traversal and mutation.

Nodes live in one flat list; parents hold the arena ids of their children.
A ``Path`` is a chain of child positions starting at a root position, so it
describes *where* a node is shown, while the arena id describes *which* node
it is. Paths go stale whenever expansion changes; arena ids do not.

All mutators are lenient: an empty or out-of-range path is ignored rather
than raised, because paths can be computed against an older view.
"""

from __future__ import annotations

from collections.abc import Iterator

from .rendering import format_tree_row
from .types import FlatRow, Path, TreeNode


class NavigationTree:
    """Mutable product/project hierarchy with flatten and path lookup."""

    def __init__(self) -> None:
        self.nodes: list[TreeNode] = []
        self.roots: list[int] = []
        self.revision = 0

    def add_node(self, node: TreeNode, parent_id: int | None = None) -> int:
        """Append ``node`` under ``parent_id`` (or as a root) and return its arena id."""
        node_id = len(self.nodes)
        self.nodes.append(node)
        if parent_id is None:
            self.roots.append(node_id)
        else:
            self.nodes[parent_id].children.append(node_id)
        self.revision += 1
        return node_id

    def _walk_visible(self) -> Iterator[tuple[int, int, Path]]:
        """Yield ``(node_id, depth, path)`` in pre-order, entering expanded nodes only."""

        def walk(node_id: int, depth: int, path: Path) -> Iterator[tuple[int, int, Path]]:
            yield node_id, depth, path
            node = self.nodes[node_id]
            if not node.expanded:
                return
            for position, child_id in enumerate(node.children):
                yield from walk(child_id, depth + 1, path + (position,))

        for root_position, root_id in enumerate(self.roots):
            yield from walk(root_id, 0, (root_position,))

    def flatten(self) -> list[FlatRow]:
        """Return visible rows as ``(text, depth, selected)`` in display order."""
        rows: list[FlatRow] = []
        for node_id, depth, _path in self._walk_visible():
            node = self.nodes[node_id]
            rows.append((format_tree_row(node, depth), depth, node.selected))
        return rows

    def visible_nodes(self) -> list[TreeNode]:
        """Return the nodes behind ``flatten()`` rows, in the same order."""
        return [self.nodes[node_id] for node_id, _depth, _path in self._walk_visible()]

    def visible_count(self) -> int:
        return sum(1 for _ in self._walk_visible())

    def resolve_path(self, visible_index: int) -> Path | None:
        """Return the structural path of the row at ``visible_index``, or ``None``."""
        if visible_index < 0:
            return None
        for counter, (_node_id, _depth, path) in enumerate(self._walk_visible()):
            if counter == visible_index:
                return path
        return None

    def node_id_at(self, visible_index: int) -> int | None:
        if visible_index < 0:
            return None
        for counter, (node_id, _depth, _path) in enumerate(self._walk_visible()):
            if counter == visible_index:
                return node_id
        return None

    def visible_index_of(self, node_id: int) -> int | None:
        """Return the current row index of ``node_id`` or ``None`` when hidden."""
        for counter, (visible_id, _depth, _path) in enumerate(self._walk_visible()):
            if visible_id == node_id:
                return counter
        return None

    def path_of(self, node_id: int) -> Path | None:
        """Return the structural path of ``node_id`` regardless of expansion."""

        def search(ids: list[int], prefix: Path) -> Path | None:
            for position, candidate in enumerate(ids):
                path = prefix + (position,)
                if candidate == node_id:
                    return path
                found = search(self.nodes[candidate].children, path)
                if found is not None:
                    return found
            return None

        return search(self.roots, ())

    def node_id_at_path(self, path: Path) -> int | None:
        """Walk child positions from the root; ``None`` for empty or stale paths."""
        if not path:
            return None
        root_position = path[0]
        if not 0 <= root_position < len(self.roots):
            return None
        node_id = self.roots[root_position]
        for position in path[1:]:
            children = self.nodes[node_id].children
            if not 0 <= position < len(children):
                return None
            node_id = children[position]
        return node_id

    def node_at_path(self, path: Path) -> TreeNode | None:
        node_id = self.node_id_at_path(path)
        return None if node_id is None else self.nodes[node_id]

    def nodes_along_path(self, path: Path) -> list[TreeNode]:
        """Return the nodes visited by ``path``, stopping at the first stale segment."""
        visited: list[TreeNode] = []
        for depth in range(1, len(path) + 1):
            node = self.node_at_path(path[:depth])
            if node is None:
                break
            visited.append(node)
        return visited

    def set_expanded(self, path: Path, expanded: bool) -> None:
        node = self.node_at_path(path)
        if node is None or node.expanded == expanded:
            return
        node.expanded = expanded
        self.revision += 1

    def set_selected(self, path: Path, selected: bool) -> None:
        node = self.node_at_path(path)
        if node is None or node.selected == selected:
            return
        node.selected = selected
        self.revision += 1

    def clear_all_selected(self) -> None:
        changed = False
        for node in self.nodes:
            if node.selected:
                node.selected = False
                changed = True
        if changed:
            self.revision += 1

    def selected_ids(self) -> list[int]:
        return [node_id for node_id, node in enumerate(self.nodes) if node.selected]

    def clear(self) -> None:
        self.nodes.clear()
        self.roots.clear()
        self.revision += 1
