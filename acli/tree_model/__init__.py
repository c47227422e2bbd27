"""Navigation tree model: arena storage, flatten/path lookup, and row labels.

Defines ``NavigationTree`` plus the builder that seeds it from a discovered
``AtlassianDomain``. Row formatting helpers are shared with the fuzzy filter.
"""

from __future__ import annotations

from .build import build_tree
from .rendering import format_tree_row, node_icon, strip_row_decoration
from .tree import NavigationTree
from .types import FlatRow, NodeKind, Path, TreeNode

__all__ = [
    "FlatRow",
    "NavigationTree",
    "NodeKind",
    "Path",
    "TreeNode",
    "build_tree",
    "format_tree_row",
    "node_icon",
    "strip_row_decoration",
]
