"""Display-label formatting for navigation tree rows.

Rows are plain text: indentation, an expand marker, a kind icon, then the
node name. ``strip_row_decoration`` reverses this for fuzzy matching.
"""

from __future__ import annotations

from ..domain.models import AtlassianProduct, ProductType
from .types import NodeKind, TreeNode

INDENT = "  "
EXPANDED_MARKER = "▼ "
COLLAPSED_MARKER = "▶ "
LEAF_MARKER = "  "

DOMAIN_ICON = "🌐"
PROJECT_ICON = "📁"
UNAVAILABLE_ICON = "⭕"
PRODUCT_ICONS: dict[ProductType, str] = {
    ProductType.CONFLUENCE: "📊",
    ProductType.JIRA: "📋",
    ProductType.JSM: "🎫",
}

ROW_ICONS: frozenset[str] = frozenset(
    {DOMAIN_ICON, PROJECT_ICON, UNAVAILABLE_ICON, *PRODUCT_ICONS.values()}
)
_MARKER_CHARS = frozenset("▼▶")


def node_icon(node: TreeNode) -> str:
    if node.kind is NodeKind.DOMAIN:
        return DOMAIN_ICON
    if node.kind is NodeKind.PROJECT:
        return PROJECT_ICON
    product = node.payload
    if isinstance(product, AtlassianProduct) and not product.available:
        return UNAVAILABLE_ICON
    if isinstance(product, AtlassianProduct):
        return PRODUCT_ICONS.get(product.product_type, UNAVAILABLE_ICON)
    return UNAVAILABLE_ICON


def expand_marker(node: TreeNode) -> str:
    if not node.children:
        return LEAF_MARKER
    return EXPANDED_MARKER if node.expanded else COLLAPSED_MARKER


def format_tree_row(node: TreeNode, depth: int) -> str:
    """Return the decorated row label for ``node`` at ``depth``."""
    return f"{INDENT * depth}{expand_marker(node)}{node_icon(node)} {node.name}"


def strip_row_decoration(text: str) -> str:
    """Strip indentation, expand markers, and leading icon glyphs from a row label.

    Text that carries no decoration is returned trimmed but otherwise intact,
    so plain labels can be fed through the same path.
    """
    rest = text.lstrip(" ")
    while rest and (rest[0] in _MARKER_CHARS or rest[0] == " "):
        rest = rest[1:]
    changed = True
    while changed:
        changed = False
        for icon in ROW_ICONS:
            if rest.startswith(icon):
                rest = rest[len(icon):].lstrip(" \ufe0f")
                changed = True
    return rest.strip()
