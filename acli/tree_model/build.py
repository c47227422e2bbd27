"""Navigation-tree construction from discovered domain data."""

from __future__ import annotations

from ..domain.models import AtlassianDomain
from .tree import NavigationTree
from .types import TreeNode


def build_tree(domain: AtlassianDomain) -> NavigationTree:
    """Build the session tree: one root per product, one child per project.

    The wiki product starts expanded when it has projects so spaces are
    visible immediately; every other node starts collapsed.
    """
    tree = NavigationTree()
    for product in domain.products:
        product_node = TreeNode.for_product(product)
        if product.product_type.is_wiki and product.projects:
            product_node.expanded = True
        product_id = tree.add_node(product_node)
        for project in product.projects:
            tree.add_node(TreeNode.for_project(project), parent_id=product_id)
    return tree
