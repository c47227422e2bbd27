"""Tree node datatypes used by the navigation tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..domain.models import AtlassianDomain, AtlassianProduct, Project

Path = tuple[int, ...]
Payload = Union[AtlassianDomain, AtlassianProduct, Project]
FlatRow = tuple[str, int, bool]


class NodeKind(Enum):
    DOMAIN = "domain"
    PRODUCT = "product"
    PROJECT = "project"


@dataclass
class TreeNode:
    """One node in the navigation arena.

    ``children`` holds arena ids, in display order. ``payload`` is a value copy
    of the entity the node stands for; its type always matches ``kind``.
    """

    name: str
    kind: NodeKind
    payload: Payload
    expanded: bool = False
    selected: bool = False
    children: list[int] = field(default_factory=list)

    @classmethod
    def for_domain(cls, domain: AtlassianDomain) -> TreeNode:
        return cls(domain.name, NodeKind.DOMAIN, domain, expanded=True)

    @classmethod
    def for_product(cls, product: AtlassianProduct) -> TreeNode:
        return cls(product.name, NodeKind.PRODUCT, product)

    @classmethod
    def for_project(cls, project: Project) -> TreeNode:
        return cls(project.name, NodeKind.PROJECT, project)
