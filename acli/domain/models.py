"""Atlassian domain datatypes: instance, product, and project/space."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProductType(Enum):
    """Products that can appear under an Atlassian instance."""

    CONFLUENCE = "confluence"
    JIRA = "jira"
    JSM = "jsm"

    @property
    def is_wiki(self) -> bool:
        return self is ProductType.CONFLUENCE

    @property
    def query_field(self) -> str:
        """CQL field that scopes a query to one project of this product."""
        return "space" if self.is_wiki else "project"


@dataclass(frozen=True)
class Project:
    """A Confluence space or a Jira project."""

    id: str
    key: str
    name: str
    description: str | None = None
    project_type: str = "space"


@dataclass(frozen=True)
class AtlassianProduct:
    product_type: ProductType
    name: str
    projects: tuple[Project, ...] = ()
    available: bool = True


@dataclass(frozen=True)
class AtlassianDomain:
    """One Atlassian instance and the products discovered on it."""

    name: str
    base_url: str
    products: tuple[AtlassianProduct, ...] = field(default_factory=tuple)
