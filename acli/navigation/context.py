"""Resolved (domain, product, project) selection and its CQL rendering."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import AtlassianDomain, AtlassianProduct, Project

NO_SELECTION = "No selection"


@dataclass(frozen=True)
class NavigationContext:
    domain: AtlassianDomain | None = None
    product: AtlassianProduct | None = None
    project: Project | None = None

    def is_complete(self) -> bool:
        return self.domain is not None and self.product is not None and self.project is not None

    def cql_context(self) -> str | None:
        """Return the CQL fragment scoping a query to the selected project.

        ``space = "KEY"`` for the wiki product, ``project = "KEY"`` otherwise.
        """
        product, project = self.product, self.project
        if self.domain is None or product is None or project is None:
            return None
        return f'{product.product_type.query_field} = "{project.key}"'

    def display_path(self) -> str:
        parts = [
            entity.name
            for entity in (self.domain, self.product, self.project)
            if entity is not None
        ]
        return " > ".join(parts) if parts else NO_SELECTION
