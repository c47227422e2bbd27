"""Startup discovery of the products and projects behind one Atlassian instance.

A failing product is degraded to ``available=False`` with the error embedded
in its display name; it never aborts discovery of the others.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from ..errors import ConfluenceError
from .models import AtlassianDomain, AtlassianProduct, ProductType

if TYPE_CHECKING:
    from ..remote.client import ConfluenceClient

logger = logging.getLogger(__name__)

PLACEHOLDER_PRODUCTS: tuple[tuple[ProductType, str], ...] = (
    (ProductType.JIRA, "Jira (coming soon)"),
    (ProductType.JSM, "Jira Service Management (coming soon)"),
)


def domain_name_from_url(base_url: str) -> str:
    """Return the host part of ``base_url``, or the raw value when it has none."""
    host = urlparse(base_url).hostname
    return host or base_url


class DomainLoader:
    """Build an ``AtlassianDomain`` by querying the remote client once."""

    def __init__(self, client: ConfluenceClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url

    def load_domain(self) -> AtlassianDomain:
        products = [self.discover_confluence()]
        for product_type, name in PLACEHOLDER_PRODUCTS:
            products.append(AtlassianProduct(product_type, name, (), available=False))
        return AtlassianDomain(
            name=domain_name_from_url(self.base_url),
            base_url=self.base_url,
            products=tuple(products),
        )

    def discover_confluence(self) -> AtlassianProduct:
        try:
            projects = self.client.list_projects()
        except ConfluenceError as exc:
            logger.warning("Confluence discovery failed: %s", exc)
            return AtlassianProduct(
                ProductType.CONFLUENCE,
                f"Confluence (Error: {exc})",
                (),
                available=False,
            )
        logger.info("discovered %d Confluence spaces", len(projects))
        return AtlassianProduct(ProductType.CONFLUENCE, "Confluence", tuple(projects))
