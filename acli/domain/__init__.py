"""Atlassian domain model and startup discovery."""

from __future__ import annotations

from .loader import DomainLoader, domain_name_from_url
from .models import AtlassianDomain, AtlassianProduct, ProductType, Project

__all__ = [
    "AtlassianDomain",
    "AtlassianProduct",
    "DomainLoader",
    "ProductType",
    "Project",
    "domain_name_from_url",
]
