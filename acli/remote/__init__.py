"""Confluence REST collaborator."""

from __future__ import annotations

from .client import ConfluenceClient
from .models import ConfluencePage, ConfluenceSpace, parse_page, parse_space

__all__ = ["ConfluenceClient", "ConfluencePage", "ConfluenceSpace", "parse_page", "parse_space"]
