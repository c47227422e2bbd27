"""Selection resolution: cursor movement, expansion, and the resolved context."""

from __future__ import annotations

from .context import NO_SELECTION, NavigationContext
from .navigator import PAGE_SIZE, TreeNavigator

__all__ = ["NO_SELECTION", "NavigationContext", "PAGE_SIZE", "TreeNavigator"]
