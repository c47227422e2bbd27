"""Fuzzy filtering of the flattened navigation tree."""

from __future__ import annotations

from .filtering import FilteredRow, SearchSession, clean_display_text, filter_rows, label_offset
from .fuzzy import FuzzyMatch, fuzzy_match, fuzzy_score

__all__ = [
    "FilteredRow",
    "FuzzyMatch",
    "SearchSession",
    "clean_display_text",
    "filter_rows",
    "fuzzy_match",
    "fuzzy_score",
    "label_offset",
]
