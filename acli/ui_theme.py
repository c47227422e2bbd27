"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the tree, context, command and footer panes.
The Pygments style used for the command preview is a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title: str
    tree_product: str
    tree_project: str
    tree_unavailable: str
    tree_selected: str
    search_hit: str
    search_query: str
    search_hint: str
    context_label: str
    context_value: str
    context_ok: str
    context_missing: str
    operation_selected: str
    operation_dim: str
    dry_run: str
    output_error: str
    status: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    tree_product="\033[1;34m",
    tree_project="\033[38;5;252m",
    tree_unavailable="\033[2;38;5;245m",
    tree_selected="\033[1;38;5;229m",
    search_hit="\033[1;38;5;214m",
    search_query="\033[1;38;5;81m",
    search_hint="\033[2;38;5;250m",
    context_label="\033[38;5;109m",
    context_value="\033[38;5;252m",
    context_ok="\033[38;5;42m",
    context_missing="\033[38;5;214m",
    operation_selected="\033[1;38;5;81m",
    operation_dim="\033[2;38;5;250m",
    dry_run="\033[1;38;5;214m",
    output_error="\033[38;5;203m",
    status="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    tree_product="\033[1;38;5;45m",
    tree_project="\033[38;5;153m",
    tree_unavailable="\033[2;38;5;110m",
    tree_selected="\033[1;38;5;117m",
    search_hit="\033[1;38;5;215m",
    search_query="\033[1;38;5;45m",
    search_hint="\033[2;38;5;110m",
    context_label="\033[38;5;73m",
    context_value="\033[38;5;153m",
    context_ok="\033[38;5;84m",
    context_missing="\033[38;5;215m",
    operation_selected="\033[1;38;5;45m",
    operation_dim="\033[2;38;5;110m",
    dry_run="\033[1;38;5;215m",
    output_error="\033[38;5;210m",
    status="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

MONO_THEME = UITheme(
    name="mono",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1m",
    tree_product="\033[1m",
    tree_project="",
    tree_unavailable="\033[2m",
    tree_selected="\033[1;4m",
    search_hit="\033[1;4m",
    search_query="\033[1m",
    search_hint="\033[2m",
    context_label="\033[2m",
    context_value="",
    context_ok="\033[1m",
    context_missing="\033[2m",
    operation_selected="\033[1m",
    operation_dim="\033[2m",
    dry_run="\033[1m",
    output_error="\033[1m",
    status="\033[1m",
    help_dim="\033[2m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    title="",
    tree_product="",
    tree_project="",
    tree_unavailable="",
    tree_selected="",
    search_hit="",
    search_query="",
    search_hint="",
    context_label="",
    context_value="",
    context_ok="",
    context_missing="",
    operation_selected="",
    operation_dim="",
    dry_run="",
    output_error="",
    status="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    MONO_THEME.name: MONO_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "DEFAULT_THEME",
    "MONO_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
