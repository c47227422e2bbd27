"""Full-frame composition for the three interactive screens.

``render_frame`` is pure: it reads ``AppState`` and returns exactly ``height``
styled rows, each padded to ``width`` columns. ``write_frame`` pushes them to
the terminal in one write.
"""

from __future__ import annotations

import os
import sys

from ..domain.models import AtlassianProduct
from ..highlight import highlight_command, sanitize_terminal_text
from ..screen.keymap import key_hints
from ..screen.state import AppState, CommandBuilder, CommandStep, Screen
from ..search.filtering import FilteredRow, label_offset
from ..tree_model.types import NodeKind, TreeNode
from ..ui_theme import UITheme
from .ansi import fit_ansi_line, highlight_positions

TREE_PANE_RATIO = 0.6
MIN_TREE_WIDTH = 20
CHROME_ROWS = 3


def scroll_window(cursor: int, start: int, rows: int, count: int) -> int:
    """Return a window start that keeps ``cursor`` inside ``rows`` visible rows."""
    rows = max(1, rows)
    if cursor < start:
        start = cursor
    elif cursor >= start + rows:
        start = cursor - rows + 1
    return max(0, min(start, max(0, count - rows)))


def tree_pane_width(width: int) -> int:
    if width <= MIN_TREE_WIDTH + 2:
        return max(1, width - 1)
    return max(MIN_TREE_WIDTH, int(width * TREE_PANE_RATIO))


def _styled(style: str, text: str, theme: UITheme) -> str:
    return f"{style}{text}{theme.reset}" if style else text


def _title_row(state: AppState, theme: UITheme) -> str:
    domain = state.navigator.domain
    label = f" acli - {domain.name}" if domain is not None else " acli"
    if state.screen is Screen.SEARCHING:
        label += f" | Search ({len(state.search.results)} results)"
    elif state.screen is Screen.BUILDING_COMMAND:
        label += " | Commands"
    return _styled(theme.title, label, theme)


def _node_style(node: TreeNode, theme: UITheme) -> str:
    if node.selected:
        return theme.tree_selected
    if node.kind is NodeKind.PROJECT:
        return theme.tree_project
    payload = node.payload
    if isinstance(payload, AtlassianProduct) and not payload.available:
        return theme.tree_unavailable
    return theme.tree_product


def _tree_rows(state: AppState, rows: int, theme: UITheme) -> list[str]:
    flat = state.tree.flatten()
    nodes = state.tree.visible_nodes()
    start = scroll_window(state.navigator.cursor, state.tree_start, rows, len(flat))
    lines: list[str] = []
    for index in range(start, min(len(flat), start + rows)):
        text, _depth, selected = flat[index]
        style = _node_style(nodes[index], theme)
        line = f"{text} *" if selected else text
        if index == state.navigator.cursor:
            lines.append(f"{theme.reverse}{line}")
        else:
            lines.append(_styled(style, line, theme))
    return lines


def _search_row(row: FilteredRow, is_cursor: bool, theme: UITheme) -> str:
    base = theme.reverse if is_cursor else ""
    offset = label_offset(row.text)
    positions = tuple(offset + pos for pos in row.match_positions)
    text = highlight_positions(row.text, positions, theme.search_hit, theme.reset, base)
    return f"{base}{text}"


def _search_rows(state: AppState, rows: int, theme: UITheme) -> list[str]:
    search = state.search
    prompt = f"Search: {_styled(theme.search_query, search.query, theme)}_"
    lines = [prompt]
    if not search.query:
        lines.append(_styled(theme.search_hint, "type to filter spaces and products", theme))
        return lines
    results = search.results
    if not results:
        lines.append(_styled(theme.search_hint, "no matches", theme))
        return lines
    list_rows = max(1, rows - 1)
    start = scroll_window(search.cursor, 0, list_rows, len(results))
    for index in range(start, min(len(results), start + list_rows)):
        lines.append(_search_row(results[index], index == search.cursor, theme))
    return lines


def _context_rows(state: AppState, theme: UITheme) -> list[str]:
    context = state.navigator.context
    cql = context.cql_context()
    lines = [
        _styled(theme.context_label, "Selection", theme),
        _styled(theme.context_value, context.display_path(), theme),
        "",
        _styled(theme.context_label, "CQL", theme),
        _styled(theme.context_value, cql if cql is not None else "(incomplete)", theme),
        "",
    ]
    if context.is_complete():
        lines.append(_styled(theme.context_ok, "Ready for commands (press c)", theme))
    else:
        lines.append(_styled(theme.context_missing, "Select a project to enable commands", theme))
    domain = state.navigator.domain
    if domain is not None:
        lines.extend(["", _styled(theme.context_label, "Instance", theme), domain.base_url])
    return lines


def _split_panes(left: list[str], right: list[str], width: int, rows: int, theme: UITheme) -> list[str]:
    left_width = tree_pane_width(width)
    right_width = max(0, width - left_width - 1)
    divider = _styled(theme.divider, "│", theme)
    out: list[str] = []
    for row in range(rows):
        left_text = fit_ansi_line(left[row] if row < len(left) else "", left_width)
        if right_width <= 0:
            out.append(left_text)
            continue
        right_text = fit_ansi_line(right[row] if row < len(right) else "", right_width)
        out.append(f"{left_text}{divider}{right_text}")
    return out


def _arguments_line(builder: CommandBuilder, theme: UITheme) -> str:
    text = builder.arguments.text
    if builder.step is not CommandStep.TYPING_ARGUMENTS:
        return text
    cursor = builder.arguments.cursor
    under = text[cursor] if cursor < len(text) else " "
    return f"{text[:cursor]}{theme.reverse}{under}{theme.reset}{text[cursor + 1:]}"


def _command_rows(
    state: AppState,
    rows: int,
    theme: UITheme,
    preview: str,
    style: str,
    color: bool,
) -> list[str]:
    builder = state.command
    context = state.navigator.context
    lines = [
        f"{_styled(theme.context_label, 'Context:', theme)} {context.display_path()}",
        f"{_styled(theme.context_label, 'CQL:', theme)} {context.cql_context() or '(incomplete)'}",
        "",
    ]
    if builder is None:
        return lines
    lines.append(_styled(theme.title, "Operations", theme))
    for index, operation in enumerate(builder.operations):
        marker = ">" if index == builder.highlighted else " "
        row = f" {marker} [{operation.shortcut}] {operation.name:<7} {operation.description}"
        if index == builder.highlighted:
            lines.append(_styled(theme.operation_selected, row, theme))
        else:
            lines.append(_styled(theme.operation_dim, row, theme))
    lines.append("")
    if builder.step is not CommandStep.SELECTING_OPERATION:
        operation = builder.operation
        hint = operation.argument_hint if operation is not None else ""
        lines.append(f"{_styled(theme.context_label, 'Arguments:', theme)} {_arguments_line(builder, theme)}")
        if hint:
            lines.append(_styled(theme.help_dim, f"  e.g. {hint}", theme))
        dry = "on" if builder.dry_run else "off"
        lines.append(f"{_styled(theme.context_label, 'Dry run:', theme)} {_styled(theme.dry_run, dry, theme)}")
        lines.append(f"{_styled(theme.context_label, 'Command:', theme)} {highlight_command(preview, style, enabled=color)}")
    if builder.output:
        lines.append(_styled(theme.divider, "─" * 20 + " output", theme))
        failed = builder.last_result is not None and not builder.last_result.success
        remaining = max(0, rows - len(lines))
        visible = builder.output[builder.output_scroll:builder.output_scroll + remaining]
        for line in visible:
            clean = sanitize_terminal_text(line)
            lines.append(_styled(theme.output_error, clean, theme) if failed else clean)
    return lines


def render_frame(
    state: AppState,
    width: int,
    height: int,
    theme: UITheme,
    *,
    command_preview: str = "",
    style: str = "monokai",
    color: bool = True,
) -> list[str]:
    """Compose ``height`` rows for the current screen, each ``width`` columns wide."""
    width = max(1, width)
    height = max(CHROME_ROWS, height)
    body_rows = height - CHROME_ROWS
    out = [fit_ansi_line(_title_row(state, theme), width)]

    if state.screen is Screen.BUILDING_COMMAND:
        body = _command_rows(state, body_rows, theme, command_preview, style, color)
        out.extend(fit_ansi_line(body[row] if row < len(body) else "", width) for row in range(body_rows))
    else:
        if state.screen is Screen.SEARCHING:
            left = _search_rows(state, body_rows, theme)
        else:
            left = _tree_rows(state, body_rows, theme)
        out.extend(_split_panes(left, _context_rows(state, theme), width, body_rows, theme))

    out.append(fit_ansi_line(_styled(theme.status, state.status_message, theme), width))
    out.append(fit_ansi_line(_styled(theme.help_dim, key_hints(state), theme), width))
    return out


def write_frame(rows: list[str], fd: int | None = None) -> None:
    out = ["\033[H\033[J", "\r\n".join(rows)]
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, "".join(out).encode("utf-8", errors="replace"))
