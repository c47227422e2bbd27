"""ctag: list and edit Confluence page labels selected by a CQL expression.

Examples::

    acli ctag list 'space = "ENG"' --tree
    acli ctag add 'parent = 1234' "foo,bar"
    acli ctag update 'parent = 1234' "foo:bar,baz:qux"
    acli ctag remove 'parent = 1234' "foo,bar"

Every operation first queries the matching pages. ``list`` prints them, the
others apply label changes page by page. Dry runs print what would happen
and never touch the network.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TextIO

from .errors import UsageError
from .remote.client import ConfluenceClient
from .remote.models import ConfluencePage

logger = logging.getLogger(__name__)

OPERATIONS = ("list", "add", "update", "remove")
HIGHLIGHT = "\x1b[1;33m"
RESET = "\x1b[0m"
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "

ClientFactory = Callable[[], ConfluenceClient]


def parse_labels(text: str | None) -> list[str]:
    """Split a comma-separated label list, dropping blanks."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_updates(text: str) -> list[tuple[str, str]]:
    """Parse ``"old:new,old2:new2"``; a malformed item raises ``UsageError``."""
    pairs: list[tuple[str, str]] = []
    for item in (part.strip() for part in text.split(",")):
        parts = item.split(":")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise UsageError(f"Invalid update format '{item}'. Expected 'old:new'")
        pairs.append((parts[0].strip(), parts[1].strip()))
    return pairs


def _as_list_text(values: list[str]) -> str:
    return json.dumps(values)


def should_highlight(labels: tuple[str, ...] | list[str], highlight_tags: list[str]) -> bool:
    return any(label in highlight_tags for label in labels)


class CtagCommand:
    """Run one ctag operation and print its report to ``out``."""

    def __init__(
        self,
        client_factory: ClientFactory,
        out: TextIO,
        *,
        dry_run: bool = False,
        pretty: bool = False,
        color: bool = True,
    ) -> None:
        self.client_factory = client_factory
        self.out = out
        self.dry_run = dry_run
        self.pretty = pretty
        self.color = color
        self._client: ConfluenceClient | None = None

    @property
    def client(self) -> ConfluenceClient:
        if self._client is None:
            self._client = self.client_factory()
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def echo(self, text: str = "") -> None:
        print(text, file=self.out)

    def run(self, operation: str, cql: str, tags: str | None = None, *, tree: bool = False) -> int:
        try:
            if operation == "list":
                self.list_pages(cql, parse_labels(tags), tree=tree)
            elif operation == "add":
                self.add_labels(cql, parse_labels(tags))
            elif operation == "update":
                self.update_labels(cql, parse_updates(tags or ""))
            elif operation == "remove":
                self.remove_labels(cql, parse_labels(tags))
            else:
                raise UsageError(f"Unknown ctag operation: {operation}")
        finally:
            self.close()
        return 0

    # Display

    def _title(self, page: ConfluencePage, highlight_tags: list[str]) -> str:
        if self.color and should_highlight(page.labels, highlight_tags):
            return f"{HIGHLIGHT}{page.title}{RESET}"
        return page.title

    def _line(self, page: ConfluencePage, highlight_tags: list[str]) -> str:
        title = self._title(page, highlight_tags)
        if page.labels:
            return f"{title} [{', '.join(page.labels)}]"
        return title

    def _page_json(self, page: ConfluencePage, highlight_tags: list[str]) -> dict[str, object]:
        data = page.to_json()
        data["highlighted"] = should_highlight(page.labels, highlight_tags)
        return data

    def _children(self, page: ConfluencePage) -> list[ConfluencePage]:
        return self.client.query_pages(f"parent = {page.id}")

    def _tree_lines(
        self,
        page: ConfluencePage,
        prefix: str,
        is_last: bool,
        highlight_tags: list[str],
        seen: set[str],
    ) -> None:
        self.echo(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{self._line(page, highlight_tags)}")
        if page.id in seen:
            return
        seen.add(page.id)
        children = self._children(page)
        child_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
        for index, child in enumerate(children):
            self._tree_lines(child, child_prefix, index == len(children) - 1, highlight_tags, seen)

    def _tree_json(self, page: ConfluencePage, highlight_tags: list[str], seen: set[str]) -> dict[str, object]:
        data = self._page_json(page, highlight_tags)
        if page.id in seen:
            data["children"] = []
            return data
        seen.add(page.id)
        data["children"] = [self._tree_json(child, highlight_tags, seen) for child in self._children(page)]
        return data

    # Operations

    def list_pages(self, cql: str, highlight_tags: list[str], *, tree: bool = False) -> None:
        if self.dry_run:
            self.echo(f"DRY RUN: Would list pages for CQL: {cql}")
            if highlight_tags:
                self.echo(f"DRY RUN: Would highlight pages with tags: {_as_list_text(highlight_tags)}")
            if tree:
                self.echo("DRY RUN: Would use tree format")
            return
        pages = self.client.query_pages(cql)
        if self.pretty:
            if tree:
                seen: set[str] = set()
                payload = [self._tree_json(page, highlight_tags, seen) for page in pages]
            else:
                payload = [self._page_json(page, highlight_tags) for page in pages]
            self.echo(json.dumps(payload, indent=2))
            return
        if not pages:
            self.echo(f"No pages found matching CQL: {cql}")
            return
        if tree:
            self.echo("Pages matching CQL query:")
            seen = set()
            for index, page in enumerate(pages):
                self._tree_lines(page, "", index == len(pages) - 1, highlight_tags, seen)
            return
        for page in pages:
            self.echo(self._line(page, highlight_tags))

    def _matching_pages(self, cql: str) -> list[ConfluencePage]:
        pages = self.client.query_pages(cql)
        if not pages:
            self.echo(f"No pages found matching CQL: {cql}")
        return pages

    def _report(self, verb: str, pages: list[ConfluencePage]) -> None:
        self.echo(f"Successfully {verb} {len(pages)} pages:")
        for page in pages:
            self.echo(f"  - {page.title}")

    def add_labels(self, cql: str, labels: list[str]) -> None:
        if not labels:
            raise UsageError("No labels given")
        if self.dry_run:
            self.echo(f"DRY RUN: Would add labels {_as_list_text(labels)} to pages matching CQL: {cql}")
            return
        pages = self._matching_pages(cql)
        if not pages:
            return
        self.echo(f"Adding labels {_as_list_text(labels)} to {len(pages)} pages...")
        self.client.bulk_add_labels([page.id for page in pages], labels)
        logger.info("added %s to %d pages", labels, len(pages))
        self._report("added labels to", pages)

    def update_labels(self, cql: str, pairs: list[tuple[str, str]]) -> None:
        rendered = _as_list_text([f"{old}:{new}" for old, new in pairs])
        if self.dry_run:
            self.echo(f"DRY RUN: Would update labels {rendered} on pages matching CQL: {cql}")
            return
        pages = self._matching_pages(cql)
        if not pages:
            return
        self.echo(f"Updating labels {rendered} on {len(pages)} pages...")
        self.client.bulk_update_labels([page.id for page in pages], pairs)
        logger.info("updated %s on %d pages", rendered, len(pages))
        self._report("updated labels on", pages)

    def remove_labels(self, cql: str, labels: list[str]) -> None:
        if not labels:
            raise UsageError("No labels given")
        if self.dry_run:
            self.echo(f"DRY RUN: Would remove labels {_as_list_text(labels)} from pages matching CQL: {cql}")
            return
        pages = self._matching_pages(cql)
        if not pages:
            return
        self.echo(f"Removing labels {_as_list_text(labels)} from {len(pages)} pages...")
        self.client.bulk_remove_labels([page.id for page in pages], labels)
        logger.info("removed %s from %d pages", labels, len(pages))
        self._report("removed labels from", pages)
