"""Tests for the ctag label command against a fake Confluence client."""

from __future__ import annotations

import io
import json
import unittest
from unittest import mock

from acli.ctag import CtagCommand, parse_labels, parse_updates, should_highlight
from acli.errors import UsageError
from acli.remote.models import ConfluencePage

PAGES = [
    ConfluencePage("1", "Runbook", labels=("ops", "draft")),
    ConfluencePage("2", "Roadmap", labels=()),
]


def _command(pages=PAGES, *, children=None, **kwargs) -> tuple[CtagCommand, mock.Mock, io.StringIO]:
    client = mock.Mock()
    children = children or {}

    def query_pages(cql: str):
        if cql.startswith("parent = "):
            return children.get(cql.split(" = ", 1)[1], [])
        return list(pages)

    client.query_pages.side_effect = query_pages
    out = io.StringIO()
    kwargs.setdefault("color", False)
    return CtagCommand(lambda: client, out, **kwargs), client, out


class ParsingTests(unittest.TestCase):
    def test_parse_labels_drops_blanks(self) -> None:
        self.assertEqual(parse_labels(" foo, ,bar ,"), ["foo", "bar"])
        self.assertEqual(parse_labels(None), [])

    def test_parse_updates(self) -> None:
        self.assertEqual(parse_updates("foo:bar, baz:qux"), [("foo", "bar"), ("baz", "qux")])

    def test_parse_updates_rejects_malformed_item(self) -> None:
        for text in ("foo", "a:b:c", ":new", "old:"):
            with self.subTest(text=text):
                with self.assertRaises(UsageError):
                    parse_updates(text)

        with self.assertRaises(UsageError) as ctx:
            parse_updates("ok:fine,broken")
        self.assertEqual(str(ctx.exception), "Invalid update format 'broken'. Expected 'old:new'")

    def test_should_highlight(self) -> None:
        self.assertTrue(should_highlight(("ops", "draft"), ["draft"]))
        self.assertFalse(should_highlight(("ops",), []))


class ListTests(unittest.TestCase):
    def test_plain_listing_shows_labels(self) -> None:
        command, _client, out = _command()

        self.assertEqual(command.run("list", 'space = "ENG"'), 0)

        self.assertEqual(out.getvalue().splitlines(), ["Runbook [ops, draft]", "Roadmap"])

    def test_highlight_only_when_color_enabled(self) -> None:
        command, _client, out = _command(color=True)

        command.run("list", 'space = "ENG"', "draft")

        first, second = out.getvalue().splitlines()
        self.assertTrue(first.startswith("\x1b[1;33mRunbook\x1b[0m"))
        self.assertEqual(second, "Roadmap")

    def test_empty_result_message(self) -> None:
        command, _client, out = _command(pages=[])

        command.run("list", "label = nothing")

        self.assertEqual(out.getvalue(), "No pages found matching CQL: label = nothing\n")

    def test_pretty_output_is_json_with_highlight_flag(self) -> None:
        command, _client, out = _command(pretty=True)

        command.run("list", 'space = "ENG"', "ops")

        payload = json.loads(out.getvalue())
        self.assertEqual([item["title"] for item in payload], ["Runbook", "Roadmap"])
        self.assertEqual([item["highlighted"] for item in payload], [True, False])

    def test_tree_output_recurses_into_children(self) -> None:
        children = {"1": [ConfluencePage("3", "Child")], "3": [ConfluencePage("1", "Runbook")]}
        command, _client, out = _command(children=children)

        command.run("list", 'space = "ENG"', tree=True)

        self.assertEqual(
            out.getvalue().splitlines(),
            [
                "Pages matching CQL query:",
                "├── Runbook [ops, draft]",
                "│   └── Child",
                "│       └── Runbook",
                "└── Roadmap",
            ],
        )

    def test_pretty_tree_nests_children(self) -> None:
        children = {"1": [ConfluencePage("3", "Child")]}
        command, _client, out = _command(children=children, pretty=True)

        command.run("list", 'space = "ENG"', tree=True)

        payload = json.loads(out.getvalue())
        self.assertEqual(payload[0]["children"][0]["title"], "Child")
        self.assertEqual(payload[1]["children"], [])

    def test_dry_run_never_builds_client(self) -> None:
        factory = mock.Mock()
        out = io.StringIO()

        CtagCommand(factory, out, dry_run=True).run("list", 'space = "ENG"', "a,b", tree=True)

        factory.assert_not_called()
        self.assertEqual(
            out.getvalue().splitlines(),
            [
                'DRY RUN: Would list pages for CQL: space = "ENG"',
                'DRY RUN: Would highlight pages with tags: ["a", "b"]',
                "DRY RUN: Would use tree format",
            ],
        )


class MutationTests(unittest.TestCase):
    def test_add_reports_each_page(self) -> None:
        command, client, out = _command()

        command.run("add", 'space = "ENG"', "foo,bar")

        client.bulk_add_labels.assert_called_once_with(["1", "2"], ["foo", "bar"])
        client.close.assert_called_once()
        self.assertEqual(
            out.getvalue().splitlines(),
            [
                'Adding labels ["foo", "bar"] to 2 pages...',
                "Successfully added labels to 2 pages:",
                "  - Runbook",
                "  - Roadmap",
            ],
        )

    def test_update_passes_pairs(self) -> None:
        command, client, out = _command()

        command.run("update", 'space = "ENG"', "draft:final")

        client.bulk_update_labels.assert_called_once_with(["1", "2"], [("draft", "final")])
        self.assertIn("Successfully updated labels on 2 pages:", out.getvalue())

    def test_remove_with_no_matching_pages_does_nothing(self) -> None:
        command, client, out = _command(pages=[])

        command.run("remove", "label = old", "old")

        client.bulk_remove_labels.assert_not_called()
        self.assertEqual(out.getvalue(), "No pages found matching CQL: label = old\n")

    def test_dry_run_mutations_describe_intent(self) -> None:
        factory = mock.Mock()
        out = io.StringIO()
        command = CtagCommand(factory, out, dry_run=True)

        command.run("add", "parent = 1", "foo")
        command.run("update", "parent = 1", "a:b")
        command.run("remove", "parent = 1", "foo")

        factory.assert_not_called()
        self.assertEqual(
            out.getvalue().splitlines(),
            [
                'DRY RUN: Would add labels ["foo"] to pages matching CQL: parent = 1',
                'DRY RUN: Would update labels ["a:b"] on pages matching CQL: parent = 1',
                'DRY RUN: Would remove labels ["foo"] from pages matching CQL: parent = 1',
            ],
        )

    def test_missing_labels_is_usage_error(self) -> None:
        command, client, _out = _command()

        with self.assertRaises(UsageError):
            command.run("add", "parent = 1", " , ")
        client.query_pages.assert_not_called()


if __name__ == "__main__":
    unittest.main()
