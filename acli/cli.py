"""Command-line front door for acli.

Without a subcommand (or with ``-i``) the interactive browser starts;
``acli ctag ...`` runs one label operation and exits.
Exit codes: 0 success, 1 remote or configuration error, 2 usage error.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import load_settings, load_theme_name, save_theme_name
from .ctag import OPERATIONS, CtagCommand
from .errors import AcliError, UsageError
from .log import configure_logging
from .remote.client import ConfluenceClient
from .ui_theme import available_theme_names, normalize_theme_name

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

_TAG_HELP = {
    "list": "Optional comma-separated tags; matching pages are highlighted.",
    "add": 'Comma-separated labels to add (e.g. "foo,bar").',
    "update": 'Comma-separated renames "old:new,old2:new2".',
    "remove": 'Comma-separated labels to remove (e.g. "foo,bar").',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acli",
        description="Browse an Atlassian instance and manage Confluence page labels.",
    )
    parser.add_argument("-d", "--dry-run", action="store_true", help="Show what would change without changing it.")
    parser.add_argument("-p", "--pretty", action="store_true", help="Print list output as indented JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("-i", "--interactive", action="store_true", help="Start the interactive browser.")
    parser.add_argument("--style", default="monokai", help="Pygments style for the command preview.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", default=None, help="Write logs to this file.")

    commands = parser.add_subparsers(dest="command")
    ctag = commands.add_parser("ctag", help="List or edit labels on pages matching a CQL expression.")
    operations = ctag.add_subparsers(dest="operation", required=True)
    for operation in OPERATIONS:
        sub = operations.add_parser(operation, help=f"{operation.capitalize()} labels on pages matching CQL.")
        sub.add_argument("cql", help="CQL expression selecting pages.")
        if operation == "list":
            sub.add_argument("tags", nargs="?", default=None, help=_TAG_HELP[operation])
            sub.add_argument("--tree", action="store_true", help="Show pages and their children as a tree.")
        else:
            sub.add_argument("tags", help=_TAG_HELP[operation])
        sub.add_argument(
            "-d",
            "--dry-run",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Show what would change without changing it.",
        )
    return parser


def _client_factory() -> ConfluenceClient:
    settings = load_settings()
    return ConfluenceClient(settings.base_url, settings.username, settings.api_token)


def _run_ctag(args: argparse.Namespace) -> int:
    color = not args.no_color and sys.stdout.isatty()
    command = CtagCommand(
        _client_factory,
        sys.stdout,
        dry_run=args.dry_run,
        pretty=args.pretty,
        color=color,
    )
    return command.run(args.operation, args.cql, args.tags, tree=getattr(args, "tree", False))


def _run_interactive(args: argparse.Namespace) -> int:
    from .runtime.app import run_app

    theme_name = args.theme
    if theme_name is not None:
        theme_name = normalize_theme_name(theme_name)
        save_theme_name(theme_name)
    else:
        theme_name = load_theme_name()
    run_app(load_settings(), theme_name=theme_name, style=args.style, no_color=args.no_color)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, dispatch, and map failures to exit codes."""
    args = build_parser().parse_args(argv)
    interactive = args.interactive or args.command is None
    configure_logging(args.verbose, args.log_file, to_file=interactive)
    try:
        if interactive:
            return _run_interactive(args)
        return _run_ctag(args)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except AcliError as exc:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
