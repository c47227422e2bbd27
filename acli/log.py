"""Logging setup for the CLI and the interactive session.

The TUI draws on the terminal, so it logs to a file; one-shot CLI commands
log to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .config import DEFAULT_LOG_PATH

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CLI_FORMAT = "%(levelname)s: %(message)s"
_HANDLER_MARK = "_acli_handler"


def _install(handler: logging.Handler, level: int) -> logging.Handler:
    root = logging.getLogger("acli")
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)
            existing.close()
    setattr(handler, _HANDLER_MARK, True)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return handler


def configure_logging(verbose: bool = False, log_file: str | Path | None = None, *, to_file: bool = False) -> logging.Handler:
    """Install the acli log handler, replacing any earlier one.

    ``to_file`` (or an explicit ``log_file``) selects a file handler at
    ``log_file`` or the platform log directory; otherwise stderr is used.
    """
    level = logging.DEBUG if verbose else (logging.INFO if to_file or log_file else logging.WARNING)
    if to_file or log_file is not None:
        path = Path(log_file) if log_file is not None else DEFAULT_LOG_PATH
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        return _install(handler, level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CLI_FORMAT))
    return _install(handler, level)
