"""Exception taxonomy shared by the CLI, remote client, and TUI core.

Remote failures are isolated per product during discovery; command failures
are surfaced through the status line. Only configuration errors are fatal.
"""

from __future__ import annotations


class AcliError(Exception):
    """Base class for all errors raised by acli."""


class ConfigurationMissing(AcliError):
    """Required configuration (URL, username, token) is absent or invalid."""


class ConfluenceError(AcliError):
    """Base class for failures talking to the Confluence REST API."""


class RemoteQueryFailed(ConfluenceError):
    """A CQL search returned a non-success response."""

    def __init__(self, query: str, message: str) -> None:
        super().__init__(f"CQL query failed: {query} - {message}")
        self.query = query
        self.message = message


class RemoteRequestFailed(ConfluenceError):
    """The HTTP request itself failed (connection, timeout, bad payload)."""


class PageNotFound(ConfluenceError):
    def __init__(self, page_id: str) -> None:
        super().__init__(f"Page not found: {page_id}")
        self.page_id = page_id


class LabelOperationFailed(ConfluenceError):
    """Adding or removing a label was rejected by the server."""


class ApiError(ConfluenceError):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"API error {status}: {message}")
        self.status = status
        self.message = message


class IncompleteContext(AcliError):
    """A query or command was requested without a full domain/product/project selection."""

    def __init__(self, message: str = "No valid context for command execution") -> None:
        super().__init__(message)


class CommandError(AcliError):
    """Base class for failures of the external ctag invocation."""


class CommandSpawnFailed(CommandError):
    """The external command could not be started."""


class CommandNonZeroExit(CommandError):
    def __init__(self, command: str, exit_code: int, stderr: str) -> None:
        detail = stderr.strip() or f"exit code {exit_code}"
        super().__init__(f"Command failed: {detail}")
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


class UsageError(AcliError):
    """Command-line arguments are well-formed for argparse but semantically invalid."""
