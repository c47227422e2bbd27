"""Synchronous dispatch of ctag label operations as a child process.

The executor turns a complete ``NavigationContext`` into a CQL scope and runs
``<prefix> ctag <operation> <cql> [args...] [--dry-run]``. Output is captured,
never streamed; the caller blocks until the child exits.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..errors import CommandNonZeroExit, CommandSpawnFailed, IncompleteContext
from ..navigation.context import NavigationContext

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def default_command_prefix() -> list[str]:
    return [sys.executable, "-m", "acli"]


@dataclass(frozen=True)
class CommandResult:
    exit_code: int
    stdout: str
    stderr: str
    command: str
    success: bool

    def check(self) -> CommandResult:
        if not self.success:
            raise CommandNonZeroExit(self.command, self.exit_code, self.stderr)
        return self


def split_free_args(free_args: str) -> list[str]:
    """Split user-typed arguments, honouring quotes when they are balanced."""
    try:
        return shlex.split(free_args)
    except ValueError:
        return free_args.split()


class CommandExecutor:
    def __init__(
        self,
        command_prefix: Sequence[str] | None = None,
        runner: Runner = subprocess.run,
    ) -> None:
        self.command_prefix = list(command_prefix) if command_prefix is not None else default_command_prefix()
        self.runner = runner
        self.history: list[CommandResult] = []

    def build_argv(
        self,
        context: NavigationContext,
        operation: str,
        free_args: str = "",
        dry_run: bool = False,
    ) -> list[str]:
        cql = context.cql_context()
        if cql is None:
            raise IncompleteContext()
        argv = [*self.command_prefix, "ctag", operation, cql, *split_free_args(free_args)]
        if dry_run:
            argv.append("--dry-run")
        return argv

    def preview(
        self,
        context: NavigationContext,
        operation: str,
        free_args: str = "",
        dry_run: bool = False,
    ) -> str:
        """Return the user-facing command line, without the interpreter prefix."""
        cql = context.cql_context()
        if cql is None:
            return ""
        parts = ["ctag", operation, cql, *split_free_args(free_args)]
        if dry_run:
            parts.append("--dry-run")
        return shlex.join(parts)

    def execute(
        self,
        context: NavigationContext,
        operation: str,
        free_args: str = "",
        dry_run: bool = False,
    ) -> CommandResult:
        argv = self.build_argv(context, operation, free_args, dry_run)
        command = shlex.join(argv[len(self.command_prefix):])
        logger.info("dispatching %s", command)
        try:
            completed = self.runner(argv, capture_output=True, text=True, check=False)
        except OSError as exc:
            logger.error("could not start %s: %s", argv[0], exc)
            raise CommandSpawnFailed(f"Failed to start {argv[0]}: {exc}") from exc
        result = CommandResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            command=command,
            success=completed.returncode == 0,
        )
        logger.info("%s exited with %d", command, result.exit_code)
        self.history.append(result)
        return result
