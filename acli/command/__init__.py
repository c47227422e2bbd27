"""Label operation catalogue, argument input, and the ctag dispatcher."""

from __future__ import annotations

from .executor import CommandExecutor, CommandResult, default_command_prefix, split_free_args
from .input import TextInput
from .operations import LABEL_OPERATIONS, Operation, available_operations, operation_by_shortcut

__all__ = [
    "CommandExecutor",
    "CommandResult",
    "LABEL_OPERATIONS",
    "Operation",
    "TextInput",
    "available_operations",
    "default_command_prefix",
    "operation_by_shortcut",
    "split_free_args",
]
