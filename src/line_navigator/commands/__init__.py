"""Command table, built-in motions, and reversible overrides."""

from .builtin import BUILTIN_COMMANDS, default_command_table
from .table import Command, CommandHandler, CommandOverrides, CommandTable

__all__ = [
    "BUILTIN_COMMANDS",
    "Command",
    "CommandHandler",
    "CommandOverrides",
    "CommandTable",
    "default_command_table",
]
