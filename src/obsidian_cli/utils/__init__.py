"""Utility modules for obsidian-cli."""

from obsidian_cli.utils.errors import ErrorResult, exit_with_error, handle_error
from obsidian_cli.utils.logging import setup_logging
from obsidian_cli.utils.output import format_output, print_output
from obsidian_cli.utils.paths import ensure_md_extension

__all__ = [
    "ErrorResult",
    "ensure_md_extension",
    "exit_with_error",
    "format_output",
    "handle_error",
    "print_output",
    "setup_logging",
]
