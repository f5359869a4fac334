"""Conversion of exceptions into user-facing messages and exit codes."""

from __future__ import annotations

from typing import NamedTuple, NoReturn

import typer

from obsidian_cli.models import CLIError

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorResult(NamedTuple):
    """Message and exit code reported for a failed command."""

    message: str
    exit_code: int


def handle_error(error: BaseException) -> ErrorResult:
    """Convert an exception into a message and exit code.

    Args:
        error: Exception raised by a command

    Returns:
        ErrorResult with the message to show and the exit code to use
    """
    if isinstance(error, CLIError):
        return ErrorResult(error.message, error.exit_code)

    message = str(error)
    if not message:
        return ErrorResult(UNEXPECTED_ERROR_MESSAGE, 1)
    return ErrorResult(message, 1)


def exit_with_error(error: BaseException) -> NoReturn:
    """Print an error to stderr with a failure marker and exit.

    Args:
        error: Exception raised by a command

    Raises:
        typer.Exit: Always, with the exit code from handle_error
    """
    message, exit_code = handle_error(error)
    typer.echo(f"{typer.style('✖', fg=typer.colors.RED)} {message}", err=True)
    raise typer.Exit(exit_code) from error
