"""Decorators for CLI command handlers.

Provides the single error boundary every command runs behind:

    @app.command()
    @cli_command
    async def handler(ctx: typer.Context, ...) -> None:
        ...

The async handler is run with asyncio.run, and any exception it raises is
reported once as ``✖ <message>`` on stderr with a non-zero exit code.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, ParamSpec

import typer

from obsidian_cli.utils.errors import exit_with_error

logger = logging.getLogger(__name__)

# Conventional exit code for SIGINT
INTERRUPTED_EXIT_CODE = 130

P = ParamSpec("P")


def cli_command(
    func: Callable[P, Coroutine[Any, Any, None]],
) -> Callable[P, None]:
    """Decorator to run an async command handler and report its errors.

    typer.Exit and typer.Abort raised by the handler pass through unchanged.

    Args:
        func: The async handler to wrap.

    Returns:
        Synchronous wrapper suitable for typer registration.
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> None:
        try:
            asyncio.run(func(*args, **kwargs))
        except (typer.Exit, typer.Abort):
            raise
        except KeyboardInterrupt:
            typer.echo("\nInterrupted", err=True)
            raise typer.Exit(INTERRUPTED_EXIT_CODE) from None
        except Exception as e:
            logger.debug("Command %s failed", func.__name__, exc_info=True)
            exit_with_error(e)

    return wrapper
