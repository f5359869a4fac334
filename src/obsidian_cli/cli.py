"""CLI interface for the Obsidian Local REST API.

Each subcommand builds one client from environment configuration, runs one
or two API operations, and renders the result as text or JSON.

Example:
    export OBSIDIAN_API_KEY=...
    obsidian status
    obsidian --json note read Inbox
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from obsidian_cli import __version__
from obsidian_cli.api.client import ObsidianClient
from obsidian_cli.config import API_KEY_ENV_VAR, get_config
from obsidian_cli.decorators import cli_command
from obsidian_cli.models import (
    CLIError,
    NoteDate,
    NoteFormat,
    PatchOperation,
    PatchOptions,
    Period,
    TargetType,
)
from obsidian_cli.updates import check_for_updates, run_self_update
from obsidian_cli.utils.errors import exit_with_error
from obsidian_cli.utils.logging import setup_logging
from obsidian_cli.utils.output import print_output
from obsidian_cli.utils.paths import ensure_md_extension

app = typer.Typer(
    name="obsidian",
    help="CLI for Obsidian using Local REST API",
    no_args_is_help=True,
)
note_app = typer.Typer(help="Manage vault notes", no_args_is_help=True)
active_app = typer.Typer(help="Manage the currently active file in Obsidian", no_args_is_help=True)
daily_app = typer.Typer(help="Manage daily notes (shortcut for periodic daily)", no_args_is_help=True)
periodic_app = typer.Typer(
    help="Manage periodic notes (daily, weekly, monthly, quarterly, yearly)",
    no_args_is_help=True,
)
commands_app = typer.Typer(help="List and execute Obsidian commands", no_args_is_help=True)
vault_app = typer.Typer(help="Browse vault files and directories", no_args_is_help=True)

app.add_typer(note_app, name="note")
app.add_typer(active_app, name="active")
app.add_typer(daily_app, name="daily")
app.add_typer(periodic_app, name="periodic")
app.add_typer(commands_app, name="commands")
app.add_typer(vault_app, name="vault")


@dataclass
class CLIState:
    """Options shared by every subcommand."""

    json_output: bool = False


# Keeps markdown list items ("- item") positional. Commands using this
# must not define short options.
CONTENT_SETTINGS = {"ignore_unknown_options": True}

# Shared option types
MetadataOption = Annotated[bool, typer.Option("--metadata", help="Include frontmatter and metadata")]
FileOption = Annotated[Path | None, typer.Option("--file", "-f", help="Read content from file")]
DateOption = Annotated[str | None, typer.Option("--date", help="Specific date (YYYY-MM-DD)")]
TargetOption = Annotated[
    str,
    typer.Option("--target", help="Target location (heading name, block ID, or frontmatter field)"),
]
TargetTypeOption = Annotated[TargetType, typer.Option("--type", help="Target type")]
OperationOption = Annotated[PatchOperation, typer.Option("--operation", help="Patch operation")]
DelimiterOption = Annotated[
    str | None,
    typer.Option("--delimiter", help="Delimiter between nested heading levels"),
]
TrimOption = Annotated[
    bool | None,
    typer.Option("--trim-whitespace/--no-trim-whitespace", help="Trim whitespace around the target"),
]


def _json_output(ctx: typer.Context) -> bool:
    state = ctx.obj
    return isinstance(state, CLIState) and state.json_output


def _connect() -> ObsidianClient:
    """Create a client from environment configuration.

    Raises:
        ConfigError: If OBSIDIAN_API_KEY is not set
    """
    config = get_config()
    return ObsidianClient(config.api_key, config.api_url)


def _acknowledge(ctx: typer.Context, message: str, **details: Any) -> None:
    """Report a successful write."""
    if _json_output(ctx):
        print_output({"success": True, **details}, json_output=True)
    else:
        print_output(message)


def _read_content(content: str | None, file: Path | None) -> str:
    """Resolve note content from an argument or a file (file wins)."""
    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Cannot read file {file}: {e.strerror or e}") from e
    return content or ""


def _parse_date(value: str | None) -> NoteDate | None:
    """Parse YYYY-MM-DD into date components without calendar validation."""
    if value is None:
        return None
    parts = value.split("-")
    if len(parts) != 3:
        raise CLIError(f"Invalid date: {value}. Expected YYYY-MM-DD")
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        raise CLIError(f"Invalid date: {value}. Expected YYYY-MM-DD") from None
    return NoteDate(year=year, month=month, day=day)


def _parse_period(value: str) -> Period:
    try:
        return Period(value)
    except ValueError:
        valid = ", ".join(period.value for period in Period)
        raise CLIError(f"Invalid period: {value}. Must be one of: {valid}") from None


def _patch_options(
    target: str,
    target_type: TargetType,
    operation: PatchOperation,
    delimiter: str | None,
    trim_whitespace: bool | None,
) -> PatchOptions:
    return PatchOptions(
        operation=operation,
        target_type=target_type,
        target=target,
        delimiter=delimiter,
        trim_whitespace=trim_whitespace,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log HTTP requests to stderr")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """CLI for Obsidian using Local REST API."""
    ctx.obj = CLIState(json_output=json_output)
    setup_logging(
        logging.DEBUG if verbose else logging.WARNING,
        secrets=[os.environ.get(API_KEY_ENV_VAR, "")],
    )


# ============================================================================
# status / search / open / update
# ============================================================================


@app.command()
@cli_command
async def status(ctx: typer.Context) -> None:
    """Check connection to Obsidian."""
    async with _connect() as client:
        server_status, update_available = await asyncio.gather(
            client.get_status(),
            check_for_updates(__version__),
        )

    if _json_output(ctx):
        payload = server_status.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload["updateAvailable"] = update_available
        print_output(payload, json_output=True)
        return

    typer.echo(f"Connected to {server_status.service}")
    typer.echo(f"Obsidian version: {server_status.versions.obsidian}")
    typer.echo(f"Plugin version: {server_status.versions.plugin}")
    typer.echo(f"Authenticated: {'Yes' if server_status.authenticated else 'No'}")
    if update_available:
        typer.echo(f"\nUpdate available: v{update_available} (current: v{__version__})")
        typer.echo("Run 'obsidian update' to install")


@app.command()
@cli_command
async def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search text, or a DQL query with --dql")],
    dql: Annotated[bool, typer.Option("--dql", help="Use Dataview DQL query instead of simple search")] = False,
    context: Annotated[int, typer.Option("--context", help="Context length for simple search")] = 100,
) -> None:
    """Search for content in the vault."""
    json_output = _json_output(ctx)

    async with _connect() as client:
        if dql:
            print_output(await client.search_dql(query), json_output)
            return
        results = await client.search(query, context)

    if json_output:
        print_output(results, json_output=True)
        return
    if not results:
        typer.echo("No results found.")
        return
    for result in results:
        typer.echo(f"\n{result.filename}")
        for match in result.matches:
            typer.echo(f"  ...{match.context}...")


@app.command("open")
@cli_command
async def open_file(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Vault-relative file path")],
    new_leaf: Annotated[bool, typer.Option("--new-leaf", help="Open in a new leaf/tab")] = False,
) -> None:
    """Open a file in Obsidian."""
    async with _connect() as client:
        await client.open_file(path, new_leaf)
    _acknowledge(ctx, f"Opened: {path}", path=path)


@app.command()
@cli_command
async def update() -> None:
    """Update obsidian-cli to the latest version."""
    typer.echo("Updating obsidian-cli...\n")
    await asyncio.to_thread(run_self_update)
    typer.echo("\nUpdate complete!")


# ============================================================================
# note
# ============================================================================


@note_app.command("read")
@cli_command
async def note_read(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Note path")],
    metadata: MetadataOption = False,
) -> None:
    """Read a note from the vault."""
    note_format = NoteFormat.JSON if metadata else NoteFormat.MARKDOWN
    async with _connect() as client:
        content = await client.get_file(ensure_md_extension(path), note_format)
    print_output(content, _json_output(ctx))


@note_app.command("create")
@cli_command
async def note_create(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Note path")],
    content: Annotated[str | None, typer.Argument(help="Note content")] = None,
    file: FileOption = None,
) -> None:
    """Create a new note."""
    path = ensure_md_extension(path)
    body = _read_content(content, file)
    async with _connect() as client:
        await client.create_file(path, body)
    _acknowledge(ctx, f"Created: {path}", path=path)


@note_app.command("update")
@cli_command
async def note_update(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Note path")],
    content: Annotated[str | None, typer.Argument(help="Note content")] = None,
    file: FileOption = None,
) -> None:
    """Update an existing note."""
    path = ensure_md_extension(path)
    body = _read_content(content, file)
    async with _connect() as client:
        await client.update_file(path, body)
    _acknowledge(ctx, f"Updated: {path}", path=path)


@note_app.command("delete")
@cli_command
async def note_delete(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Note path")],
) -> None:
    """Delete a note."""
    path = ensure_md_extension(path)
    async with _connect() as client:
        await client.delete_file(path)
    _acknowledge(ctx, f"Deleted: {path}", path=path)


@note_app.command("append", context_settings=CONTENT_SETTINGS)
@cli_command
async def note_append(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Note path")],
    content: Annotated[str, typer.Argument(help="Content to append")],
) -> None:
    """Append content to a note."""
    path = ensure_md_extension(path)
    async with _connect() as client:
        await client.append_to_file(path, content)
    _acknowledge(ctx, f"Appended to: {path}", path=path)


@note_app.command("patch", context_settings=CONTENT_SETTINGS)
@cli_command
async def note_patch(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Note path")],
    content: Annotated[str, typer.Argument(help="Content to insert")],
    target: TargetOption,
    target_type: TargetTypeOption,
    operation: OperationOption = PatchOperation.APPEND,
    delimiter: DelimiterOption = None,
    trim_whitespace: TrimOption = None,
) -> None:
    """Insert content relative to a heading, block, or frontmatter."""
    path = ensure_md_extension(path)
    options = _patch_options(target, target_type, operation, delimiter, trim_whitespace)
    async with _connect() as client:
        await client.patch_file(path, content, options)
    _acknowledge(ctx, f"Patched: {path}", path=path)


# ============================================================================
# active
# ============================================================================


@active_app.command("read")
@cli_command
async def active_read(ctx: typer.Context, metadata: MetadataOption = False) -> None:
    """Read the currently active file."""
    note_format = NoteFormat.JSON if metadata else NoteFormat.MARKDOWN
    async with _connect() as client:
        content = await client.get_active_file(note_format)
    print_output(content, _json_output(ctx))


@active_app.command("update")
@cli_command
async def active_update(
    ctx: typer.Context,
    content: Annotated[str | None, typer.Argument(help="New content")] = None,
    file: FileOption = None,
) -> None:
    """Update the currently active file."""
    body = _read_content(content, file)
    async with _connect() as client:
        await client.update_active_file(body)
    _acknowledge(ctx, "Updated active file")


@active_app.command("delete")
@cli_command
async def active_delete(ctx: typer.Context) -> None:
    """Delete the currently active file."""
    async with _connect() as client:
        await client.delete_active_file()
    _acknowledge(ctx, "Deleted active file")


@active_app.command("append", context_settings=CONTENT_SETTINGS)
@cli_command
async def active_append(
    ctx: typer.Context,
    content: Annotated[str, typer.Argument(help="Content to append")],
) -> None:
    """Append content to the currently active file."""
    async with _connect() as client:
        await client.append_to_active_file(content)
    _acknowledge(ctx, "Appended to active file")


@active_app.command("patch", context_settings=CONTENT_SETTINGS)
@cli_command
async def active_patch(
    ctx: typer.Context,
    content: Annotated[str, typer.Argument(help="Content to insert")],
    target: TargetOption,
    target_type: TargetTypeOption,
    operation: OperationOption = PatchOperation.APPEND,
    delimiter: DelimiterOption = None,
    trim_whitespace: TrimOption = None,
) -> None:
    """Insert content relative to a heading, block, or frontmatter."""
    options = _patch_options(target, target_type, operation, delimiter, trim_whitespace)
    async with _connect() as client:
        await client.patch_active_file(content, options)
    _acknowledge(ctx, "Patched active file")


# ============================================================================
# daily / periodic
# ============================================================================


def _register_periodic_commands(group: typer.Typer, resolve_period: Callable[[typer.Context], Period]) -> None:
    """Register read/append/update/delete/patch on a periodic note group.

    Args:
        group: Typer group to register on
        resolve_period: Returns the period the group operates on
    """

    @group.command("read")
    @cli_command
    async def periodic_read(ctx: typer.Context, metadata: MetadataOption = False, date: DateOption = None) -> None:
        """Read the periodic note."""
        period = resolve_period(ctx)
        note_date = _parse_date(date)
        note_format = NoteFormat.JSON if metadata else NoteFormat.MARKDOWN
        async with _connect() as client:
            content = await client.get_periodic_note(period, note_date, note_format)
        print_output(content, _json_output(ctx))

    @group.command("append", context_settings=CONTENT_SETTINGS)
    @cli_command
    async def periodic_append(
        ctx: typer.Context,
        content: Annotated[str, typer.Argument(help="Content to append")],
        date: DateOption = None,
    ) -> None:
        """Append content to the periodic note."""
        period = resolve_period(ctx)
        note_date = _parse_date(date)
        async with _connect() as client:
            await client.append_to_periodic_note(period, content, note_date)
        _acknowledge(ctx, f"Appended to {period.value} note")

    @group.command("update")
    @cli_command
    async def periodic_update(
        ctx: typer.Context,
        content: Annotated[str | None, typer.Argument(help="New content")] = None,
        file: FileOption = None,
        date: DateOption = None,
    ) -> None:
        """Update the periodic note."""
        period = resolve_period(ctx)
        note_date = _parse_date(date)
        body = _read_content(content, file)
        async with _connect() as client:
            await client.update_periodic_note(period, body, note_date)
        _acknowledge(ctx, f"Updated {period.value} note")

    @group.command("delete")
    @cli_command
    async def periodic_delete(ctx: typer.Context, date: DateOption = None) -> None:
        """Delete the periodic note."""
        period = resolve_period(ctx)
        note_date = _parse_date(date)
        async with _connect() as client:
            await client.delete_periodic_note(period, note_date)
        _acknowledge(ctx, f"Deleted {period.value} note")

    @group.command("patch", context_settings=CONTENT_SETTINGS)
    @cli_command
    async def periodic_patch(
        ctx: typer.Context,
        content: Annotated[str, typer.Argument(help="Content to insert")],
        target: TargetOption,
        target_type: TargetTypeOption,
        operation: OperationOption = PatchOperation.APPEND,
        delimiter: DelimiterOption = None,
        trim_whitespace: TrimOption = None,
        date: DateOption = None,
    ) -> None:
        """Insert content relative to a heading, block, or frontmatter."""
        period = resolve_period(ctx)
        note_date = _parse_date(date)
        options = _patch_options(target, target_type, operation, delimiter, trim_whitespace)
        async with _connect() as client:
            await client.patch_periodic_note(period, content, options, note_date)
        _acknowledge(ctx, f"Patched {period.value} note")


@periodic_app.callback()
def periodic_callback(
    ctx: typer.Context,
    period: Annotated[str, typer.Argument(help="daily, weekly, monthly, quarterly, or yearly")],
) -> None:
    """Manage periodic notes (daily, weekly, monthly, quarterly, yearly)."""
    try:
        ctx.meta["period"] = _parse_period(period)
    except CLIError as e:
        exit_with_error(e)


_register_periodic_commands(daily_app, lambda ctx: Period.DAILY)
_register_periodic_commands(periodic_app, lambda ctx: ctx.meta["period"])


# ============================================================================
# commands
# ============================================================================


@commands_app.command("list")
@cli_command
async def commands_list(ctx: typer.Context) -> None:
    """List all available commands."""
    async with _connect() as client:
        commands = await client.get_commands()

    if _json_output(ctx):
        print_output(commands, json_output=True)
        return
    for command in commands:
        typer.echo(f"{command.id}: {command.name}")


@commands_app.command("exec")
@cli_command
async def commands_exec(
    ctx: typer.Context,
    command_id: Annotated[str, typer.Argument(help="Command ID (see 'commands list')")],
) -> None:
    """Execute a command by ID."""
    async with _connect() as client:
        await client.execute_command(command_id)
    _acknowledge(ctx, f"Executed: {command_id}", commandId=command_id)


# ============================================================================
# vault
# ============================================================================


@vault_app.command("list")
@cli_command
async def vault_list(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory path (default: vault root)")] = "",
) -> None:
    """List files in a directory."""
    async with _connect() as client:
        files = await client.list_directory(path)

    if _json_output(ctx):
        print_output(files, json_output=True)
        return
    for name in files:
        typer.echo(name)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
