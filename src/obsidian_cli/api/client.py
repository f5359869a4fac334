"""Obsidian Local REST API client using httpx.

Provides authenticated access to the Local REST API plugin endpoints.
The plugin serves a self-signed certificate on loopback, so TLS peer
verification is always disabled.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from obsidian_cli.api.paths import (
    DQL_CONTENT_TYPE,
    MARKDOWN_CONTENT_TYPE,
    active_path,
    command_path,
    directory_path,
    open_path,
    patch_headers,
    periodic_path,
    search_path,
    vault_path,
)
from obsidian_cli.models import (
    Command,
    ConfigError,
    DirectoryListing,
    Note,
    NoteDate,
    NoteFormat,
    ObsidianAPIError,
    PatchOptions,
    Period,
    SearchResult,
    ServerStatus,
)

logger = logging.getLogger(__name__)


class ObsidianClient:
    """HTTP client for the Obsidian Local REST API.

    Every request carries ``Authorization: Bearer <api_key>``.
    Use as async context manager for proper resource management.

    Attributes:
        base_url: Server URL without trailing slash
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize API client.

        Args:
            api_key: Bearer token from the plugin settings
            base_url: Server URL (a single trailing slash is removed)
            transport: Custom transport (used by tests)

        Raises:
            ConfigError: If api_key is empty
        """
        if not api_key:
            raise ConfigError("API key must not be empty")
        self._api_key = api_key
        self.base_url = base_url.removesuffix("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        self._client = httpx.AsyncClient(verify=False, transport=self._transport)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context manager."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, headers: dict[str, str] | None = None) -> httpx.Headers:
        """Merge caller headers with the Authorization header.

        Authorization is set last, replacing any caller value regardless of case.

        Args:
            headers: Additional request headers

        Returns:
            Merged headers
        """
        merged = httpx.Headers(headers or {})
        merged["Authorization"] = f"Bearer {self._api_key}"
        return merged

    async def request(
        self,
        path: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        content: str | bytes | None = None,
    ) -> Any:
        """Send a request and decode the response.

        Args:
            path: Request path, already encoded (e.g., "/vault/notes%2Fa.md")
            method: HTTP method
            headers: Additional request headers
            content: Raw request body

        Returns:
            Decoded JSON if the response is ``application/json``, otherwise text

        Raises:
            ObsidianAPIError: If the server responds with a non-2xx status
            httpx.TransportError: If the server cannot be reached
        """
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        response = await self._client.request(
            method,
            url,
            headers=self._build_headers(headers),
            content=content,
        )
        logger.debug("%s %s -> %d", method, url, response.status_code)

        if not response.is_success:
            raise ObsidianAPIError(
                status_code=response.status_code,
                message=response.text or response.reason_phrase,
            )

        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    # ------------------------------------------------------------------
    # Shared note operations (active file, vault file, periodic note)
    # ------------------------------------------------------------------

    async def _read_note(self, path: str, note_format: NoteFormat) -> Note | str:
        result = await self.request(path, headers={"Accept": note_format.value})
        if note_format is NoteFormat.JSON and isinstance(result, dict):
            return Note.model_validate(result)
        return result

    async def _write_note(self, path: str, method: str, content: str) -> None:
        await self.request(
            path,
            method=method,
            headers={"Content-Type": MARKDOWN_CONTENT_TYPE},
            content=content,
        )

    async def _patch_note(self, path: str, content: str, options: PatchOptions) -> None:
        await self.request(path, method="PATCH", headers=patch_headers(options), content=content)

    async def _delete_note(self, path: str) -> None:
        await self.request(path, method="DELETE")

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    async def get_status(self) -> ServerStatus:
        """Get server status and authentication state."""
        result = await self.request("/")
        return ServerStatus.model_validate(result)

    # ------------------------------------------------------------------
    # Active file
    # ------------------------------------------------------------------

    async def get_active_file(self, note_format: NoteFormat = NoteFormat.MARKDOWN) -> Note | str:
        """Read the currently active file.

        Args:
            note_format: MARKDOWN for raw text, JSON for a Note with metadata

        Returns:
            Markdown text or Note
        """
        return await self._read_note(active_path(), note_format)

    async def update_active_file(self, content: str) -> None:
        """Replace the content of the active file."""
        await self._write_note(active_path(), "PUT", content)

    async def append_to_active_file(self, content: str) -> None:
        """Append content to the active file."""
        await self._write_note(active_path(), "POST", content)

    async def delete_active_file(self) -> None:
        """Delete the active file."""
        await self._delete_note(active_path())

    async def patch_active_file(self, content: str, options: PatchOptions) -> None:
        """Insert content relative to a heading, block, or frontmatter field of the active file."""
        await self._patch_note(active_path(), content, options)

    # ------------------------------------------------------------------
    # Vault files
    # ------------------------------------------------------------------

    async def get_file(self, path: str, note_format: NoteFormat = NoteFormat.MARKDOWN) -> Note | str:
        """Read a vault file.

        Args:
            path: Vault-relative file path
            note_format: MARKDOWN for raw text, JSON for a Note with metadata

        Returns:
            Markdown text or Note
        """
        return await self._read_note(vault_path(path), note_format)

    async def create_file(self, path: str, content: str) -> None:
        """Create a vault file (replaces it if it already exists)."""
        await self._write_note(vault_path(path), "PUT", content)

    async def update_file(self, path: str, content: str) -> None:
        """Replace the content of a vault file."""
        await self._write_note(vault_path(path), "PUT", content)

    async def append_to_file(self, path: str, content: str) -> None:
        """Append content to a vault file."""
        await self._write_note(vault_path(path), "POST", content)

    async def delete_file(self, path: str) -> None:
        """Delete a vault file."""
        await self._delete_note(vault_path(path))

    async def patch_file(self, path: str, content: str, options: PatchOptions) -> None:
        """Insert content relative to a heading, block, or frontmatter field of a vault file."""
        await self._patch_note(vault_path(path), content, options)

    async def list_directory(self, path: str = "") -> list[str]:
        """List files in a vault directory.

        Args:
            path: Directory path (empty for the vault root)

        Returns:
            File and directory names; empty if the server omits ``files``
        """
        result = await self.request(directory_path(path))
        if not isinstance(result, dict):
            return []
        return DirectoryListing.model_validate(result).files

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, query: str, context_length: int = 100) -> list[SearchResult]:
        """Run a simple text search.

        Args:
            query: Search text
            context_length: Characters of context around each match

        Returns:
            Matching files
        """
        result = await self.request(search_path(query, context_length))
        return [SearchResult.model_validate(item) for item in result]

    async def search_dql(self, query: str) -> list[Any]:
        """Run a Dataview DQL query.

        Args:
            query: DQL query text

        Returns:
            Query results as returned by the server
        """
        result: list[Any] = await self.request(
            "/search/",
            method="POST",
            headers={"Content-Type": DQL_CONTENT_TYPE},
            content=query,
        )
        return result

    # ------------------------------------------------------------------
    # Commands and UI
    # ------------------------------------------------------------------

    async def get_commands(self) -> list[Command]:
        """List available Obsidian commands."""
        result = await self.request("/commands/")
        if isinstance(result, dict):
            # The plugin wraps the list as {"commands": [...]}
            result = result.get("commands", [])
        return [Command.model_validate(item) for item in result]

    async def execute_command(self, command_id: str) -> None:
        """Execute an Obsidian command by ID."""
        await self.request(command_path(command_id), method="POST")

    async def open_file(self, path: str, new_leaf: bool = False) -> None:
        """Open a file in the Obsidian UI.

        Args:
            path: Vault-relative file path
            new_leaf: Open in a new leaf/tab
        """
        await self.request(open_path(path, new_leaf), method="POST")

    # ------------------------------------------------------------------
    # Periodic notes
    # ------------------------------------------------------------------

    async def get_periodic_note(
        self,
        period: Period,
        date: NoteDate | None = None,
        note_format: NoteFormat = NoteFormat.MARKDOWN,
    ) -> Note | str:
        """Read a periodic note.

        Args:
            period: Note period
            date: Specific date (default: current period, resolved by the server)
            note_format: MARKDOWN for raw text, JSON for a Note with metadata

        Returns:
            Markdown text or Note
        """
        return await self._read_note(periodic_path(period, date), note_format)

    async def append_to_periodic_note(self, period: Period, content: str, date: NoteDate | None = None) -> None:
        """Append content to a periodic note."""
        await self._write_note(periodic_path(period, date), "POST", content)

    async def update_periodic_note(self, period: Period, content: str, date: NoteDate | None = None) -> None:
        """Replace the content of a periodic note."""
        await self._write_note(periodic_path(period, date), "PUT", content)

    async def delete_periodic_note(self, period: Period, date: NoteDate | None = None) -> None:
        """Delete a periodic note."""
        await self._delete_note(periodic_path(period, date))

    async def patch_periodic_note(
        self,
        period: Period,
        content: str,
        options: PatchOptions,
        date: NoteDate | None = None,
    ) -> None:
        """Insert content relative to a heading, block, or frontmatter field of a periodic note."""
        await self._patch_note(periodic_path(period, date), content, options)
