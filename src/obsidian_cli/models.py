"""Pydantic data models for obsidian-cli.

This module defines the data models returned by the Local REST API client,
the request-side option types, and the error types used throughout the CLI.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServerVersions(BaseModel):
    """Version information reported by the server.

    Attributes:
        obsidian: Obsidian application version
        plugin: Local REST API plugin version (``self`` on the wire)
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    obsidian: str
    plugin: str = Field(alias="self")


class ServerStatus(BaseModel):
    """Server status returned by ``GET /``.

    Attributes:
        status: Status string (e.g., "OK")
        authenticated: Whether the supplied API key was accepted
        service: Service name
        versions: Obsidian and plugin versions
    """

    model_config = ConfigDict(extra="allow")

    status: str
    authenticated: bool
    service: str
    versions: ServerVersions


class NoteStat(BaseModel):
    """File statistics attached to a note."""

    model_config = ConfigDict(extra="allow")

    ctime: int
    mtime: int
    size: int


class Note(BaseModel):
    """A vault note with metadata.

    Returned when a note is requested as ``application/vnd.olrapi.note+json``.

    Attributes:
        content: Markdown body of the note
        frontmatter: Parsed YAML frontmatter
        path: Vault-relative path
        tags: Tags found in the note
        stat: File statistics
    """

    model_config = ConfigDict(extra="allow")

    content: str
    frontmatter: dict[str, Any] = {}
    path: str | None = None
    tags: list[str] = []
    stat: NoteStat | None = None


class Command(BaseModel):
    """An Obsidian command that can be executed through the API."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str


class MatchSpan(BaseModel):
    """Character offsets of a search hit."""

    start: int
    end: int


class SearchMatch(BaseModel):
    """A single hit within a file.

    Attributes:
        match: Offsets of the hit in the file
        context: Text surrounding the hit
    """

    model_config = ConfigDict(extra="allow")

    match: MatchSpan
    context: str


class SearchResult(BaseModel):
    """A file matched by a simple search.

    Attributes:
        filename: Vault-relative path of the file
        score: Relevance score (optional)
        matches: Hits within the file (absent means no hits)
    """

    model_config = ConfigDict(extra="allow")

    filename: str
    score: float | None = None
    matches: list[SearchMatch] = []


class DirectoryListing(BaseModel):
    """Directory listing returned by ``GET /vault/.../``.

    An absent ``files`` field means an empty directory.
    """

    model_config = ConfigDict(extra="allow")

    files: list[str] = []


class Period(str, Enum):
    """Periodic note period."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class NoteFormat(str, Enum):
    """Representation requested when reading a note.

    The value is the ``Accept`` header sent to the server.
    """

    MARKDOWN = "text/markdown"
    JSON = "application/vnd.olrapi.note+json"


class NoteDate(BaseModel):
    """Calendar date anchoring a periodic note.

    Components are plain integers; the server decides whether the date exists.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int


class PatchOperation(str, Enum):
    """How patch content is combined with the target."""

    APPEND = "append"
    PREPEND = "prepend"
    REPLACE = "replace"


class TargetType(str, Enum):
    """Kind of location a patch is applied to."""

    HEADING = "heading"
    BLOCK = "block"
    FRONTMATTER = "frontmatter"


class PatchOptions(BaseModel):
    """Patch directive for inserting content relative to a target.

    Attributes:
        operation: append, prepend, or replace
        target_type: heading, block, or frontmatter
        target: Heading name, block ID, or frontmatter key
        delimiter: Delimiter for nested heading targets (optional)
        trim_whitespace: Whether the server trims whitespace around the target (optional)
    """

    model_config = ConfigDict(frozen=True)

    operation: PatchOperation = PatchOperation.APPEND
    target_type: TargetType
    target: str
    delimiter: str | None = None
    trim_whitespace: bool | None = None


class ObsidianAPIError(Exception):
    """Exception for non-2xx responses from the Local REST API.

    Attributes:
        status_code: HTTP status code
        message: Response body text, or the status reason phrase if the body was empty
    """

    def __init__(self, status_code: int, message: str) -> None:
        """Initialize the error.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
        """
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class ConfigError(Exception):
    """Raised when required configuration is missing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CLIError(Exception):
    """User-facing command error with an exit code.

    Attributes:
        message: Message shown to the user
        exit_code: Process exit code (default: 1)
    """

    def __init__(self, message: str, exit_code: int = 1) -> None:
        """Initialize the error.

        Args:
            message: Message shown to the user
            exit_code: Process exit code
        """
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)
