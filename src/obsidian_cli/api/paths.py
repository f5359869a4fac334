"""Request path and header builders for the Local REST API.

Every identifier is percent-encoded exactly once, at the point it is
inserted into a path or query segment.
"""

from __future__ import annotations

from urllib.parse import quote

from obsidian_cli.models import NoteDate, PatchOptions, Period

MARKDOWN_CONTENT_TYPE = "text/markdown"
DQL_CONTENT_TYPE = "application/vnd.olrapi.dataview.dql+txt"

# Characters encodeURIComponent leaves alone besides letters, digits and "_.-~"
_COMPONENT_SAFE = "!*'()"


def encode_component(value: str) -> str:
    """Percent-encode a single path or query component.

    Slashes are encoded too, so a nested vault path becomes one segment.

    Args:
        value: Raw identifier (note path, command ID, query text)

    Returns:
        Encoded component
    """
    return quote(value, safe=_COMPONENT_SAFE)


def active_path() -> str:
    """Path of the currently active file."""
    return "/active/"


def vault_path(path: str) -> str:
    """Path of a file in the vault."""
    return f"/vault/{encode_component(path)}"


def directory_path(path: str = "") -> str:
    """Path of a vault directory listing.

    Args:
        path: Directory path (empty for the vault root)

    Returns:
        Listing path ending with a slash
    """
    if not path:
        return "/vault/"
    return f"/vault/{encode_component(path)}/"


def periodic_path(period: Period, date: NoteDate | None = None) -> str:
    """Path of a periodic note.

    Without a date the server resolves the current period itself.

    Args:
        period: Note period
        date: Specific date (optional)

    Returns:
        Periodic note path
    """
    if date is None:
        return f"/periodic/{period.value}/"
    return f"/periodic/{period.value}/{date.year}/{date.month}/{date.day}/"


def search_path(query: str, context_length: int = 100) -> str:
    """Path of a simple search request, including its query string."""
    return f"/search/simple/?query={encode_component(query)}&contextLength={context_length}"


def command_path(command_id: str) -> str:
    """Path for executing a command."""
    return f"/commands/{encode_component(command_id)}/"


def open_path(path: str, new_leaf: bool = False) -> str:
    """Path for opening a file in the Obsidian UI.

    Args:
        path: Vault-relative file path
        new_leaf: Open in a new leaf/tab

    Returns:
        Open path, with ``?newLeaf=true`` when requested
    """
    query = "?newLeaf=true" if new_leaf else ""
    return f"/open/{encode_component(path)}{query}"


def patch_headers(options: PatchOptions) -> dict[str, str]:
    """Build headers for a PATCH request.

    Target-Delimiter and Trim-Target-Whitespace are only sent when supplied.

    Args:
        options: Patch directive

    Returns:
        Headers dictionary
    """
    headers = {
        "Content-Type": MARKDOWN_CONTENT_TYPE,
        "Operation": options.operation.value,
        "Target-Type": options.target_type.value,
        "Target": encode_component(options.target),
    }
    if options.delimiter:
        headers["Target-Delimiter"] = options.delimiter
    if options.trim_whitespace is not None:
        headers["Trim-Target-Whitespace"] = "true" if options.trim_whitespace else "false"
    return headers
