"""API module for obsidian-cli.

Provides the HTTP client and request builders for the Obsidian Local REST API.
"""

from obsidian_cli.api.client import ObsidianClient

__all__ = [
    "ObsidianClient",
]
