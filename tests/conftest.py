"""Pytest configuration and shared fixtures for obsidian-cli tests.

HTTP traffic is simulated with httpx.MockTransport, so no server is needed.
"""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import AsyncMock, patch

import pytest

from obsidian_cli.api.client import ObsidianClient
from tests.helpers import TEST_API_KEY, TEST_BASE_URL, MockServer

# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def mock_server() -> MockServer:
    """Create an empty mock server."""
    return MockServer()


@pytest.fixture
def client(mock_server: MockServer) -> ObsidianClient:
    """Create a client wired to the mock server.

    Returns:
        ObsidianClient that still has to be entered with ``async with``.
    """
    return ObsidianClient(TEST_API_KEY, TEST_BASE_URL, transport=mock_server.transport)


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set the environment variables the CLI reads."""
    monkeypatch.setenv("OBSIDIAN_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("OBSIDIAN_API_URL", TEST_BASE_URL)


@pytest.fixture
def cli_server(mock_server: MockServer, cli_env: None) -> Generator[MockServer, None, None]:
    """Route every client the CLI creates to the mock server.

    The release check is disabled so no real network call is made.

    Yields:
        The mock server receiving CLI requests.
    """

    def create_client(api_key: str, base_url: str) -> ObsidianClient:
        return ObsidianClient(api_key, base_url, transport=mock_server.transport)

    with (
        patch("obsidian_cli.cli.ObsidianClient", side_effect=create_client),
        patch("obsidian_cli.cli.check_for_updates", new_callable=AsyncMock, return_value=None),
    ):
        yield mock_server
