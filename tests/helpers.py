"""Test helpers: a recording mock server and response factories."""

from __future__ import annotations

from typing import Any

import httpx

TEST_API_KEY = "test-api-key-1234"
TEST_BASE_URL = "https://127.0.0.1:27124"


class MockServer:
    """Records requests and replays queued responses.

    Requests without a queued response get an empty 204.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def queue(self, response: httpx.Response) -> None:
        """Queue a response for the next request."""
        self.responses.append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(204)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    """Create a response with an application/json body."""
    return httpx.Response(status_code, json=data)


def markdown_response(text: str, status_code: int = 200) -> httpx.Response:
    """Create a response with a text/markdown body."""
    return httpx.Response(
        status_code,
        content=text.encode("utf-8"),
        headers={"Content-Type": "text/markdown; charset=utf-8"},
    )


def create_status_response(authenticated: bool = True) -> dict[str, Any]:
    """Create a server status payload as returned by GET /."""
    return {
        "status": "OK",
        "authenticated": authenticated,
        "service": "Obsidian Local REST API",
        "versions": {"obsidian": "1.5.0", "self": "1.0.0"},
    }


def create_note_response(content: str = "# Inbox\n", path: str = "Inbox.md") -> dict[str, Any]:
    """Create a note payload as returned for application/vnd.olrapi.note+json."""
    return {
        "content": content,
        "frontmatter": {"status": "draft"},
        "path": path,
        "tags": ["inbox"],
        "stat": {"ctime": 1700000000000, "mtime": 1700000100000, "size": len(content)},
    }
