"""Release check and self-update for obsidian-cli.

The release check is advisory: any failure reports "no update".
"""

from __future__ import annotations

import logging
import subprocess

import httpx

from obsidian_cli.models import CLIError

logger = logging.getLogger(__name__)

RELEASES_URL = "https://api.github.com/repos/nickcramaro/obsidian-cli/releases/latest"
INSTALL_SCRIPT = "curl -fsSL https://raw.githubusercontent.com/nickcramaro/obsidian-cli/main/install.sh | bash"

# Default timeout for the release check (seconds)
DEFAULT_TIMEOUT = 10


async def check_for_updates(
    current_version: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str | None:
    """Check GitHub for a newer release.

    Args:
        current_version: Installed version (without "v" prefix)
        transport: Custom transport (used by tests)

    Returns:
        Latest version if it differs from current_version, otherwise None
    """
    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(DEFAULT_TIMEOUT),
            transport=transport,
        ) as client:
            response = await client.get(RELEASES_URL, headers={"User-Agent": "obsidian-cli"})
            if not response.is_success:
                logger.debug("Release check returned %d", response.status_code)
                return None
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.debug("Release check failed: %s", e)
        return None

    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not tag:
        return None

    latest = tag.removeprefix("v")
    if latest != current_version:
        return latest
    return None


def run_self_update() -> None:
    """Reinstall obsidian-cli with the upstream install script.

    Output of the script goes straight to the terminal.

    Raises:
        CLIError: If the script cannot be started or exits non-zero
    """
    try:
        result = subprocess.run(["bash", "-c", INSTALL_SCRIPT], check=False)
    except OSError as e:
        raise CLIError(f"Failed to run update: {e}") from e

    if result.returncode != 0:
        raise CLIError(f"Update failed with code {result.returncode}")
