"""Configuration loaded from environment variables.

Provides the API key and server URL used to construct the API client.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from obsidian_cli.models import ConfigError

# Environment variable names
API_KEY_ENV_VAR = "OBSIDIAN_API_KEY"
API_URL_ENV_VAR = "OBSIDIAN_API_URL"

# Local REST API plugin listens here by default (self-signed HTTPS)
DEFAULT_API_URL = "https://127.0.0.1:27124"


class Config(BaseModel):
    """Connection settings for the Local REST API.

    Attributes:
        api_key: Bearer token from the plugin settings
        api_url: Base URL of the server
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    api_url: str = DEFAULT_API_URL


def get_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build the configuration from environment variables.

    Empty values are treated the same as unset ones.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Config with API key and URL

    Raises:
        ConfigError: If OBSIDIAN_API_KEY is not set
    """
    env = os.environ if environ is None else environ

    api_key = env.get(API_KEY_ENV_VAR, "")
    if not api_key:
        raise ConfigError(f"{API_KEY_ENV_VAR} not set. Get it from Obsidian Settings → Local REST API")

    return Config(
        api_key=api_key,
        api_url=env.get(API_URL_ENV_VAR, "") or DEFAULT_API_URL,
    )
