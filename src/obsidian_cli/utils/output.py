"""Output formatting for command results.

Results are rendered either as indented JSON or as plain text.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import typer
from pydantic import BaseModel


def _to_plain(data: Any) -> Any:
    """Convert models (also nested in lists/dicts) to plain JSON-compatible data."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, list):
        return [_to_plain(item) for item in data]
    if isinstance(data, Mapping):
        return {key: _to_plain(value) for key, value in data.items()}
    return data


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _format_object(obj: Mapping[str, Any]) -> str:
    return "\n".join(f"{key}: {_format_value(value)}" for key, value in obj.items())


def format_output(data: Any, json_output: bool = False) -> str:
    """Format a command result.

    Args:
        data: Result to format (string, model, list, or mapping)
        json_output: Emit indented JSON instead of readable text

    Returns:
        Formatted text
    """
    plain = _to_plain(data)

    if json_output:
        return json.dumps(plain, indent=2, ensure_ascii=False)

    if isinstance(plain, str):
        return plain
    if isinstance(plain, list):
        return "\n".join(
            item if isinstance(item, str) else _format_object(item) if isinstance(item, Mapping) else str(item)
            for item in plain
        )
    if isinstance(plain, Mapping):
        return _format_object(plain)
    return str(plain)


def print_output(data: Any, json_output: bool = False) -> None:
    """Write a formatted command result to stdout."""
    typer.echo(format_output(data, json_output))
