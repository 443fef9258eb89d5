"""Input parsing utilities for CLI commands."""

import json
from typing import Any


def parse_json_object(raw: str, what: str = "data") -> dict[str, Any]:
    """Parse a JSON object given on the command line.

    Args:
        raw: JSON text, e.g. '{"name": "Ada"}'
        what: What the object is, for the error message

    Returns:
        Parsed object

    Raises:
        ValueError: If the text is not valid JSON or not an object
    """
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON for {what}: {e.msg}") from e
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object for {what}, got {type(value).__name__}")
    return value


def parse_columns(raw: str | None) -> list[str]:
    """Split a comma-separated column list, e.g. "name, email"."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_row_id(raw: str) -> int | str:
    """Use an integer identifier when the text is one, else the text itself."""
    try:
        return int(raw)
    except ValueError:
        return raw
