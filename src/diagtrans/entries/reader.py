"""
Entry reader — loads log entries dumped by the engine.

Accepted inputs:
- JSON array of entry objects (or a single object)
- JSON lines, one entry object per line
- YAML list of entry mappings (``.yaml`` / ``.yml`` files)
"""

import json
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from .model import LogEntry

logger = structlog.get_logger()


class EntryFormatError(ValueError):
    """Error raised when entries cannot be parsed."""

    pass


def _records_from_json(text: str) -> list[Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Not a single document; try one object per line
        records = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise EntryFormatError(f"Line {lineno}: invalid JSON: {e.msg}") from e
        return records

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    raise EntryFormatError("Expected a JSON object or array of objects")


def _records_from_yaml(text: str) -> list[Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise EntryFormatError(f"Invalid YAML: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    raise EntryFormatError("Expected a YAML mapping or list of mappings")


def parse_entries(text: str, fmt: str = "json") -> list[LogEntry]:
    """Parse entries from text.

    Args:
        text: File content.
        fmt: "json" (array, object or JSON lines) or "yaml".

    Returns:
        Entries in input order.

    Raises:
        EntryFormatError: If the text or one of its records is invalid.
    """
    records = _records_from_yaml(text) if fmt == "yaml" else _records_from_json(text)

    entries = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise EntryFormatError(f"Entry {index}: expected an object, got {type(record).__name__}")
        try:
            entries.append(LogEntry.from_dict(record))
        except ValidationError as e:
            raise EntryFormatError(f"Entry {index}: {e}") from e
    return entries


def read_entries(path: Path) -> list[LogEntry]:
    """Read entries from a file, picking the format from its extension."""
    fmt = "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"
    entries = parse_entries(path.read_text(encoding="utf-8"), fmt=fmt)
    logger.debug("entries.read", path=str(path), count=len(entries), format=fmt)
    return entries
