"""Mirroring of loaded locations into a vim quickfix list.

The errorfile written here is read back with ``vim -q <file>`` or
``:cfile <file>``; the item dicts match what ``setqflist()`` accepts.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .locations import Location


def quickfix_type(category: str) -> str:
    return category[:1].upper()


def to_quickfix_items(locations: Iterable[Location]) -> list[dict[str, object]]:
    return [
        {
            "filename": location.filename,
            "lnum": location.line,
            "col": location.column,
            "text": location.text,
            "type": quickfix_type(location.category),
        }
        for location in locations
    ]


def format_errorfile(locations: Iterable[Location]) -> str:
    """Render locations in vim's default ``%f:%l:%c: %m`` error format."""
    out: list[str] = []
    for location in locations:
        message = f"{location.category}: {location.text}" if location.text else location.category
        out.append(f"{location.filename}:{location.line}:{location.column}: {message}\n")
    return "".join(out)


def write_errorfile(path: Path, locations: Iterable[Location]) -> str | None:
    """Write the errorfile, returning an error message instead of raising."""
    try:
        path.write_text(format_errorfile(locations), encoding="utf-8")
    except OSError as exc:
        return f"Failed to write quickfix file {path}: {exc}"
    return None
