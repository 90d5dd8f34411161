"""Parsing of ``.bacon-locations`` lines into ``Location`` entries.

Each line looks like ``error src/main.rs:61:15 the faucet is leaking``.
Lines of any other shape are skipped silently.
"""

from __future__ import annotations

import enum
import os
import re
from collections.abc import Iterable
from pathlib import Path

from .locations import Location

_POSIX_LINE_RE = re.compile(r"(\S+) ([^:]+):(\d+):(\d+)\s*(.*)")
# The drive letter colon must not be taken for the ``:line:column`` suffix.
_WINDOWS_LINE_RE = re.compile(r"(\S+) ([A-Za-z]:[^:]+):(\d+):(\d+)\s*(.*)")
_DRIVE_RE = re.compile(r"^[A-Za-z]:/")


class PathSyntax(enum.Enum):
    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> PathSyntax:
        return cls.WINDOWS if os.name == "nt" else cls.POSIX


def _is_absolute(path: str, syntax: PathSyntax) -> bool:
    if path.startswith("/"):
        return True
    return syntax is PathSyntax.WINDOWS and bool(_DRIVE_RE.match(path))


def _join(base_dir: Path | str, path: str) -> str:
    base = str(base_dir).replace("\\", "/").rstrip("/")
    if not base:
        return path
    return f"{base}/{path}"


def parse_line(
    raw_line: str,
    base_dir: Path | str,
    syntax: PathSyntax = PathSyntax.POSIX,
) -> Location | None:
    """Parse one raw line, resolving relative paths against ``base_dir``."""
    if syntax is PathSyntax.WINDOWS:
        raw_line = raw_line.replace("\\", "/")
        match = _WINDOWS_LINE_RE.search(raw_line)
    else:
        match = _POSIX_LINE_RE.search(raw_line)
    if match is None:
        return None

    category, path, line, column, text = match.groups()
    if not category:
        return None
    if not _is_absolute(path, syntax):
        path = _join(base_dir, path)
    return Location(
        category=category,
        filename=path,
        line=int(line),
        column=int(column),
        text=text or "",
    )


def parse_locations(
    raw_lines: Iterable[str],
    base_dir: Path | str,
    syntax: PathSyntax = PathSyntax.POSIX,
) -> tuple[Location, ...]:
    parsed = (parse_line(raw, base_dir, syntax) for raw in raw_lines)
    return tuple(location for location in parsed if location is not None)


def format_location_line(location: Location) -> str:
    """Serialize ``location`` back to the locations file format."""
    head = f"{location.category} {location.filename}:{location.line}:{location.column}"
    return f"{head} {location.text}" if location.text else head
