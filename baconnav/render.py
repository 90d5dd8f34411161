"""Text rendering of the locations list.

Rows keep the layout of the editor popup: category initial, centered index,
``path:line:col`` relative to the working directory, then the message.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pygments.console import ansiformat

from .locations import Location

HEADER_TEXT = "Bacon Locations"
INDEX_WIDTH = 5

_CATEGORY_COLORS = {
    "E": "*red*",
    "W": "*yellow*",
}
_DEFAULT_CATEGORY_COLOR = "cyan"


def center(text: str, width: int) -> str:
    """Pad ``text`` with spaces on both sides to ``width`` columns."""
    shift = width // 2 - len(text) // 2
    remain = width - shift - len(text)
    return " " * max(0, shift) + text + " " * max(0, remain)


def header_line(width: int, color: bool = False) -> str:
    header = center(HEADER_TEXT, width)
    return ansiformat("*white*", header) if color else header


def display_path(filename: str, cwd: Path) -> str:
    """Strip the ``cwd`` prefix from ``filename`` when it lies inside it."""
    prefix = str(cwd).rstrip("/") + "/"
    if filename.startswith(prefix):
        return filename[len(prefix):]
    return filename


def format_location_row(index: int, location: Location, cwd: Path, color: bool = False) -> str:
    initial = location.category[:1].upper()
    shield = center(str(index), INDEX_WIDTH)
    place = f"{display_path(location.filename, cwd)}:{location.line}:{location.column}"
    if color:
        initial = ansiformat(_CATEGORY_COLORS.get(initial, _DEFAULT_CATEGORY_COLOR), initial)
        shield = ansiformat("brightblack", shield)
    return f" {initial}{shield}{place} | {location.text}"


def format_location_rows(locations: Iterable[Location], cwd: Path, color: bool = False) -> list[str]:
    return [format_location_row(idx, location, cwd, color) for idx, location in enumerate(locations, start=1)]
