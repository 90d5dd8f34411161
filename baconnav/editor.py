"""Opening a location in the user's editor.

Runs ``$EDITOR +<line> <file>`` for the selected location.
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Sequence
from typing import Callable

from .locations import Location
from .paths import lines_from


def cursor_target(location: Location, lines: Sequence[str]) -> tuple[int, int]:
    """Clamp ``location`` to the file contents.

    Returns a 1-based line and a 0-based column, both kept within the
    current text so a stale diagnostic never points past the end.
    """
    target_line = max(1, min(location.line, len(lines)))
    line_content = lines[target_line - 1] if lines else ""
    target_column = max(0, min(location.column - 1, len(line_content)))
    return target_line, target_column


def location_cursor(location: Location) -> tuple[int, int]:
    try:
        lines = lines_from(location.path)
    except OSError:
        lines = []
    return cursor_target(location, lines)


def open_in_editor(
    location: Location,
    runner: Callable[..., object] = subprocess.run,
) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot edit: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot edit: $EDITOR is empty."

    line, _column = location_cursor(location)
    try:
        runner([*cmd, f"+{line}", location.filename], check=False)
    except Exception as exc:
        return f"Failed to launch editor: {exc}"
    return None
