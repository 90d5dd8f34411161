"""Primitive filesystem helpers shared by the resolvers.

Existence checks never raise; they answer ``False`` for anything that cannot
be stat'ed. Line reading tolerates undecodable bytes in diagnostic messages.
"""

from __future__ import annotations

from pathlib import Path


def file_exists(path: Path | str) -> bool:
    """Return whether any filesystem entry (file or directory) exists at ``path``."""
    try:
        return Path(path).exists()
    except OSError:
        return False


def lines_from(path: Path | str) -> list[str]:
    """Return every line of ``path`` without line terminators."""
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return text.splitlines()


def split_path(path: Path | str) -> tuple[Path, str]:
    """Split ``path`` into its containing directory and its last segment."""
    target = Path(path)
    return target.parent, target.name
