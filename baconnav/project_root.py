"""Project root detection by upward search for a ``.git`` marker."""

from __future__ import annotations

import logging
from pathlib import Path

from .paths import file_exists

VCS_MARKER = ".git"

logger = logging.getLogger(__name__)


def find_project_root(start: Path) -> Path:
    """Return the nearest ancestor of ``start`` holding a ``.git`` entry.

    ``.git`` may be a directory or a file (worktrees, submodules). The
    filesystem root is not probed; reaching it returns ``start`` unchanged.
    """
    current = start
    while current.parent != current:
        if file_exists(current / VCS_MARKER):
            logger.debug("project root: %s", current)
            return current
        current = current.parent
    logger.debug("no %s marker above %s, using it as project root", VCS_MARKER, start)
    return start
