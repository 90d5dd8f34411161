"""Depth-first search for every file with a given name below a root.

Hidden directories and directories ignored by git are never entered.
Children are visited in sorted name order so the first match is stable.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .gitignore import IgnoreEvaluator, IgnoreFilter
from .paths import file_exists

logger = logging.getLogger(__name__)


def _child_directories(directory: Path) -> list[Path]:
    try:
        children = list(directory.iterdir())
    except (PermissionError, OSError):
        return []
    dirs: list[Path] = []
    for child in children:
        try:
            if child.is_dir() and not child.is_symlink():
                dirs.append(child)
        except OSError:
            continue
    return sorted(dirs, key=lambda p: p.name)


def find_files_recursive(
    root: Path,
    filename: str,
    evaluator: IgnoreEvaluator | None = None,
) -> list[Path]:
    """Return every ``<dir>/filename`` below ``root``, in pre-order.

    A directory's own match is recorded before any of its subdirectories are
    searched.
    """
    ignore_filter = IgnoreFilter(root, evaluator)
    results: list[Path] = []

    def walk(directory: Path) -> None:
        target = directory / filename
        if file_exists(target):
            results.append(target)
        for child in _child_directories(directory):
            if child.name.startswith("."):
                continue
            if ignore_filter.is_ignored(child):
                logger.debug("skipping ignored directory %s", child)
                continue
            walk(child)

    walk(root)
    logger.debug("found %d %s file(s) under %s", len(results), filename, root)
    return results
