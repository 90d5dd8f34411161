"""Gitignore-aware path filtering for the recursive searches.

Ignore decisions are delegated to ``git check-ignore`` through an
``IgnoreEvaluator``. Every failure of the external tool fails open: a path is
only ever skipped when git positively reports it as ignored.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

VCS_DIR_NAME = ".git"

logger = logging.getLogger(__name__)


def is_vcs_internal(path: Path | str) -> bool:
    """Return whether ``path`` is, or lies inside, a ``.git`` directory."""
    text = str(path).replace("\\", "/")
    return text.endswith("/" + VCS_DIR_NAME) or text == VCS_DIR_NAME or f"/{VCS_DIR_NAME}/" in text


class IgnoreEvaluator(Protocol):
    """Capability answering repository membership and ignore-rule queries."""

    def in_repo(self, root: Path) -> bool: ...

    def check_ignore(self, path: Path) -> bool: ...


class NullIgnoreEvaluator:
    """Evaluator for trees outside version control: nothing is ever ignored."""

    def in_repo(self, root: Path) -> bool:
        return False

    def check_ignore(self, path: Path) -> bool:
        return False


class GitIgnoreEvaluator:
    """Evaluator backed by the ``git`` executable."""

    def __init__(self, git: str = "git") -> None:
        self.git = git

    def _available(self) -> bool:
        return shutil.which(self.git) is not None

    def in_repo(self, root: Path) -> bool:
        """Return whether ``root`` lies inside a git work tree."""
        if not self._available():
            return False
        try:
            proc = subprocess.run(
                [self.git, "-C", str(root), "rev-parse", "--git-dir"],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError:
            return False
        return proc.returncode == 0 and bool(proc.stdout.strip())

    def check_ignore(self, path: Path) -> bool:
        """Return whether git reports ``path`` as ignored.

        Exit status 0 means ignored and 1 means not ignored. Anything else
        (not a repository, git missing or broken) is treated as not ignored.
        """
        if not self._available():
            return False
        try:
            proc = subprocess.run(
                [self.git, "-C", str(path.parent), "check-ignore", "-q", str(path)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            return False
        if proc.returncode > 1:
            logger.debug("git check-ignore exited %d for %s, not ignoring", proc.returncode, path)
            return False
        return proc.returncode == 0


class IgnoreFilter:
    """Ignore decisions for one top-level search.

    Repository membership is probed once, when the filter is built, so a
    search over many directories costs one ``rev-parse`` plus one
    ``check-ignore`` per visited directory.
    """

    def __init__(self, root: Path, evaluator: IgnoreEvaluator | None = None) -> None:
        self.root = root
        self.evaluator: IgnoreEvaluator = evaluator if evaluator is not None else NullIgnoreEvaluator()
        self.in_repo = self.evaluator.in_repo(root)
        logger.debug("search root %s in repository: %s", root, self.in_repo)

    def is_ignored(self, path: Path) -> bool:
        if is_vcs_internal(path):
            return True
        if not self.in_repo:
            return False
        return self.evaluator.check_ignore(path)
