"""Tests for the recursive marker-file search."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from baconnav.search import find_files_recursive


class _IgnoreNames:
    def __init__(self, *names: str) -> None:
        self.names = set(names)

    def in_repo(self, root: Path) -> bool:
        return True

    def check_ignore(self, path: Path) -> bool:
        return path.name in self.names


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


class FindFilesRecursiveTests(unittest.TestCase):
    def test_pre_order_with_sorted_siblings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            top = _touch(root / ".bacon-locations")
            b = _touch(root / "b" / ".bacon-locations")
            a_deep = _touch(root / "a" / "x" / ".bacon-locations")
            a = _touch(root / "a" / ".bacon-locations")

            found = find_files_recursive(root, ".bacon-locations")

            self.assertEqual(found, [top, a, a_deep, b])

    def test_hidden_directories_are_not_searched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / ".cache" / ".bacon-locations")
            _touch(root / ".git" / ".bacon-locations")
            visible = _touch(root / "crate" / ".bacon-locations")

            found = find_files_recursive(root, ".bacon-locations")

            self.assertEqual(found, [visible])

    def test_ignored_directories_are_not_searched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / "target" / "debug" / ".bacon.socket")
            kept = _touch(root / "app" / ".bacon.socket")

            found = find_files_recursive(root, ".bacon.socket", _IgnoreNames("target"))

            self.assertEqual(found, [kept])

    def test_no_matches_returns_empty_list(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "src").mkdir()

            self.assertEqual(find_files_recursive(root, ".bacon-locations"), [])

    def test_symlinked_directories_are_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            outside = base / "outside"
            _touch(outside / ".bacon-locations")
            root = base / "project"
            root.mkdir()
            try:
                (root / "linked").symlink_to(outside, target_is_directory=True)
            except OSError:
                self.skipTest("cannot create symlinks here")

            self.assertEqual(find_files_recursive(root, ".bacon-locations"), [])

    def test_unreadable_directory_is_skipped_and_siblings_still_searched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _touch(root / "locked" / "inner" / ".bacon-locations")
            visible = _touch(root / "open" / ".bacon-locations")
            original_iterdir = Path.iterdir

            def iterdir(self: Path):
                if self.name == "locked":
                    raise PermissionError(13, "Permission denied", str(self))
                return original_iterdir(self)

            with mock.patch.object(Path, "iterdir", iterdir):
                found = find_files_recursive(root, ".bacon-locations")

            self.assertEqual(found, [visible])


if __name__ == "__main__":
    unittest.main()
