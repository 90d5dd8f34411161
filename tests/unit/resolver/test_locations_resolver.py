"""Tests for choosing which ``.bacon-locations`` file to load."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from baconnav.gitignore import NullIgnoreEvaluator
from baconnav.resolver import find_upward, resolve_locations_file
from baconnav.session import BaconSession


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def _project(tmp: str) -> Path:
    root = Path(tmp).resolve()
    (root / ".git").mkdir()
    return root


def _session(cwd: Path) -> BaconSession:
    return BaconSession(cwd=cwd, ignore_evaluator=NullIgnoreEvaluator())


class DownwardSelectionTests(unittest.TestCase):
    def test_file_next_to_socket_wins_over_plain_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            _touch(root / "a" / ".bacon-locations")
            chosen = _touch(root / "b" / ".bacon-locations")
            _touch(root / "b" / ".bacon.socket")

            resolution = resolve_locations_file(_session(root))

            self.assertEqual(resolution.path, chosen)
            self.assertEqual(resolution.base_dir, root / "b")
            self.assertEqual(resolution.warnings, ())

    def test_several_files_with_socket_pick_first_and_warn(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            first = _touch(root / "a" / ".bacon-locations")
            _touch(root / "a" / ".bacon.socket")
            second = _touch(root / "b" / ".bacon-locations")
            _touch(root / "b" / ".bacon.socket")
            plain = _touch(root / "c" / ".bacon-locations")

            resolution = resolve_locations_file(_session(root))

            self.assertEqual(resolution.path, first)
            self.assertEqual(len(resolution.warnings), 1)
            warning = resolution.warnings[0]
            self.assertIn("with .bacon.socket found", warning)
            self.assertIn(str(first), warning)
            self.assertIn(str(second), warning)
            self.assertNotIn(str(plain), warning)

    def test_single_file_without_socket_is_selected_silently(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            only = _touch(root / "crate" / ".bacon-locations")

            resolution = resolve_locations_file(_session(root))

            self.assertEqual(resolution.path, only)
            self.assertEqual(resolution.warnings, ())

    def test_several_files_without_socket_pick_first_and_warn(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            first = _touch(root / "a" / ".bacon-locations")
            second = _touch(root / "b" / ".bacon-locations")

            resolution = resolve_locations_file(_session(root))

            self.assertEqual(resolution.path, first)
            self.assertEqual(resolution.candidates, (first, second))
            self.assertIn("none have a .bacon.socket", resolution.warnings[0])


class CacheAndFallbackTests(unittest.TestCase):
    def test_selected_file_is_cached_and_reused_without_search(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            chosen = _touch(root / "crate" / ".bacon-locations")
            session = _session(root)

            resolve_locations_file(session)
            self.assertEqual(session.cached_locations_file, chosen)

            with mock.patch("baconnav.resolver.find_files_recursive") as search:
                resolution = resolve_locations_file(session)

            search.assert_not_called()
            self.assertEqual(resolution.path, chosen)
            self.assertEqual(resolution.base_dir, root / "crate")

    def test_deleted_cached_file_is_searched_again(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            stale = _touch(root / "old" / ".bacon-locations")
            session = _session(root)
            resolve_locations_file(session)
            stale.unlink()
            fresh = _touch(root / "new" / ".bacon-locations")

            resolution = resolve_locations_file(session)

            self.assertEqual(resolution.path, fresh)
            self.assertEqual(session.cached_locations_file, fresh)

    def test_upward_search_finds_file_above_project_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            outer = Path(tmp).resolve()
            above = _touch(outer / ".bacon-locations")
            root = outer / "repo"
            (root / ".git").mkdir(parents=True)
            cwd = root / "src"
            cwd.mkdir()

            resolution = resolve_locations_file(_session(cwd))

            self.assertEqual(resolution.path, above)
            self.assertEqual(resolution.base_dir, outer)

    def test_find_upward_includes_start_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            start = Path(tmp).resolve()
            here = _touch(start / ".bacon-locations")

            self.assertEqual(find_upward(start, ".bacon-locations"), here)

    def test_nothing_found_fails_without_caching(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = _project(tmp)
            session = _session(root)

            with mock.patch("baconnav.resolver.find_upward", return_value=None):
                resolution = resolve_locations_file(session)

            self.assertFalse(resolution.ok)
            self.assertEqual(resolution.error, "No .bacon-locations file found")
            self.assertIsNone(session.cached_locations_file)


if __name__ == "__main__":
    unittest.main()
