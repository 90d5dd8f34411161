"""Tests for cursor clamping and the ``$EDITOR`` launch helper."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from baconnav.editor import cursor_target, open_in_editor
from baconnav.locations import Location


class CursorTargetTests(unittest.TestCase):
    def test_position_inside_file_is_kept(self) -> None:
        location = Location("error", "/proj/a.rs", 2, 3)

        self.assertEqual(cursor_target(location, ["fn main() {", "    let x = 1;"]), (2, 2))

    def test_line_past_end_is_clamped_to_last_line(self) -> None:
        location = Location("error", "/proj/a.rs", 40, 1)

        self.assertEqual(cursor_target(location, ["one", "two"]), (2, 0))

    def test_column_past_end_is_clamped_to_line_length(self) -> None:
        location = Location("error", "/proj/a.rs", 1, 99)

        self.assertEqual(cursor_target(location, ["short"]), (1, 5))

    def test_empty_file_targets_first_line(self) -> None:
        location = Location("error", "/proj/a.rs", 5, 5)

        self.assertEqual(cursor_target(location, []), (1, 0))


class OpenInEditorTests(unittest.TestCase):
    def test_missing_editor_returns_message(self) -> None:
        runner = mock.Mock()
        with mock.patch.dict(os.environ, {"EDITOR": ""}):
            error = open_in_editor(Location("error", "/proj/a.rs", 1, 1), runner=runner)

        self.assertEqual(error, "Cannot edit: $EDITOR is not set.")
        runner.assert_not_called()

    def test_editor_is_started_on_clamped_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp).resolve() / "a.rs"
            source.write_text("one\ntwo\nthree\n", encoding="utf-8")
            runner = mock.Mock()
            with mock.patch.dict(os.environ, {"EDITOR": "nvim -u NONE"}):
                error = open_in_editor(Location("error", str(source), 12, 1), runner=runner)

        self.assertIsNone(error)
        runner.assert_called_once()
        self.assertEqual(runner.call_args.args[0], ["nvim", "-u", "NONE", "+3", str(source)])


if __name__ == "__main__":
    unittest.main()
