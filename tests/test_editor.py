"""
Interactive Editor Tests
========================

Mode switching and redraw requests for point edits.
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from solvers.editor import Mode, StringEditor
from solvers.grid import StringGrid


class TestStringEditor(unittest.TestCase):

    def setUp(self):
        self.redraws = 0
        self.grid = StringGrid(16)
        self.grid.initialize()
        self.editor = StringEditor(self.grid, redraw=self._redraw)

    def _redraw(self):
        self.redraws += 1

    def test_starts_running(self):
        self.assertIs(self.editor.mode, Mode.RUNNING)
        self.assertEqual(self.editor.mode.status, "Running string simulation")

    def test_set_mode_returns_new_mode(self):
        with self.assertLogs("solvers.editor", level="INFO") as logs:
            self.assertIs(self.editor.set_mode(Mode.EDITING), Mode.EDITING)
        self.assertIn("Drag mouse to adjust string shape", logs.output[0])

        self.assertIs(self.editor.set_mode("running"), Mode.RUNNING)

    def test_unknown_mode_rejected(self):
        with self.assertRaises(ValueError):
            self.editor.set_mode("paused")

    def test_toggle(self):
        self.assertIs(self.editor.toggle(), Mode.EDITING)
        self.assertIs(self.editor.toggle(), Mode.RUNNING)

    def test_running_mode_edit_does_not_redraw(self):
        result = self.editor.edit(3, 0.5)
        self.assertTrue(result.applied)
        self.assertFalse(result.redraw)
        self.assertEqual(self.redraws, 0)
        self.assertEqual(self.grid.u_curr[3], 0.5)

    def test_editing_mode_redraws_every_edit(self):
        self.editor.set_mode(Mode.EDITING)
        for i in range(1, 6):
            result = self.editor.edit(i, -0.25)
            self.assertTrue(result.redraw)
        self.assertEqual(self.redraws, 5)

    def test_out_of_range_edit_is_ignored(self):
        self.editor.set_mode(Mode.EDITING)
        result = self.editor.edit(15, 1.0)
        self.assertFalse(result.applied)
        self.assertEqual(self.grid.u_curr[15], 0.0)

    def test_no_callback(self):
        editor = StringEditor(self.grid, mode=Mode.EDITING)
        self.assertTrue(editor.edit(2, 0.1).redraw)


if __name__ == "__main__":
    unittest.main()
