"""
Grid State Tests
================

Checks the three-level buffer handling:
1. Starting shape and fixed ends.
2. Rotation moves roles without copying.
3. Point edits and read-only snapshots.
"""

import math
import sys
import unittest
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from solvers.grid import StringGrid, sech


class TestStringGrid(unittest.TestCase):

    def setUp(self):
        self.grid = StringGrid(128)
        self.grid.initialize()

    def test_default_shape_is_soliton_pulse(self):
        """Interior points follow 2.5 sech((i - 64)/5) sin(10 pi i / 127)."""
        for i in (1, 30, 63, 64, 65, 100, 126):
            expected = 2.5 * sech((i - 64) / 5.0) * math.sin(i * 10.0 * math.pi / 127)
            self.assertAlmostEqual(self.grid.u_curr[i], expected)
            self.assertAlmostEqual(self.grid.u_prev[i], expected)
        self.assertGreater(np.max(np.abs(self.grid.u_curr)), 1.0)

    def test_boundaries_zero_in_every_level(self):
        for u in (self.grid.u_prev, self.grid.u_curr, self.grid.u_next):
            self.assertEqual(u[0], 0.0)
            self.assertEqual(u[-1], 0.0)

    def test_custom_shape_only_fills_interior(self):
        self.grid.initialize(lambda i: 7.0)
        self.assertEqual(self.grid.u_curr[0], 0.0)
        self.assertEqual(self.grid.u_curr[-1], 0.0)
        self.assertTrue(np.all(self.grid.u_curr[1:-1] == 7.0))
        self.assertTrue(np.all(self.grid.u_next == 0.0))

    def test_rotate_moves_roles(self):
        prev, curr, nxt = self.grid.u_prev, self.grid.u_curr, self.grid.u_next
        self.grid.rotate()
        self.assertIs(self.grid.u_prev, curr)
        self.assertIs(self.grid.u_curr, nxt)
        self.assertIs(self.grid.u_next, prev)
        self.assertEqual(self.grid.rotations, 1)

    def test_rotate_never_aliases(self):
        for _ in range(7):
            self.grid.rotate()
            ids = {id(self.grid.u_prev), id(self.grid.u_curr), id(self.grid.u_next)}
            self.assertEqual(len(ids), 3)

    def test_set_point_sets_previous_and_current(self):
        self.assertTrue(self.grid.set_point(10, 0.75))
        self.assertEqual(self.grid.u_prev[10], 0.75)
        self.assertEqual(self.grid.u_curr[10], 0.75)

    def test_set_point_rejects_boundary_and_out_of_range(self):
        before = self.grid.snapshot()
        for i in (0, 127, -1, 128, 500):
            self.assertFalse(self.grid.set_point(i, 3.0))
        np.testing.assert_array_equal(self.grid.snapshot(), before)

    def test_snapshot_is_read_only_copy(self):
        snap = self.grid.snapshot()
        self.assertIsNot(snap, self.grid.u_curr)
        with self.assertRaises(ValueError):
            snap[5] = 1.0

        self.grid.set_point(5, 1.0)
        self.assertNotEqual(snap[5], 1.0)

    def test_clear_flattens(self):
        self.grid.clear()
        self.assertTrue(np.all(self.grid.snapshot() == 0.0))

    def test_small_grids(self):
        for n in (1, 2):
            grid = StringGrid(n)
            grid.initialize()
            self.assertTrue(np.all(grid.snapshot() == 0.0))
            self.assertFalse(grid.set_point(0, 1.0))

    def test_empty_grid_rejected(self):
        with self.assertRaises(ValueError):
            StringGrid(0)


if __name__ == "__main__":
    unittest.main()
