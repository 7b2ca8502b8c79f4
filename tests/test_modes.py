"""Pattern generation: shape counts, determinism and random draw order."""
import unittest

from geogrid.modes import (
    CirclePattern,
    Point,
    TrianglePattern,
    generate_for_seed,
    generate_pattern,
    shape_count,
)
from geogrid.rng import SeededRandom


class ScriptedRandom:
    """Stream that replays fixed values, to pin down draw order."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls]
        self.calls += 1
        return value

    def floor(self, n):
        return int(self.random() * n)


class TestPatternGeneration(unittest.TestCase):

    def test_triangle_count(self):
        """Triangle mode yields 2 * k^2 triangles."""
        for k in range(1, 6):
            pattern = generate_for_seed(1, "triangle", k)
            self.assertIsInstance(pattern, TrianglePattern)
            self.assertEqual(len(pattern.triangles), 2 * k * k)
            self.assertEqual(pattern.grid_res, k + 1)

    def test_circle_count(self):
        """Circle mode yields k^2 cells."""
        for k in range(1, 6):
            pattern = generate_for_seed(1, "circle", k)
            self.assertIsInstance(pattern, CirclePattern)
            self.assertEqual(shape_count(pattern), k * k)

    def test_complexity_two_gives_eight_triangles(self):
        self.assertEqual(len(generate_for_seed(5, "triangle", 2).triangles), 8)

    def test_deterministic_for_same_seed(self):
        """Independent fresh streams give identical patterns."""
        for mode in ("triangle", "circle"):
            a = generate_pattern(mode, 4, SeededRandom(31337))
            b = generate_pattern(mode, 4, SeededRandom(31337))
            self.assertEqual(a, b)

    def test_different_seeds_differ(self):
        a = generate_for_seed(1, "triangle", 5)
        b = generate_for_seed(2, "triangle", 5)
        self.assertNotEqual(a, b)

    def test_seed_42_triangle_cell(self):
        """Known values: seed 42 draws 0.252 (no flip), then slots 0 and 4."""
        pattern = generate_for_seed(42, "triangle", 1)
        first, second = pattern.triangles
        self.assertEqual(first.vertices, (Point(0, 0), Point(1, 0), Point(0, 1)))
        self.assertEqual(first.color_index, 0)
        self.assertEqual(second.vertices, (Point(1, 0), Point(1, 1), Point(0, 1)))
        self.assertEqual(second.color_index, 4)

    def test_seed_42_circle_cell(self):
        cell = generate_for_seed(42, "circle", 1).cells[0]
        self.assertEqual((cell.corner, cell.bg_color_index, cell.arc_color_index), (1, 0, 4))
        self.assertEqual((cell.x, cell.y, cell.w, cell.h), (0, 0, 1, 1))

    def test_triangle_draw_order(self):
        """Per sub-cell: diagonal flag, then the two color slots."""
        rng = ScriptedRandom([0.9, 0.125, 0.5, 0.1, 0.0, 0.999] + [0.0] * 6)
        pattern = generate_pattern("triangle", 2, rng)
        t = pattern.triangles
        # first sub-cell (row 0, col 0) flipped diagonal
        self.assertEqual(t[0].vertices, (Point(0, 0), Point(0.5, 0), Point(0.5, 0.5)))
        self.assertEqual(t[1].vertices, (Point(0, 0), Point(0.5, 0.5), Point(0, 0.5)))
        self.assertEqual((t[0].color_index, t[1].color_index), (1, 4))
        # second sub-cell is (row 0, col 1): row-major
        self.assertEqual(t[2].vertices, (Point(0.5, 0), Point(1, 0), Point(0.5, 0.5)))
        self.assertEqual((t[2].color_index, t[3].color_index), (0, 7))
        self.assertEqual(rng.calls, 12)

    def test_diagonal_threshold_is_strict(self):
        """Exactly 0.5 does not flip the diagonal."""
        pattern = generate_pattern("triangle", 1, ScriptedRandom([0.5, 0.0, 0.0]))
        self.assertEqual(pattern.triangles[0].vertices, (Point(0, 0), Point(1, 0), Point(0, 1)))

    def test_circle_draw_order(self):
        """Per sub-cell: corner, background slot, arc slot."""
        rng = ScriptedRandom([0.75, 0.25, 0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        pattern = generate_pattern("circle", 2, rng)
        cell = pattern.cells[0]
        self.assertEqual((cell.corner, cell.bg_color_index, cell.arc_color_index), (3, 2, 4))
        self.assertEqual((pattern.cells[1].x, pattern.cells[1].y), (0.5, 0))
        self.assertEqual((pattern.cells[2].x, pattern.cells[2].y), (0, 0.5))
        self.assertEqual(rng.calls, 12)

    def test_index_ranges(self):
        pattern = generate_for_seed(99, "circle", 5)
        for cell in pattern.cells:
            self.assertIn(cell.corner, range(4))
            self.assertIn(cell.bg_color_index, range(8))
            self.assertIn(cell.arc_color_index, range(8))
        for tri in generate_for_seed(99, "triangle", 5).triangles:
            self.assertIn(tri.color_index, range(8))

    def test_unknown_mode_draws_triangles(self):
        self.assertIsInstance(generate_for_seed(3, "hexagon", 2), TrianglePattern)


if __name__ == "__main__":
    unittest.main()
