import unittest

from imageapp.ops import op_insert
from imageapp.pixels import BLACK, WHITE, Color, PixelBuffer

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
GRAY = Color(100, 100, 100)


class TestInsert(unittest.TestCase):
    def setUp(self):
        self.target = PixelBuffer(4, 5, fill=GRAY)
        self.small = PixelBuffer.from_rows([
            [WHITE, RED],
            [GREEN, BLUE],
        ])

    def test_background_skipped(self):
        op_insert(self.target, self.small, 1, 1)
        self.assertEqual(self.target.get(1, 1), GRAY)  # white not copied
        self.assertEqual(self.target.get(1, 2), RED)
        self.assertEqual(self.target.get(2, 1), GREEN)
        self.assertEqual(self.target.get(2, 2), BLUE)

    def test_only_overlay_area_changes(self):
        op_insert(self.target, self.small, 1, 1)
        changed = {
            (y, x)
            for y in range(self.target.height)
            for x in range(self.target.width)
            if self.target.get(y, x) != GRAY
        }
        self.assertEqual(changed, {(1, 2), (2, 1), (2, 2)})

    def test_returns_target_source_untouched(self):
        before = self.small.copy()
        out = op_insert(self.target, self.small, 0, 0)
        self.assertIs(out, self.target)
        self.assertEqual(self.small, before)

    def test_x_is_column_y_is_row(self):
        op_insert(self.target, self.small, 3, 0)
        self.assertEqual(self.target.get(0, 4), RED)
        self.assertEqual(self.target.get(1, 3), GREEN)

    def test_clips_at_right_and_bottom(self):
        op_insert(self.target, self.small, 4, 3)
        self.assertEqual(self.target.get(3, 4), GRAY)  # (0,0) white
        # everything else falls outside and is dropped
        self.assertEqual(self.target.size, (5, 4))

    def test_clips_negative_offsets(self):
        op_insert(self.target, self.small, -1, -1)
        self.assertEqual(self.target.get(0, 0), BLUE)
        self.assertEqual(self.target.get(0, 1), GRAY)

    def test_fully_outside_is_noop(self):
        before = self.target.copy()
        op_insert(self.target, self.small, 50, 50)
        self.assertEqual(self.target, before)

    def test_custom_background(self):
        op_insert(self.target, self.small, 0, 0, background=BLUE)
        self.assertEqual(self.target.get(0, 0), WHITE)
        self.assertEqual(self.target.get(1, 1), GRAY)

    def test_exact_match_only(self):
        near_white = PixelBuffer.from_rows([[(254, 255, 255)]])
        op_insert(self.target, near_white, 0, 0)
        self.assertEqual(self.target.get(0, 0), Color(254, 255, 255))

    def test_black_background(self):
        src = PixelBuffer.from_rows([[BLACK, RED]])
        op_insert(self.target, src, 0, 0, background=BLACK)
        self.assertEqual(self.target.get(0, 0), GRAY)
        self.assertEqual(self.target.get(0, 1), RED)


if __name__ == "__main__":
    unittest.main()
