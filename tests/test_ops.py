import unittest
from pathlib import Path

from imageapp.ops import (
    apply_edits,
    EditOptions,
    op_grayscale,
    op_negative,
    op_recolor,
)
from imageapp.pixels import Color, PixelBuffer


class TestColorOps(unittest.TestCase):
    def setUp(self):
        # 3x2 pixels
        self.buf = PixelBuffer.from_rows([
            [(10, 20, 30), (0, 0, 0), (255, 128, 1)],
            [(1, 2, 2), (30, 60, 90), (255, 255, 255)],
        ])

    def test_recolor_swaps_channels(self):
        out = op_recolor(self.buf)
        self.assertIs(out, self.buf)  # in place
        self.assertEqual(out.get(0, 0), Color(20, 30, 10))
        self.assertEqual(out.get(0, 2), Color(128, 1, 255))

    def test_recolor_three_times_is_identity(self):
        orig = self.buf.copy()
        for _ in range(3):
            op_recolor(self.buf)
        self.assertEqual(self.buf, orig)

    def test_negative(self):
        op_negative(self.buf)
        self.assertEqual(self.buf.get(0, 0), Color(245, 235, 225))
        self.assertEqual(self.buf.get(1, 2), Color(0, 0, 0))

    def test_double_negative_is_identity(self):
        orig = self.buf.copy()
        op_negative(op_negative(self.buf))
        self.assertEqual(self.buf, orig)

    def test_grayscale_average(self):
        op_grayscale(self.buf)
        self.assertEqual(self.buf.get(1, 1), Color(60, 60, 60))

    def test_grayscale_truncates(self):
        # (1+2+2)/3 = 1.67: truncation gives 1, rounding would give 2
        op_grayscale(self.buf)
        self.assertEqual(self.buf.get(1, 0), Color(1, 1, 1))
        # (255+128+1)/3 = 128.0
        self.assertEqual(self.buf.get(0, 2), Color(128, 128, 128))

    def test_grayscale_fixed_point(self):
        once = op_grayscale(self.buf).copy()
        twice = op_grayscale(self.buf)
        self.assertEqual(twice, once)

    def test_color_ops_on_empty_buffer(self):
        empty = PixelBuffer(0, 0)
        self.assertEqual(op_negative(empty), PixelBuffer(0, 0))


class TestApplyEdits(unittest.TestCase):
    def setUp(self):
        self.buf = PixelBuffer.from_rows([
            [(10, 20, 30), (40, 50, 60), (70, 80, 90)],
            [(1, 2, 3), (4, 5, 6), (7, 8, 9)],
        ])

    def test_input_not_modified(self):
        orig = self.buf.copy()
        apply_edits(self.buf, EditOptions(recolor=True, negative=True, rotate=90))
        self.assertEqual(self.buf, orig)

    def test_chain_order(self):
        opts = EditOptions(negative=True, grayscale=True, rotate=90)
        out = apply_edits(self.buf, opts)
        self.assertEqual(out.size, (2, 3))
        # (10,20,30) -> negative (245,235,225) -> gray 235; lands top-right
        self.assertEqual(out.get(0, 1), Color(235, 235, 235))

    def test_no_edits_returns_equal_copy(self):
        out = apply_edits(self.buf, EditOptions())
        self.assertEqual(out, self.buf)
        self.assertIsNot(out, self.buf)

    def test_insert_with_overlay(self):
        overlay = PixelBuffer.from_rows([[(9, 9, 9), (255, 255, 255)]])
        opts = EditOptions(insert=Path("overlay.png"), insert_x=1, insert_y=1)
        out = apply_edits(self.buf, opts, overlay=overlay)
        self.assertEqual(out.get(1, 1), Color(9, 9, 9))
        self.assertEqual(out.get(1, 2), Color(7, 8, 9))  # white skipped

    def test_insert_without_overlay_raises(self):
        with self.assertRaises(ValueError):
            apply_edits(self.buf, EditOptions(insert=Path("overlay.png")))


if __name__ == "__main__":
    unittest.main()
