"""Tests for minimal-scroll origin calculation and cursor placement."""

from __future__ import annotations

import unittest

from patchexplorer.exploring.viewport import calculate_origin, cursor_placement, max_origin


class CalculateOriginTests(unittest.TestCase):
    def test_visible_selection_keeps_origin(self) -> None:
        self.assertEqual(calculate_origin(5, 10, 50, 7, 9), 5)

    def test_selection_below_scrolls_just_enough(self) -> None:
        self.assertEqual(calculate_origin(5, 10, 50, 20, 22), 13)

    def test_selection_above_scrolls_up_to_start(self) -> None:
        self.assertEqual(calculate_origin(20, 10, 50, 12, 14), 12)

    def test_range_taller_than_view_keeps_end_visible(self) -> None:
        self.assertEqual(calculate_origin(0, 5, 50, 10, 30), 26)

    def test_no_selection_only_clamps(self) -> None:
        self.assertEqual(calculate_origin(7, 10, 50, -1, -1), 7)
        self.assertEqual(calculate_origin(70, 10, 50, -1, -1), 40)

    def test_result_is_always_within_bounds(self) -> None:
        for total in (0, 3, 10, 25):
            for height in (1, 4, 10, 30):
                for origin in range(0, 30, 3):
                    for start in range(0, max(total, 1)):
                        for end in (start, min(start + 2, max(total - 1, 0))):
                            if end < start:
                                continue
                            result = calculate_origin(origin, height, total, start, end)
                            self.assertGreaterEqual(result, 0)
                            self.assertLessEqual(result, max_origin(height, total))
                            if origin <= max_origin(height, total) and origin <= start and end < origin + height:
                                self.assertEqual(result, origin)

    def test_cursor_placement_is_view_relative(self) -> None:
        placement = cursor_placement(20, 22, 13)

        self.assertEqual(placement.cursor_row, 9)
        self.assertEqual(placement.range_select_start, 20)
        self.assertEqual(placement.origin, 13)


if __name__ == "__main__":
    unittest.main()
