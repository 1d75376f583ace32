"""
Test cases for rasterization density planning.
"""

import unittest

from pdf_stitcher.planner import plan_density
from pdf_stitcher.utils import round_half_up


class TestPlanDensity(unittest.TestCase):
    """Test cases for plan_density."""

    def test_default_width_uses_a4_baseline(self):
        """1200px on an unknown page size is planned against 595pt."""
        self.assertEqual(plan_density(1200), 145)

    def test_baseline_formula_for_various_widths(self):
        """Without a reference width DPI = round(width * 72 / 595)."""
        for width in (100, 595, 800, 1000, 1600):
            with self.subTest(width=width):
                expected = min(round_half_up(width * 72 / 595), 200)
                self.assertEqual(plan_density(width), expected)

    def test_large_page_uses_its_own_width(self):
        """A 1190pt wide page needs half the density of A4."""
        self.assertEqual(plan_density(1200, 1190.0), 73)

    def test_page_at_threshold_keeps_baseline(self):
        """Only pages strictly wider than 800pt change the plan."""
        self.assertEqual(plan_density(1200, 800.0), 145)
        self.assertEqual(plan_density(1200, 612.0), 145)

    def test_dpi_is_capped(self):
        """Very wide targets never exceed the 200 DPI ceiling."""
        self.assertEqual(plan_density(3000), 200)
        self.assertEqual(plan_density(5000, 1190.0), 200)

    def test_custom_ceiling(self):
        """The ceiling is configurable."""
        self.assertEqual(plan_density(1200, max_dpi=100), 100)

    def test_tiny_width_still_positive(self):
        """The planner always returns a positive DPI."""
        self.assertEqual(plan_density(1), 1)


class TestRoundHalfUp(unittest.TestCase):
    """Halves round up, unlike the built-in round()."""

    def test_rounding(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(72.6), 73)
        self.assertEqual(round_half_up(145.2), 145)


if __name__ == '__main__':
    unittest.main()
