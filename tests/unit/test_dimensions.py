import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from svgjpeg_core.errors import InvalidDocumentSize
from svgjpeg_renderer.dimensions import resolve_dimensions, round_half_away
from svgjpeg_renderer.models import Dimensions


class ResolveDimensionsTests(unittest.TestCase):
    def test_intrinsic_size_when_width_absent(self):
        self.assertEqual(resolve_dimensions(200.0, 100.0), Dimensions(200, 100))
        self.assertEqual(resolve_dimensions(100.5, 10.4), Dimensions(101, 10))

    def test_tiny_document_is_at_least_one_pixel(self):
        self.assertEqual(resolve_dimensions(0.2, 0.3), Dimensions(1, 1))

    def test_requested_width_keeps_aspect_ratio(self):
        self.assertEqual(resolve_dimensions(100.0, 100.0, 50), Dimensions(50, 50))
        self.assertEqual(resolve_dimensions(400.0, 300.0, 200), Dimensions(200, 150))
        self.assertEqual(resolve_dimensions(3.0, 1.0, 1), Dimensions(1, 1))

    def test_height_within_one_pixel_of_aspect(self):
        sizes = [(1.0, 1.0), (13.7, 91.3), (1920.0, 1080.0), (0.5, 700.0), (333.3, 0.9)]
        for iw, ih in sizes:
            for width in (1, 7, 64, 1000):
                dims = resolve_dimensions(iw, ih, width)
                self.assertEqual(dims.width, width)
                self.assertLessEqual(abs(dims.height - width * ih / iw), 1.0)
                self.assertGreaterEqual(dims.height, 1)

    def test_degenerate_sizes_raise(self):
        for iw, ih in [(0.0, 10.0), (10.0, 0.0), (-1.0, 5.0), (5.0, -3.0), (float("nan"), 5.0)]:
            with self.subTest(size=(iw, ih)):
                with self.assertRaises(InvalidDocumentSize):
                    resolve_dimensions(iw, ih, 50)

    def test_non_positive_requested_width_rejected(self):
        with self.assertRaises(ValueError):
            resolve_dimensions(10.0, 10.0, 0)

    def test_round_half_away_from_zero(self):
        self.assertEqual(round_half_away(2.5), 3)
        self.assertEqual(round_half_away(3.5), 4)
        self.assertEqual(round_half_away(2.49), 2)
        self.assertEqual(round_half_away(-2.5), -3)

    def test_dimensions_reject_zero(self):
        with self.assertRaises(ValueError):
            Dimensions(0, 5)


if __name__ == "__main__":
    unittest.main()
