"""
Tests for mask refinement (opening + closing).
"""

import os
import sys
import unittest

import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from detection import MaskRefiner  # type: ignore


def square_mask(size=120, top_left=(30, 30), side=50):
    mask = np.zeros((size, size), dtype=np.uint8)
    y, x = top_left
    mask[y:y + side, x:x + side] = 255
    return mask


class TestMaskRefiner(unittest.TestCase):
    """Test cases for the MaskRefiner."""

    def setUp(self):
        self.refiner = MaskRefiner(kernel_size=5)

    def test_speckles_are_removed(self):
        mask = np.zeros((100, 100), dtype=np.uint8)
        mask[10, 10] = 255
        mask[50, 80] = 255
        mask[70:73, 20:23] = 255  # 3x3 blob, smaller than the kernel

        refined = self.refiner.refine(mask)
        self.assertEqual(np.count_nonzero(refined), 0)

    def test_small_holes_are_filled(self):
        clean = square_mask()
        holed = clean.copy()
        holed[50:52, 50:52] = 0

        refined = self.refiner.refine(holed)
        self.assertTrue(np.array_equal(refined, clean))

    def test_solid_blob_survives(self):
        mask = square_mask()
        self.assertTrue(np.array_equal(self.refiner.refine(mask), mask))

    def test_refine_is_idempotent(self):
        mask = square_mask()
        mask[50:52, 50:52] = 0
        mask[5, 5] = 255
        mask[100:102, 10:12] = 255

        once = self.refiner.refine(mask)
        twice = self.refiner.refine(once)
        self.assertTrue(np.array_equal(once, twice))

    def test_dimensions_preserved_and_input_untouched(self):
        mask = np.zeros((37, 53), dtype=np.uint8)
        mask[10:30, 10:40] = 255
        mask[2, 2] = 255
        original = mask.copy()

        refined = self.refiner.refine(mask)
        self.assertEqual(refined.shape, mask.shape)
        self.assertTrue(np.array_equal(mask, original))

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            MaskRefiner(kernel_size=4)
        with self.assertRaises(ValueError):
            MaskRefiner(kernel_size=0)
        with self.assertRaises(ValueError):
            self.refiner.refine(np.zeros((10, 10, 3), dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
