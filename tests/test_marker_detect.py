"""
Tests for marker detection functionality.
"""

import os
import sys
import unittest

import cv2
import numpy as np

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from marker_detect import (  # type: ignore
    DetectionConfiguration,
    DetectionStatus,
    MarkerDetector,
)
from synthetic import MARKER_COLOR, draw_marker, marker_corners  # type: ignore

WHITE = (255, 255, 255)


def blank(width=320, height=240, color=WHITE):
    return np.full((height, width, 3), color, dtype=np.uint8)


class TestMarkerDetect(unittest.TestCase):
    """Test cases for marker detection."""

    def setUp(self):
        self.detector = MarkerDetector()

    def test_marker_detection_initialization(self):
        config = self.detector.config
        self.assertEqual(config.threshold, 30)
        self.assertEqual(config.kernel_size, 5)
        self.assertAlmostEqual(config.epsilon_ratio, 0.02)
        self.assertEqual(config.channel_order, "bgr")

    def test_configuration_ignores_unknown_keys(self):
        config = DetectionConfiguration.from_dict({"threshold": 50, "unused": True})
        self.assertEqual(config.threshold, 50)
        detector = MarkerDetector({"threshold": 50, "kernel_size": 7})
        self.assertEqual(detector.segmenter.threshold, 50)
        self.assertEqual(detector.refiner.kernel_size, 7)

    def test_black_frame_has_no_detection(self):
        result = self.detector.detect(blank(color=(0, 0, 0)))
        self.assertEqual(result.status, DetectionStatus.NO_FOREGROUND)
        self.assertFalse(result.detected)
        self.assertIsNone(result.detection)
        self.assertEqual(np.count_nonzero(result.mask), 0)

    def test_green_square_detected_at_true_center(self):
        frame = blank()
        cv2.rectangle(frame, (100, 60), (199, 159), MARKER_COLOR, -1)

        result = self.detector.detect(frame)

        expected_mask = np.zeros((240, 320), dtype=np.uint8)
        expected_mask[60:160, 100:200] = 255
        self.assertTrue(np.array_equal(result.mask, expected_mask))

        self.assertEqual(result.status, DetectionStatus.DETECTED)
        corners = {tuple(p) for p in result.detection.corners.tolist()}
        self.assertEqual(corners, {(100, 60), (100, 159), (199, 159), (199, 60)})

        cx, cy = result.detection.center
        self.assertLessEqual(abs(cx - 149.5), 1.0)
        self.assertLessEqual(abs(cy - 109.5), 1.0)

    def test_larger_of_two_markers_is_selected(self):
        layouts = [
            ((20, 20, 50, 50), (150, 100, 280, 210)),
            ((250, 170, 290, 210), (20, 20, 150, 130)),
        ]
        for small, large in layouts:
            frame = blank()
            cv2.rectangle(frame, small[:2], small[2:], MARKER_COLOR, -1)
            cv2.rectangle(frame, large[:2], large[2:], MARKER_COLOR, -1)

            result = self.detector.detect(frame)
            self.assertTrue(result.detected)
            expected = ((large[0] + large[2]) // 2, (large[1] + large[3]) // 2)
            self.assertEqual(result.detection.center, expected)

    def test_non_quadrilaterals_are_rejected(self):
        triangle = np.array([(160, 30), (60, 200), (260, 200)], dtype=np.int32)
        angles = np.linspace(0, 2 * np.pi, 5, endpoint=False) - np.pi / 2
        pentagon = np.stack([160 + 80 * np.cos(angles), 120 + 80 * np.sin(angles)], axis=1)

        for shape in (triangle, pentagon):
            frame = draw_marker(blank(), shape)
            result = self.detector.detect(frame)
            self.assertEqual(result.status, DetectionStatus.REJECTED_SHAPE)
            self.assertIsNone(result.detection)
            self.assertIsNotNone(result.contour)

    def test_rotated_marker_center(self):
        corners = marker_corners((170, 115), (110, 70), angle=35)
        frame = draw_marker(blank(), corners)

        result = self.detector.detect(frame)
        self.assertTrue(result.detected)
        self.assertEqual(result.detection.corners.shape, (4, 2))
        cx, cy = result.detection.center
        self.assertLessEqual(abs(cx - 170), 2)
        self.assertLessEqual(abs(cy - 115), 2)

    def test_speckle_noise_does_not_break_detection(self):
        frame = blank()
        cv2.rectangle(frame, (100, 60), (199, 159), MARKER_COLOR, -1)
        rng = np.random.default_rng(11)
        ys = rng.integers(0, 240, 150)
        xs = rng.integers(0, 320, 150)
        frame[ys, xs] = MARKER_COLOR

        result = self.detector.detect(frame)
        self.assertTrue(result.detected)
        self.assertEqual(result.detection.center, (149, 109))

    def test_input_frame_not_modified(self):
        frame = blank()
        cv2.rectangle(frame, (100, 60), (199, 159), MARKER_COLOR, -1)
        original = frame.copy()
        self.detector.detect(frame)
        self.assertTrue(np.array_equal(frame, original))

    def test_rgb_channel_order(self):
        bgr = blank()
        cv2.rectangle(bgr, (100, 60), (199, 159), MARKER_COLOR, -1)
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)

        result = MarkerDetector({"channel_order": "rgb"}).detect(rgb)
        self.assertTrue(result.detected)
        self.assertEqual(result.detection.center, (149, 109))


if __name__ == "__main__":
    unittest.main()
