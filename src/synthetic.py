"""
Synthetic frame source.

Generates frames with a green quadrilateral moving over a light background,
for demos without a camera and for reproducible tests.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

LOGGER = logging.getLogger(__name__)

MARKER_COLOR = (40, 200, 30)  # BGR
BACKGROUND_COLOR = (235, 235, 235)


def marker_corners(
    center: Tuple[float, float],
    size: Tuple[float, float],
    angle: float = 0.0,
) -> np.ndarray:
    """Corners of a rotated rectangle, shape (4, 2) int32."""
    box = cv2.boxPoints(((float(center[0]), float(center[1])), (float(size[0]), float(size[1])), float(angle)))
    return np.round(box).astype(np.int32)


def draw_marker(frame: np.ndarray, corners: np.ndarray, color=MARKER_COLOR) -> np.ndarray:
    """Fill a polygon on the frame in place and return it."""
    cv2.fillPoly(frame, [np.asarray(corners, dtype=np.int32).reshape(-1, 1, 2)], color)
    return frame


class SyntheticFrameSource:
    """
    Frame source that yields ``num_frames`` frames then reports end of stream.

    The marker travels on a circle around the frame center while rotating.
    """

    def __init__(
        self,
        num_frames: int = 300,
        width: int = 640,
        height: int = 480,
        marker_size: Tuple[int, int] = (120, 90),
        noise: int = 0,
        seed: Optional[int] = 0,
    ):
        self.num_frames = num_frames
        self.width = width
        self.height = height
        self.marker_size = marker_size
        self.noise = noise
        self.rng = np.random.default_rng(seed)
        self.frame_index = 0
        self.truth: List[np.ndarray] = []

    def initialize(self) -> bool:
        LOGGER.info(
            "Synthetic source: %d frame(s) of %dx%d",
            self.num_frames,
            self.width,
            self.height,
        )
        return True

    def corners_at(self, index: int) -> np.ndarray:
        """Ground-truth marker corners for a frame index."""
        phase = 2.0 * np.pi * index / max(self.num_frames, 1)
        radius = min(self.width, self.height) * 0.2
        center = (
            self.width / 2 + radius * np.cos(phase),
            self.height / 2 + radius * np.sin(phase),
        )
        angle = (index * 3) % 90
        return marker_corners(center, self.marker_size, angle)

    def render(self, index: int) -> np.ndarray:
        frame = np.full((self.height, self.width, 3), BACKGROUND_COLOR, dtype=np.uint8)
        draw_marker(frame, self.corners_at(index))
        if self.noise > 0:
            noise = self.rng.integers(0, self.noise, (self.height, self.width, 3), dtype=np.uint8)
            frame = cv2.add(frame, noise)
        return frame

    def capture_frame(self):
        if self.frame_index >= self.num_frames:
            return None
        frame = self.render(self.frame_index)
        self.truth.append(self.corners_at(self.frame_index))
        self.frame_index += 1
        return frame

    def cleanup(self):
        self.frame_index = self.num_frames
