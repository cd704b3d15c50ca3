"""
Color segmentation for the green marker.

Converts a three-channel frame into a binary mask of pixels whose green
intensity dominates the other two channels.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

import cv2
import numpy as np


FOREGROUND = 255
BACKGROUND = 0


class ChannelOrder(Enum):
    """Supported channel layouts for incoming frames."""
    BGR = "bgr"  # OpenCV capture default
    RGB = "rgb"

    @property
    def blue(self) -> int:
        return 0 if self is ChannelOrder.BGR else 2

    @property
    def green(self) -> int:
        return 1

    @property
    def red(self) -> int:
        return 2 if self is ChannelOrder.BGR else 0

    @classmethod
    def parse(cls, value: Union[str, "ChannelOrder"]) -> "ChannelOrder":
        """Accept either an enum member or its config string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown channel order: {value!r}") from None


class Segmenter:
    """Builds a foreground mask from the green-dominance of each pixel."""

    def __init__(self, threshold: int = 30, channel_order: Union[str, ChannelOrder] = ChannelOrder.BGR):
        if not 0 <= threshold <= 255:
            raise ValueError(f"Threshold must be within [0, 255], got {threshold}")
        self.threshold = threshold
        self.channel_order = ChannelOrder.parse(channel_order)

    def split_channels(self, frame: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return (blue, green, red) planes regardless of the frame layout."""
        order = self.channel_order
        planes = cv2.split(frame)
        return planes[order.blue], planes[order.green], planes[order.red]

    def greenness(self, frame: np.ndarray) -> np.ndarray:
        """Compute ``green - blue - red`` with uint8 saturation at zero."""
        blue, green, red = self.split_channels(frame)
        # cv2.subtract saturates instead of wrapping around
        return cv2.subtract(cv2.subtract(green, blue), red)

    def segment(self, frame: np.ndarray) -> np.ndarray:
        """Segment the marker color.

        Args:
            frame: Color frame of shape (H, W, 3), dtype uint8

        Returns:
            np.ndarray: Mask of shape (H, W) with values 0 or 255
        """
        if frame is None or frame.size == 0:
            raise ValueError("Frame cannot be empty.")
        if frame.ndim != 3 or frame.shape[2] != 3:
            raise ValueError(f"Expected a 3-channel frame, got shape {frame.shape}")

        if frame.dtype != np.uint8:
            raise ValueError(f"Expected an 8-bit frame, got dtype {frame.dtype}")

        greenness = self.greenness(frame)
        _, mask = cv2.threshold(greenness, self.threshold, FOREGROUND, cv2.THRESH_BINARY)
        return mask
