"""
Morphological cleanup of segmentation masks.
"""

from __future__ import annotations

import cv2
import numpy as np


class MaskRefiner:
    """Removes speckle noise (opening) then fills small holes (closing)."""

    def __init__(self, kernel_size: int = 5):
        if kernel_size <= 0 or kernel_size % 2 == 0:
            raise ValueError(f"Kernel size must be a positive odd number, got {kernel_size}")
        self.kernel_size = kernel_size
        self.kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))

    def open(self, mask: np.ndarray) -> np.ndarray:
        return cv2.morphologyEx(mask, cv2.MORPH_OPEN, self.kernel)

    def close(self, mask: np.ndarray) -> np.ndarray:
        return cv2.morphologyEx(mask, cv2.MORPH_CLOSE, self.kernel)

    def refine(self, mask: np.ndarray) -> np.ndarray:
        """Return a cleaned copy of ``mask``.

        Opening must run first, otherwise closing would merge noise into
        solid blobs before it could be removed.
        """
        if mask is None or mask.ndim != 2:
            raise ValueError("Mask must be a single-channel 2D array.")
        return self.close(self.open(mask))
