"""
Contour extraction and candidate selection.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

LOGGER = logging.getLogger(__name__)


def contour_perimeter(contour: np.ndarray) -> float:
    """Closed polyline length of a contour, including the last-to-first edge."""
    if contour is None or len(contour) == 0:
        return 0.0
    return float(cv2.arcLength(contour, True))


class ContourExtractor:
    """Finds outer foreground boundaries and keeps the longest one."""

    def extract(self, mask: np.ndarray) -> List[np.ndarray]:
        """Trace the external boundaries of all 8-connected foreground regions.

        Args:
            mask: Binary mask (0/255)

        Returns:
            List of contours, each of shape (N, 1, 2) int32
        """
        if mask is None or mask.ndim != 2:
            raise ValueError("Mask must be a single-channel 2D array.")
        contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return list(contours)

    @staticmethod
    def select_largest(contours: Sequence[np.ndarray]) -> Optional[Tuple[np.ndarray, float]]:
        """Pick the contour with the greatest perimeter.

        Ties keep the first contour in trace order. Zero-length contours are
        never selected.

        Returns:
            (contour, perimeter) or None when nothing qualifies
        """
        best: Optional[np.ndarray] = None
        best_length = 0.0
        for contour in contours:
            length = contour_perimeter(contour)
            if length > best_length:
                best = contour
                best_length = length

        if best is None:
            return None
        return best, best_length

    def find_best(self, mask: np.ndarray) -> Optional[Tuple[np.ndarray, float]]:
        contours = self.extract(mask)
        LOGGER.debug("Found %d contour(s)", len(contours))
        return self.select_largest(contours)
