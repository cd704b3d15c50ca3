"""
Polygon approximation and quadrilateral validation.
"""

from __future__ import annotations

from typing import Optional

import cv2
import numpy as np

from .contours import contour_perimeter


class ShapeValidator:
    """
    Accepts a contour only when it simplifies to exactly ``vertex_count`` points.

    The Douglas-Peucker tolerance scales with the contour's own perimeter, so
    the decision does not depend on how far the marker is from the camera.
    Returned vertices keep the traversal order of the traced contour, which
    makes indices 0/2 and 1/3 opposite corners.
    """

    def __init__(self, epsilon_ratio: float = 0.02, vertex_count: int = 4):
        if not 0.0 < epsilon_ratio < 1.0:
            raise ValueError(f"Epsilon ratio must be within (0, 1), got {epsilon_ratio}")
        self.epsilon_ratio = epsilon_ratio
        self.vertex_count = vertex_count

    def approximate(self, contour: np.ndarray, perimeter: Optional[float] = None) -> np.ndarray:
        """Simplify a closed contour.

        Args:
            contour: Contour of shape (N, 1, 2) or (N, 2)
            perimeter: Precomputed perimeter, recomputed when omitted

        Returns:
            np.ndarray: Polygon vertices of shape (K, 2), int32
        """
        points = np.asarray(contour, dtype=np.int32).reshape(-1, 1, 2)
        if perimeter is None:
            perimeter = contour_perimeter(points)
        epsilon = self.epsilon_ratio * perimeter
        approx = cv2.approxPolyDP(points, epsilon, True)
        return approx.reshape(-1, 2)

    def validate(self, contour: np.ndarray, perimeter: Optional[float] = None) -> Optional[np.ndarray]:
        """Return the polygon if it has the expected vertex count, else None."""
        polygon = self.approximate(contour, perimeter)
        if len(polygon) != self.vertex_count:
            return None
        return polygon
