"""
Marker center estimation.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np


def diagonal_midpoint(corners: np.ndarray) -> Tuple[int, int]:
    """Midpoint of the diagonal joining corner 0 and corner 2.

    Integer coordinates are floored. Only one diagonal is used; for a planar
    parallelogram both diagonals meet at this point, for other quadrilaterals
    this is not the centroid.

    Args:
        corners: Four ordered points, shape (4, 2) or (4, 1, 2)

    Returns:
        (x, y) pixel coordinates
    """
    points = np.asarray(corners).reshape(-1, 2)
    if len(points) != 4:
        raise ValueError(f"Expected 4 corners, got {len(points)}")

    p0 = points[0].astype(np.int64)
    p2 = points[2].astype(np.int64)
    center = (p0 + p2) // 2
    return int(center[0]), int(center[1])


class GeometryEstimator:
    """Computes the marker center from validated corners."""

    def center(self, corners: np.ndarray) -> Tuple[int, int]:
        return diagonal_midpoint(corners)
