"""
Detection subpackage.

Building blocks of the per-frame green-quadrilateral detector:
- Segmenter (green-dominance color mask)
- MaskRefiner (morphological opening + closing)
- ContourExtractor (outer boundaries, longest-perimeter selection)
- ShapeValidator (Douglas-Peucker approximation, 4-vertex check)
- GeometryEstimator (diagonal-midpoint center)
"""

from .contours import ContourExtractor, contour_perimeter
from .geometry import GeometryEstimator, diagonal_midpoint
from .morphology import MaskRefiner
from .segmentation import BACKGROUND, FOREGROUND, ChannelOrder, Segmenter
from .shape import ShapeValidator

__all__ = [
    "BACKGROUND",
    "FOREGROUND",
    "ChannelOrder",
    "ContourExtractor",
    "GeometryEstimator",
    "MaskRefiner",
    "Segmenter",
    "ShapeValidator",
    "contour_perimeter",
    "diagonal_midpoint",
]
