"""
Marker detection module.

Detects a single green quadrilateral marker in a frame and reports its four
corners and center.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from detection import (
    ChannelOrder,
    ContourExtractor,
    GeometryEstimator,
    MaskRefiner,
    Segmenter,
    ShapeValidator,
)

LOGGER = logging.getLogger(__name__)


class DetectionStatus(Enum):
    """Per-frame detection outcome."""
    DETECTED = "detected"
    NO_FOREGROUND = "no_foreground"  # No contour survived segmentation/cleanup
    REJECTED_SHAPE = "rejected_shape"  # Largest contour is not a quadrilateral


@dataclass
class DetectionConfiguration:
    """Configuration for the marker detector."""

    threshold: int = 30  # Greenness cutoff (0-255)
    kernel_size: int = 5  # Square morphology kernel side
    epsilon_ratio: float = 0.02  # Polygon tolerance as a fraction of perimeter
    channel_order: str = "bgr"

    @classmethod
    def from_dict(cls, config: Optional[Dict] = None) -> "DetectionConfiguration":
        cfg_dict = dict(config or {})
        return cls(**{
            k: v for k, v in cfg_dict.items()
            if k in cls.__dataclass_fields__
        })


@dataclass
class MarkerDetection:
    """A detected marker: corners in contour order and diagonal-midpoint center."""

    corners: np.ndarray  # shape (4, 2), int32
    center: Tuple[int, int]


@dataclass
class DetectionFrameResult:
    """Result container for marker detection on a frame."""

    status: DetectionStatus
    mask: np.ndarray
    contour: Optional[np.ndarray] = None
    perimeter: float = 0.0
    polygon: Optional[np.ndarray] = None
    detection: Optional[MarkerDetection] = None

    @property
    def detected(self) -> bool:
        return self.status is DetectionStatus.DETECTED


class MarkerDetector:
    """Handles marker detection in video frames."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize marker detector.

        Args:
            config: Detection configuration dictionary
        """
        self.config = DetectionConfiguration.from_dict(config)
        self.channel_order = ChannelOrder.parse(self.config.channel_order)

        self.segmenter = Segmenter(self.config.threshold, self.channel_order)
        self.refiner = MaskRefiner(self.config.kernel_size)
        self.extractor = ContourExtractor()
        self.validator = ShapeValidator(self.config.epsilon_ratio)
        self.geometry = GeometryEstimator()

        LOGGER.info(
            "MarkerDetector initialized: threshold=%s, kernel=%sx%s, epsilon_ratio=%s, channels=%s",
            self.config.threshold,
            self.config.kernel_size,
            self.config.kernel_size,
            self.config.epsilon_ratio,
            self.channel_order.value,
        )

    def detect(self, frame: np.ndarray) -> DetectionFrameResult:
        """Detect the marker in the given frame.

        Args:
            frame: Color frame (H, W, 3), uint8, in the configured channel order

        Returns:
            DetectionFrameResult with the refined mask and, when found, the marker
        """
        mask = self.refiner.refine(self.segmenter.segment(frame))

        best = self.extractor.find_best(mask)
        if best is None:
            LOGGER.debug("No foreground contour found")
            return DetectionFrameResult(status=DetectionStatus.NO_FOREGROUND, mask=mask)

        contour, perimeter = best
        polygon = self.validator.validate(contour, perimeter)
        if polygon is None:
            LOGGER.debug("Largest contour (perimeter %.1f) is not a quadrilateral", perimeter)
            return DetectionFrameResult(
                status=DetectionStatus.REJECTED_SHAPE,
                mask=mask,
                contour=contour,
                perimeter=perimeter,
            )

        detection = MarkerDetection(corners=polygon, center=self.geometry.center(polygon))
        LOGGER.debug("Marker detected at %s", detection.center)
        return DetectionFrameResult(
            status=DetectionStatus.DETECTED,
            mask=mask,
            contour=contour,
            perimeter=perimeter,
            polygon=polygon,
            detection=detection,
        )
