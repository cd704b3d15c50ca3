"""
Overlay rendering module.

Draws the detected marker (outline, diagonals, center) and the frame-rate
readout on a copy of the camera frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np

from marker_detect import MarkerDetection

LOGGER = logging.getLogger(__name__)


@dataclass
class Overlay2D:
    """Definition of a 2D overlay element."""

    overlay_type: str  # "text", "circle", "line", "polygon"
    position: Tuple[int, int]  # Screen position (x, y)
    color: Tuple[int, int, int] = (0, 0, 255)
    thickness: int = 2
    # Type-specific parameters
    text: str = ""
    font_scale: float = 0.7
    radius: int = 5  # For circles
    end_position: Optional[Tuple[int, int]] = None  # For lines
    points: Optional[np.ndarray] = None  # For polygons


@dataclass
class OverlayConfiguration:
    """Configuration for the overlay renderer (colors are BGR)."""

    edge_color: Tuple[int, int, int] = (0, 0, 255)
    center_color: Tuple[int, int, int] = (255, 0, 0)
    text_color: Tuple[int, int, int] = (0, 0, 255)
    thickness: int = 2
    center_radius: int = 5
    font_scale: float = 0.7
    fps_offset: Tuple[int, int] = (150, 30)  # (distance from right edge, baseline y)
    antialiasing: bool = True


class OverlayRenderer:
    """
    Renders detection annotations onto frames.

    Each call to :meth:`annotate` builds a fresh list of 2D overlay elements
    and draws them on a copy, so the captured frame is never modified.
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize overlay renderer.

        Args:
            config: Configuration dictionary with overlay settings
        """
        cfg = config or {}
        defaults = OverlayConfiguration()
        self.config = OverlayConfiguration(
            edge_color=tuple(cfg.get("edge_color", defaults.edge_color)),
            center_color=tuple(cfg.get("center_color", defaults.center_color)),
            text_color=tuple(cfg.get("text_color", defaults.text_color)),
            thickness=int(cfg.get("thickness", defaults.thickness)),
            center_radius=int(cfg.get("center_radius", defaults.center_radius)),
            font_scale=float(cfg.get("font_scale", defaults.font_scale)),
            fps_offset=tuple(cfg.get("fps_offset", defaults.fps_offset)),
            antialiasing=bool(cfg.get("antialiasing", defaults.antialiasing)),
        )
        self.overlays_2d: List[Overlay2D] = []

    # ------------------------------------------------------------------ #
    # 2D Overlay Management
    # ------------------------------------------------------------------ #
    def add_2d_overlay(self, overlay: Overlay2D):
        """Add a 2D overlay element."""
        self.overlays_2d.append(overlay)

    def clear_2d_overlays(self):
        """Remove all 2D overlays."""
        self.overlays_2d.clear()

    def add_marker(self, detection: MarkerDetection):
        """Queue the quadrilateral outline, both diagonals and the center dot."""
        corners = np.asarray(detection.corners, dtype=np.int32).reshape(-1, 2)
        color = self.config.edge_color
        thickness = self.config.thickness

        self.add_2d_overlay(Overlay2D("polygon", _point(corners[0]), color, thickness, points=corners))
        for start, end in ((0, 2), (1, 3)):
            self.add_2d_overlay(Overlay2D(
                "line",
                _point(corners[start]),
                color,
                thickness,
                end_position=_point(corners[end]),
            ))
        self.add_2d_overlay(Overlay2D(
            "circle",
            _point(detection.center),
            self.config.center_color,
            thickness=-1,
            radius=self.config.center_radius,
        ))

    def add_frame_rate(self, fps: float, frame_width: int):
        """Queue the frame-rate readout at its fixed top-right position."""
        dx, y = self.config.fps_offset
        self.add_2d_overlay(Overlay2D(
            "text",
            (frame_width - dx, y),
            self.config.text_color,
            self.config.thickness,
            text=f"FPS: {fps:.1f}",
            font_scale=self.config.font_scale,
        ))

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def annotate(
        self,
        frame: np.ndarray,
        detection: Optional[MarkerDetection] = None,
        fps: Optional[float] = None,
    ) -> np.ndarray:
        """Render the detection and frame rate on a copy of the frame.

        Args:
            frame: Source frame (not modified)
            detection: Detected marker, or None to draw no marker overlay
            fps: Frame rate to display, or None to omit the readout

        Returns:
            Annotated copy of the frame
        """
        output = frame.copy()
        self.clear_2d_overlays()
        if detection is not None:
            self.add_marker(detection)
        if fps is not None:
            self.add_frame_rate(fps, output.shape[1])
        return self._render_2d_overlays(output)

    def _render_2d_overlays(self, frame: np.ndarray) -> np.ndarray:
        """Render all 2D overlay elements onto the frame."""
        line_type = cv2.LINE_AA if self.config.antialiasing else cv2.LINE_8

        for overlay in self.overlays_2d:
            try:
                if overlay.overlay_type == "text":
                    cv2.putText(
                        frame,
                        overlay.text,
                        overlay.position,
                        cv2.FONT_HERSHEY_SIMPLEX,
                        overlay.font_scale,
                        overlay.color,
                        overlay.thickness,
                        line_type,
                    )

                elif overlay.overlay_type == "circle":
                    cv2.circle(
                        frame,
                        overlay.position,
                        overlay.radius,
                        overlay.color,
                        overlay.thickness,
                        line_type,
                    )

                elif overlay.overlay_type == "line" and overlay.end_position:
                    cv2.line(
                        frame,
                        overlay.position,
                        overlay.end_position,
                        overlay.color,
                        overlay.thickness,
                        line_type,
                    )

                elif overlay.overlay_type == "polygon" and overlay.points is not None:
                    pts = overlay.points.reshape((-1, 1, 2)).astype(np.int32)
                    cv2.polylines(
                        frame,
                        [pts],
                        isClosed=True,
                        color=overlay.color,
                        thickness=overlay.thickness,
                        lineType=line_type,
                    )

            except cv2.error as e:
                LOGGER.warning("Failed to render 2D overlay: %s", e)

        return frame


def _point(value) -> Tuple[int, int]:
    x, y = np.asarray(value).reshape(2)
    return int(x), int(y)
