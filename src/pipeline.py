"""
Frame pipeline.

Pulls frames from a source one at a time, runs marker detection, annotates
the frame and hands it to a display sink until the stream ends or the user
asks to quit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from marker_detect import DetectionFrameResult, MarkerDetector
from metrics import FrameRateCounter, FrameRateSample
from overlay import OverlayRenderer

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass
class ProcessedFrame:
    """Everything produced for one frame."""

    index: int
    result: DetectionFrameResult
    annotated: np.ndarray
    frame_rate: FrameRateSample


class FramePipeline:
    """
    Single-threaded acquire / detect / present loop.

    ``source`` must provide ``capture_frame()`` returning a frame or None at
    end of stream. ``sink`` must provide ``present(frame, mask, detection=None)``
    and ``handle_events()`` returning False when the user wants to quit.
    """

    def __init__(
        self,
        source,
        sink,
        detector: Optional[MarkerDetector] = None,
        renderer: Optional[OverlayRenderer] = None,
        frame_rate: Optional[FrameRateCounter] = None,
        max_frames: Optional[int] = None,
    ):
        self.source = source
        self.sink = sink
        self.detector = detector or MarkerDetector()
        self.renderer = renderer or OverlayRenderer()
        self.frame_rate = frame_rate or FrameRateCounter()
        self.max_frames = max_frames

        self.frame_index = 0
        self.detections = 0

    def process_frame(self, frame: np.ndarray) -> ProcessedFrame:
        """Detect the marker in one frame and build its annotated copy."""
        result = self.detector.detect(frame)
        sample = self.frame_rate.tick()
        annotated = self.renderer.annotate(frame, result.detection, sample.fps)

        processed = ProcessedFrame(
            index=self.frame_index,
            result=result,
            annotated=annotated,
            frame_rate=sample,
        )
        self.frame_index += 1
        if result.detected:
            self.detections += 1
        return processed

    def step(self) -> bool:
        """Run one loop iteration.

        Returns:
            bool: False when the loop should stop
        """
        frame = self.source.capture_frame()
        if frame is None:
            LOGGER.info("End of stream reached after %d frame(s)", self.frame_index)
            return False

        processed = self.process_frame(frame)
        self.sink.present(processed.annotated, processed.result.mask, processed.result.detection)

        if not self.sink.handle_events():
            return False
        if self.max_frames is not None and self.frame_index >= self.max_frames:
            LOGGER.info("Frame limit of %d reached", self.max_frames)
            return False
        return True

    def run(self) -> int:
        """Run until end of stream, frame limit or quit request.

        Returns:
            int: Process exit code
        """
        try:
            while self.step():
                pass
        except KeyboardInterrupt:
            LOGGER.info("Interrupted by user")

        LOGGER.info(
            "Processed %d frame(s), marker detected in %d",
            self.frame_index,
            self.detections,
        )
        return EXIT_OK
