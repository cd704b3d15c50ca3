"""
Frame-rate measurement.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class FrameRateSample:
    """Frame rate reading taken once per loop iteration."""

    fps: float = 0.0
    frame_count: int = 0  # Frames counted in the current window before this one
    elapsed: float = 0.0  # Seconds since the window started


class FrameRateCounter:
    """
    Counts frames over a fixed time window.

    The rate is the number of frames seen in the current window divided by
    the window's elapsed time. The window restarts once it reaches
    ``window`` seconds.
    """

    def __init__(self, window: float = 1.0, clock: Callable[[], float] = time.perf_counter):
        self.window = window
        self.clock = clock
        self.count = 0
        self.window_start = clock()

    def reset(self):
        self.count = 0
        self.window_start = self.clock()

    def tick(self) -> FrameRateSample:
        """Register one frame and return the rate for the current window."""
        now = self.clock()
        elapsed = now - self.window_start
        fps = self.count / elapsed if elapsed > 0 else 0.0
        sample = FrameRateSample(fps=fps, frame_count=self.count, elapsed=elapsed)

        self.count += 1
        if elapsed >= self.window:
            self.window_start = now
            self.count = 0
        return sample
