"""
Video input.

Opens a camera device or a video file and hands out frames one at a time.
"""

import logging
import platform
from typing import List, Optional

import cv2
import numpy as np


class VideoProcessor:
    """Frame source backed by ``cv2.VideoCapture``."""

    def __init__(self, config=None):
        """Initialize video source settings.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.cap: Optional[cv2.VideoCapture] = None
        self.logger = logging.getLogger(__name__)

        self.camera_id = self.config.get('camera_id', 0)
        self.width = self.config.get('video_width', 640)
        self.height = self.config.get('video_height', 480)
        self.fps = self.config.get('video_fps', 30)
        self.video_file = self.config.get('video_file')

        self.backend_priority = self._resolve_backend_priority(
            self.config.get('camera_backend_priority')
        )
        self.selected_backend: Optional[int] = None
        self.max_init_attempts = self.config.get('camera_init_attempts', 10)

        # Frame read during camera warmup, handed out by the first capture_frame()
        self._pending_frame: Optional[np.ndarray] = None
        self.frames_read = 0

    @staticmethod
    def _resolve_backend_priority(user_priority: Optional[List[int]]) -> List[int]:
        """Determine backend priority order based on platform and config."""
        if user_priority:
            return list(user_priority)

        system = platform.system()
        names = {
            'Darwin': ['CAP_AVFOUNDATION', 'CAP_QT'],
            'Windows': ['CAP_DSHOW', 'CAP_MSMF'],
        }.get(system, ['CAP_V4L2', 'CAP_GSTREAMER'])
        names.append('CAP_ANY')

        backends = [getattr(cv2, name) for name in names if getattr(cv2, name, None) is not None]
        return backends or [cv2.CAP_ANY]

    @staticmethod
    def _backend_name(backend: Optional[int]) -> str:
        """Return human-readable name for backend constant."""
        if backend is None:
            return "Unknown"

        for attr in dir(cv2):
            if attr.startswith("CAP_") and getattr(cv2, attr) == backend:
                return attr
        return f"Backend({backend})"

    @property
    def is_open(self) -> bool:
        return self.cap is not None and self.cap.isOpened()

    def initialize(self):
        """Open the configured source (video file if set, otherwise camera).

        Returns:
            bool: True if the source is ready to deliver frames
        """
        if self.video_file:
            return self.load_video_file(self.video_file)
        return self.open_camera()

    def open_camera(self):
        """Open the camera, trying each backend in priority order.

        Returns:
            bool: True if a backend delivered a usable frame
        """
        self.cleanup()

        for backend in self.backend_priority:
            name = self._backend_name(backend)
            self.logger.info("Opening camera %s with backend %s", self.camera_id, name)
            try:
                cap = cv2.VideoCapture(self.camera_id, backend)
            except cv2.error as e:
                self.logger.error("Backend %s raised while opening camera %s: %s", name, self.camera_id, e)
                continue

            if not cap.isOpened():
                self.logger.warning("Failed to open camera %s with backend %s", self.camera_id, name)
                cap.release()
                continue

            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            cap.set(cv2.CAP_PROP_FPS, self.fps)

            first_frame = self._warmup_camera(cap)
            if first_frame is None:
                self.logger.warning("Camera opened but failed to provide frames (backend %s)", name)
                cap.release()
                continue

            self.cap = cap
            self.selected_backend = backend
            self._pending_frame = first_frame
            info = self.get_frame_info()
            self.logger.info(
                "Camera initialized with backend %s: %sx%s @ %sfps",
                name,
                info['width'],
                info['height'],
                info['fps'],
            )
            return True

        self.logger.error(
            "Unable to open camera %s with available backends: %s",
            self.camera_id,
            [self._backend_name(b) for b in self.backend_priority],
        )
        return False

    def _warmup_camera(self, cap: cv2.VideoCapture) -> Optional[np.ndarray]:
        """Read until the camera returns a non-black frame."""
        for attempt in range(1, self.max_init_attempts + 1):
            ret, frame = cap.read()
            if not ret or frame is None or frame.size == 0:
                continue
            if frame.mean() == 0:
                self.logger.debug("Warmup frame %s is black; retrying...", attempt)
                continue
            return frame
        return None

    def load_video_file(self, filepath):
        """Use a video file instead of a camera.

        Returns:
            bool: True if the file could be opened
        """
        self.cleanup()
        cap = cv2.VideoCapture(str(filepath))
        if not cap.isOpened():
            self.logger.error("Failed to open video file: %s", filepath)
            cap.release()
            return False

        self.cap = cap
        self.logger.info("Video file loaded: %s", filepath)
        return True

    def capture_frame(self):
        """Return the next frame.

        Returns:
            np.ndarray or None: BGR frame, or None at end of stream
        """
        if self._pending_frame is not None:
            frame, self._pending_frame = self._pending_frame, None
            self.frames_read += 1
            return frame

        if not self.is_open:
            return None

        ret, frame = self.cap.read()
        if not ret or frame is None or frame.size == 0:
            self.logger.info("Video stream ended after %d frame(s)", self.frames_read)
            return None

        self.frames_read += 1
        return frame

    def get_frame_info(self):
        """Get information about the current video stream.

        Returns:
            dict: Frame information
        """
        if self.cap is None:
            return {}

        return {
            'width': int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            'height': int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            'fps': int(self.cap.get(cv2.CAP_PROP_FPS)),
            'backend': self._backend_name(self.selected_backend),
        }

    def cleanup(self):
        """Release the capture device."""
        self._pending_frame = None
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            self.logger.info("Video source released")
