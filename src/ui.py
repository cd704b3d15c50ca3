"""
User interface module.

Shows the annotated frame and the refined mask, and polls the keyboard for
the quit request.
"""

import logging

import cv2

ESC_KEY = 27


class UserInterface:
    """Display sink using OpenCV windows, or a logging sink when headless."""

    def __init__(self, config=None):
        """Initialize user interface.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.frame_window = "Frame"
        self.mask_window = "Mask"
        self.display_width = self.config.get('display_width', 640)
        self.display_height = self.config.get('display_height', 480)
        self.headless = self.config.get('headless', False)

        self.frames_presented = 0

    def initialize(self):
        """Create display windows.

        Returns:
            bool: True if initialization successful, False otherwise
        """
        if self.headless:
            self.logger.info("UI running headless")
            return True

        try:
            for window in (self.frame_window, self.mask_window):
                cv2.namedWindow(window, cv2.WINDOW_NORMAL)
                cv2.resizeWindow(window, self.display_width, self.display_height)
        except cv2.error as e:
            self.logger.error("UI initialization failed: %s", e)
            return False

        self.logger.info("UI initialized: %sx%s", self.display_width, self.display_height)
        return True

    def present(self, frame, mask=None, detection=None):
        """Show one processed frame.

        Args:
            frame: Annotated frame
            mask: Refined mask (diagnostic view)
            detection: Marker detection for this frame, if any
        """
        self.frames_presented += 1

        if self.headless:
            if detection is not None:
                self.logger.info(
                    "Frame %d: marker center %s, corners %s",
                    self.frames_presented,
                    detection.center,
                    detection.corners.tolist(),
                )
            return

        if frame is None:
            return
        try:
            if mask is not None:
                cv2.imshow(self.mask_window, mask)
            cv2.imshow(self.frame_window, frame)
        except cv2.error as e:
            self.logger.error("Frame display error: %s", e)

    def handle_events(self):
        """Handle user input events.

        Returns:
            bool: True to continue running, False to exit
        """
        if self.headless:
            return True

        key = cv2.waitKey(1) & 0xFF
        if key == ord('q') or key == ESC_KEY:
            self.logger.info("User requested exit")
            return False
        if key == ord('h'):
            self._print_help()
        return True

    def _print_help(self):
        """Print help information to console."""
        help_text = """
        GREENQUAD Controls:
        ===================
        q / ESC - Quit application
        h       - Show this help
        """
        print(help_text)

    def cleanup(self):
        """Clean up UI resources."""
        if self.headless:
            return
        try:
            cv2.destroyAllWindows()
            self.logger.info("UI cleaned up")
        except cv2.error as e:
            self.logger.error("UI cleanup error: %s", e)
