"""
Main entry point for the GREENQUAD application.

Tracks a green quadrilateral marker in a camera feed or video file and shows
its outline and center.

Usage:
    python main.py                      # Default camera
    python main.py --video clip.mp4     # Video file
    python main.py --synthetic          # Generated frames, no camera needed
    python main.py --verbose            # Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from marker_detect import MarkerDetector
from overlay import OverlayRenderer
from pipeline import EXIT_OK, EXIT_FAILURE, FramePipeline
from synthetic import SyntheticFrameSource
from ui import UserInterface
from utils import get_config, save_config, setup_logging, validate_config
from video import VideoProcessor

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="GREENQUAD - Green quadrilateral marker tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                        # Track with camera 0
  python main.py --camera 1             # Use another camera
  python main.py --video clip.mp4       # Process a video file
  python main.py --synthetic --headless # Log detections on generated frames

Controls:
  Q / ESC - Quit
  H       - Print help
        """,
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--camera", "-c", type=int, help="Camera device index")
    source.add_argument("--video", type=str, help="Read frames from a video file")
    source.add_argument(
        "--synthetic",
        action="store_true",
        help="Use generated frames with a moving marker",
    )

    parser.add_argument("--config", type=str, help="JSON configuration file")
    parser.add_argument("--save-config", type=str, help="Write the effective configuration to this file")
    parser.add_argument("--threshold", type=int, help="Greenness threshold (0-255)")
    parser.add_argument("--kernel-size", type=int, help="Morphology kernel size (odd)")
    parser.add_argument("--epsilon", type=float, help="Polygon tolerance as a fraction of perimeter")
    parser.add_argument("--max-frames", type=int, help="Stop after this many frames")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Do not open windows; log detections instead",
    )
    parser.add_argument(
        "--verbose", "-V",
        action="store_true",
        help="Enable verbose/debug logging",
    )

    args = parser.parse_args(argv)
    if args.max_frames is not None and args.max_frames < 1:
        parser.error("--max-frames must be at least 1")
    return args


def build_config(args: argparse.Namespace) -> dict:
    """Load the configuration file and apply command-line overrides."""
    config = get_config(args.config)

    if args.camera is not None:
        config["camera_id"] = args.camera
    if args.video:
        config["video_file"] = args.video
    if args.headless:
        config["headless"] = True

    detection = config["detection"]
    if not isinstance(detection, dict):
        return config
    if args.threshold is not None:
        detection["threshold"] = args.threshold
    if args.kernel_size is not None:
        detection["kernel_size"] = args.kernel_size
    if args.epsilon is not None:
        detection["epsilon_ratio"] = args.epsilon

    return config


def create_source(args: argparse.Namespace, config: dict):
    """Build the frame source selected on the command line."""
    if args.synthetic:
        return SyntheticFrameSource(
            num_frames=args.max_frames or 300,
            width=config["video_width"],
            height=config["video_height"],
        )
    return VideoProcessor(config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        int: Process exit code
    """
    args = parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logging(level=log_level)

    LOGGER.info("Starting GREENQUAD...")

    config = build_config(args)
    if not validate_config(config):
        return EXIT_FAILURE
    if args.save_config:
        save_config(config, args.save_config)

    try:
        detector = MarkerDetector(config["detection"])
        renderer = OverlayRenderer(config.get("overlay", {}))
    except (TypeError, ValueError) as e:
        LOGGER.error("Invalid configuration: %s", e)
        return EXIT_FAILURE

    source = create_source(args, config)
    if not source.initialize():
        LOGGER.error("Error opening video stream or file")
        return EXIT_FAILURE

    ui = UserInterface(config)
    if not ui.initialize():
        source.cleanup()
        return EXIT_FAILURE

    pipeline = FramePipeline(
        source,
        ui,
        detector=detector,
        renderer=renderer,
        max_frames=args.max_frames,
    )

    try:
        exit_code = pipeline.run()
    except Exception as e:
        LOGGER.exception("Application error: %s", e)
        exit_code = EXIT_FAILURE
    finally:
        source.cleanup()
        ui.cleanup()

    if exit_code == EXIT_OK:
        LOGGER.info("GREENQUAD exited normally")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
