"""
Shared helper functions and utilities.

Logging setup and configuration loading/validation.
"""

import copy
import json
import logging
import os

from detection import ChannelOrder

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    # Video settings
    'camera_id': 0,
    'video_width': 640,
    'video_height': 480,
    'video_fps': 30,
    'camera_backend_priority': None,
    'camera_init_attempts': 10,
    'video_file': None,

    # Marker detection
    'detection': {
        'threshold': 30,  # Greenness cutoff, 0-255
        'kernel_size': 5,  # Morphology kernel side (odd)
        'epsilon_ratio': 0.02,  # Polygon tolerance as a fraction of perimeter
        'channel_order': 'bgr',
    },

    # Overlay rendering (BGR colors)
    'overlay': {
        'edge_color': [0, 0, 255],
        'center_color': [255, 0, 0],
        'text_color': [0, 0, 255],
        'thickness': 2,
        'center_radius': 5,
        'font_scale': 0.7,
        'fps_offset': [150, 30],
        'antialiasing': True,
    },

    # Display
    'display_width': 640,
    'display_height': 480,
    'headless': False,
}

NESTED_SECTIONS = ('detection', 'overlay')


def setup_logging(level=logging.INFO):
    """Set up logging configuration.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    LOGGER.debug("Logging initialized")


def merge_config(base, overrides):
    """Overlay ``overrides`` on ``base``; nested sections merge key by key."""
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if key in NESTED_SECTIONS and isinstance(value, dict):
            merged.setdefault(key, {}).update(value)
        else:
            merged[key] = value
    return merged


def get_config(config_path=None):
    """Load configuration from file or return defaults.

    Args:
        config_path: Path to a JSON configuration file (optional)

    Returns:
        dict: Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                loaded_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            LOGGER.warning("Failed to load config from %s: %s", config_path, e)
            return config
        config = merge_config(config, loaded_config)
        LOGGER.info("Configuration loaded from %s", config_path)
    elif config_path:
        LOGGER.warning("Config file %s not found, using defaults", config_path)

    return config


def save_config(config, config_path):
    """Save configuration to file.

    Returns:
        bool: True if save successful, False otherwise
    """
    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=4)
    except (OSError, TypeError) as e:
        LOGGER.error("Failed to save config to %s: %s", config_path, e)
        return False
    LOGGER.info("Configuration saved to %s", config_path)
    return True


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config):
    """Validate configuration parameters.

    Args:
        config: Configuration dictionary

    Returns:
        bool: True if valid, False otherwise
    """
    required_keys = ['camera_id', 'video_width', 'video_height', 'detection']

    for key in required_keys:
        if key not in config:
            LOGGER.error("Missing required config key: %s", key)
            return False

    valid = True
    width, height = config['video_width'], config['video_height']
    if not (_is_int(width) and _is_int(height)) or width <= 0 or height <= 0:
        LOGGER.error("Video dimensions must be positive integers, got %r x %r", width, height)
        valid = False

    detection = config['detection']
    if not isinstance(detection, dict):
        LOGGER.error("Config section 'detection' must be an object, got %r", detection)
        return False

    threshold = detection.get('threshold', 30)
    if not _is_int(threshold) or not 0 <= threshold <= 255:
        LOGGER.error("Detection threshold must be an integer within [0, 255], got %r", threshold)
        valid = False

    kernel_size = detection.get('kernel_size', 5)
    if not _is_int(kernel_size) or kernel_size <= 0 or kernel_size % 2 == 0:
        LOGGER.error("Kernel size must be a positive odd integer, got %r", kernel_size)
        valid = False

    epsilon_ratio = detection.get('epsilon_ratio', 0.02)
    if not _is_number(epsilon_ratio) or not 0.0 < epsilon_ratio < 1.0:
        LOGGER.error("Epsilon ratio must be a number within (0, 1), got %r", epsilon_ratio)
        valid = False

    try:
        ChannelOrder.parse(detection.get('channel_order', 'bgr'))
    except ValueError as e:
        LOGGER.error("%s", e)
        valid = False

    overlay = config.get('overlay', {})
    if not isinstance(overlay, dict):
        LOGGER.error("Config section 'overlay' must be an object, got %r", overlay)
        valid = False

    if valid:
        LOGGER.info("Configuration validated successfully")
    return valid
