"""
Tests for configuration loading and validation.
"""

import json
import os
import sys
import tempfile
import unittest

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from utils import get_config, merge_config, save_config, validate_config  # type: ignore


class TestConfig(unittest.TestCase):
    """Test cases for configuration helpers."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_json(self, name, payload):
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)
        return path

    def test_defaults(self):
        config = get_config()
        self.assertEqual(config["detection"]["threshold"], 30)
        self.assertEqual(config["detection"]["kernel_size"], 5)
        self.assertAlmostEqual(config["detection"]["epsilon_ratio"], 0.02)
        self.assertEqual(config["camera_id"], 0)
        self.assertTrue(validate_config(config))

    def test_defaults_are_not_shared(self):
        get_config()["detection"]["threshold"] = 99
        self.assertEqual(get_config()["detection"]["threshold"], 30)

    def test_file_overrides_merge_nested_sections(self):
        path = self.write_json("config.json", {"detection": {"threshold": 45}, "camera_id": 2})
        config = get_config(path)
        self.assertEqual(config["detection"]["threshold"], 45)
        self.assertEqual(config["detection"]["kernel_size"], 5)
        self.assertEqual(config["camera_id"], 2)

    def test_missing_or_broken_file_falls_back_to_defaults(self):
        self.assertEqual(get_config(os.path.join(self.tmpdir.name, "absent.json")), get_config())
        broken = self.write_json("broken.json", "{not json")
        self.assertEqual(get_config(broken), get_config())

    def test_merge_config_replaces_plain_keys(self):
        merged = merge_config({"a": 1, "detection": {"x": 1}}, {"a": 2, "detection": {"y": 2}})
        self.assertEqual(merged, {"a": 2, "detection": {"x": 1, "y": 2}})

    def test_validation_rejects_bad_values(self):
        cases = [
            ("threshold", 300),
            ("kernel_size", 4),
            ("epsilon_ratio", 0.0),
            ("channel_order", "hsv"),
        ]
        for key, value in cases:
            config = get_config()
            config["detection"][key] = value
            self.assertFalse(validate_config(config), key)

        config = get_config()
        config["video_width"] = 0
        self.assertFalse(validate_config(config))

        config = get_config()
        del config["detection"]
        self.assertFalse(validate_config(config))

    def test_validation_rejects_wrong_types(self):
        cases = [
            ("threshold", "30"),
            ("threshold", True),
            ("kernel_size", 5.0),
            ("kernel_size", None),
            ("epsilon_ratio", "0.02"),
        ]
        for key, value in cases:
            config = get_config()
            config["detection"][key] = value
            with self.assertLogs("utils", "ERROR"):
                self.assertFalse(validate_config(config), (key, value))

        for section in ("detection", "overlay"):
            config = get_config()
            config[section] = 3
            with self.assertLogs("utils", "ERROR"):
                self.assertFalse(validate_config(config), section)

        config = get_config()
        config["video_width"] = "640"
        self.assertFalse(validate_config(config))

        config = get_config()
        config["detection"]["epsilon_ratio"] = 1 / 50
        self.assertTrue(validate_config(config))

    def test_save_config(self):
        path = os.path.join(self.tmpdir.name, "saved.json")
        config = get_config()
        self.assertTrue(save_config(config, path))
        self.assertEqual(get_config(path), config)


if __name__ == "__main__":
    unittest.main()
