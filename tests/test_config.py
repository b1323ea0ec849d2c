"""
Test cases for configuration loading and validation.
"""
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nodturn.config import (
    Cfg,
    ConfigError,
    GestureConfig,
    TrackingConfig,
    default_config,
    load_config,
    validate_config,
)


class TestLoadConfig(unittest.TestCase):
    """Test YAML loading."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, text: str) -> Path:
        path = Path(self.tmp.name) / "config.yaml"
        path.write_text(text)
        return path

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(Path(self.tmp.name) / "nope.yaml")

    def test_partial_file_uses_defaults(self):
        """Sections and keys left out fall back to the built-in values."""
        path = self.write("gestures:\n  angle_threshold_deg: 30\n  dead_zone_deg: 5\n")
        cfg = load_config(path)
        self.assertEqual(cfg.gestures.angle_threshold_deg, 30.0)
        self.assertEqual(cfg.gestures.dead_zone_deg, 5.0)
        self.assertEqual(cfg.gestures.cooldown_ms, 1500.0)
        self.assertEqual(cfg.camera.width, 640)
        self.assertEqual(cfg.tracking.target_fps, 30.0)

    def test_empty_file(self):
        cfg = load_config(self.write(""))
        self.assertEqual(cfg, default_config())

    def test_dead_zone_at_threshold_rejected(self):
        path = self.write("gestures:\n  angle_threshold_deg: 20\n  dead_zone_deg: 20\n")
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_non_mapping_section_rejected(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("gestures: 12\n"))

    def test_show_keypoints_must_be_boolean(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("display:\n  show_keypoints: \"false\"\n"))
        with self.assertRaises(ConfigError):
            load_config(self.write("display:\n  show_keypoints: 0\n"))

    def test_show_keypoints_false(self):
        cfg = load_config(self.write("display:\n  show_keypoints: false\n"))
        self.assertFalse(cfg.display.show_keypoints)

    def test_non_mapping_root_rejected(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("- a\n- b\n"))


class TestValidateConfig(unittest.TestCase):
    """Test value validation."""

    def test_defaults_are_valid(self):
        validate_config(Cfg())

    def test_invalid_values(self):
        bad = [
            Cfg(gestures=GestureConfig(dead_zone_deg=50.0)),
            Cfg(gestures=GestureConfig(dead_zone_deg=-1.0)),
            Cfg(gestures=GestureConfig(angle_threshold_deg=0.0, dead_zone_deg=0.0)),
            Cfg(gestures=GestureConfig(hold_duration_ms=-5.0)),
            Cfg(gestures=GestureConfig(cooldown_ms=-1.0)),
            Cfg(gestures=GestureConfig(smoothing_window=0)),
            Cfg(gestures=GestureConfig(calibration_samples=0)),
            Cfg(gestures=GestureConfig(min_keypoint_score=1.5)),
            Cfg(tracking=TrackingConfig(target_fps=0.0)),
            Cfg(tracking=TrackingConfig(no_pose_hint_ticks=0)),
        ]
        for cfg in bad:
            with self.subTest(cfg=cfg):
                with self.assertRaises(ConfigError):
                    validate_config(cfg)

    def test_config_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigError, ValueError))


if __name__ == '__main__':
    unittest.main()
