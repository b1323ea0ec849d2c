"""
Integration test to verify all components can be imported and work together.
"""
import asyncio
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from nodturn import (
    HeadTracker,
    Keypoint,
    PageNavigator,
    Pose,
    default_config,
    load_config,
)


class ConstantTiltSource:
    """Pose source that reports level ears until told to tilt."""

    def __init__(self):
        self.dy = 0.0
        self.calls = 0

    async def estimate(self, frame):
        self.calls += 1
        left = Keypoint("left_ear", 300.0, 200.0, 0.95)
        right = Keypoint("right_ear", 400.0, 200.0 + self.dy, 0.95)
        return [Pose(keypoints=[left, right], score=0.95)]


class StillCamera:
    def read(self):
        return "frame"


class TestIntegration(unittest.IsolatedAsyncioTestCase):
    """Test that config, tracker and navigator work together end to end."""

    async def test_tilt_turns_page(self):
        config = load_config()
        config.gestures.calibration_samples = 5
        config.gestures.hold_duration_ms = 50
        config.tracking.target_fps = 200

        pages = PageNavigator(total_pages=4)
        source = ConstantTiltSource()
        tracker = HeadTracker(source, StillCamera(), pages, config)

        tracker.start()
        for _ in range(400):
            if tracker.status.calibrated:
                break
            await asyncio.sleep(0.005)
        self.assertTrue(tracker.status.calibrated)

        # ~60 degree tilt with the right ear lower: next page
        source.dy = 175.0
        for _ in range(400):
            if pages.current_page == 2:
                break
            await asyncio.sleep(0.005)
        await tracker.stop()

        self.assertEqual(pages.current_page, 2)
        self.assertGreater(source.calls, 5)

    def test_default_config_matches_file(self):
        self.assertEqual(load_config(), default_config())


if __name__ == '__main__':
    unittest.main()
