"""
Shared fixtures for building synthetic poses.
"""
import math
from typing import List, Optional

from nodturn.types import Keypoint, Pose


def make_pose(angle_deg: float, score: Optional[float] = 0.9, ear_distance: float = 100.0,
              origin=(300.0, 200.0)) -> List[Pose]:
    """Build a one-pose result whose ear line sits at ``angle_deg``."""
    ox, oy = origin
    rad = math.radians(angle_deg)
    left = Keypoint(name="left_ear", x=ox, y=oy, score=score)
    right = Keypoint(
        name="right_ear",
        x=ox + ear_distance * math.cos(rad),
        y=oy + ear_distance * math.sin(rad),
        score=score,
    )
    nose = Keypoint(name="nose", x=ox + ear_distance / 2, y=oy + 20.0, score=score)
    return [Pose(keypoints=[nose, left, right], score=score)]


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start_ms: float = 0.0):
        self.now = start_ms

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now

    def __call__(self) -> float:
        return self.now
