"""
Angle helpers for head tilt tracking.
"""
import math
from collections import deque
from typing import Deque

from .types import Keypoint


def roll_angle(left: Keypoint, right: Keypoint) -> float:
    """
    Calculate the roll angle (head tilt) from two reference points.

    Args:
        left: Left-side reference point (e.g. left ear)
        right: Right-side reference point (e.g. right ear)

    Returns:
        Angle in degrees in (-180, 180]. Positive when the right point sits
        lower in the image than the left one (image y grows downward).
    """
    return math.degrees(math.atan2(right.y - left.y, right.x - left.x))


def wrap_angle(delta: float) -> float:
    """Map an angle difference into (-180, 180]."""
    while delta > 180.0:
        delta -= 360.0
    while delta <= -180.0:
        delta += 360.0
    return delta


def angular_velocity(current: float, previous: float, elapsed_ms: float) -> float:
    """
    Calculate angular speed in degrees per second.

    The difference takes the short way round the +/-180 boundary, so 179 and
    -179 are 2 degrees apart.
    """
    if elapsed_ms == 0:
        return 0.0
    return abs(wrap_angle(current - previous)) / (elapsed_ms / 1000.0)


class SimpleMovingAverage:
    """Unweighted moving average over the last ``window_size`` samples."""

    def __init__(self, window_size: int = 5):
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        self.window_size = window_size
        self.values: Deque[float] = deque(maxlen=window_size)

    def add(self, value: float) -> float:
        """Append a sample and return the updated average."""
        self.values.append(float(value))
        return self.get_average()

    def get_average(self) -> float:
        if not self.values:
            return 0.0
        return sum(self.values) / len(self.values)

    def reset(self) -> None:
        self.values.clear()

    def __len__(self) -> int:
        return len(self.values)
