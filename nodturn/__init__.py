"""
NodTurn

Hands-free page turning for a document reader: webcam head pose is turned into
debounced left/right tilt gestures that move between pages.
"""

__version__ = "0.1.0"

from .types import Keypoint, Pose, PageTurnCommand, TrackingStatus, NavigatorProto, PoseSourceProto, FrameSourceProto
from .config import load_config, default_config, Cfg, ConfigError
from .gesture_math import roll_angle, wrap_angle, angular_velocity, SimpleMovingAverage
from .calibration import NeutralCalibrator, NotCalibratedError
from .gestures import HeadTiltGesture, GestureProcessor
from .navigation import PageNavigator
from .controller_mock import MockNavigator
from .tracking import HeadTracker

__all__ = [
    "Keypoint",
    "Pose",
    "PageTurnCommand",
    "TrackingStatus",
    "NavigatorProto",
    "PoseSourceProto",
    "FrameSourceProto",
    "load_config",
    "default_config",
    "Cfg",
    "ConfigError",
    "roll_angle",
    "wrap_angle",
    "angular_velocity",
    "SimpleMovingAverage",
    "NeutralCalibrator",
    "NotCalibratedError",
    "HeadTiltGesture",
    "GestureProcessor",
    "PageNavigator",
    "MockNavigator",
    "HeadTracker",
]
