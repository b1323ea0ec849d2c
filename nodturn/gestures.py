"""
Gesture recognition classes that convert head tilt into page turn commands.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .calibration import NeutralCalibrator
from .config import GestureConfig, TrackingConfig
from .gesture_math import SimpleMovingAverage, angular_velocity, roll_angle
from .types import Direction, Keypoint, PageTurnCommand, Pose

logger = logging.getLogger(__name__)

LEFT_REFERENCE = "left_ear"
RIGHT_REFERENCE = "right_ear"


class HeadTiltGesture:
    """
    Turns calibrated tilt deviation into one-shot page turn commands.

    Features:
    - Dead zone: returning near neutral cancels a pending tilt
    - Hold duration: the tilt must persist past the threshold in one direction
    - Direction change restarts the hold timer
    - Cooldown between fired commands regardless of direction
    - Ambiguous band between dead zone and threshold changes nothing
    """

    def __init__(self, cfg: GestureConfig):
        """Initialize tilt gesture processor."""
        self.cfg = cfg
        self.pending_direction: Optional[Direction] = None
        self.threshold_exceeded_at: Optional[float] = None
        self.last_trigger_at: Optional[float] = None

    @property
    def is_pending(self) -> bool:
        return self.pending_direction is not None

    def update(self, deviation: float, now_ms: float) -> Optional[PageTurnCommand]:
        """
        Process one calibrated deviation sample.

        Args:
            deviation: Signed tilt away from neutral in degrees
            now_ms: Current timestamp in milliseconds

        Returns:
            PageTurnCommand if a tilt was held long enough, None otherwise
        """
        magnitude = abs(deviation)

        if magnitude <= self.cfg.dead_zone_deg:
            if self.is_pending:
                logger.debug("Tilt %s cancelled by return to neutral", self.pending_direction)
            self._clear_pending()
            return None

        if magnitude <= self.cfg.angle_threshold_deg:
            # Ambiguous band: neither arms nor cancels
            return None

        direction: Direction = "right" if deviation > 0 else "left"

        if self.pending_direction != direction:
            # Reversal does not inherit the previous hold time
            self.pending_direction = direction
            self.threshold_exceeded_at = now_ms
            return None

        held_ms = now_ms - self.threshold_exceeded_at
        if held_ms < self.cfg.hold_duration_ms:
            return None

        if self.last_trigger_at is not None and now_ms - self.last_trigger_at <= self.cfg.cooldown_ms:
            return None

        self.last_trigger_at = now_ms
        self._clear_pending()
        logger.info("Tilt %s held for %.0f ms, firing", direction, held_ms)
        return PageTurnCommand(direction=direction, timestamp_ms=now_ms)

    def reset(self) -> None:
        """Reset pending and cooldown state."""
        self._clear_pending()
        self.last_trigger_at = None

    def _clear_pending(self) -> None:
        self.pending_direction = None
        self.threshold_exceeded_at = None


@dataclass
class FrameResult:
    """Everything the gesture pipeline learned from one tick."""
    pose_detected: bool
    keypoints_usable: bool
    no_pose_hint: bool
    calibrated: bool
    calibration_progress: float
    raw_angle: Optional[float] = None
    smoothed_angle: Optional[float] = None
    velocity_deg_s: Optional[float] = None
    deviation: Optional[float] = None
    neutral_angle: Optional[float] = None
    pending_direction: Optional[Direction] = None
    command: Optional[PageTurnCommand] = None


class GestureProcessor:
    """
    Main gesture processor owning all per-session tracking state.

    One instance lives for one tracking session; build a new one to start over.
    """

    def __init__(self, cfg: GestureConfig, tracking: Optional[TrackingConfig] = None):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg
        self.tracking = tracking or TrackingConfig()
        self.smoother = SimpleMovingAverage(cfg.smoothing_window)
        self.calibrator = NeutralCalibrator(cfg.calibration_samples)
        self.tilt_gesture = HeadTiltGesture(cfg)

        # Velocity tracking
        self.prev_angle: Optional[float] = None
        self.prev_timestamp: Optional[float] = None

        self.missed_ticks = 0

    def select_reference_points(self, poses: Sequence[Pose]) -> Optional[List[Keypoint]]:
        """
        Pick both ears from the first pose.

        Returns:
            [left, right] if both are present and confident enough, None otherwise
        """
        if not poses:
            return None
        pose = poses[0]
        left = pose.get(LEFT_REFERENCE)
        right = pose.get(RIGHT_REFERENCE)
        if left is None or right is None:
            return None
        if not self._is_confident(left) or not self._is_confident(right):
            return None
        return [left, right]

    def _is_confident(self, kp: Keypoint) -> bool:
        return kp.score is not None and kp.score >= self.cfg.min_keypoint_score

    def miss(self, pose_detected: bool = False) -> FrameResult:
        """
        Record a tick without usable reference points.

        Used for empty or low-confidence results and for failed estimates.
        Pending timers are neither advanced nor reset.
        """
        self.missed_ticks += 1
        return FrameResult(
            pose_detected=pose_detected,
            keypoints_usable=False,
            no_pose_hint=self.missed_ticks >= self.tracking.no_pose_hint_ticks,
            calibrated=self.calibrator.is_calibrated,
            calibration_progress=self.calibrator.progress,
            neutral_angle=self.calibrator.neutral_angle,
            pending_direction=self.tilt_gesture.pending_direction,
        )

    def process(self, poses: Sequence[Pose], now_ms: float) -> FrameResult:
        """
        Process one pose estimation result.

        Args:
            poses: Poses from the estimator (only the first one is used)
            now_ms: Current timestamp in milliseconds

        Returns:
            FrameResult describing the tick, with a command if one fired
        """
        refs = self.select_reference_points(poses)
        if refs is None:
            return self.miss(pose_detected=bool(poses))
        self.missed_ticks = 0

        left, right = refs
        raw = roll_angle(left, right)
        smoothed = self.smoother.add(raw)

        velocity = None
        if self.prev_timestamp is not None:
            velocity = angular_velocity(smoothed, self.prev_angle, now_ms - self.prev_timestamp)
        self.prev_angle = smoothed
        self.prev_timestamp = now_ms

        calibration = self.calibrator.observe(smoothed)
        result = FrameResult(
            pose_detected=True,
            keypoints_usable=True,
            no_pose_hint=False,
            calibrated=calibration.finalized,
            calibration_progress=calibration.progress,
            raw_angle=raw,
            smoothed_angle=smoothed,
            velocity_deg_s=velocity,
            neutral_angle=calibration.neutral_angle,
        )
        if not calibration.finalized:
            return result

        deviation = self.calibrator.deviation(smoothed)
        result.deviation = deviation
        result.command = self.tilt_gesture.update(deviation, now_ms)
        result.pending_direction = self.tilt_gesture.pending_direction
        return result

    def reset(self) -> None:
        """Discard all session state and recalibrate from scratch."""
        self.smoother.reset()
        self.calibrator.reset()
        self.tilt_gesture.reset()
        self.prev_angle = None
        self.prev_timestamp = None
        self.missed_ticks = 0
