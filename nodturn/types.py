"""
Type definitions for the head-tilt page turner.
"""
from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional, Protocol, runtime_checkable


Direction = Literal["left", "right"]


@dataclass(frozen=True)
class Keypoint:
    """A named 2D landmark in pixel coordinates."""
    name: str
    x: float
    y: float
    score: Optional[float] = None  # None means the landmark was not observed


@dataclass(frozen=True)
class Pose:
    """Keypoints for a single detected subject."""
    keypoints: List[Keypoint] = field(default_factory=list)
    score: Optional[float] = None

    def get(self, name: str) -> Optional[Keypoint]:
        for kp in self.keypoints:
            if kp.name == name:
                return kp
        return None


@dataclass(frozen=True)
class PageTurnCommand:
    """A fired tilt gesture."""
    direction: Direction
    timestamp_ms: float

    @property
    def action(self) -> Literal["advance", "retreat"]:
        # Right tilt moves forward through the document.
        return "advance" if self.direction == "right" else "retreat"


@dataclass(frozen=True)
class TrackingStatus:
    """Snapshot of a tracking session published to UI observers."""
    running: bool = False
    pose_detected: bool = False
    no_pose_hint: bool = False
    calibrated: bool = False
    calibration_progress: float = 0.0
    raw_angle: Optional[float] = None
    smoothed_angle: Optional[float] = None
    velocity_deg_s: Optional[float] = None
    deviation: Optional[float] = None
    neutral_angle: Optional[float] = None
    pending_direction: Optional[Direction] = None
    last_command: Optional[PageTurnCommand] = None


@runtime_checkable
class NavigatorProto(Protocol):
    """Navigation sink driven by fired gestures."""

    def advance(self) -> None:
        """Move to the next page; no-op on the last page."""
        ...

    def retreat(self) -> None:
        """Move to the previous page; no-op on the first page."""
        ...


@runtime_checkable
class PoseSourceProto(Protocol):
    """Pose estimation capability consumed once per tick."""

    async def estimate(self, frame: Any) -> List[Pose]:
        """Return the poses found in the frame; empty when nothing is detected."""
        ...


@runtime_checkable
class FrameSourceProto(Protocol):
    """Video frame capability; None means no frame is ready yet."""

    def read(self) -> Optional[Any]:
        ...
