"""
Configuration management for the head-tilt page turner.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, Union
from dataclasses import dataclass, field


class ConfigError(ValueError):
    """Raised when configuration values cannot drive the gesture pipeline."""


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30


@dataclass
class PoseConfig:
    """MediaPipe Pose configuration settings."""
    model_complexity: int = 0
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class GestureConfig:
    """Head tilt gesture configuration."""
    angle_threshold_deg: float = 45.0
    dead_zone_deg: float = 10.0
    hold_duration_ms: float = 800.0
    cooldown_ms: float = 1500.0
    smoothing_window: int = 5
    calibration_samples: int = 30
    min_keypoint_score: float = 0.3


@dataclass
class TrackingConfig:
    """Detection loop configuration."""
    target_fps: float = 30.0
    no_pose_hint_ticks: int = 90


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_keypoints: bool = True
    window_name: str = "NodTurn"


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    pose: PoseConfig = field(default_factory=PoseConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def default_config() -> Cfg:
    """Built-in defaults, validated."""
    cfg = Cfg()
    validate_config(cfg)
    return cfg


def load_config(path: Optional[Union[str, Path]] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Validated configuration object
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    cfg = _dict_to_config(data)
    validate_config(cfg)
    return cfg


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return section


def _as_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object, falling back to defaults."""
    camera_data = _section(data, 'camera')
    d = CameraConfig()
    camera = CameraConfig(
        index=int(camera_data.get('index', d.index)),
        width=int(camera_data.get('width', d.width)),
        height=int(camera_data.get('height', d.height)),
        fps=int(camera_data.get('fps', d.fps))
    )

    pose_data = _section(data, 'pose')
    d = PoseConfig()
    pose = PoseConfig(
        model_complexity=int(pose_data.get('model_complexity', d.model_complexity)),
        min_detection_confidence=float(pose_data.get('min_detection_confidence', d.min_detection_confidence)),
        min_tracking_confidence=float(pose_data.get('min_tracking_confidence', d.min_tracking_confidence))
    )

    gestures_data = _section(data, 'gestures')
    d = GestureConfig()
    gestures = GestureConfig(
        angle_threshold_deg=float(gestures_data.get('angle_threshold_deg', d.angle_threshold_deg)),
        dead_zone_deg=float(gestures_data.get('dead_zone_deg', d.dead_zone_deg)),
        hold_duration_ms=float(gestures_data.get('hold_duration_ms', d.hold_duration_ms)),
        cooldown_ms=float(gestures_data.get('cooldown_ms', d.cooldown_ms)),
        smoothing_window=int(gestures_data.get('smoothing_window', d.smoothing_window)),
        calibration_samples=int(gestures_data.get('calibration_samples', d.calibration_samples)),
        min_keypoint_score=float(gestures_data.get('min_keypoint_score', d.min_keypoint_score))
    )

    tracking_data = _section(data, 'tracking')
    d = TrackingConfig()
    tracking = TrackingConfig(
        target_fps=float(tracking_data.get('target_fps', d.target_fps)),
        no_pose_hint_ticks=int(tracking_data.get('no_pose_hint_ticks', d.no_pose_hint_ticks))
    )

    display_data = _section(data, 'display')
    d = DisplayConfig()
    display = DisplayConfig(
        show_keypoints=_as_bool(display_data.get('show_keypoints', d.show_keypoints), 'display.show_keypoints'),
        window_name=str(display_data.get('window_name', d.window_name))
    )

    return Cfg(
        camera=camera,
        pose=pose,
        gestures=gestures,
        tracking=tracking,
        display=display
    )


def validate_config(cfg: Cfg) -> None:
    """
    Reject values the gesture pipeline cannot work with.

    Raises:
        ConfigError: on the first invalid value found
    """
    g = cfg.gestures
    if g.angle_threshold_deg <= 0 or g.angle_threshold_deg >= 180:
        raise ConfigError(f"angle_threshold_deg must be in (0, 180), got {g.angle_threshold_deg}")
    if g.dead_zone_deg < 0:
        raise ConfigError(f"dead_zone_deg must be >= 0, got {g.dead_zone_deg}")
    if g.dead_zone_deg >= g.angle_threshold_deg:
        raise ConfigError(
            f"dead_zone_deg ({g.dead_zone_deg}) must be smaller than "
            f"angle_threshold_deg ({g.angle_threshold_deg})"
        )
    if g.hold_duration_ms < 0:
        raise ConfigError(f"hold_duration_ms must be >= 0, got {g.hold_duration_ms}")
    if g.cooldown_ms < 0:
        raise ConfigError(f"cooldown_ms must be >= 0, got {g.cooldown_ms}")
    if g.smoothing_window < 1:
        raise ConfigError(f"smoothing_window must be >= 1, got {g.smoothing_window}")
    if g.calibration_samples < 1:
        raise ConfigError(f"calibration_samples must be >= 1, got {g.calibration_samples}")
    if not 0.0 <= g.min_keypoint_score <= 1.0:
        raise ConfigError(f"min_keypoint_score must be in [0, 1], got {g.min_keypoint_score}")

    if cfg.tracking.target_fps <= 0:
        raise ConfigError(f"target_fps must be > 0, got {cfg.tracking.target_fps}")
    if cfg.tracking.no_pose_hint_ticks < 1:
        raise ConfigError(f"no_pose_hint_ticks must be >= 1, got {cfg.tracking.no_pose_hint_ticks}")

    for name in ('min_detection_confidence', 'min_tracking_confidence'):
        value = getattr(cfg.pose, name)
        if not 0.0 <= value <= 1.0:
            raise ConfigError(f"{name} must be in [0, 1], got {value}")
