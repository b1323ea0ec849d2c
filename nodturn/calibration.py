"""
Neutral head posture calibration.

Users rarely hold their head perfectly level, so tilt is measured relative
to a baseline averaged over the first samples of a session.
"""
from dataclasses import dataclass
from typing import List, Optional

from .gesture_math import wrap_angle


class NotCalibratedError(RuntimeError):
    """Raised when a deviation is requested before the baseline exists."""


@dataclass(frozen=True)
class CalibrationResult:
    """Outcome of one observed sample."""
    finalized: bool
    progress: float  # 0..1
    neutral_angle: Optional[float] = None


class NeutralCalibrator:
    """Collects ``sample_count`` smoothed angles and freezes their mean."""

    def __init__(self, sample_count: int = 30):
        if sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {sample_count}")
        self.sample_count = sample_count
        self._samples: List[float] = []
        self._neutral_angle: Optional[float] = None

    @property
    def is_calibrated(self) -> bool:
        return self._neutral_angle is not None

    @property
    def neutral_angle(self) -> Optional[float]:
        return self._neutral_angle

    @property
    def progress(self) -> float:
        if self.is_calibrated:
            return 1.0
        return len(self._samples) / self.sample_count

    def observe(self, smoothed_angle: float) -> CalibrationResult:
        """
        Feed one smoothed angle.

        Samples after the baseline is frozen are ignored.
        """
        if self._neutral_angle is None:
            self._samples.append(float(smoothed_angle))
            if len(self._samples) >= self.sample_count:
                self._neutral_angle = sum(self._samples) / len(self._samples)
        return CalibrationResult(
            finalized=self.is_calibrated,
            progress=self.progress,
            neutral_angle=self._neutral_angle,
        )

    def deviation(self, smoothed_angle: float) -> float:
        """Signed displacement from the neutral angle in (-180, 180]."""
        if self._neutral_angle is None:
            raise NotCalibratedError(
                f"deviation requested after {len(self._samples)}/{self.sample_count} calibration samples"
            )
        return wrap_angle(smoothed_angle - self._neutral_angle)

    def reset(self) -> None:
        self._samples = []
        self._neutral_angle = None
