"""
Webcam frame source backed by OpenCV.
"""
import logging
from typing import Optional

import numpy as np

from .config import CameraConfig

logger = logging.getLogger(__name__)


class CameraFrameSource:
    """Keeps the most recent webcam frame available to the tracking loop."""

    def __init__(self, config: CameraConfig):
        import cv2

        self.config = config
        self.cap = cv2.VideoCapture(config.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.height)
        self.cap.set(cv2.CAP_PROP_FPS, config.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {config.index}")

        self.latest: Optional[np.ndarray] = None

    def grab(self) -> Optional[np.ndarray]:
        """Read a new frame from the camera; None if the read failed."""
        ret, frame = self.cap.read()
        if not ret:
            logger.warning("Failed to read frame from camera %d", self.config.index)
            return None
        self.latest = frame
        return frame

    def read(self) -> Optional[np.ndarray]:
        """Latest grabbed frame, None until the camera has produced one."""
        return self.latest

    def release(self) -> None:
        if self.cap.isOpened():
            self.cap.release()
