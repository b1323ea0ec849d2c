"""
Head landmark detection using MediaPipe Pose.
"""
import asyncio
from typing import Any, List

import numpy as np

from .config import PoseConfig
from .types import Keypoint, Pose


# Keypoint name -> MediaPipe PoseLandmark index. MediaPipe labels sides from
# the subject's point of view; the camera frame is not mirrored, so the
# subject's right ear is on the image left. Names here follow the image.
HEAD_LANDMARKS = {
    "nose": 0,            # NOSE
    "left_eye": 5,        # RIGHT_EYE
    "right_eye": 2,       # LEFT_EYE
    "left_ear": 8,        # RIGHT_EAR
    "right_ear": 7,       # LEFT_EAR
    "left_shoulder": 12,  # RIGHT_SHOULDER
    "right_shoulder": 11, # LEFT_SHOULDER
}


class PoseTracker:
    """Single-person pose estimator using MediaPipe Pose."""

    def __init__(self, config: PoseConfig):
        """
        Initialize the pose tracker.

        Args:
            config: Model complexity and confidence thresholds
        """
        # Imported lazily so the gesture core works without the vision stack
        import cv2
        import mediapipe as mp

        self._cv2 = cv2
        self.mp_pose = mp.solutions.pose
        self.pose = self.mp_pose.Pose(
            static_image_mode=False,
            model_complexity=config.model_complexity,
            enable_segmentation=False,
            smooth_landmarks=True,
            min_detection_confidence=config.min_detection_confidence,
            min_tracking_confidence=config.min_tracking_confidence
        )
        self.last_poses: List[Pose] = []

    def process(self, frame_bgr: np.ndarray) -> List[Pose]:
        """
        Process a frame and return detected poses.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            A list with at most one Pose in pixel coordinates, empty if nobody was found
        """
        if frame_bgr is None or frame_bgr.size == 0:
            return []

        height, width = frame_bgr.shape[:2]

        # Convert BGR to RGB for MediaPipe
        frame_rgb = self._cv2.cvtColor(frame_bgr, self._cv2.COLOR_BGR2RGB)
        results = self.pose.process(frame_rgb)

        if not results or results.pose_landmarks is None:
            self.last_poses = []
            return []

        landmarks = results.pose_landmarks.landmark
        keypoints = []
        for name, index in HEAD_LANDMARKS.items():
            lm = landmarks[index]
            keypoints.append(Keypoint(
                name=name,
                x=float(lm.x) * width,
                y=float(lm.y) * height,
                score=float(getattr(lm, "visibility", 0.0) or 0.0)
            ))

        scores = [kp.score for kp in keypoints]
        self.last_poses = [Pose(keypoints=keypoints, score=float(np.mean(scores)))]
        return self.last_poses

    async def estimate(self, frame: Any) -> List[Pose]:
        """Run inference off the event loop thread."""
        return await asyncio.to_thread(self.process, frame)

    def draw_keypoints(self, frame: np.ndarray, poses: List[Pose]) -> np.ndarray:
        """
        Draw keypoints of the first pose and the ear line on the frame.

        Args:
            frame: Input frame
            poses: Poses in pixel coordinates

        Returns:
            Frame with keypoints drawn
        """
        if not poses:
            return frame
        cv2 = self._cv2
        pose = poses[0]
        for kp in pose.keypoints:
            cv2.circle(frame, (int(kp.x), int(kp.y)), 3, (0, 255, 0), -1)
        left = pose.get("left_ear")
        right = pose.get("right_ear")
        if left is not None and right is not None:
            cv2.line(frame, (int(left.x), int(left.y)), (int(right.x), int(right.y)), (0, 200, 255), 2)
        return frame

    def close(self) -> None:
        """Release MediaPipe resources."""
        self.pose.close()
