"""
Main application for hands-free page turning.
"""
import argparse
import asyncio
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .camera import CameraFrameSource
from .config import Cfg, load_config
from .controller_mock import MockNavigator
from .landmarks import PoseTracker
from .navigation import PageNavigator
from .tracking import HeadTracker
from .types import TrackingStatus

logger = logging.getLogger(__name__)

KEY_HELP = [
    "n / space = next page, p = previous page",
    "h = first page, e = last page",
    "t = toggle tracking, c = recalibrate, q = quit",
]


class PageTurnerApp:
    """Main application class wiring camera, pose model, tracker and pages."""

    def __init__(self, config: Cfg, total_pages: int = 10, use_mock: bool = False):
        """Initialize the application with configuration."""
        self.config = config
        self.camera = CameraFrameSource(config.camera)
        self.pose_tracker = PoseTracker(config.pose)

        self.pages = PageNavigator(total_pages)
        self.pages.subscribe(lambda page, total: logger.info("Page %d / %d", page, total))
        if use_mock:
            self.navigator = MockNavigator()
            logger.info("Using mock navigator, gestures will only be logged")
        else:
            self.navigator = self.pages

        self.tracker = HeadTracker(self.pose_tracker, self.camera, self.navigator, config)
        self.tracker.subscribe(self._on_status)
        self._hint_shown = False

    def _on_status(self, status: TrackingStatus) -> None:
        if status.no_pose_hint and not self._hint_shown:
            logger.warning("No pose detected, make sure your face is visible to the camera")
        self._hint_shown = status.no_pose_hint

    async def _restart_tracking(self) -> None:
        await self.tracker.stop()
        self.tracker.start()

    def _draw_overlay(self, frame, status: TrackingStatus):
        import cv2

        if self.config.display.show_keypoints:
            frame = self.pose_tracker.draw_keypoints(frame, self.pose_tracker.last_poses)

        if not status.running:
            state_text = "Tracking off"
        elif status.no_pose_hint:
            state_text = "No pose detected"
        elif not status.calibrated:
            state_text = f"Calibrating... {status.calibration_progress * 100:.0f}%"
        elif status.pending_direction:
            state_text = f"Holding {status.pending_direction}"
        else:
            state_text = "Ready"

        angle_text = ""
        if status.smoothed_angle is not None:
            angle_text = f"Angle: {status.smoothed_angle:.1f}"
            if status.deviation is not None:
                angle_text += f"  Dev: {status.deviation:+.1f}"
            if status.velocity_deg_s is not None:
                angle_text += f"  Vel: {status.velocity_deg_s:.0f} deg/s"

        page_text = f"Page {self.pages.current_page} / {self.pages.total_pages}"

        cv2.putText(frame, state_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
        cv2.putText(frame, angle_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        cv2.putText(frame, page_text, (10, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
        for i, line in enumerate(KEY_HELP):
            y = frame.shape[0] - 20 * (len(KEY_HELP) - i)
            cv2.putText(frame, line, (10, y), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (255, 255, 255), 1)
        return frame

    async def run(self) -> None:
        """Run the preview loop until 'q' is pressed."""
        import cv2

        logger.info("Starting %s", self.config.display.window_name)
        logger.info("Tilt your head right for the next page, left for the previous page")
        self.tracker.start()
        try:
            while True:
                frame = await asyncio.to_thread(self.camera.grab)
                if frame is None:
                    break

                preview = self._draw_overlay(frame.copy(), self.tracker.status)
                cv2.imshow(self.config.display.window_name, preview)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                elif key in (ord('n'), ord(' ')):
                    self.pages.advance()
                elif key == ord('p'):
                    self.pages.retreat()
                elif key == ord('h'):
                    self.pages.first()
                elif key == ord('e'):
                    self.pages.last()
                elif key == ord('c'):
                    await self._restart_tracking()
                elif key == ord('t'):
                    if self.tracker.is_running:
                        await self.tracker.stop()
                    else:
                        self.tracker.start()

                await asyncio.sleep(0)
        finally:
            await self.tracker.stop()
            self.camera.release()
            self.pose_tracker.close()
            cv2.destroyAllWindows()


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn pages by tilting your head")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--pages", type=int, default=10, help="Number of pages in the document")
    parser.add_argument("--mock", action="store_true", help="Log gestures instead of turning pages")
    return parser.parse_args(argv)


async def main(argv: Optional[list] = None) -> None:
    """Entry point for the application."""
    load_dotenv()
    args = parse_args(argv)
    config = load_config(args.config or os.getenv("NODTURN_CONFIG"))

    app = PageTurnerApp(config, total_pages=args.pages, use_mock=args.mock)
    try:
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def cli() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    cli()
