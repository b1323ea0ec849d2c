"""
Detection loop that drives the gesture pipeline once per tick.
"""
import asyncio
import logging
import time
from typing import Callable, List, Optional

from .config import Cfg
from .gestures import FrameResult, GestureProcessor
from .types import (
    FrameSourceProto,
    NavigatorProto,
    PageTurnCommand,
    PoseSourceProto,
    TrackingStatus,
)

logger = logging.getLogger(__name__)

StatusListener = Callable[[TrackingStatus], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TrackingSession:
    """State owned by one start()..stop() run of the tracker."""

    def __init__(self, processor: GestureProcessor):
        self.processor = processor
        self.stop_event = asyncio.Event()
        self.task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return not self.stop_event.is_set()


class HeadTracker:
    """
    Runs tracking sessions: frame -> pose estimate -> gesture -> navigation.

    At most one estimate is in flight. Stopping prevents the next tick; an
    estimate already awaited is allowed to finish but its result is dropped.
    A session started while the previous one is still winding down waits for
    it before its first tick.
    """

    def __init__(
        self,
        pose_source: PoseSourceProto,
        frame_source: FrameSourceProto,
        navigator: NavigatorProto,
        cfg: Cfg,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            pose_source: Async pose estimator
            frame_source: Supplies frames, None while not ready
            navigator: Receives advance()/retreat() for fired gestures
            cfg: Application configuration
            clock: Millisecond clock, monotonic by default
        """
        self.pose_source = pose_source
        self.frame_source = frame_source
        self.navigator = navigator
        self.cfg = cfg
        self.clock = clock or monotonic_ms
        self.tick_interval_s = 1.0 / cfg.tracking.target_fps

        self._session: Optional[TrackingSession] = None
        self._listeners: List[StatusListener] = []
        self._status = TrackingStatus()

    @property
    def is_running(self) -> bool:
        return self._session is not None and self._session.active

    @property
    def processor(self) -> Optional[GestureProcessor]:
        """Gesture state of the current session, None when stopped."""
        return self._session.processor if self._session is not None else None

    @property
    def status(self) -> TrackingStatus:
        return self._status

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a status listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> asyncio.Task:
        """Begin a fresh session on the running event loop."""
        previous = self._session
        if previous is not None and previous.active:
            return previous.task

        session = TrackingSession(GestureProcessor(self.cfg.gestures, self.cfg.tracking))
        previous_task = previous.task if previous is not None else None
        session.task = asyncio.ensure_future(self._run_after(previous_task, session))
        self._session = session
        self._publish(TrackingStatus(running=True))
        logger.info("Head tracking started")
        return session.task

    async def stop(self) -> None:
        """End the current session and wait for its loop to exit."""
        session = self._session
        if session is None:
            return
        session.stop_event.set()
        if session.task is not None and not session.task.done():
            await session.task
        if self._session is session:
            self._session = None
            self._publish(TrackingStatus(running=False))
        logger.info("Head tracking stopped")

    async def _run_after(self, previous: Optional[asyncio.Task], session: TrackingSession) -> None:
        if previous is not None and not previous.done():
            await previous
        await self.run(session)

    async def run(self, session: TrackingSession) -> None:
        """Loop body; returns once the session is stopped."""
        while session.active:
            try:
                await self.tick(session)
            except Exception as e:
                logger.exception("Tracking tick failed: %s", e)
            if not session.active:
                break
            await self._sleep(session, self.tick_interval_s)

    async def tick(self, session: TrackingSession) -> Optional[PageTurnCommand]:
        """
        Run one detection cycle for a session.

        Returns:
            The command fired this tick, if any
        """
        frame = self.frame_source.read()
        if frame is None:
            return None

        try:
            poses = await self.pose_source.estimate(frame)
        except Exception as e:
            if not session.active:
                return None
            logger.warning("Pose estimation failed, skipping tick: %s", e)
            self._publish(self._status_from(session, session.processor.miss()))
            return None

        if not session.active:
            # Session ended while the estimate was in flight
            return None

        result = session.processor.process(poses or [], self.clock())
        if result.command is not None:
            self._dispatch(result.command)
        self._publish(self._status_from(session, result))
        return result.command

    def _dispatch(self, command: PageTurnCommand) -> None:
        if command.action == "advance":
            self.navigator.advance()
        else:
            self.navigator.retreat()

    def _status_from(self, session: TrackingSession, result: FrameResult) -> TrackingStatus:
        return TrackingStatus(
            running=session.active,
            pose_detected=result.keypoints_usable,
            no_pose_hint=result.no_pose_hint,
            calibrated=result.calibrated,
            calibration_progress=result.calibration_progress,
            raw_angle=result.raw_angle,
            smoothed_angle=result.smoothed_angle,
            velocity_deg_s=result.velocity_deg_s,
            deviation=result.deviation,
            neutral_angle=result.neutral_angle,
            pending_direction=result.pending_direction,
            last_command=result.command or self._status.last_command,
        )

    def _publish(self, status: TrackingStatus) -> None:
        self._status = status
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception as e:
                logger.error("Status listener failed: %s", e)

    async def _sleep(self, session: TrackingSession, seconds: float) -> None:
        try:
            await asyncio.wait_for(session.stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass
