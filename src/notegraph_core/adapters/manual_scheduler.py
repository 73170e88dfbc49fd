"""
Manual Frame Scheduler Adapter.

Frames only happen when advance() is called. Used by headless tools and
tests that need to step the simulation deterministically.
"""

from typing import Optional

from ..ports.scheduler_port import FrameScheduler, FrameCallback


class ManualScheduler(FrameScheduler):
    """
    Frame scheduler driven by explicit advance() calls.

    The callback may stop the scheduler from inside a frame; advance()
    then returns early.
    """

    def __init__(self):
        self._callback: Optional[FrameCallback] = None
        self._running = False
        self.frames_run = 0
        self.start_count = 0

    def start(self, callback: FrameCallback) -> None:
        self._callback = callback
        self._running = True
        self.start_count += 1

    def stop(self) -> None:
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def advance(self, frames: int = 1) -> int:
        """
        Run up to `frames` frames.

        Returns:
            Number of frames actually run
        """
        ran = 0
        while ran < frames and self._running and self._callback is not None:
            self._callback()
            ran += 1
            self.frames_run += 1
        return ran

    def run_until_stopped(self, max_frames: int = 10_000) -> int:
        """Run frames until the callback stops the scheduler (or the cap is hit)."""
        return self.advance(max_frames)
