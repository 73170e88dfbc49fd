"""
Frame timer.

Drives the force simulation from a QTimer on the GUI thread, so ticks are
interleaved with mouse events on the same event loop and never run in
parallel with them.
"""

from typing import Optional

from PyQt6.QtCore import QObject, QTimer

from notegraph_core.ports.scheduler_port import FrameScheduler, FrameCallback


FRAME_INTERVAL_MS = 16  # ~60 fps


class QtFrameScheduler(FrameScheduler):
    """FrameScheduler backed by a repeating QTimer."""

    def __init__(self, parent: Optional[QObject] = None, interval_ms: int = FRAME_INTERVAL_MS):
        """
        Initialize the scheduler.

        Args:
            parent: Optional parent QObject that owns the timer
            interval_ms: Time between frames
        """
        self._callback: Optional[FrameCallback] = None
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    def start(self, callback: FrameCallback) -> None:
        self._callback = callback
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
