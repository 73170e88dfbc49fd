"""
Frame scheduler port interface.

Defines the contract for driving the simulation one tick per render frame.
All implementations MUST call back on the thread that owns the simulation.
"""

from abc import ABC, abstractmethod
from typing import Callable


FrameCallback = Callable[[], None]


class FrameScheduler(ABC):
    """
    Abstract interface for a per-frame tick loop.

    The simulation registers a single callback with start() and releases the
    loop with stop(). Starting while running replaces the callback.
    """

    @abstractmethod
    def start(self, callback: FrameCallback) -> None:
        """
        Begin invoking callback once per frame.

        Args:
            callback: Function to call for every frame
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop invoking the callback. Must be safe to call when stopped."""
        pass

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether frames are currently being scheduled."""
        pass
