"""
Ports (interfaces) for NoteGraph.

These define the contracts that adapters must implement.
This enables dependency injection and testing without a GUI event loop.
"""

from .scheduler_port import FrameScheduler, FrameCallback

__all__ = ["FrameScheduler", "FrameCallback"]
