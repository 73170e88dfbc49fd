"""
Event-loop helpers for NoteGraph.

These run periodic work on the GUI thread without blocking the UI.
"""

from .frame_timer import QtFrameScheduler

__all__ = [
    "QtFrameScheduler",
]
