"""
Adapters for NoteGraph.

Implementations of the port interfaces.
"""

from .manual_scheduler import ManualScheduler

__all__ = ["ManualScheduler"]
