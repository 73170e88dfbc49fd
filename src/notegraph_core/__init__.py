"""
NoteGraph Core - Headless library for the knowledge-graph view.

This module flattens cluster trees into graphs, lays them out with a
force simulation, and turns pointer gestures into re-parent requests. It has
no UI dependencies and can be embedded in other applications.

The core never edits notes or clusters: it only emits requests.
"""

__version__ = "0.1.0"
__author__ = "NoteGraph Team"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "GraphSynchronizer":
        from .services.synchronizer import GraphSynchronizer
        return GraphSynchronizer
    elif name == "ForceSimulation":
        from .services.simulation import ForceSimulation
        return ForceSimulation
    elif name == "DragController":
        from .services.drag_controller import DragController
        return DragController
    elif name == "Viewport":
        from .services.viewport import Viewport
        return Viewport
    elif name == "ManualScheduler":
        from .adapters.manual_scheduler import ManualScheduler
        return ManualScheduler
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "GraphSynchronizer",
    "ForceSimulation",
    "DragController",
    "Viewport",
    "ManualScheduler",
]
