"""
ViewModels for NoteGraph app.

MVVM architecture separating interaction logic from UI:
- ViewModels handle state and wire the headless core to Qt signals
- Views (Qt widgets) handle rendering and user input
- Core services handle layout, gestures and viewport math
"""

from .base import BaseViewModel
from .graph_vm import GraphVM

__all__ = [
    # Base
    "BaseViewModel",

    # ViewModels
    "GraphVM",
]
