"""
Base ViewModel class for NoteGraph MVVM architecture.

ViewModels own the headless core services, expose their state as
properties, and re-emit core callbacks as Qt signals for the views.
"""

from typing import Optional, Any
from PyQt6.QtCore import QObject, pyqtSignal


class BaseViewModel(QObject):
    """
    Base class for all ViewModels.

    Pattern:
    - Properties with signals on change
    - Commands as methods
    - No widget references (UI-agnostic)
    - Services injected via constructor
    - shutdown() releases timers and other event-loop resources
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._is_shut_down = False

    @property
    def is_shut_down(self) -> bool:
        return self._is_shut_down

    def shutdown(self) -> None:
        """Release resources. Subclasses extend this; safe to call twice."""
        self._is_shut_down = True

    def _notify_change(self, signal: pyqtSignal, *args: Any) -> None:
        """Emit a signal unless the ViewModel has been shut down."""
        if not self._is_shut_down:
            signal.emit(*args)
