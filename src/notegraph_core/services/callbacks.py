"""
Single-slot holder for externally supplied callbacks.

The collaborator replaces the callback whenever it has a new one; the owner
reads the slot only at the moment it fires. Nothing captures the function
earlier, so a gesture that started before a replacement still reaches the
latest callback.
"""

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class CallbackSlot:
    """Holds at most one callback, read at invocation time."""

    def __init__(self, name: str, callback: Optional[Callable[..., Any]] = None):
        self.name = name
        self._callback = callback

    @property
    def is_set(self) -> bool:
        return self._callback is not None

    @property
    def current(self) -> Optional[Callable[..., Any]]:
        return self._callback

    def set(self, callback: Optional[Callable[..., Any]]) -> None:
        """Replace the stored callback (None clears it)."""
        self._callback = callback

    def clear(self) -> None:
        self._callback = None

    def invoke(self, *args: Any) -> bool:
        """
        Call the currently registered callback.

        Returns:
            True if a callback was registered and called
        """
        callback = self._callback
        if callback is None:
            logger.debug("[%s] No callback registered, skipping", self.name)
            return False
        callback(*args)
        return True
