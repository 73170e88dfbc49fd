"""
Enumerations for the NoteGraph domain.
"""

from enum import Enum


class NodeKind(str, Enum):
    """Kind of a node in the knowledge graph."""
    ROOT = "root"    # Synthesized "Knowledge Base" node
    GROUP = "group"  # Cluster of notes
    LEAF = "leaf"    # A single note

    @property
    def radius(self) -> float:
        """Fixed node radius for this kind."""
        if self is NodeKind.ROOT:
            return 35.0
        elif self is NodeKind.GROUP:
            return 25.0
        elif self is NodeKind.LEAF:
            return 12.0
        raise ValueError(f"Unhandled node kind: {self!r}")

    @property
    def can_reparent(self) -> bool:
        """Whether dragging a node of this kind can request a re-parent."""
        if self is NodeKind.LEAF:
            return True
        elif self in (NodeKind.ROOT, NodeKind.GROUP):
            return False
        raise ValueError(f"Unhandled node kind: {self!r}")


class DragState(str, Enum):
    """States of the drag gesture controller."""
    IDLE = "idle"
    DRAGGING = "dragging"
