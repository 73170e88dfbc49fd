"""
Domain models for NoteGraph.

Contains DTOs, enums, and fixed configuration used throughout the application.
"""

from .models import (
    ROOT_ID,
    ROOT_NAME,
    ClusterLeaf,
    ClusterGroup,
    ClusterTree,
    GraphNode,
    GraphEdge,
    GraphGeneration,
)
from .enums import (
    NodeKind,
    DragState,
)
from .config import (
    ForceConfig,
    DragConfig,
    DEFAULT_FORCE_CONFIG,
    DEFAULT_DRAG_CONFIG,
)

__all__ = [
    # Models
    "ROOT_ID",
    "ROOT_NAME",
    "ClusterLeaf",
    "ClusterGroup",
    "ClusterTree",
    "GraphNode",
    "GraphEdge",
    "GraphGeneration",
    # Enums
    "NodeKind",
    "DragState",
    # Config
    "ForceConfig",
    "DragConfig",
    "DEFAULT_FORCE_CONFIG",
    "DEFAULT_DRAG_CONFIG",
]
