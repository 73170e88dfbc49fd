"""
Services for NoteGraph.

Graph synchronization, force simulation, drag handling and viewport state.
"""

from .callbacks import CallbackSlot
from .synchronizer import GraphSynchronizer
from .simulation import ForceSimulation
from .drag_controller import DragController
from .viewport import Viewport, ViewTransform, MIN_SCALE, MAX_SCALE
from .tree_loader import parse_cluster_tree, validate_tree, tree_to_dicts
from .tree_edit import reparent_leaf

__all__ = [
    "CallbackSlot",
    "GraphSynchronizer",
    "ForceSimulation",
    "DragController",
    "Viewport",
    "ViewTransform",
    "MIN_SCALE",
    "MAX_SCALE",
    "parse_cluster_tree",
    "validate_tree",
    "tree_to_dicts",
    "reparent_leaf",
]
