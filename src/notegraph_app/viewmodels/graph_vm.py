"""
Graph ViewModel for the knowledge-graph visualization.

Manages:
- The current cluster tree and the graph generation built from it
- The force simulation and its frame loop
- Drag gestures (pinning, drop targets, re-parent requests)
- The pan/zoom viewport

The GraphCanvas widget reads state from this ViewModel and focuses purely on
rendering and forwarding mouse input.
"""

import logging
from typing import Any, Callable, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .base import BaseViewModel
from notegraph_core.domain.enums import DragState
from notegraph_core.domain.models import ClusterTree, GraphEdge, GraphGeneration, GraphNode
from notegraph_core.ports.scheduler_port import FrameScheduler
from notegraph_core.services.callbacks import CallbackSlot
from notegraph_core.services.drag_controller import DragController
from notegraph_core.services.simulation import ForceSimulation
from notegraph_core.services.synchronizer import GraphSynchronizer
from notegraph_core.services.viewport import Viewport

logger = logging.getLogger(__name__)


class GraphVM(BaseViewModel):
    """
    ViewModel for the knowledge graph.

    Signals:
        graph_changed: Emitted when a new generation replaces the old one
        positions_changed: Emitted after every simulation tick
        highlight_changed(object, object): (dragged_id, drop_target_id), None when cleared
        transform_changed: Emitted when pan/zoom changes
        note_selected(str): leaf_ref of a clicked note
        reparent_requested(str, str, str): (leaf_ref, group_id, group_name)

    External callbacks (latest registered one is used):
        set_on_select(callback(leaf_ref))
        set_on_reparent(callback(leaf_ref, group_id, group_name))
    """

    # Signals
    graph_changed = pyqtSignal()
    positions_changed = pyqtSignal()
    highlight_changed = pyqtSignal(object, object)
    transform_changed = pyqtSignal()
    note_selected = pyqtSignal(str)
    reparent_requested = pyqtSignal(str, str, str)

    def __init__(
        self,
        scheduler: Optional[FrameScheduler] = None,
        parent: Optional[QObject] = None,
    ):
        """
        Initialize the ViewModel.

        Args:
            scheduler: Frame loop for the simulation (QTimer-based if None)
            parent: Optional parent QObject
        """
        super().__init__(parent)

        if scheduler is None:
            from notegraph_app.workers.frame_timer import QtFrameScheduler
            scheduler = QtFrameScheduler(self)

        self._sync = GraphSynchronizer()
        self._sim = ForceSimulation(scheduler)
        self._drag = DragController(self._sim)
        self._viewport = Viewport()

        # State
        self._tree: ClusterTree = []
        self._generation: Optional[GraphGeneration] = None
        self._size: Tuple[float, float] = (0.0, 0.0)
        self._highlight: Tuple[Optional[str], Optional[str]] = (None, None)

        # Collaborator callbacks
        self._on_select = CallbackSlot("on_select")
        self._on_reparent = CallbackSlot("on_reparent")

        # Core -> Qt wiring
        self._sim.on_tick.set(self._handle_tick)
        self._drag.on_highlight.set(self._handle_highlight)
        self._drag.on_select.set(self._handle_select)
        self._drag.on_reparent.set(self._handle_reparent)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def tree(self) -> ClusterTree:
        """Current cluster tree (as supplied by the owner)."""
        return self._tree

    @property
    def generation(self) -> Optional[GraphGeneration]:
        return self._generation

    @property
    def nodes(self) -> Tuple[GraphNode, ...]:
        """Live nodes of the running simulation."""
        return self._sim.nodes

    @property
    def edges(self) -> Tuple[GraphEdge, ...]:
        return self._sim.edges

    @property
    def simulation(self) -> ForceSimulation:
        return self._sim

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def drag_state(self) -> DragState:
        return self._drag.state

    @property
    def dragged_node_id(self) -> Optional[str]:
        return self._drag.dragged_node_id

    @property
    def drop_target_id(self) -> Optional[str]:
        return self._highlight[1]

    @property
    def viewport_size(self) -> Tuple[float, float]:
        return self._size

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self._sim.get_node(node_id)

    # -------------------------------------------------------------------------
    # Callback registration
    # -------------------------------------------------------------------------

    def set_on_select(self, callback: Optional[Callable[[str], Any]]) -> None:
        """Register the note selection callback (replaces the previous one)."""
        self._on_select.set(callback)

    def set_on_reparent(self, callback: Optional[Callable[[str, str, str], Any]]) -> None:
        """Register the re-parent callback (replaces the previous one)."""
        self._on_reparent.set(callback)

    # -------------------------------------------------------------------------
    # Data Commands
    # -------------------------------------------------------------------------

    def set_tree(self, tree: Optional[ClusterTree]) -> GraphGeneration:
        """
        Rebuild the graph from a new cluster tree.

        Any drag in progress is cancelled; positions of surviving nodes are
        kept.

        Returns:
            The new generation
        """
        self._drag.cancel()
        self._sim.stop()

        self._tree = list(tree or [])
        self._generation = self._sync.rebuild(self._tree)
        self._start_simulation()
        self._notify_change(self.graph_changed)
        return self._generation

    def set_viewport_size(self, width: float, height: float) -> None:
        """
        Update the drawable area.

        A generation that could not start on a zero-area viewport is started
        once the area becomes usable.
        """
        was_empty = not (self._size[0] > 0 and self._size[1] > 0)
        self._size = (float(width), float(height))
        if was_empty and self._generation is not None and not self._sim.nodes:
            self._start_simulation()
            self._notify_change(self.graph_changed)

    def _start_simulation(self) -> None:
        if self._generation is None:
            return
        width, height = self._size
        started = self._sim.start(
            self._generation.nodes, self._generation.edges, width, height
        )
        if not started:
            logger.debug("[GraphVM] Simulation not started (viewport %sx%s)", width, height)

    # -------------------------------------------------------------------------
    # Pointer Commands (scene coordinates)
    # -------------------------------------------------------------------------

    def begin_drag(self, node_id: str, x: Optional[float] = None, y: Optional[float] = None) -> bool:
        return self._drag.pointer_down(node_id, x, y)

    def drag_to(self, x: float, y: float) -> None:
        self._drag.pointer_move(x, y)

    def end_drag(self) -> None:
        self._drag.pointer_up()

    def cancel_drag(self) -> None:
        self._drag.cancel()

    # -------------------------------------------------------------------------
    # Viewport Commands (screen coordinates)
    # -------------------------------------------------------------------------

    def zoom(self, delta: float, anchor_x: float = 0.0, anchor_y: float = 0.0) -> None:
        if self._viewport.wheel(delta, anchor_x, anchor_y):
            self._notify_change(self.transform_changed)

    def zoom_by(self, factor: float, anchor_x: float = 0.0, anchor_y: float = 0.0) -> None:
        if self._viewport.zoom_by(factor, anchor_x, anchor_y):
            self._notify_change(self.transform_changed)

    def pan_by(self, dx: float, dy: float) -> None:
        self._viewport.pan_by(dx, dy)
        self._notify_change(self.transform_changed)

    def reset_view(self) -> None:
        self._viewport.reset()
        self._notify_change(self.transform_changed)

    def screen_to_scene(self, x: float, y: float) -> Tuple[float, float]:
        return self._viewport.screen_to_scene(x, y)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def shutdown(self) -> None:
        """Cancel any drag and stop the frame loop."""
        self._drag.cancel()
        self._sim.stop()
        super().shutdown()

    # -------------------------------------------------------------------------
    # Core callbacks
    # -------------------------------------------------------------------------

    def _handle_tick(self) -> None:
        self._notify_change(self.positions_changed)

    def _handle_highlight(self, dragged_id: Optional[str], target_id: Optional[str]) -> None:
        self._highlight = (dragged_id, target_id)
        self._notify_change(self.highlight_changed, dragged_id, target_id)

    def _handle_select(self, leaf_ref: str) -> None:
        self._notify_change(self.note_selected, leaf_ref)
        self._on_select.invoke(leaf_ref)

    def _handle_reparent(self, leaf_ref: str, group_id: str, group_name: str) -> None:
        self._notify_change(self.reparent_requested, leaf_ref, group_id, group_name)
        self._on_reparent.invoke(leaf_ref, group_id, group_name)
