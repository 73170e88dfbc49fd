"""
Drag Controller - turns pointer events into pins, drop targets and requests.

State machine:
    IDLE --pointer_down--> DRAGGING --pointer_up / cancel--> IDLE

While a leaf is dragged, every group other than the leaf's own is a drop
candidate when the leaf's simulated position is closer than hit_threshold +
group radius. Groups are scanned in arena order and the last candidate found
becomes the hover target. Releasing over a target asks the tree owner to
re-parent the leaf; the controller itself never edits the tree.

Signals (callback slots, read at the moment they fire):
    on_highlight(dragged_id, target_group_id): after every move and on release
    on_select(leaf_ref): press/release on a leaf without moving
    on_reparent(leaf_ref, group_id, group_name): release over a drop target
"""

import logging
import math
from typing import Optional, Tuple

from ..domain.config import DragConfig, DEFAULT_DRAG_CONFIG
from ..domain.enums import DragState, NodeKind
from ..domain.models import GraphNode
from .callbacks import CallbackSlot
from .simulation import ForceSimulation

logger = logging.getLogger(__name__)


class DragController:
    """Pointer gesture state machine on top of a ForceSimulation."""

    def __init__(
        self,
        simulation: ForceSimulation,
        config: DragConfig = DEFAULT_DRAG_CONFIG,
    ):
        self._sim = simulation
        self._config = config

        self._state = DragState.IDLE
        self._node_id: Optional[str] = None
        self._hover_target_id: Optional[str] = None
        self._press_pos: Optional[Tuple[float, float]] = None
        self._moved = False

        self.on_highlight = CallbackSlot("on_highlight")
        self.on_select = CallbackSlot("on_select")
        self.on_reparent = CallbackSlot("on_reparent")

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragged_node_id(self) -> Optional[str]:
        return self._node_id

    @property
    def hover_target_id(self) -> Optional[str]:
        return self._hover_target_id

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def pointer_down(
        self,
        node_id: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> bool:
        """
        Start dragging a node.

        Args:
            node_id: Node under the pointer
            x, y: Pointer position in scene coordinates (for click detection)

        Returns:
            True if a drag started
        """
        if self._state is DragState.DRAGGING:
            self.cancel()

        node = self._sim.get_node(node_id)
        if node is None or not node.is_seeded:
            return False

        self._state = DragState.DRAGGING
        self._node_id = node_id
        self._hover_target_id = None
        self._moved = False
        if x is None or y is None:
            self._press_pos = (node.x, node.y)
        else:
            self._press_pos = (x, y)

        self._sim.pin(node_id, node.x, node.y)
        return True

    def pointer_move(self, x: float, y: float) -> None:
        """Move the dragged node to the pointer and update the drop target."""
        if self._state is not DragState.DRAGGING:
            return

        node = self._sim.get_node(self._node_id)
        if node is None:
            # Generation was replaced under us
            self.cancel()
            return

        if not self._moved and self._press_pos is not None:
            px, py = self._press_pos
            if math.hypot(x - px, y - py) > self._config.click_slop:
                self._moved = True

        self._sim.pin(self._node_id, x, y)

        if node.kind.can_reparent:
            self._hover_target_id = self._find_drop_target(node)

        self.on_highlight.invoke(self._node_id, self._hover_target_id)

    def pointer_up(self) -> None:
        """Release the dragged node and send a click or re-parent request."""
        if self._state is not DragState.DRAGGING:
            return

        node_id = self._node_id
        target_id = self._hover_target_id
        moved = self._moved
        self._reset()

        self._sim.unpin(node_id)
        self.on_highlight.invoke(None, None)

        node = self._sim.get_node(node_id)
        if node is None or not node.kind.can_reparent:
            return

        if target_id is not None:
            target = self._sim.get_node(target_id)
            if target is not None and target.kind is NodeKind.GROUP:
                logger.info(
                    "[DragController] Requesting move of %r to group %r",
                    node.leaf_ref, target.id,
                )
                self.on_reparent.invoke(node.leaf_ref, target.id, target.name)
        elif not moved:
            self.on_select.invoke(node.leaf_ref)

    def cancel(self) -> None:
        """Abort the gesture: release the node with no notification."""
        if self._state is not DragState.DRAGGING:
            return
        node_id = self._node_id
        self._reset()
        self._sim.unpin(node_id)
        self.on_highlight.invoke(None, None)

    # -------------------------------------------------------------------------
    # Hit testing
    # -------------------------------------------------------------------------

    def _find_drop_target(self, leaf: GraphNode) -> Optional[str]:
        """
        Last group (in arena order) within reach of the leaf's current
        position, excluding the leaf's own group.

        The position is the simulated one, so a new pin only counts once a
        tick has moved the leaf there.
        """
        target_id: Optional[str] = None
        for group in self._sim.iter_nodes(NodeKind.GROUP):
            if group.id == leaf.origin_group_id or not group.is_seeded:
                continue
            distance = math.hypot(leaf.x - group.x, leaf.y - group.y)
            if distance < self._config.hit_threshold + group.radius:
                target_id = group.id
        return target_id

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._node_id = None
        self._hover_target_id = None
        self._press_pos = None
        self._moved = False
