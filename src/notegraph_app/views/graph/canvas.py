"""
GraphCanvas - QPainter-based knowledge graph visualization.

Features:
- Live force-directed layout (repaints every simulation tick)
- Drag notes onto another cluster to request a move
- Click a note to select it
- Scroll or pinch to zoom, drag the background (or middle button) to pan
"""

from typing import Optional

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QEvent, QPointF, QRectF
from PyQt6.QtGui import (
    QPainter, QFont, QWheelEvent, QMouseEvent, QPaintEvent, QResizeEvent,
)

from notegraph_core.domain.enums import DragState, NodeKind
from notegraph_core.domain.models import GraphNode
from ...viewmodels.graph_vm import GraphVM
from .style_manager import StyleManager


class GraphCanvas(QWidget):
    """
    Custom widget drawing the graph held by a GraphVM.

    All interaction state lives in the ViewModel; this widget converts mouse
    positions to scene coordinates and paints.
    """

    def __init__(
        self,
        vm: GraphVM,
        style_manager: Optional[StyleManager] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._vm = vm
        self._style = style_manager or StyleManager()

        # Pan state
        self._panning = False
        self._pan_last: Optional[QPointF] = None

        # Hovered node for tooltips
        self._hovered_id: Optional[str] = None

        self.setMouseTracking(True)
        self.setMinimumSize(400, 300)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._bind_viewmodel()

    def _bind_viewmodel(self):
        self._vm.graph_changed.connect(self.update)
        self._vm.positions_changed.connect(self.update)
        self._vm.highlight_changed.connect(lambda *_: self.update())
        self._vm.transform_changed.connect(self.update)

    @property
    def style_manager(self) -> StyleManager:
        return self._style

    # -------------------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent):
        """Paint the graph."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Background (drawn without transform)
        painter.fillRect(self.rect(), self._style.get_background_brush())

        nodes = [n for n in self._vm.nodes if n.is_seeded]
        if len(nodes) <= 1:
            painter.setPen(self._style.get_text_pen())
            painter.setFont(QFont(self._style.style.font_family, 11))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter,
                             "No clusters yet - run clustering to build the graph")
            return

        # Zoom indicator in corner
        viewport = self._vm.viewport
        if viewport.scale != 1.0:
            painter.setPen(self._style.get_text_pen())
            painter.setFont(QFont(self._style.style.font_family, 9))
            painter.drawText(10, self.height() - 10, f"Zoom: {viewport.scale:.0%}")

        # Apply zoom and pan transform
        tx, ty = viewport.translation
        painter.translate(tx, ty)
        painter.scale(viewport.scale, viewport.scale)

        # Draw edges
        painter.setPen(self._style.get_edge_pen())
        for edge in self._vm.edges:
            source = self._vm.get_node(edge.source_id)
            target = self._vm.get_node(edge.target_id)
            if source is None or target is None or not (source.is_seeded and target.is_seeded):
                continue
            painter.drawLine(QPointF(source.x, source.y), QPointF(target.x, target.y))

        # Draw nodes: root and groups first so notes stay on top
        dragged_id = self._vm.dragged_node_id
        target_id = self._vm.drop_target_id
        for kind in (NodeKind.ROOT, NodeKind.GROUP, NodeKind.LEAF):
            for node in nodes:
                if node.kind is kind:
                    self._paint_node(
                        painter, node,
                        dragged=node.id == dragged_id,
                        drop_target=node.id == target_id,
                    )

    def _paint_node(self, painter: QPainter, node: GraphNode, dragged: bool, drop_target: bool):
        center = QPointF(node.x, node.y)
        radius = node.radius

        painter.setPen(self._style.get_node_pen(dragged=dragged, drop_target=drop_target))
        painter.setBrush(self._style.get_node_brush(node.kind))
        painter.drawEllipse(center, radius, radius)

        # Label to the right of the node
        painter.setPen(self._style.get_text_pen())
        painter.setFont(self._style.get_font(node.kind))
        label_rect = QRectF(
            node.x + radius + self._style.style.label_gap, node.y - 8, 220, 16
        )
        painter.drawText(
            label_rect,
            Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
            node.name,
        )

    # -------------------------------------------------------------------------
    # Resize
    # -------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self._vm.set_viewport_size(self.width(), self.height())

    # -------------------------------------------------------------------------
    # Mouse
    # -------------------------------------------------------------------------

    def _get_node_at_position(self, pos: QPointF) -> Optional[GraphNode]:
        """Find which node is at the given screen position (topmost first)."""
        x, y = self._vm.screen_to_scene(pos.x(), pos.y())
        # Buffer is larger when zoomed out for easier clicking on small targets
        buffer = 4 / self._vm.viewport.scale

        # Notes are drawn last, so test them first
        for kind in (NodeKind.LEAF, NodeKind.GROUP, NodeKind.ROOT):
            for node in reversed(self._vm.nodes):
                if node.kind is not kind or not node.is_seeded:
                    continue
                hit_radius = node.radius + buffer
                if (x - node.x) ** 2 + (y - node.y) ** 2 <= hit_radius ** 2:
                    return node
        return None

    def mousePressEvent(self, event: QMouseEvent):
        """Start a node drag, or pan when pressing on the background."""
        pos = event.position()

        if event.button() == Qt.MouseButton.LeftButton:
            node = self._get_node_at_position(pos)
            if node is not None:
                x, y = self._vm.screen_to_scene(pos.x(), pos.y())
                self._vm.begin_drag(node.id, x, y)
                self.setCursor(Qt.CursorShape.ClosedHandCursor)
                event.accept()
                return

        if event.button() in (Qt.MouseButton.LeftButton, Qt.MouseButton.MiddleButton):
            self._panning = True
            self._pan_last = pos
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        """Handle dragging, panning and hover tooltips."""
        pos = event.position()

        if self._vm.drag_state is DragState.DRAGGING:
            x, y = self._vm.screen_to_scene(pos.x(), pos.y())
            self._vm.drag_to(x, y)
            event.accept()
            return

        if self._panning and self._pan_last is not None:
            delta = pos - self._pan_last
            self._pan_last = pos
            self._vm.pan_by(delta.x(), delta.y())
            event.accept()
            return

        node = self._get_node_at_position(pos)
        node_id = node.id if node is not None else None
        if node_id != self._hovered_id:
            self._hovered_id = node_id
            self.setToolTip(self._tooltip_for(node) if node is not None else "")
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        """Finish a drag or stop panning."""
        if event.button() == Qt.MouseButton.LeftButton and self._vm.drag_state is DragState.DRAGGING:
            self._vm.end_drag()
            self.setCursor(Qt.CursorShape.ArrowCursor)
            event.accept()
            return

        if self._panning:
            self._panning = False
            self._pan_last = None
            self.setCursor(Qt.CursorShape.ArrowCursor)
            event.accept()
            return

        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        """Handle scroll wheel for zooming around the mouse position."""
        delta = event.angleDelta().y()
        if delta != 0:
            pos = event.position()
            self._vm.zoom(delta, pos.x(), pos.y())
        event.accept()

    def event(self, event):
        """Trackpad pinch zooms around the gesture position."""
        if event.type() == QEvent.Type.NativeGesture:
            if event.gestureType() == Qt.NativeGestureType.ZoomNativeGesture:
                pos = event.position()
                self._vm.zoom_by(1.0 + event.value(), pos.x(), pos.y())
                event.accept()
                return True
        return super().event(event)

    def keyPressEvent(self, event):
        """Escape cancels a drag; Home resets the view."""
        if event.key() == Qt.Key.Key_Escape and self._vm.drag_state is DragState.DRAGGING:
            self._vm.cancel_drag()
            self.setCursor(Qt.CursorShape.ArrowCursor)
        elif event.key() == Qt.Key.Key_Home:
            self._vm.reset_view()
        else:
            super().keyPressEvent(event)

    def _tooltip_for(self, node: GraphNode) -> str:
        if node.kind is NodeKind.LEAF:
            return f"{node.name}\nClick to open, drag onto another cluster to move"
        elif node.kind is NodeKind.GROUP:
            lines = [node.name]
            if node.description:
                lines.append(node.description)
            return "\n".join(lines)
        elif node.kind is NodeKind.ROOT:
            return f"{node.name}\nScroll to zoom, drag background to pan"
        raise ValueError(f"Unhandled node kind: {node.kind!r}")
