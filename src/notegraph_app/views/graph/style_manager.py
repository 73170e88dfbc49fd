"""
Style manager for the knowledge graph.

Centralizes all colors, pens and fonts. Every lookup dispatches on NodeKind.
"""

from dataclasses import dataclass, field
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPen, QBrush

from notegraph_core.domain.enums import NodeKind


@dataclass
class GraphStyle:
    """All styling parameters for the graph."""

    # Background
    bg_color: QColor = field(default_factory=lambda: QColor(15, 17, 23))

    # Node colors
    root_color: QColor = field(default_factory=lambda: QColor(168, 85, 247))   # Purple
    group_color: QColor = field(default_factory=lambda: QColor(59, 130, 246))  # Blue
    leaf_color: QColor = field(default_factory=lambda: QColor(100, 116, 139))  # Slate
    node_outline_color: QColor = field(default_factory=lambda: QColor(255, 255, 255))

    # Edges
    edge_color: QColor = field(default_factory=lambda: QColor(46, 50, 62))

    # Text
    text_color: QColor = field(default_factory=lambda: QColor(226, 232, 240))

    # Drag feedback
    drop_target_color: QColor = field(default_factory=lambda: QColor(250, 204, 21))  # Amber
    dragged_color: QColor = field(default_factory=lambda: QColor(125, 211, 252))     # Sky

    # Fonts
    font_family: str = "Segoe UI"
    leaf_font_size: int = 8
    group_font_size: int = 9

    # Labels sit this far right of the node edge
    label_gap: float = 5.0


class StyleManager:
    """Manages all styling for the graph visualization."""

    def __init__(self, style: Optional[GraphStyle] = None):
        self.style = style or GraphStyle()

    # -------------------------------------------------------------------------
    # Color Methods
    # -------------------------------------------------------------------------

    def get_node_color(self, kind: NodeKind) -> QColor:
        """Fill color for a node kind."""
        if kind is NodeKind.ROOT:
            return self.style.root_color
        elif kind is NodeKind.GROUP:
            return self.style.group_color
        elif kind is NodeKind.LEAF:
            return self.style.leaf_color
        raise ValueError(f"Unhandled node kind: {kind!r}")

    # -------------------------------------------------------------------------
    # Font Methods
    # -------------------------------------------------------------------------

    def get_font(self, kind: NodeKind) -> QFont:
        """Label font: notes are small and regular, clusters and root bold."""
        if kind is NodeKind.LEAF:
            return QFont(self.style.font_family, self.style.leaf_font_size)
        elif kind in (NodeKind.GROUP, NodeKind.ROOT):
            font = QFont(self.style.font_family, self.style.group_font_size)
            font.setBold(True)
            return font
        raise ValueError(f"Unhandled node kind: {kind!r}")

    # -------------------------------------------------------------------------
    # Pen/Brush Helpers
    # -------------------------------------------------------------------------

    def get_node_pen(self, dragged: bool = False, drop_target: bool = False) -> QPen:
        """Pen for drawing node outline."""
        if drop_target:
            return QPen(self.style.drop_target_color, 4)
        elif dragged:
            return QPen(self.style.dragged_color, 2.5)
        return QPen(self.style.node_outline_color, 1.5)

    def get_node_brush(self, kind: NodeKind) -> QBrush:
        return QBrush(self.get_node_color(kind))

    def get_edge_pen(self) -> QPen:
        color = QColor(self.style.edge_color)
        color.setAlphaF(0.6)
        return QPen(color, 1.5)

    def get_text_pen(self) -> QPen:
        """Pen for drawing text."""
        return QPen(self.style.text_color)

    def get_background_brush(self) -> QBrush:
        return QBrush(self.style.bg_color, Qt.BrushStyle.SolidPattern)
