"""
Graph visualization package.

This package provides the interactive knowledge graph with:
- Live force-directed layout
- Drag-to-recluster for notes
- Pan and bounded zoom
"""

from .canvas import GraphCanvas
from .style_manager import StyleManager, GraphStyle

__all__ = ["GraphCanvas", "StyleManager", "GraphStyle"]
