"""
Main Window for NoteGraph.

Thin view layer using MVVM pattern:
- GraphVM holds graph state and interaction logic
- This window owns the cluster tree, applies move requests to it and
  rebuilds the graph from the result
"""

import logging
from typing import Dict, Optional

from PyQt6.QtWidgets import QMainWindow, QToolBar
from PyQt6.QtGui import QAction

from notegraph_core.domain.models import ClusterTree
from notegraph_core.services.tree_edit import reparent_leaf
from ..viewmodels import GraphVM
from .graph import GraphCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window using MVVM pattern."""

    def __init__(
        self,
        tree: ClusterTree,
        note_titles: Optional[Dict[str, str]] = None,
    ):
        super().__init__()

        self.setWindowTitle("NoteGraph - Knowledge Graph")
        self.resize(1200, 800)

        self._tree = tree
        self._note_titles = note_titles or {}

        # ViewModel and canvas
        self._graph_vm = GraphVM(parent=self)
        self._canvas = GraphCanvas(self._graph_vm, parent=self)
        self.setCentralWidget(self._canvas)

        self._setup_toolbar()
        self.statusBar().showMessage("Drag a note onto another cluster to move it")

        # Bind ViewModel callbacks
        self._graph_vm.set_on_select(self._on_note_selected)
        self._graph_vm.set_on_reparent(self._on_reparent_requested)

        # Initial data load
        self._graph_vm.set_viewport_size(self._canvas.width(), self._canvas.height())
        self._graph_vm.set_tree(self._tree)

    @property
    def graph_vm(self) -> GraphVM:
        return self._graph_vm

    def _setup_toolbar(self):
        toolbar = QToolBar("View", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        reset_action = QAction("Reset View", self)
        reset_action.triggered.connect(self._graph_vm.reset_view)
        toolbar.addAction(reset_action)

        relayout_action = QAction("Re-layout", self)
        relayout_action.triggered.connect(lambda: self._graph_vm.set_tree(self._tree))
        toolbar.addAction(relayout_action)

    # -------------------------------------------------------------------------
    # Collaborator callbacks
    # -------------------------------------------------------------------------

    def _on_note_selected(self, leaf_ref: str):
        title = self._note_titles.get(leaf_ref, leaf_ref)
        self.statusBar().showMessage(f"Selected: {title}", 5000)

    def _on_reparent_requested(self, leaf_ref: str, group_id: str, group_name: str):
        title = self._note_titles.get(leaf_ref, leaf_ref)
        self._tree = reparent_leaf(self._tree, leaf_ref, group_id)
        self._graph_vm.set_tree(self._tree)
        self.statusBar().showMessage(f"Moved '{title}' to {group_name}", 5000)

    def closeEvent(self, event):
        """Handle window close."""
        self._graph_vm.shutdown()
        event.accept()
