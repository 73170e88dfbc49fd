"""
Graph Synchronizer - flattens a cluster tree into a node/edge generation.

Each rebuild produces fresh node objects. Physical state is carried over
from the previous generation by id only; no object from an older generation
is ever handed to the simulation.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..domain.config import ForceConfig, DEFAULT_FORCE_CONFIG
from ..domain.enums import NodeKind
from ..domain.models import (
    ROOT_ID,
    ROOT_NAME,
    ClusterTree,
    GraphEdge,
    GraphGeneration,
    GraphNode,
)
from .tree_loader import validate_tree

logger = logging.getLogger(__name__)


class GraphSynchronizer:
    """
    Builds graph generations from cluster trees.

    Usage:
        sync = GraphSynchronizer()
        nodes, edges = sync.rebuild(tree)
        ...
        nodes, edges = sync.rebuild(updated_tree)  # positions carried over
    """

    def __init__(self, config: ForceConfig = DEFAULT_FORCE_CONFIG):
        self._config = config
        self._previous: Dict[str, GraphNode] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of generations built so far."""
        return self._generation

    def reset(self) -> None:
        """Forget the previous generation (next rebuild starts unseeded)."""
        self._previous = {}

    def rebuild(self, tree: Optional[ClusterTree]) -> GraphGeneration:
        """
        Flatten the tree and merge it against the previous generation.

        Args:
            tree: List of cluster groups (None is treated as empty)

        Returns:
            GraphGeneration with fresh nodes and id-resolved edges
        """
        tree = tree or []
        issues = validate_tree(tree)
        for issue in issues:
            logger.warning("[Synchronizer] %s", issue)

        # Last write wins on duplicate ids
        nodes_by_id: Dict[str, GraphNode] = {}
        edge_pairs: List[Tuple[str, str]] = []

        nodes_by_id[ROOT_ID] = GraphNode(id=ROOT_ID, name=ROOT_NAME, kind=NodeKind.ROOT)

        for group in tree:
            if not group.id or group.id == ROOT_ID:
                continue
            nodes_by_id[group.id] = GraphNode(
                id=group.id,
                name=group.name,
                kind=NodeKind.GROUP,
                description=group.description,
            )
            edge_pairs.append((ROOT_ID, group.id))

            for leaf in group.leaves:
                if not leaf.id or not leaf.leaf_ref or leaf.id == ROOT_ID:
                    continue
                nodes_by_id[leaf.id] = GraphNode(
                    id=leaf.id,
                    name=leaf.name,
                    kind=NodeKind.LEAF,
                    leaf_ref=leaf.leaf_ref,
                    origin_group_id=group.id,
                )
                edge_pairs.append((group.id, leaf.id))

        # A leaf may have overwritten its own group; drop orphaned leaves
        for node_id in list(nodes_by_id):
            node = nodes_by_id[node_id]
            if node.kind is NodeKind.LEAF:
                origin = nodes_by_id.get(node.origin_group_id)
                if origin is None or origin.kind is not NodeKind.GROUP:
                    del nodes_by_id[node_id]

        edges = self._resolve_edges(edge_pairs, nodes_by_id)

        # Continuity: copy physics by id, never by reference
        for node in nodes_by_id.values():
            prior = self._previous.get(node.id)
            if prior is not None:
                node.copy_physics_from(prior)

        nodes = list(nodes_by_id.values())
        self._previous = nodes_by_id
        self._generation += 1

        logger.debug(
            "[Synchronizer] Generation %d: %d nodes, %d edges",
            self._generation, len(nodes), len(edges),
        )
        return GraphGeneration(
            nodes=nodes,
            edges=edges,
            generation=self._generation,
            issues=issues,
        )

    def _resolve_edges(
        self,
        edge_pairs: List[Tuple[str, str]],
        nodes_by_id: Dict[str, GraphNode],
    ) -> List[GraphEdge]:
        """Turn id pairs into edges, dropping dangling or ill-kinded ones."""
        edges: List[GraphEdge] = []
        seen = set()
        for source_id, target_id in edge_pairs:
            if (source_id, target_id) in seen:
                continue
            source = nodes_by_id.get(source_id)
            target = nodes_by_id.get(target_id)
            if source is None or target is None:
                continue
            distance = self._config.edge_distance(source.kind, target.kind)
            if distance is None:
                continue
            # A leaf listed under two groups keeps only the edge to its origin
            if target.kind is NodeKind.LEAF and target.origin_group_id != source_id:
                continue
            seen.add((source_id, target_id))
            edges.append(GraphEdge(source_id, target_id, distance))
        return edges
