"""
Domain models (DTOs) for NoteGraph.

These are pure data classes with no Qt or rendering dependencies.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Iterator

from .enums import NodeKind


ROOT_ID = "root"
ROOT_NAME = "Knowledge Base"


# =============================================================================
# Input tree (produced by the external clustering step)
# =============================================================================

@dataclass
class ClusterLeaf:
    """A note placed inside a cluster."""
    id: str
    name: str
    leaf_ref: str                # Id of the note this leaf stands for


@dataclass
class ClusterGroup:
    """A cluster of notes."""
    id: str
    name: str
    description: Optional[str] = None  # Why this cluster exists
    leaves: List[ClusterLeaf] = field(default_factory=list)


ClusterTree = List[ClusterGroup]


# =============================================================================
# Graph generation (consumed by the simulation)
# =============================================================================

@dataclass
class GraphNode:
    """A node in one graph generation, including its physical state."""
    id: str
    name: str
    kind: NodeKind
    leaf_ref: Optional[str] = None         # Present iff kind is LEAF
    origin_group_id: Optional[str] = None  # Leaf only
    description: Optional[str] = None      # Group only

    # Physical state (None until seeded by the simulation)
    x: Optional[float] = None
    y: Optional[float] = None
    vx: Optional[float] = None
    vy: Optional[float] = None

    # Pin (set while dragged)
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def radius(self) -> float:
        return self.kind.radius

    @property
    def is_seeded(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None and self.fy is not None

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        if not self.is_seeded:
            return None
        return (self.x, self.y)

    def copy_physics_from(self, other: "GraphNode") -> None:
        """Copy x/y/vx/vy from a node of a previous generation."""
        self.x = other.x
        self.y = other.y
        self.vx = other.vx
        self.vy = other.vy


@dataclass(frozen=True)
class GraphEdge:
    """A link between two nodes, referenced by id."""
    source_id: str
    target_id: str
    target_distance: float


@dataclass
class GraphGeneration:
    """The flattened graph produced by one rebuild."""
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    generation: int = 0
    issues: List[str] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        # Allows `nodes, edges = synchronizer.rebuild(tree)`
        yield self.nodes
        yield self.edges

    @property
    def root(self) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.kind is NodeKind.ROOT:
                return node
        return None

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
