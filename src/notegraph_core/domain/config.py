"""
Fixed layout and interaction parameters.

These values are part of the visual design and are not user-tunable.
"""

from dataclasses import dataclass
from typing import Optional

from .enums import NodeKind


@dataclass(frozen=True)
class ForceConfig:
    """Force simulation parameters."""

    # Link distances
    root_group_distance: float = 120.0
    group_leaf_distance: float = 60.0

    # Many-body charge (negative = repulsive)
    charge_strength: float = -400.0
    charge_distance_min: float = 1.0

    # Collision
    collision_radius_scale: float = 1.5
    collision_iterations: int = 2
    collision_strength: float = 1.0

    # Centering
    center_strength: float = 0.1

    # Cooling
    alpha_start: float = 1.0
    alpha_min: float = 0.001
    alpha_decay: float = 1 - 0.001 ** (1 / 300)  # ~300 ticks from 1 to alpha_min
    velocity_decay: float = 0.4
    reheat_alpha_target: float = 0.3

    # Initial placement of unseeded nodes (phyllotaxis spiral)
    initial_radius: float = 10.0

    def edge_distance(self, source_kind: NodeKind, target_kind: NodeKind) -> Optional[float]:
        """
        Target link distance for an edge between two kinds.

        Returns None for kind pairs that never form an edge.
        """
        if source_kind is NodeKind.ROOT:
            return self.root_group_distance if target_kind is NodeKind.GROUP else None
        elif source_kind is NodeKind.GROUP:
            return self.group_leaf_distance if target_kind is NodeKind.LEAF else None
        elif source_kind is NodeKind.LEAF:
            return None
        raise ValueError(f"Unhandled node kind: {source_kind!r}")


@dataclass(frozen=True)
class DragConfig:
    """Drag gesture parameters."""
    hit_threshold: float = 50.0   # Added to the group radius for drop targets
    click_slop: float = 3.0       # Max pointer travel still treated as a click


DEFAULT_FORCE_CONFIG = ForceConfig()
DEFAULT_DRAG_CONFIG = DragConfig()
