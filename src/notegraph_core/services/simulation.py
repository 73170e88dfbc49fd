"""
Force Simulation - live force-directed layout of one graph generation.

Forces (applied every tick, in order):
1. Links pull connected nodes toward their target distance
2. Many-body charge pushes every pair apart (all pairs, vectorised)
3. Centering shifts the whole graph toward the viewport center
4. Collision separates overlapping nodes (radius * 1.5)

Cooling follows the usual alpha scheme: alpha decays toward alpha_target
each tick and the frame loop stops once it drops below alpha_min. Pinning a
node raises alpha_target so its neighbours react while it is dragged.

The simulation is the only owner of the node objects it was started with.
Everything else reads them through the accessors below and writes only via
pin()/unpin().
"""

import logging
import math
from typing import Dict, Iterator, List, Optional, Set, Tuple

import numpy as np

from ..domain.config import ForceConfig, DEFAULT_FORCE_CONFIG
from ..domain.enums import NodeKind
from ..domain.models import GraphEdge, GraphNode
from ..ports.scheduler_port import FrameScheduler
from .callbacks import CallbackSlot

logger = logging.getLogger(__name__)

# Golden angle for the initial phyllotaxis spiral
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

# Linear congruential generator constants (deterministic jiggle)
_LCG_A = 1664525
_LCG_C = 1013904223
_LCG_M = 4294967296


class ForceSimulation:
    """
    Tick-based force simulation driven by a FrameScheduler.

    Signals (callback slots):
        on_tick: Called after every tick with no arguments
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        config: ForceConfig = DEFAULT_FORCE_CONFIG,
    ):
        self._scheduler = scheduler
        self._config = config

        # Arena
        self._nodes: List[GraphNode] = []
        self._index: Dict[str, int] = {}
        self._edges: List[GraphEdge] = []
        # (source index, target index, distance, strength, bias)
        self._links: List[Tuple[int, int, float, float, float]] = []
        self._pinned: Set[str] = set()

        # Cooling state
        self._alpha = 0.0
        self._alpha_target = 0.0
        self._center = (0.0, 0.0)
        self._random_state = 1
        self.tick_count = 0

        self.on_tick = CallbackSlot("on_tick")

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> ForceConfig:
        return self._config

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def alpha_target(self) -> float:
        return self._alpha_target

    @property
    def center(self) -> Tuple[float, float]:
        return self._center

    @property
    def is_running(self) -> bool:
        return self._scheduler.is_running

    @property
    def nodes(self) -> Tuple[GraphNode, ...]:
        """Live nodes (read-only view; positions change every tick)."""
        return tuple(self._nodes)

    @property
    def edges(self) -> Tuple[GraphEdge, ...]:
        """Edges whose endpoints both exist in the current generation."""
        return tuple(self._edges)

    @property
    def pinned_ids(self) -> Set[str]:
        return set(self._pinned)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        idx = self._index.get(node_id)
        return self._nodes[idx] if idx is not None else None

    def position_of(self, node_id: str) -> Optional[Tuple[float, float]]:
        node = self.get_node(node_id)
        return node.position if node is not None else None

    def iter_nodes(self, kind: Optional[NodeKind] = None) -> Iterator[GraphNode]:
        """Iterate live nodes in arena order, optionally of one kind."""
        for node in self._nodes:
            if kind is None or node.kind is kind:
                yield node

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(
        self,
        nodes: List[GraphNode],
        edges: List[GraphEdge],
        width: float,
        height: float,
    ) -> bool:
        """
        Adopt a new generation and begin ticking.

        Args:
            nodes: Nodes of the generation (the simulation takes ownership)
            edges: Edges referencing nodes by id
            width: Viewport width
            height: Viewport height

        Returns:
            True if the simulation was started
        """
        self.stop()
        self._nodes = []
        self._index = {}
        self._edges = []
        self._links = []
        self._pinned = set()
        self._alpha = 0.0
        self._alpha_target = 0.0

        if not (width > 0 and height > 0):
            logger.info("[Simulation] Zero-area viewport (%s x %s), not starting", width, height)
            return False

        # Last write wins on duplicate ids
        by_id: Dict[str, GraphNode] = {}
        for node in nodes:
            by_id[node.id] = node
        self._nodes = list(by_id.values())
        self._index = {node.id: i for i, node in enumerate(self._nodes)}

        self._center = (width / 2.0, height / 2.0)
        self._random_state = 1
        self.tick_count = 0
        self._resolve_links(edges)
        self._seed_positions()

        for node in self._nodes:
            node.fx = None
            node.fy = None

        self._alpha = self._config.alpha_start

        if len(self._nodes) <= 1:
            # Nothing to lay out; show the lone root at the center
            for node in self._nodes:
                node.x, node.y = self._center
                node.vx = node.vy = 0.0
            self.on_tick.invoke()
            return True

        self._scheduler.start(self._on_frame)
        logger.debug(
            "[Simulation] Started with %d nodes, %d links",
            len(self._nodes), len(self._links),
        )
        return True

    def stop(self) -> None:
        """Halt the tick loop. Safe to call repeatedly."""
        if self._scheduler.is_running:
            self._scheduler.stop()

    def _on_frame(self) -> None:
        self.tick()
        if self._alpha < self._config.alpha_min:
            self._scheduler.stop()
            logger.debug("[Simulation] Settled after %d ticks", self.tick_count)

    def _resolve_links(self, edges: List[GraphEdge]) -> None:
        """Resolve edges by id, dropping any whose endpoints are missing."""
        resolved: List[Tuple[int, int, GraphEdge]] = []
        for edge in edges:
            s = self._index.get(edge.source_id)
            t = self._index.get(edge.target_id)
            if s is None or t is None or s == t:
                logger.debug(
                    "[Simulation] Dropping dangling edge %s -> %s",
                    edge.source_id, edge.target_id,
                )
                continue
            resolved.append((s, t, edge))

        count = [0] * len(self._nodes)
        for s, t, _ in resolved:
            count[s] += 1
            count[t] += 1

        for s, t, edge in resolved:
            strength = 1.0 / min(count[s], count[t])
            bias = count[s] / (count[s] + count[t])
            self._links.append((s, t, edge.target_distance, strength, bias))
            self._edges.append(edge)

    def _seed_positions(self) -> None:
        """Place unseeded nodes on a spiral around the center."""
        cx, cy = self._center
        for i, node in enumerate(self._nodes):
            if not node.is_seeded:
                radius = self._config.initial_radius * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = cx + radius * math.cos(angle)
                node.y = cy + radius * math.sin(angle)
            if node.vx is None or node.vy is None:
                node.vx = 0.0
                node.vy = 0.0

    # -------------------------------------------------------------------------
    # Pinning
    # -------------------------------------------------------------------------

    def pin(self, node_id: str, x: float, y: float) -> bool:
        """
        Fix a node at (x, y) and reheat the simulation.

        The position takes effect on the next tick.

        Returns:
            True if the node exists and was pinned
        """
        node = self.get_node(node_id)
        if node is None or not (math.isfinite(x) and math.isfinite(y)):
            return False

        node.fx = float(x)
        node.fy = float(y)
        self._pinned.add(node_id)
        self._alpha_target = self._config.reheat_alpha_target

        if not self._scheduler.is_running and len(self._nodes) > 1:
            self._scheduler.start(self._on_frame)
        return True

    def unpin(self, node_id: str) -> bool:
        """
        Release a pinned node back to the simulation.

        Returns:
            True if the node exists
        """
        node = self.get_node(node_id)
        if node is None:
            return False

        node.fx = None
        node.fy = None
        self._pinned.discard(node_id)
        if not self._pinned:
            self._alpha_target = 0.0
        return True

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self) -> None:
        """Advance the simulation by one step."""
        if not self._nodes:
            return

        cfg = self._config
        self._alpha += (self._alpha_target - self._alpha) * cfg.alpha_decay
        alpha = self._alpha

        self._apply_links(alpha)
        self._apply_charge(alpha)
        self._apply_centering()
        for _ in range(cfg.collision_iterations):
            self._apply_collision()

        keep = 1.0 - cfg.velocity_decay
        for node in self._nodes:
            if node.fx is None or node.fy is None:
                node.vx *= keep
                node.vy *= keep
                node.x += node.vx
                node.y += node.vy
            else:
                node.x = node.fx
                node.y = node.fy
                node.vx = 0.0
                node.vy = 0.0

        self.tick_count += 1
        self.on_tick.invoke()

    def _jiggle(self) -> float:
        """Tiny deterministic offset used to separate coincident nodes."""
        self._random_state = (_LCG_A * self._random_state + _LCG_C) % _LCG_M
        return (self._random_state / _LCG_M - 0.5) * 1e-6

    def _apply_links(self, alpha: float) -> None:
        nodes = self._nodes
        for s, t, distance, strength, bias in self._links:
            source = nodes[s]
            target = nodes[t]
            x = target.x + target.vx - source.x - source.vx
            y = target.y + target.vy - source.y - source.vy
            if x == 0:
                x = self._jiggle()
            if y == 0:
                y = self._jiggle()
            length = math.sqrt(x * x + y * y)
            length = (length - distance) / length * alpha * strength
            x *= length
            y *= length
            target.vx -= x * bias
            target.vy -= y * bias
            source.vx += x * (1 - bias)
            source.vy += y * (1 - bias)

    def _apply_charge(self, alpha: float) -> None:
        """All-pairs many-body force (reads positions, writes velocities)."""
        cfg = self._config
        n = len(self._nodes)
        if n < 2:
            return

        xs = np.fromiter((node.x for node in self._nodes), dtype=float, count=n)
        ys = np.fromiter((node.y for node in self._nodes), dtype=float, count=n)

        # dx[i, j] = x_j - x_i
        dx = xs[np.newaxis, :] - xs[:, np.newaxis]
        dy = ys[np.newaxis, :] - ys[:, np.newaxis]

        # Separate coincident pairs before dividing by their distance
        coincident = np.argwhere(np.triu((dx == 0) & (dy == 0), k=1))
        for i, j in coincident:
            jx = self._jiggle()
            jy = self._jiggle()
            dx[i, j], dx[j, i] = jx, -jx
            dy[i, j], dy[j, i] = jy, -jy

        dist2 = dx * dx + dy * dy
        np.fill_diagonal(dist2, np.inf)
        min2 = cfg.charge_distance_min * cfg.charge_distance_min
        dist2 = np.where(dist2 < min2, np.sqrt(min2 * dist2), dist2)

        weight = cfg.charge_strength * alpha / dist2
        dvx = (dx * weight).sum(axis=1)
        dvy = (dy * weight).sum(axis=1)

        for node, ax, ay in zip(self._nodes, dvx, dvy):
            node.vx += float(ax)
            node.vy += float(ay)

    def _apply_centering(self) -> None:
        """Shift all nodes so their mean moves toward the center."""
        n = len(self._nodes)
        cx, cy = self._center
        sx = sum(node.x for node in self._nodes) / n - cx
        sy = sum(node.y for node in self._nodes) / n - cy
        strength = self._config.center_strength
        for node in self._nodes:
            node.x -= sx * strength
            node.y -= sy * strength

    def _apply_collision(self) -> None:
        """One relaxation pass separating overlapping nodes."""
        cfg = self._config
        nodes = self._nodes
        radii = [node.radius * cfg.collision_radius_scale for node in nodes]
        n = len(nodes)

        for i in range(n):
            node = nodes[i]
            ri = radii[i]
            ri2 = ri * ri
            xi = node.x + node.vx
            yi = node.y + node.vy
            for j in range(i + 1, n):
                other = nodes[j]
                rj = radii[j]
                r = ri + rj
                x = xi - other.x - other.vx
                y = yi - other.y - other.vy
                dist2 = x * x + y * y
                if dist2 >= r * r:
                    continue
                if x == 0:
                    x = self._jiggle()
                    dist2 += x * x
                if y == 0:
                    y = self._jiggle()
                    dist2 += y * y
                length = math.sqrt(dist2)
                length = (r - length) / length * cfg.collision_strength
                x *= length
                y *= length
                rj2 = rj * rj
                share = rj2 / (ri2 + rj2)
                node.vx += x * share
                node.vy += y * share
                other.vx -= x * (1 - share)
                other.vy -= y * (1 - share)
