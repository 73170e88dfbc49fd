"""
Viewport - bounded pan/zoom transform applied to the rendered scene.

screen = scene * scale + (tx, ty)

The viewport only affects rendering; it never touches simulation state.
"""

import math
from dataclasses import dataclass
from typing import Tuple


MIN_SCALE = 0.1
MAX_SCALE = 4.0
ZOOM_STEP = 1.25  # Per wheel notch


@dataclass
class ViewTransform:
    """Snapshot of the current transform."""
    tx: float = 0.0
    ty: float = 0.0
    scale: float = 1.0


class Viewport:
    """Pan/zoom state with the scale clamped to [MIN_SCALE, MAX_SCALE]."""

    def __init__(self, min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE):
        self._min_scale = min_scale
        self._max_scale = max_scale
        self._tx = 0.0
        self._ty = 0.0
        self._scale = 1.0

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def translation(self) -> Tuple[float, float]:
        return (self._tx, self._ty)

    @property
    def transform(self) -> ViewTransform:
        return ViewTransform(self._tx, self._ty, self._scale)

    def _clamp(self, scale: float) -> float:
        return max(self._min_scale, min(self._max_scale, scale))

    def zoom_by(self, factor: float, anchor_x: float = 0.0, anchor_y: float = 0.0) -> bool:
        """
        Multiply the scale by `factor`, keeping the screen point (anchor_x,
        anchor_y) fixed.

        Returns:
            True if the transform changed
        """
        if not math.isfinite(factor) or factor <= 0:
            return False
        return self.set_scale(self._scale * factor, anchor_x, anchor_y)

    def set_scale(self, scale: float, anchor_x: float = 0.0, anchor_y: float = 0.0) -> bool:
        """Set an absolute scale (clamped), keeping the anchor fixed."""
        if not math.isfinite(scale) or scale <= 0:
            return False
        new_scale = self._clamp(scale)
        if new_scale == self._scale:
            return False

        # Scene point under the anchor before zooming
        sx, sy = self.screen_to_scene(anchor_x, anchor_y)
        self._scale = new_scale
        self._tx = anchor_x - sx * new_scale
        self._ty = anchor_y - sy * new_scale
        return True

    def wheel(self, delta: float, anchor_x: float = 0.0, anchor_y: float = 0.0) -> bool:
        """Zoom one step in (delta > 0) or out (delta < 0)."""
        if delta == 0 or not math.isfinite(delta):
            return False
        factor = ZOOM_STEP if delta > 0 else 1 / ZOOM_STEP
        return self.zoom_by(factor, anchor_x, anchor_y)

    def pan_by(self, dx: float, dy: float) -> None:
        """Translate the view by a screen-space delta."""
        if math.isfinite(dx) and math.isfinite(dy):
            self._tx += dx
            self._ty += dy

    def reset(self) -> None:
        """Reset zoom and pan to default."""
        self._tx = 0.0
        self._ty = 0.0
        self._scale = 1.0

    def screen_to_scene(self, x: float, y: float) -> Tuple[float, float]:
        return ((x - self._tx) / self._scale, (y - self._ty) / self._scale)

    def scene_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return (x * self._scale + self._tx, y * self._scale + self._ty)
