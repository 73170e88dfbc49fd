"""
Tests for Viewport pan/zoom.
"""

import math
import random
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from notegraph_core.services.viewport import Viewport, MIN_SCALE, MAX_SCALE, ZOOM_STEP


class TestZoom:
    """Scale bounds and anchoring."""

    def test_defaults(self):
        vp = Viewport()
        assert vp.scale == 1.0
        assert vp.translation == (0.0, 0.0)

    def test_clamped_high(self):
        vp = Viewport()
        for _ in range(50):
            vp.zoom_by(10.0)
        assert vp.scale == MAX_SCALE

    def test_clamped_low(self):
        vp = Viewport()
        for _ in range(50):
            vp.zoom_by(0.01)
        assert vp.scale == MIN_SCALE

    def test_scale_stays_in_bounds(self):
        """Any sequence of wheel deltas keeps scale within [0.1, 4]."""
        rng = random.Random(7)
        vp = Viewport()
        for _ in range(500):
            vp.wheel(rng.choice([-360, -120, -1, 1, 120, 360]), rng.uniform(0, 800), rng.uniform(0, 600))
            assert MIN_SCALE <= vp.scale <= MAX_SCALE

    def test_anchor_stays_fixed(self):
        vp = Viewport()
        vp.pan_by(30.0, -20.0)
        before = vp.screen_to_scene(200.0, 150.0)

        vp.zoom_by(2.0, 200.0, 150.0)

        after = vp.screen_to_scene(200.0, 150.0)
        assert after == pytest.approx(before)

    def test_wheel_step(self):
        vp = Viewport()
        assert vp.wheel(120)
        assert vp.scale == pytest.approx(ZOOM_STEP)
        assert vp.wheel(-120)
        assert vp.scale == pytest.approx(1.0)

    def test_no_change_at_limit(self):
        vp = Viewport()
        vp.set_scale(MAX_SCALE)
        assert vp.zoom_by(2.0) is False

    @pytest.mark.parametrize("factor", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_factor_ignored(self, factor):
        vp = Viewport()
        assert vp.zoom_by(factor, 10.0, 10.0) is False
        assert vp.scale == 1.0
        assert vp.translation == (0.0, 0.0)

    def test_zero_wheel_delta_ignored(self):
        vp = Viewport()
        assert vp.wheel(0) is False
        assert vp.scale == 1.0


class TestPan:
    """Translation and coordinate mapping."""

    def test_pan_accumulates(self):
        vp = Viewport()
        vp.pan_by(10.0, 5.0)
        vp.pan_by(-4.0, 1.0)
        assert vp.translation == (6.0, 6.0)

    def test_non_finite_pan_ignored(self):
        vp = Viewport()
        vp.pan_by(math.nan, 1.0)
        assert vp.translation == (0.0, 0.0)

    def test_mapping_inverse(self):
        vp = Viewport()
        vp.pan_by(40.0, 25.0)
        vp.zoom_by(1.5, 100.0, 100.0)

        sx, sy = vp.scene_to_screen(12.0, -7.0)
        assert vp.screen_to_scene(sx, sy) == pytest.approx((12.0, -7.0))

    def test_reset(self):
        vp = Viewport()
        vp.pan_by(40.0, 25.0)
        vp.zoom_by(3.0, 50.0, 50.0)

        vp.reset()

        transform = vp.transform
        assert (transform.tx, transform.ty, transform.scale) == (0.0, 0.0, 1.0)
