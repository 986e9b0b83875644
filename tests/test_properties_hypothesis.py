import math

import numpy as np
import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a dev optional dependency")
from hypothesis import given, strategies as st  # type: ignore

from court.arcs import ArcSpec, chord_segments, sample_arc
from court.net import NetSpec, bottom_radius, ring_radii, strand_segments
from engine.render.camera import PerspectiveCamera
from engine.ui.camera_presets import CameraPresetController


@given(
    cx=st.floats(-20, 20),
    cz=st.floats(-20, 20),
    r=st.floats(0.1, 10),
    a0=st.floats(-360, 360),
    sweep=st.floats(-360, 360),
    n=st.integers(1, 128),
)
def test_arc_samples_lie_on_circle(cx, cz, r, a0, sweep, n):
    spec = ArcSpec(center=(cx, cz), radius=r, start_deg=a0, end_deg=a0 + sweep, segments=n)
    pts = sample_arc(spec)
    assert pts.shape == (n + 1, 3)
    d = np.hypot(pts[:, 0] - cx, pts[:, 2] - cz)
    np.testing.assert_allclose(d, r, rtol=1e-9, atol=1e-9)
    total = sum(c.length for c in chord_segments(pts))
    assert total <= spec.length() + 1e-6


@given(
    rim=st.floats(0.05, 1.0),
    strands=st.integers(1, 32),
    rings=st.integers(0, 6),
    shrink=st.floats(0.05, 0.95),
    length=st.floats(0.1, 2.0),
)
def test_net_radii_shrink_and_strands_count(rim, strands, rings, shrink, length):
    spec = NetSpec(
        rim_radius=rim, strand_count=strands, ring_count=rings, shrink=shrink, length=length
    )
    radii = [rim] + ring_radii(spec) + [bottom_radius(spec)]
    assert all(a > b for a, b in zip(radii[:-1], radii[1:]))
    segs = strand_segments(spec)
    assert segs.shape == (strands * (rings + 1), 2, 3)
    assert segs[:, :, 1].min() == pytest.approx(-length)
    assert segs[:, :, 1].max() <= 0.0


@given(steps=st.integers(0, 40))
def test_preset_index_is_steps_mod_n(steps):
    cam = PerspectiveCamera()
    ctrl = CameraPresetController()
    ctrl.apply(cam)
    for _ in range(steps):
        ctrl.cycle(cam)
    assert ctrl.index == steps % len(ctrl)
    assert cam.position == ctrl.current.eye
    assert math.isfinite(cam.view_matrix().sum())
