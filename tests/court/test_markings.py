from __future__ import annotations

import math

import numpy as np
import pytest

from court.config import CourtConfig
from court.markings import (
    build_court_markings,
    build_key,
    free_throw_spec,
    side_sign,
    three_point_spec,
)
from engine.core.material import Material


def test_side_sign() -> None:
    assert side_sign("left") == -1
    assert side_sign("right") == 1
    with pytest.raises(ValueError):
        side_sign("center")


def test_markings_root_children(court_cfg: CourtConfig) -> None:
    root = build_court_markings(court_cfg)
    assert root.name == "markings"
    names = [c.name for c in root.children]
    assert names == [
        "outline",
        "center_line",
        "center_circle",
        "three_point_left",
        "three_point_right",
        "key_left",
        "key_right",
    ]


def test_all_markings_share_one_material(court_cfg: CourtConfig) -> None:
    mat = Material((1.0, 1.0, 1.0, 1.0), name="lines")
    root = build_court_markings(court_cfg, mat)
    mats = {id(m.material) for m, _ in root.iter_meshes()}
    assert mats == {id(mat)}


def test_outline_spans_court(court_cfg: CourtConfig) -> None:
    outline = build_court_markings(court_cfg).find("outline")
    assert outline is not None
    coords = np.vstack([g.coords for g, _ in outline.flatten()])
    lo, hi = coords.min(axis=0), coords.max(axis=0)
    assert np.allclose(lo[[0, 2]], (-15.05, -7.55), atol=1e-5)
    assert np.allclose(hi[[0, 2]], (15.05, 7.55), atol=1e-5)


def test_center_circle_is_flat_on_floor(court_cfg: CourtConfig) -> None:
    circle = build_court_markings(court_cfg).find("center_circle")
    assert circle is not None
    (g, _), = circle.flatten()
    assert np.allclose(g.coords[:, 1], court_cfg.markings.y, atol=1e-6)
    radial = np.hypot(g.coords[:, 0], g.coords[:, 2])
    assert radial.max() == pytest.approx(2.0, abs=1e-5)
    assert radial.min() == pytest.approx(1.9, abs=1e-5)


def test_three_point_specs_mirror(court_cfg: CourtConfig) -> None:
    left = three_point_spec(court_cfg, "left")
    right = three_point_spec(court_cfg, "right")
    assert left.center == (0.0, -13.5)
    assert right.center == (0.0, 13.5)
    assert (left.start_deg, left.end_deg) == (-13.0, 193.0)
    assert (right.start_deg, right.end_deg) == (-193.0, 13.0)
    assert left.segments == right.segments == 64


def test_three_point_arcs_are_mirror_images(court_cfg: CourtConfig) -> None:
    root = build_court_markings(court_cfg)
    (gl, _), = root.find("three_point_left").flatten()
    (gr, _), = root.find("three_point_right").flatten()
    assert gl.n_vertices == gr.n_vertices
    mirrored = gl.coords * np.array([-1.0, 1.0, 1.0], dtype=np.float32)
    # 点集合として一致（順序は問わない）
    d = np.linalg.norm(mirrored[:, None, :] - gr.coords[None, :, :], axis=2)
    assert d.min(axis=1).max() < 1e-4


def test_three_point_arc_apex_near_half_court(court_cfg: CourtConfig) -> None:
    root = build_court_markings(court_cfg)
    (g, _), = root.find("three_point_left").flatten()
    # 左側の弧はバスケット（x=-13.5）から 6.75 だけセンター寄りまで張り出す
    assert g.coords[:, 0].max() == pytest.approx(-13.5 + 6.75, abs=0.06)
    assert g.coords[:, 0].min() >= -15.1


def test_key_structure(court_cfg: CourtConfig) -> None:
    key = build_key(court_cfg, "left", Material())
    names = [c.name for c in key.children]
    assert names[:5] == ["edge_baseline", "edge_top", "edge_lane_a", "edge_lane_b", "free_throw_line"]
    assert "free_throw_arc" in names
    hashes = [n for n in names if n.startswith("hash_")]
    assert len(hashes) == 2 * len(court_cfg.key.hash_offsets)
    arc = key.find("free_throw_arc")
    assert arc is not None and len(arc.children) == court_cfg.key.free_throw_segments
    assert key.rotation == pytest.approx((0.0, math.pi / 2, 0.0))


def test_keys_sit_between_basket_and_center(court_cfg: CourtConfig) -> None:
    k = court_cfg.key
    root = build_court_markings(court_cfg)
    for side, sign in (("left", -1), ("right", 1)):
        key = root.find(f"key_{side}")
        coords = np.vstack([g.coords for g, _ in key.flatten()])
        xs, zs = coords[:, 0], coords[:, 2]
        assert np.all(sign * xs > 0)
        # レーン奥端（14.9）から内側へ張り出すフリースローアーク（7.3）まで
        assert np.abs(xs).max() <= 15.0
        assert np.abs(xs).min() >= 7.2
        assert np.abs(zs).max() <= k.width / 2 + k.hash_gap + k.hash_length / 2 + 1e-4


def test_free_throw_arcs_bulge_away_from_baskets(court_cfg: CourtConfig) -> None:
    root = build_court_markings(court_cfg)
    ft_x = court_cfg.key.center - court_cfg.key.height / 2  # 9.1
    for side, sign in (("left", -1), ("right", 1)):
        key = root.find(f"key_{side}")
        arc = key.find("free_throw_arc")
        # キーの回転を含めたワールド座標で読む
        key_world = root.world_matrix_of(key)
        xs = np.concatenate(
            [n.mesh.geometry.transform(w).coords[:, 0] for n, w in arc.walk(key_world) if n.mesh]
        )
        # フリースローラインよりセンター側へ半径ぶん張り出す
        inner = xs.min() if sign > 0 else -xs.max()
        assert inner == pytest.approx(ft_x - court_cfg.key.free_throw_radius, abs=0.1)


def test_free_throw_specs_are_sign_mirrored(court_cfg: CourtConfig) -> None:
    left = free_throw_spec(court_cfg, "left")
    right = free_throw_spec(court_cfg, "right")
    assert left.center == pytest.approx((0.0, -9.1))
    assert right.center == pytest.approx((0.0, 9.1))
    assert (right.start_deg, right.end_deg) == (-180.0, 0.0)
