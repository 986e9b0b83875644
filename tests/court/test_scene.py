from __future__ import annotations

import numpy as np
import pytest

from court.config import CourtConfig
from court.scene import build_ball, build_logos, compose_scene
from engine.core.material import TextureHandle


class _FakeSource:
    """要求されたテクスチャ名を記録し、未解決のハンドルを返す。"""

    def __init__(self) -> None:
        self.requested: list[str] = []
        self._handles: dict[str, TextureHandle] = {}

    def request(self, name: str) -> TextureHandle:
        self.requested.append(name)
        return self._handles.setdefault(name, TextureHandle(name))


def test_scene_root_children(court_cfg: CourtConfig) -> None:
    root = compose_scene(court_cfg)
    assert root.name == "court"
    assert [c.name for c in root.children] == [
        "apron",
        "floor",
        "markings",
        "hoop_left",
        "hoop_right",
        "ball",
        "logo_left",
        "logo_right",
    ]


def test_compose_without_provider_uses_solid_colors() -> None:
    root = compose_scene()
    for mesh, _ in root.iter_meshes():
        assert mesh.material.texture is None
        assert mesh.material.bump_texture is None


def test_textures_requested_and_bound_without_waiting(court_cfg: CourtConfig) -> None:
    src = _FakeSource()
    root = compose_scene(court_cfg, src)
    assert set(src.requested) == {"wood.jpg", "basketball.png", "basketballBump.png", "Laker.PNG"}
    ball = root.find("ball")
    assert ball.mesh.material.texture.state == "pending"
    # 未解決の間はベース色
    assert ball.mesh.material.effective_color() == pytest.approx(court_cfg.color("ball"))


def test_ball_rests_on_floor_at_center(court_cfg: CourtConfig) -> None:
    ball = build_ball(court_cfg)
    b = court_cfg.ball
    assert ball.position == pytest.approx((0.0, b.radius + b.lift, 0.0))
    (g, _), = ball.flatten()
    assert g.coords[:, 1].min() == pytest.approx(b.lift, abs=1e-5)


def test_logos_are_flat_and_mirrored(court_cfg: CourtConfig) -> None:
    left, right = build_logos(court_cfg)
    assert left.position == pytest.approx((-5.0, 0.07, -4.0))
    assert right.position == pytest.approx((5.0, 0.07, 4.0))
    assert left.scale == (-1.0, -1.0, 1.0)
    (gl, _), = left.flatten()
    (gr, _), = right.flatten()
    assert np.allclose(gl.coords[:, 1], 0.07, atol=1e-6)
    lo, hi = gr.bounds()
    assert np.allclose(hi - lo, (4.0, 0.0, 3.0), atol=1e-5)
    assert left.mesh.material is right.mesh.material


def test_floor_and_apron_dimensions(court_cfg: CourtConfig) -> None:
    root = compose_scene(court_cfg)
    floor = root.find("floor")
    (g, _) = floor.flatten()[0]
    lo, hi = g.bounds()
    assert np.allclose(hi - lo, (30.0, 0.1, 15.0), atol=1e-5)
    (ga, _), = root.find("apron").flatten()
    lo, hi = ga.bounds()
    assert np.allclose(hi - lo, (34.0, 0.1, 19.0), atol=1e-5)
    boards = root.find("floor_boards")
    assert boards is not None and boards.mesh.material is floor.mesh.material


def test_hoops_share_materials(court_cfg: CourtConfig) -> None:
    root = compose_scene(court_cfg)
    left_net = root.find("hoop_left").find("net")
    right_net = root.find("hoop_right").find("net")
    assert left_net.children[0].mesh.material is right_net.children[0].mesh.material


def test_every_mesh_is_non_empty_and_finite() -> None:
    for g, _ in compose_scene().flatten():
        assert not g.is_empty
        assert np.all(np.isfinite(g.coords))
