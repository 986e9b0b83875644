"""
どこで: `court.scene`。
何を: シーン全体（外周エプロン/木目の床/ライン/両ゴール/センターのボール/床ロゴ）を 1 つのルートに組む。
なぜ: 描画ループ開始前に一度だけ静的なシーングラフを作り、以後は読むだけにするため。

テクスチャは `TextureSource.request(name)` でハンドルを受け取ってマテリアルに束ねるだけで、
読み込み完了は待たない。`provider=None` のときは全マテリアルが単色になる。
"""

from __future__ import annotations

import logging
import math
from typing import Protocol

from engine.core.material import Material, TextureHandle
from engine.core.node import Mesh, Node
from shapes import get_shape

from .config import CourtConfig
from .hoop import build_hoop, hoop_materials
from .markings import SIDES, build_court_markings

logger = logging.getLogger(__name__)


class TextureSource(Protocol):
    def request(self, name: str) -> TextureHandle: ...


def _texture(provider: TextureSource | None, name: str) -> TextureHandle | None:
    return provider.request(name) if provider is not None and name else None


def build_surface(cfg: CourtConfig, provider: TextureSource | None = None) -> list[Node]:
    """外周エプロンと木目の床（上面に板目の格子）。"""
    s = cfg.surface
    box = get_shape("box")
    apron = Node(
        "apron",
        position=(0.0, s.apron_y, 0.0),
        mesh=Mesh(
            box(width=s.apron_length, height=s.thickness, depth=s.apron_width),
            Material(cfg.color("apron"), name="apron"),
        ),
    )
    wood = Material(cfg.color("wood"), texture=_texture(provider, s.wood_texture), name="wood")
    floor = Node(
        "floor",
        mesh=Mesh(box(width=s.length, height=s.thickness, depth=s.width), wood),
    )
    boards = get_shape("plane")(width=s.length, height=s.width, divisions=s.floor_divisions)
    floor.add(
        Node(
            "floor_boards",
            position=(0.0, s.thickness / 2, 0.0),
            rotation=(-math.pi / 2, 0.0, 0.0),
            mesh=Mesh(boards, wood),
        )
    )
    return [apron, floor]


def build_ball(cfg: CourtConfig, provider: TextureSource | None = None) -> Node:
    b = cfg.ball
    material = Material(
        cfg.color("ball"),
        texture=_texture(provider, b.texture),
        bump_texture=_texture(provider, b.bump_texture),
        bump_scale=b.bump_scale,
        name="ball",
    )
    geom = get_shape("sphere")(
        radius=b.radius, width_segments=b.width_segments, height_segments=b.height_segments
    )
    return Node("ball", position=(0.0, b.radius + b.lift, 0.0), mesh=Mesh(geom, material))


def build_logos(cfg: CourtConfig, provider: TextureSource | None = None) -> list[Node]:
    """床に寝かせたロゴ 2 枚。片方は X/Y を反転して反対側のサイドラインへ向ける。"""
    lg = cfg.logo
    material = Material(cfg.color("logo"), texture=_texture(provider, lg.texture), name="logo")
    geom = get_shape("plane")(width=lg.width, height=lg.height)
    ox, oz = lg.offset
    return [
        Node(
            "logo_left",
            position=(-ox, lg.y, -oz),
            rotation=(-math.pi / 2, 0.0, 0.0),
            scale=(-1.0, -1.0, 1.0),
            mesh=Mesh(geom, material),
        ),
        Node(
            "logo_right",
            position=(ox, lg.y, oz),
            rotation=(-math.pi / 2, 0.0, 0.0),
            mesh=Mesh(geom, material),
        ),
    ]


def compose_scene(cfg: CourtConfig | None = None, provider: TextureSource | None = None) -> Node:
    """`court` ルートノードを返す。"""
    cfg = cfg if cfg is not None else CourtConfig()
    root = Node("court")
    root.add(*build_surface(cfg, provider))
    root.add(build_court_markings(cfg))
    mats = hoop_materials(cfg)
    for side in SIDES:
        root.add(build_hoop(cfg, side, mats))
    root.add(build_ball(cfg, provider))
    root.add(*build_logos(cfg, provider))
    if logger.isEnabledFor(logging.DEBUG):
        meshes = sum(1 for _ in root.iter_meshes())
        logger.debug("scene composed: nodes=%d, meshes=%d", len(root), meshes)
    return root


__all__ = ["TextureSource", "build_ball", "build_logos", "build_surface", "compose_scene"]
