"""
どこで: `court.hoop`。
何を: 片側のゴール一式（台座/ポール/アーム/バックボード/連結材/枠/リム/ネット）を組み立てる。
なぜ: 支柱ノード 1 つに全部品を入れ、左右の違いを「支柱ノードの +Y まわり半回転」だけで表すため。

支柱ローカル座標（左側基準、+X がコート中央向き）:
- アームは 25° 傾けた箱。中心は半長の射影 `(cos, sin) * L/2` に固定の補正を足した位置。
- バックボードはアーム先端から +X に一定距離離す（アームと交差しない）。
- リムの高さはバックボード高さから「四角の下げ幅 + 四角の高さ/2」を引いた値で、独立には決めない。
"""

from __future__ import annotations

import math

from common.types import Vec2, Vec3
from engine.core.material import Material
from engine.core.node import Mesh, Node
from shapes import get_shape

from .config import CourtConfig
from .markings import side_sign
from .net import NetSpec, build_net


def arm_angle(cfg: CourtConfig) -> float:
    return math.radians(cfg.hoop.arm_angle_deg)


def arm_center(cfg: CourtConfig) -> Vec2:
    h = cfg.hoop
    a = arm_angle(cfg)
    half = h.arm_length / 2
    return (
        math.cos(a) * half + h.arm_nudge[0],
        h.base_height + h.pole_height + math.sin(a) * half + h.arm_nudge[1],
    )


def arm_tip(cfg: CourtConfig) -> Vec2:
    """アーム先端（支柱ローカルの x, y）。"""
    h = cfg.hoop
    a = arm_angle(cfg)
    cx, cy = arm_center(cfg)
    return (cx + math.cos(a) * h.arm_length / 2, cy + math.sin(a) * h.arm_length / 2)


def backboard_position(cfg: CourtConfig) -> Vec3:
    tx, ty = arm_tip(cfg)
    return (tx + cfg.hoop.backboard_offset, ty, 0.0)


def rim_height(cfg: CourtConfig) -> float:
    h = cfg.hoop
    return backboard_position(cfg)[1] - h.square_offset - h.square_height / 2


def rim_position(cfg: CourtConfig) -> Vec3:
    bx, _, bz = backboard_position(cfg)
    return (bx + cfg.hoop.rim_offset, rim_height(cfg), bz)


def net_spec(cfg: CourtConfig) -> NetSpec:
    n = cfg.net
    return NetSpec(
        rim_radius=cfg.hoop.rim_radius,
        strand_count=n.strand_count,
        ring_count=n.ring_count,
        shrink=n.shrink,
        length=n.length,
        ring_tube=n.ring_tube,
    )


def hoop_materials(cfg: CourtConfig) -> dict[str, Material]:
    """ゴール用マテリアル。両側で共有すると描画レイヤーがまとまる。"""
    backboard = cfg.color("backboard")
    return {
        "base": Material(cfg.color("base"), name="hoop_base"),
        "steel": Material(cfg.color("steel"), name="hoop_steel"),
        "backboard": Material(backboard, opacity=cfg.hoop.backboard_opacity, name="backboard"),
        "frame": Material(cfg.color("frame"), name="backboard_frame"),
        "rim": Material(cfg.color("rim"), name="rim"),
        "net": Material(cfg.color("net"), name="net"),
    }


def build_frame(cfg: CourtConfig, material: Material) -> Node:
    """バックボードの外枠とシューターズスクエア。板厚の半分だけ手前に寄せる。"""
    h = cfg.hoop
    t, margin = h.frame_thickness, h.frame_margin
    bw, bh = h.backboard_width, h.backboard_height
    sw, sh, so = h.square_width, h.square_height, h.square_offset
    bx, by, bz = backboard_position(cfg)
    box = get_shape("box")
    bars = (
        ("border_top", (bw + margin, t, t), (0.0, bh / 2 + t / 2)),
        ("border_bottom", (bw + margin, t, t), (0.0, -bh / 2 - t / 2)),
        ("border_left", (t, bh + margin, t), (-bw / 2 - t / 2, 0.0)),
        ("border_right", (t, bh + margin, t), (bw / 2 + t / 2, 0.0)),
        ("square_top", (sw + margin, t, t), (0.0, sh / 2 + t / 2 - so)),
        ("square_bottom", (sw + margin, t, t), (0.0, -sh / 2 - t / 2 - so)),
        ("square_left", (t, sh + margin, t), (-sw / 2 - t / 2, -so)),
        ("square_right", (t, sh + margin, t), (sw / 2 + t / 2, -so)),
    )
    frame = Node("frame", position=(bx - t / 2, by, bz), rotation=(0.0, math.pi / 2, 0.0))
    for name, (w, hh, d), (x, y) in bars:
        geom = box(width=w, height=hh, depth=d)
        frame.add(Node(name, position=(x, y, 0.0), mesh=Mesh(geom, material)))
    return frame


def build_hoop(
    cfg: CourtConfig,
    side: str,
    materials: dict[str, Material] | None = None,
) -> Node:
    """`hoop_<side>` ノードを返す。右側は支柱ごと半回転させる。"""
    sign = side_sign(side)
    h = cfg.hoop
    mats = materials if materials is not None else hoop_materials(cfg)
    box = get_shape("box")

    support = Node(
        f"hoop_{side}",
        position=(sign * h.support_offset, 0.0, 0.0),
        rotation=(0.0, math.pi if side == "right" else 0.0, 0.0),
    )

    base = box(width=h.base_width, height=h.base_height, depth=h.base_depth)
    support.add(
        Node(
            "base",
            position=(h.base_offset, h.base_height / 2 + h.base_clearance, 0.0),
            rotation=(0.0, math.pi / 2, 0.0),
            mesh=Mesh(base, mats["base"]),
        )
    )

    pole = box(width=h.pole_width, height=h.pole_height, depth=h.pole_width)
    support.add(
        Node(
            "pole",
            position=(0.0, h.base_height + h.pole_height / 2, 0.0),
            mesh=Mesh(pole, mats["steel"]),
        )
    )

    arm = box(width=h.arm_length, height=h.arm_height, depth=h.arm_depth)
    support.add(
        Node(
            "arm",
            position=(*arm_center(cfg), 0.0),
            rotation=(0.0, 0.0, arm_angle(cfg)),
            mesh=Mesh(arm, mats["steel"]),
        )
    )

    board = get_shape("plane")(width=h.backboard_width, height=h.backboard_height)
    support.add(
        Node(
            "backboard",
            position=backboard_position(cfg),
            rotation=(0.0, math.pi / 2, 0.0),
            mesh=Mesh(board, mats["backboard"]),
        )
    )

    # アーム先端とバックボードの隙間を床と平行な短い箱で埋める
    tx, ty = arm_tip(cfg)
    connector_len = h.backboard_offset + h.connector_extra
    dx, dy = h.connector_shift
    connector = box(width=connector_len, height=h.arm_height, depth=h.arm_depth)
    support.add(
        Node(
            "connector",
            position=(tx + connector_len / 2 + dx, ty + dy, 0.0),
            mesh=Mesh(connector, mats["steel"]),
        )
    )
    support.add(build_frame(cfg, mats["frame"]))

    rim_pos = rim_position(cfg)
    rim = get_shape("torus")(radius=h.rim_radius, tube=h.rim_tube)
    support.add(
        Node(
            "rim",
            position=rim_pos,
            rotation=(math.pi / 2, 0.0, 0.0),
            mesh=Mesh(rim, mats["rim"]),
        )
    )
    support.add(build_net(net_spec(cfg), rim_pos, material=mats["net"]))
    return support


__all__ = [
    "arm_center",
    "arm_tip",
    "backboard_position",
    "build_frame",
    "build_hoop",
    "hoop_materials",
    "net_spec",
    "rim_height",
    "rim_position",
]
