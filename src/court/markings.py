"""
どこで: `court.markings`。
何を: コートのライン一式（外枠/センターライン/センターサークル/スリーポイント/キー）を
      1 つのルートノード配下に組み立てる。
なぜ: ラインは線幅を持つ薄い箱や管で表し、遠目でも太さが残るようにするため。

キーはコート中心を原点とする正準向き（長手が Z）で組み、最後にまとめて +Y まわり 90° 回す。
"""

from __future__ import annotations

import logging
import math
from typing import Literal

from engine.core.material import Material
from engine.core.node import Mesh, Node
from shapes import get_shape

from .arcs import ArcSpec, chord_segments, sample_arc, tessellate_arc
from .config import CourtConfig

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]
SIDES: tuple[Side, Side] = ("left", "right")


def side_sign(side: str) -> int:
    if side == "left":
        return -1
    if side == "right":
        return 1
    raise ValueError(f"side は 'left' か 'right' である必要があります: {side!r}")


def _flat_bar(name: str, width: float, depth: float, cfg: CourtConfig, mat: Material) -> Node:
    geom = get_shape("box")(width=width, height=cfg.markings.line_height, depth=depth)
    return Node(name, mesh=Mesh(geom, mat))


def build_outline(cfg: CourtConfig, mat: Material) -> Node:
    m, s = cfg.markings, cfg.surface
    outline = Node("outline")
    edges = (
        ("outline_near", 0.0, -s.width / 2, s.length, m.line_width),
        ("outline_far", 0.0, s.width / 2, s.length, m.line_width),
        ("outline_left", -s.length / 2, 0.0, m.line_width, s.width),
        ("outline_right", s.length / 2, 0.0, m.line_width, s.width),
    )
    for name, x, z, w, d in edges:
        bar = _flat_bar(name, w, d, cfg, mat)
        bar.position = (x, m.y, z)
        outline.add(bar)
    return outline


def build_center_marks(cfg: CourtConfig, mat: Material) -> list[Node]:
    m = cfg.markings
    line = _flat_bar("center_line", m.line_width, cfg.surface.width, cfg, mat)
    line.position = (0.0, m.y, 0.0)
    ring = get_shape("ring")(
        inner_radius=m.center_inner_radius,
        outer_radius=m.center_outer_radius,
        segments=m.center_segments,
    )
    circle = Node(
        "center_circle",
        position=(0.0, m.y, 0.0),
        rotation=(math.radians(-90.0), 0.0, 0.0),
        mesh=Mesh(ring, mat),
    )
    return [line, circle]


def three_point_spec(cfg: CourtConfig, side: str) -> ArcSpec:
    """スリーポイントアークの指定。右側は角度範囲の符号を反転する。"""
    m = cfg.markings
    sign = side_sign(side)
    start, end = m.three_point_angles
    if side == "right":
        start, end = -end, -start
    return ArcSpec(
        center=(0.0, sign * m.three_point_center),
        radius=m.three_point_radius,
        start_deg=start,
        end_deg=end,
        segments=m.three_point_segments,
        y=m.three_point_y,
    )


def build_three_point_arc(cfg: CourtConfig, side: str, mat: Material) -> Node:
    path = tessellate_arc(three_point_spec(cfg, side))
    geom = get_shape("tube")(path=path, radius=cfg.markings.three_point_tube_radius)
    return Node(f"three_point_{side}", mesh=Mesh(geom, mat))


def free_throw_spec(cfg: CourtConfig, side: str) -> ArcSpec:
    """フリースローアークの指定（フリースローライン中央を中心とする半円）。

    左キーは角度範囲そのまま、右キーは符号を反転し（-180..0）、どちらもバスケットから離れる向きに膨らむ。
    両キーに同じ 0..180 を使うと右アークだけがバスケット側へ向くため、ここで意図的に反転している。
    """
    k = cfg.key
    sign = side_sign(side)
    center = sign * k.center - sign * k.height / 2
    start, end = k.free_throw_angles
    if side == "right":
        start, end = -end, -start
    return ArcSpec(
        center=(0.0, center),
        radius=k.free_throw_radius,
        start_deg=start,
        end_deg=end,
        segments=k.free_throw_segments,
        y=cfg.markings.y,
    )


def build_key(cfg: CourtConfig, side: str, mat: Material) -> Node:
    """キー（レーン）一式。正準向きで組んでから +Y まわり 90° 回す。"""
    k, m = cfg.key, cfg.markings
    sign = side_sign(side)
    center = sign * k.center
    key = Node(f"key_{side}", rotation=(0.0, math.radians(90.0), 0.0))

    edges = (
        ("edge_baseline", 0.0, center - k.height / 2, k.width, m.line_width),
        ("edge_top", 0.0, center + k.height / 2, k.width, m.line_width),
        ("edge_lane_a", -k.width / 2, center, m.line_width, k.height),
        ("edge_lane_b", k.width / 2, center, m.line_width, k.height),
    )
    for name, x, z, w, d in edges:
        bar = _flat_bar(name, w, d, cfg, mat)
        bar.position = (x, m.y, z)
        key.add(bar)

    ft_z = center - sign * k.height / 2
    ft_line = _flat_bar("free_throw_line", k.width + k.free_throw_extra, m.line_width, cfg, mat)
    ft_line.position = (0.0, m.y, ft_z)
    key.add(ft_line)

    arc = Node("free_throw_arc")
    box = get_shape("box")
    chords = chord_segments(sample_arc(free_throw_spec(cfg, side)))
    for i, chord in enumerate(chords):
        geom = box(width=chord.length, height=m.line_height, depth=m.line_width)
        arc.add(
            Node(
                f"chord_{i}",
                position=(chord.midpoint[0], m.y, chord.midpoint[1]),
                rotation=(0.0, -chord.angle, 0.0),
                mesh=Mesh(geom, mat),
            )
        )
    key.add(arc)

    mark_x = k.width / 2 + k.hash_gap
    for j, offset in enumerate(k.hash_offsets):
        z = center - sign * offset
        for lane, suffix in ((-1, "a"), (1, "b")):
            mark = _flat_bar(f"hash_{j}_{suffix}", k.hash_length, k.hash_depth, cfg, mat)
            mark.position = (lane * mark_x, m.y, z)
            key.add(mark)
    return key


def build_court_markings(cfg: CourtConfig, material: Material | None = None) -> Node:
    """全ラインを持つ `markings` ノードを返す。"""
    mat = material if material is not None else Material(cfg.color("lines"), name="lines")
    root = Node("markings")
    root.add(build_outline(cfg, mat))
    root.add(*build_center_marks(cfg, mat))
    for side in SIDES:
        root.add(build_three_point_arc(cfg, side, mat))
    for side in SIDES:
        root.add(build_key(cfg, side, mat))
    logger.debug("court markings built: nodes=%d", len(root))
    return root


__all__ = [
    "SIDES",
    "Side",
    "build_center_marks",
    "build_court_markings",
    "build_key",
    "build_outline",
    "build_three_point_arc",
    "free_throw_spec",
    "side_sign",
    "three_point_spec",
]
