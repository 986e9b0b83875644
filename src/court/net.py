"""
どこで: `court.net`。
何を: リム下に垂れるネット（縮小していくリング + リング間をつなぐストランド）を生成する。
なぜ: 等比で細くなる円錐状の格子で、ネットの見た目を線だけで近似するため。

アルゴリズム:
- 中間リング半径 `r_i = rim * shrink**(i + 1)`（i = 0..ring_count-1）。
- 底リング半径は最後の中間半径にもう一度 `shrink` を掛けた値（ring_count=0 なら `rim * shrink`）。
- 高さは `-spacing * (i + 1)`、`spacing = length / (ring_count + 1)`。底リングは `-length`。
- 各ストランド角 `2πk / strand_count` について、リム → 中間リング… → 底リングを
  2 点の線分で結ぶ。合計 `strand_count * (ring_count + 1)` 本。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from common.types import Vec3
from engine.core.geometry import Geometry
from engine.core.material import Material
from engine.core.node import Mesh, Node
from shapes import get_shape


@dataclass(frozen=True)
class NetSpec:
    rim_radius: float = 0.23
    strand_count: int = 16
    ring_count: int = 2
    shrink: float = 0.8
    length: float = 0.5
    ring_tube: float = 0.005

    def __post_init__(self) -> None:
        if not (self.rim_radius > 0 and math.isfinite(self.rim_radius)):
            raise ValueError(f"rim_radius は正である必要があります: {self.rim_radius}")
        if isinstance(self.strand_count, bool) or int(self.strand_count) != self.strand_count:
            raise ValueError(f"strand_count は整数である必要があります: {self.strand_count!r}")
        if self.strand_count < 1:
            raise ValueError(f"strand_count は 1 以上である必要があります: {self.strand_count}")
        if isinstance(self.ring_count, bool) or int(self.ring_count) != self.ring_count:
            raise ValueError(f"ring_count は整数である必要があります: {self.ring_count!r}")
        if self.ring_count < 0:
            raise ValueError(f"ring_count は 0 以上である必要があります: {self.ring_count}")
        if not (0.0 < self.shrink < 1.0):
            raise ValueError(f"shrink は (0, 1) である必要があります: {self.shrink}")
        if not (self.length > 0 and math.isfinite(self.length)):
            raise ValueError(f"length は正である必要があります: {self.length}")

    @property
    def spacing(self) -> float:
        return self.length / (self.ring_count + 1)


def ring_radii(spec: NetSpec) -> list[float]:
    """中間リングの半径（上から順、狭義単調減少）。"""
    radii: list[float] = []
    r = spec.rim_radius
    for _ in range(spec.ring_count):
        r *= spec.shrink
        radii.append(r)
    return radii


def bottom_radius(spec: NetSpec) -> float:
    radii = ring_radii(spec)
    last = radii[-1] if radii else spec.rim_radius
    return last * spec.shrink


def ring_heights(spec: NetSpec) -> list[float]:
    """中間リングと底リングの y（リム基準、計 `ring_count + 1` 個）。"""
    heights = [-spec.spacing * (i + 1) for i in range(spec.ring_count)]
    heights.append(-spec.length)
    return heights


def strand_segments(spec: NetSpec) -> np.ndarray:
    """ストランド線分 `(strand_count * (ring_count + 1), 2, 3)`（ストランド順 → 上から順）。"""
    levels = [(spec.rim_radius, 0.0)]
    levels += list(zip(ring_radii(spec), ring_heights(spec)[:-1]))
    levels.append((bottom_radius(spec), -spec.length))

    segs = np.empty((spec.strand_count * (len(levels) - 1), 2, 3), dtype=np.float64)
    k = 0
    for i in range(spec.strand_count):
        a = 2.0 * math.pi * i / spec.strand_count
        c, s = math.cos(a), math.sin(a)
        for (r0, y0), (r1, y1) in zip(levels[:-1], levels[1:]):
            segs[k, 0] = (c * r0, y0, s * r0)
            segs[k, 1] = (c * r1, y1, s * r1)
            k += 1
    return segs


def build_net(
    spec: NetSpec,
    origin: Vec3 = (0.0, 0.0, 0.0),
    *,
    material: Material | None = None,
    name: str = "net",
) -> Node:
    """リング子ノード（`ring_count + 1` 個）とストランド子ノード 1 個を持つネットを返す。"""
    mat = material if material is not None else Material(name="net")
    torus = get_shape("torus")
    net = Node(name, position=origin)

    radii = ring_radii(spec) + [bottom_radius(spec)]
    for i, (r, y) in enumerate(zip(radii, ring_heights(spec))):
        label = f"ring_{i}" if i < spec.ring_count else "ring_bottom"
        geom = torus(
            radius=r, tube=spec.ring_tube, radial_segments=4, tubular_segments=32, sections=0
        )
        net.add(
            Node(
                label,
                position=(0.0, y, 0.0),
                rotation=(math.pi / 2, 0.0, 0.0),
                mesh=Mesh(geom, mat),
            )
        )

    segment = get_shape("segment")
    strands = Geometry.concat_all(segment(start=a, end=b) for a, b in strand_segments(spec))
    net.add(Node("strands", mesh=Mesh(strands, mat)))
    return net


__all__ = [
    "NetSpec",
    "bottom_radius",
    "build_net",
    "ring_heights",
    "ring_radii",
    "strand_segments",
]
