"""
どこで: `court.arcs`。
何を: 円弧の等角サンプリング、コート平面への軸入れ替え、弦分割（中点/長さ/角度）。
なぜ: スリーポイントライン（点列に沿う管）とフリースローアーク（短い箱の連なり）が
      同じサンプラを共有できるようにするため。

座標:
- 円弧のローカル平面は (x, z)。点は `(cx + r cos a, y, cz + r sin a)`。
- `to_court_plane` は `(x, y, z) -> (z, y, -x)`（+Y まわり 90°）で、ローカルの前方軸を
  コートの長手方向へ向ける。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from common.types import Vec2

#: これより短い（または NaN の）弦は出力しない
CHORD_EPSILON = 1e-6


@dataclass(frozen=True)
class ArcSpec:
    """円弧の指定。角度は度。"""

    center: Vec2
    radius: float
    start_deg: float
    end_deg: float
    segments: int
    y: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.segments, bool) or int(self.segments) != self.segments:
            raise ValueError(f"segments は整数である必要があります: {self.segments!r}")
        if self.segments < 1:
            raise ValueError(f"segments は 1 以上である必要があります: {self.segments}")
        if not math.isfinite(self.radius) or self.radius < 0:
            raise ValueError(f"radius は有限の非負値である必要があります: {self.radius}")
        if not (math.isfinite(self.start_deg) and math.isfinite(self.end_deg)):
            raise ValueError("角度は有限値である必要があります")

    @property
    def sweep_rad(self) -> float:
        return math.radians(self.end_deg - self.start_deg)

    def length(self) -> float:
        """真の弧長。"""
        return self.radius * abs(self.sweep_rad)


@dataclass(frozen=True)
class ChordSegment:
    """連続する 2 サンプル間の弦（ローカル平面）。"""

    midpoint: Vec2
    length: float
    angle: float  # atan2(dz, dx)（ラジアン）


def sample_arc(spec: ArcSpec) -> np.ndarray:
    """`(segments + 1, 3)` の点列を等角間隔で返す（ローカル平面）。"""
    t = np.arange(spec.segments + 1) / spec.segments
    angles = np.radians(spec.start_deg + (spec.end_deg - spec.start_deg) * t)
    cx, cz = spec.center
    pts = np.empty((spec.segments + 1, 3), dtype=np.float64)
    pts[:, 0] = cx + spec.radius * np.cos(angles)
    pts[:, 1] = spec.y
    pts[:, 2] = cz + spec.radius * np.sin(angles)
    return pts


def to_court_plane(points: np.ndarray) -> np.ndarray:
    """`(x, y, z) -> (z, y, -x)`。"""
    p = np.asarray(points, dtype=np.float64)
    if p.ndim != 2 or p.shape[1] != 3:
        raise ValueError(f"points は (N, 3) である必要があります: {p.shape}")
    return np.column_stack([p[:, 2], p[:, 1], -p[:, 0]])


def tessellate_arc(spec: ArcSpec) -> np.ndarray:
    """サンプリングしてコート平面へ写した点列。"""
    return to_court_plane(sample_arc(spec))


def chord_segments(points: np.ndarray, epsilon: float = CHORD_EPSILON) -> list[ChordSegment]:
    """点列 `(N, 3)` の x/z 成分から弦を作る。短すぎる弦と NaN は捨てる。"""
    p = np.asarray(points, dtype=np.float64)
    if p.ndim != 2 or p.shape[1] != 3:
        raise ValueError(f"points は (N, 3) である必要があります: {p.shape}")
    out: list[ChordSegment] = []
    for (x1, _, z1), (x2, _, z2) in zip(p[:-1], p[1:]):
        dx, dz = x2 - x1, z2 - z1
        length = math.hypot(dx, dz)
        if math.isnan(length) or length < epsilon:
            continue
        out.append(
            ChordSegment(
                midpoint=((x1 + x2) / 2.0, (z1 + z2) / 2.0),
                length=length,
                angle=math.atan2(dz, dx),
            )
        )
    return out


def polyline_length(points: np.ndarray) -> float:
    p = np.asarray(points, dtype=np.float64)
    if len(p) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(p, axis=0), axis=1).sum())


__all__ = [
    "ArcSpec",
    "CHORD_EPSILON",
    "ChordSegment",
    "chord_segments",
    "polyline_length",
    "sample_arc",
    "tessellate_arc",
    "to_court_plane",
]
