"""
どこで: `shapes.tube`。
何を: 任意の 3D 折れ線に沿った細い管（経路に平行な線 + 両端の断面円）。
なぜ: スリーポイントラインの弧を、一定の太さを持つ帯として表すため。

断面の基底は、各点の接線と上方向 (+Y) から作る。接線が +Y と平行な点では +X を使う。
"""

from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape


def _frames(path: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """各点の法線と従法線（単位ベクトル）を返す。"""
    tangents = np.gradient(path, axis=0)
    norms = np.linalg.norm(tangents, axis=1, keepdims=True)
    tangents = tangents / np.where(norms < 1e-12, 1.0, norms)
    up = np.broadcast_to(np.array([0.0, 1.0, 0.0]), tangents.shape)
    normals = np.cross(tangents, up)
    weak = np.linalg.norm(normals, axis=1) < 1e-6
    if np.any(weak):
        normals[weak] = np.cross(tangents[weak], np.array([1.0, 0.0, 0.0]))
    normals /= np.maximum(np.linalg.norm(normals, axis=1, keepdims=True), 1e-12)
    binormals = np.cross(normals, tangents)
    return normals, binormals


@shape
def tube(
    *,
    path: np.ndarray | list[tuple[float, float, float]],
    radius: float = 0.05,
    radial_segments: int = 8,
    caps: bool = True,
) -> Geometry:
    """`path`（(N, 3), N >= 2）に沿った管を返す。"""
    pts = np.asarray(path, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 3 or pts.shape[0] < 2:
        raise ValueError(f"path は (N>=2, 3) である必要があります: {pts.shape}")
    if radial_segments < 3:
        raise ValueError(f"radial_segments は 3 以上である必要があります: {radial_segments}")
    if radius <= 0:
        return Geometry.from_lines([pts])

    normals, binormals = _frames(pts)
    angles = 2.0 * np.pi * np.arange(radial_segments) / radial_segments
    lines: list[np.ndarray] = []
    for a in angles:
        offset = radius * (np.cos(a) * normals + np.sin(a) * binormals)
        lines.append(pts + offset)
    if caps:
        ring_a = np.append(angles, 2.0 * np.pi)
        for idx in (0, pts.shape[0] - 1):
            ring = pts[idx] + radius * (
                np.cos(ring_a)[:, None] * normals[idx] + np.sin(ring_a)[:, None] * binormals[idx]
            )
            lines.append(ring)
    return Geometry.from_lines(lines)
