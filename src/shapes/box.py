"""
どこで: `shapes.box`。
何を: 原点中心の直方体ワイヤーフレーム（上下の枠 + 4 本の縦辺）。
なぜ: コートのライン/床面/ゴールの支柱・アームなど、薄い板や棒を表す基本形状のため。
"""

from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape


@shape
def box(*, width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Geometry:
    """幅(X)・高さ(Y)・奥行(Z) の直方体を返す。いずれかが負なら `ValueError`。"""
    if width < 0 or height < 0 or depth < 0:
        raise ValueError(f"box の寸法は非負である必要があります: {(width, height, depth)}")
    hx, hy, hz = width / 2.0, height / 2.0, depth / 2.0
    corners = np.array(
        [(-hx, -hz), (hx, -hz), (hx, hz), (-hx, hz), (-hx, -hz)],
        dtype=np.float32,
    )
    bottom = np.column_stack([corners[:, 0], np.full(5, -hy, dtype=np.float32), corners[:, 1]])
    top = bottom.copy()
    top[:, 1] = hy
    verticals = [np.array([bottom[i], top[i]], dtype=np.float32) for i in range(4)]
    return Geometry.from_lines([bottom, top, *verticals])
