from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape


@shape
def plane(*, width: float = 1.0, height: float = 1.0, divisions: int = 0) -> Geometry:
    """XY 平面上（法線 +Z）の原点中心の長方形。

    `divisions > 0` のとき、内部に等間隔の格子線（縦横それぞれ `divisions` 本）を加える。
    """
    if width < 0 or height < 0:
        raise ValueError(f"plane の寸法は非負である必要があります: {(width, height)}")
    if divisions < 0:
        raise ValueError(f"divisions は 0 以上である必要があります: {divisions}")
    hx, hy = width / 2.0, height / 2.0
    lines = [np.array([(-hx, -hy), (hx, -hy), (hx, hy), (-hx, hy), (-hx, -hy)], dtype=np.float32)]
    for i in range(1, divisions + 1):
        t = i / (divisions + 1)
        x = -hx + width * t
        y = -hy + height * t
        lines.append(np.array([(x, -hy), (x, hy)], dtype=np.float32))
        lines.append(np.array([(-hx, y), (hx, y)], dtype=np.float32))
    return Geometry.from_lines(lines)
