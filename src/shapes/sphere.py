"""
どこで: `shapes.sphere`。
何を: 緯線と経線による球のワイヤーフレーム（極は ±Y）。
なぜ: センターコートのボールを線描画で表すため。
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape


@lru_cache(maxsize=32)
def _unit_latlon(width_segments: int, height_segments: int) -> tuple[np.ndarray, ...]:
    """半径 1 の緯線（極を除く）と経線を返す。"""
    lines: list[np.ndarray] = []
    lon = 2.0 * np.pi * np.arange(width_segments + 1) / width_segments
    # 緯線
    for i in range(1, height_segments):
        lat = np.pi * i / height_segments
        y = np.cos(lat)
        r = np.sin(lat)
        lines.append(np.column_stack([r * np.cos(lon), np.full_like(lon, y), -r * np.sin(lon)]))
    # 経線（極→極）
    lat = np.pi * np.arange(height_segments + 1) / height_segments
    for j in range(width_segments):
        a = lon[j]
        r = np.sin(lat)
        lines.append(np.column_stack([r * np.cos(a), np.cos(lat), -r * np.sin(a)]))
    return tuple(line.astype(np.float32) for line in lines)


@shape
def sphere(*, radius: float = 0.5, width_segments: int = 16, height_segments: int = 12) -> Geometry:
    """原点中心の球。`width_segments >= 3`、`height_segments >= 2`。"""
    if width_segments < 3 or height_segments < 2:
        raise ValueError(
            f"sphere の分割数が小さすぎます: width={width_segments}, height={height_segments}"
        )
    if radius < 0:
        raise ValueError(f"radius は非負である必要があります: {radius}")
    base = _unit_latlon(int(width_segments), int(height_segments))
    return Geometry.from_lines([line * np.float32(radius) for line in base])
