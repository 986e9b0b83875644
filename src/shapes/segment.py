from __future__ import annotations

from engine.core.geometry import Geometry

from .registry import shape


@shape
def segment(
    *,
    start: tuple[float, float, float] = (0.0, 0.0, 0.0),
    end: tuple[float, float, float] = (1.0, 0.0, 0.0),
) -> Geometry:
    """2 点を結ぶ 1 本の線分。"""
    return Geometry.from_lines([[start, end]])
