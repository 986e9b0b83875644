from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .registry import shape


def _circle(radius: float, segments: int) -> np.ndarray:
    t = 2.0 * np.pi * np.arange(segments + 1) / segments
    return np.column_stack([np.cos(t) * radius, np.sin(t) * radius]).astype(np.float32)


@shape
def ring(*, inner_radius: float = 0.5, outer_radius: float = 1.0, segments: int = 64) -> Geometry:
    """XY 平面上の円環（内周と外周の 2 本の閉じた円）。"""
    if segments < 3:
        raise ValueError(f"segments は 3 以上である必要があります: {segments}")
    if not (0.0 <= inner_radius <= outer_radius):
        raise ValueError(f"0 <= inner_radius <= outer_radius が必要です: {inner_radius}, {outer_radius}")
    lines = [_circle(outer_radius, segments)]
    if inner_radius > 0.0:
        lines.append(_circle(inner_radius, segments))
    return Geometry.from_lines(lines)
