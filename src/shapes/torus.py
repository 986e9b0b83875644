from __future__ import annotations

import numpy as np
from numba import njit

from engine.core.geometry import Geometry

from .registry import shape


@njit(fastmath=True, cache=True)
def _cross_section(
    radius: float,
    tube: float,
    radial_segments: int,
    cos_theta: float,
    sin_theta: float,
) -> np.ndarray:
    """中心円上の 1 点まわりの断面円（閉じた線）。"""
    phi = 2 * np.pi * np.arange(radial_segments + 1) / radial_segments
    r = radius + tube * np.cos(phi)
    out = np.empty((phi.shape[0], 3), dtype=np.float32)
    out[:, 0] = r * cos_theta
    out[:, 1] = r * sin_theta
    out[:, 2] = tube * np.sin(phi)
    return out


@njit(fastmath=True, cache=True)
def _parallel(
    radius: float, tube: float, tubular_segments: int, cos_phi: float, sin_phi: float
) -> np.ndarray:
    """断面上の 1 点が中心円に沿って描く円（閉じた線）。"""
    theta = 2 * np.pi * np.arange(tubular_segments + 1) / tubular_segments
    r = radius + tube * cos_phi
    out = np.empty((theta.shape[0], 3), dtype=np.float32)
    out[:, 0] = r * np.cos(theta)
    out[:, 1] = r * np.sin(theta)
    out[:, 2] = tube * sin_phi
    return out


@shape
def torus(
    *,
    radius: float = 0.23,
    tube: float = 0.02,
    radial_segments: int = 8,
    tubular_segments: int = 32,
    sections: int | None = None,
) -> Geometry:
    """XY 平面上に中心円を持つトーラス（Z 方向に厚み）。

    引数:
        radius: 中心円の半径
        tube: 管の半径（0 なら中心円 1 本だけ）
        radial_segments: 断面円の分割数（= 中心円に平行な線の本数）
        tubular_segments: 中心円方向の分割数
        sections: 描く断面円の本数（省略時は `tubular_segments`）
    """
    if radial_segments < 3 or tubular_segments < 3:
        raise ValueError("radial_segments/tubular_segments は 3 以上である必要があります")
    if radius <= 0 or tube < 0:
        raise ValueError(f"不正なトーラス寸法: radius={radius}, tube={tube}")
    n_sections = tubular_segments if sections is None else int(sections)
    lines: list[np.ndarray] = []
    if n_sections > 0 and tube > 0:
        theta = 2 * np.pi * np.arange(n_sections) / n_sections
        for c, s in zip(np.cos(theta), np.sin(theta)):
            lines.append(_cross_section(radius, tube, radial_segments, c, s))
    n_parallels = radial_segments if tube > 0 else 1
    phi = 2 * np.pi * np.arange(n_parallels) / n_parallels
    for c, s in zip(np.cos(phi), np.sin(phi)):
        lines.append(_parallel(radius, tube, tubular_segments, c, s))
    return Geometry.from_lines(lines)
