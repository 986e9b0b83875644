"""
どこで: `engine.core` の変換ユーティリティ。
何を: 4x4 同次行列（平行移動/回転/拡縮）の生成と合成 `compose_trs()`。
なぜ: `Node` のローカル/ワールド変換と `Geometry.rotate` の規約（X→Y→Z）を一箇所で揃えるため。

規約:
- 列ベクトル（`p' = M @ p`）。
- 合成順は「スケール → 回転（X→Y→Z）→ 平行移動」、すなわち `T @ Rz @ Ry @ Rx @ S`。
"""

from __future__ import annotations

import math

import numpy as np

from common.types import Vec3


def translation_matrix(dx: float, dy: float, dz: float) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = (dx, dy, dz)
    return m


def scale_matrix(sx: float, sy: float, sz: float) -> np.ndarray:
    return np.diag([float(sx), float(sy), float(sz), 1.0])


def rotation_x(angle_rad: float) -> np.ndarray:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4)
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def rotation_y(angle_rad: float) -> np.ndarray:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4)
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def rotation_z(angle_rad: float) -> np.ndarray:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def rotation_xyz(rx: float, ry: float, rz: float) -> np.ndarray:
    """X→Y→Z の順に適用する回転行列（`Rz @ Ry @ Rx`）。"""
    m = np.eye(4)
    if rx:
        m = rotation_x(rx) @ m
    if ry:
        m = rotation_y(ry) @ m
    if rz:
        m = rotation_z(rz) @ m
    return m


def compose_trs(
    position: Vec3 = (0.0, 0.0, 0.0),
    rotation: Vec3 = (0.0, 0.0, 0.0),
    scale: Vec3 = (1.0, 1.0, 1.0),
) -> np.ndarray:
    """複合変換：スケール → 回転 → 移動 を 1 つの 4x4 行列にまとめる。

    引数:
        position: 平行移動量
        rotation: (rx, ry, rz) 回転角度（ラジアン）
        scale: (sx, sy, sz) スケール係数（負値で鏡映）

    返り値:
        float64 の 4x4 行列
    """
    m = scale_matrix(*scale)
    m = rotation_xyz(*rotation) @ m
    m[:3, 3] += np.asarray(position, dtype=np.float64)
    return m


def transform_point(matrix: np.ndarray, point: Vec3) -> np.ndarray:
    """単一点に 4x4 行列を適用して (3,) 配列を返す。"""
    p = np.array([point[0], point[1], point[2], 1.0])
    return (np.asarray(matrix, dtype=np.float64) @ p)[:3]
