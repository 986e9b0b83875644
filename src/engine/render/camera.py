"""
どこで: `engine.render.camera`。
何を: 透視投影カメラ `PerspectiveCamera`（位置/注視点/上方向と fov/aspect/near/far）。
なぜ: プリセット切替とオービット操作が同じカメラ状態を読み書きし、レンダラがそこから
      view/projection 行列を得るため。

規約:
- 行列は numpy の行優先（列ベクトル規約 `p' = M @ p`）。GPU へは `.T` で転置して渡す。
- `look_at()` は注視点だけを更新し、位置は変えない。
"""

from __future__ import annotations

import math

import numpy as np

from common.types import Vec3, as_vec3


def look_at_matrix(eye: Vec3, target: Vec3, up: Vec3 = (0.0, 1.0, 0.0)) -> np.ndarray:
    """右手系の view 行列（ワールド → カメラ）。`eye == target` は `ValueError`。"""
    e = np.asarray(eye, dtype=np.float64)
    t = np.asarray(target, dtype=np.float64)
    f = t - e
    n = float(np.linalg.norm(f))
    if n < 1e-12:
        raise ValueError("eye と target が一致しています")
    f /= n
    u = np.asarray(up, dtype=np.float64)
    s = np.cross(f, u)
    if float(np.linalg.norm(s)) < 1e-12:
        # 真上/真下を向く場合は Z を仮の上方向にする
        s = np.cross(f, np.array([0.0, 0.0, 1.0]))
    s /= np.linalg.norm(s)
    u = np.cross(s, f)
    m = np.eye(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[:3, 3] = (-s @ e, -u @ e, f @ e)
    return m


def perspective_matrix(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    if not (0.0 < fov_deg < 180.0):
        raise ValueError(f"fov は (0, 180) 度である必要があります: {fov_deg}")
    if aspect <= 0.0 or near <= 0.0 or far <= near:
        raise ValueError(f"不正な投影パラメータ: aspect={aspect}, near={near}, far={far}")
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


class PerspectiveCamera:
    """位置と注視点で姿勢を表す透視カメラ。"""

    def __init__(
        self,
        fov: float = 75.0,
        aspect: float = 16.0 / 9.0,
        near: float = 0.1,
        far: float = 1000.0,
        *,
        position: Vec3 = (0.0, 0.0, 1.0),
        target: Vec3 = (0.0, 0.0, 0.0),
        up: Vec3 = (0.0, 1.0, 0.0),
    ) -> None:
        # 検証のため一度組み立てる
        perspective_matrix(fov, aspect, near, far)
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position: Vec3 = as_vec3(position)
        self.target: Vec3 = as_vec3(target)
        self.up: Vec3 = as_vec3(up)

    def set_position(self, position: Vec3) -> None:
        self.position = as_vec3(position)

    def look_at(self, target: Vec3) -> None:
        self.target = as_vec3(target)

    def set_aspect(self, aspect: float) -> None:
        if aspect <= 0.0:
            raise ValueError(f"aspect は正である必要があります: {aspect}")
        self.aspect = float(aspect)

    def view_matrix(self) -> np.ndarray:
        return look_at_matrix(self.position, self.target, self.up)

    def projection_matrix(self) -> np.ndarray:
        return perspective_matrix(self.fov, self.aspect, self.near, self.far)

    def view_projection(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()

    def forward(self) -> np.ndarray:
        """注視方向の単位ベクトル。"""
        d = np.asarray(self.target, dtype=np.float64) - np.asarray(self.position, dtype=np.float64)
        return d / np.linalg.norm(d)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"PerspectiveCamera(position={self.position}, target={self.target}, fov={self.fov})"


__all__ = ["PerspectiveCamera", "look_at_matrix", "perspective_matrix"]
