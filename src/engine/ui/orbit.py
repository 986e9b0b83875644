"""
どこで: `engine.ui.orbit`。
何を: 注視点を中心にカメラを球面上で回す `OrbitControls`（ドラッグ回転・スクロールでズーム）。
なぜ: プリセット視点の間を自由に見回せるようにするため。無効時は入力を無視する。

カメラ位置は (半径, 方位角, 極角) で保持し、`update()` でカメラへ書き戻す。
極角は [min_polar, max_polar]、半径は [min_distance, max_distance] に丸める。
"""

from __future__ import annotations

import math

import numpy as np

from common.types import Vec3, as_vec3

from ..core.tickable import Tickable
from ..render.camera import PerspectiveCamera


class OrbitControls(Tickable):
    def __init__(
        self,
        camera: PerspectiveCamera,
        *,
        target: Vec3 = (0.0, 0.0, 0.0),
        rotate_speed: float = 0.005,
        zoom_factor: float = 0.9,
        min_distance: float = 1.0,
        max_distance: float = 200.0,
        min_polar: float = 0.01,
        max_polar: float = math.pi - 0.01,
    ) -> None:
        if not (0.0 < zoom_factor < 1.0):
            raise ValueError(f"zoom_factor は (0, 1) である必要があります: {zoom_factor}")
        if not (0.0 < min_distance <= max_distance):
            raise ValueError(f"不正な距離範囲: {min_distance}..{max_distance}")
        self.camera = camera
        self.enabled = True
        self.rotate_speed = float(rotate_speed)
        self.zoom_factor = float(zoom_factor)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self.min_polar = float(min_polar)
        self.max_polar = float(max_polar)
        self._target: Vec3 = as_vec3(target)
        self.radius = 1.0
        self.azimuth = 0.0
        self.polar = math.pi / 2
        self.sync()

    @property
    def target(self) -> Vec3:
        return self._target

    @target.setter
    def target(self, value: Vec3) -> None:
        self._target = as_vec3(value)

    def sync(self) -> None:
        """カメラの現在位置から球面座標を取り直す。"""
        offset = np.asarray(self.camera.position, dtype=np.float64) - np.asarray(
            self._target, dtype=np.float64
        )
        r = float(np.linalg.norm(offset))
        if r < 1e-12:
            return
        self.radius = r
        self.azimuth = math.atan2(offset[0], offset[2])
        self.polar = math.acos(max(-1.0, min(1.0, offset[1] / r)))

    def rotate(self, dx: float, dy: float) -> bool:
        """画素単位のドラッグ量で回す。無効時は何もしない（False）。"""
        if not self.enabled:
            return False
        self.azimuth -= dx * self.rotate_speed
        self.polar = min(self.max_polar, max(self.min_polar, self.polar + dy * self.rotate_speed))
        return True

    def zoom(self, steps: float) -> bool:
        """スクロール量で寄る（正）/引く（負）。無効時は何もしない（False）。"""
        if not self.enabled:
            return False
        r = self.radius * (self.zoom_factor**steps)
        self.radius = min(self.max_distance, max(self.min_distance, r))
        return True

    def eye_position(self) -> Vec3:
        sp = math.sin(self.polar)
        tx, ty, tz = self._target
        return (
            tx + self.radius * sp * math.sin(self.azimuth),
            ty + self.radius * math.cos(self.polar),
            tz + self.radius * sp * math.cos(self.azimuth),
        )

    def update(self) -> None:
        """球面座標をカメラへ反映する。無効時はカメラに触れない。"""
        if not self.enabled:
            return
        self.camera.set_position(self.eye_position())
        self.camera.look_at(self._target)

    def tick(self, dt: float) -> None:
        self.update()


__all__ = ["OrbitControls"]
