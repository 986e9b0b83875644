"""
どこで: `engine.ui.camera_presets`。
何を: 固定視点（位置 + 注視点）の巡回を管理する `CameraPresetController`。
なぜ: キー 1 つで全体/両ゴールの視点へ切り替え、切替後もオービット操作を続けられるようにするため。

状態は「現在のインデックス」だけ。`advance()` は (i + 1) mod N、`apply()` はカメラと
オービットの注視点へ現在の視点を書き込む。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from common.types import Vec3, as_vec3

from ..render.camera import PerspectiveCamera
from .orbit import OrbitControls

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraPreset:
    """名前付きの視点。"""

    eye: Vec3
    look_at: Vec3
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "eye", as_vec3(self.eye))
        object.__setattr__(self, "look_at", as_vec3(self.look_at))


DEFAULT_PRESETS: tuple[CameraPreset, ...] = (
    CameraPreset((0.0, 15.0, 30.0), (0.0, 0.0, 0.0), "overview"),
    CameraPreset((0.0, 15.0, -30.0), (0.0, 0.0, 0.0), "overview_reverse"),
    CameraPreset((-20.0, 8.0, 0.0), (-15.5, 3.0, 0.0), "left_hoop"),
    CameraPreset((20.0, 8.0, 0.0), (15.5, 3.0, 0.0), "right_hoop"),
)


class CameraPresetController:
    def __init__(self, presets: Iterable[CameraPreset] = DEFAULT_PRESETS) -> None:
        self._presets = tuple(presets)
        if not self._presets:
            raise ValueError("少なくとも 1 つのカメラプリセットが必要です")
        self._index = 0

    @property
    def presets(self) -> tuple[CameraPreset, ...]:
        return self._presets

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> CameraPreset:
        return self._presets[self._index]

    def __len__(self) -> int:
        return len(self._presets)

    def advance(self) -> CameraPreset:
        self._index = (self._index + 1) % len(self._presets)
        return self.current

    def apply(self, camera: PerspectiveCamera, orbit: OrbitControls | None = None) -> CameraPreset:
        preset = self.current
        camera.set_position(preset.eye)
        camera.look_at(preset.look_at)
        if orbit is not None:
            orbit.target = preset.look_at
            orbit.sync()
        logger.debug("camera preset %d (%s) applied", self._index, preset.name)
        return preset

    def cycle(self, camera: PerspectiveCamera, orbit: OrbitControls | None = None) -> CameraPreset:
        self.advance()
        return self.apply(camera, orbit)


__all__ = ["CameraPreset", "CameraPresetController", "DEFAULT_PRESETS"]
