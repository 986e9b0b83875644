"""
どこで: `engine.ui` サブパッケージ。
何を: カメラ操作（OrbitControls/CameraPresetController）と画面オーバーレイ（ControlsOverlay）。
なぜ: 入力に応じた視点の状態遷移を描画から切り離して扱うため。

注意: `overlay` は pyglet に依存するため、ここでは再エクスポートしない。
"""

from .camera_presets import DEFAULT_PRESETS, CameraPreset, CameraPresetController
from .orbit import OrbitControls

__all__ = ["CameraPreset", "CameraPresetController", "DEFAULT_PRESETS", "OrbitControls"]
