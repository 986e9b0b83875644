"""
どこで: `api.viewer_state`（ビューアの状態遷移。GL/ウィンドウ非依存）。
何を: シーン/カメラ/オービット/視点プリセット/オービット有効フラグを 1 つの `ViewerContext` に束ね、
      キー入力とフレーム更新をその上の関数として提供する。
なぜ: 入力処理をグローバル変数から切り離し、ウィンドウなしでテストできるようにするため。

各関数は受け取った `ctx` をその場で更新し、同じ `ctx` を返す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from engine.core.node import Node
from engine.render.camera import PerspectiveCamera
from engine.ui.camera_presets import CameraPresetController
from engine.ui.orbit import OrbitControls

logger = logging.getLogger(__name__)


@dataclass
class ViewerContext:
    """ビューアの可変状態。

    Attributes
    ----------
    scene : Node
        描画対象のルート（構築後は読むだけ）。
    camera : PerspectiveCamera
        描画に使うカメラ。
    orbit : OrbitControls
        マウス操作で回り込むコントローラ。`orbit_enabled` と常に同期する。
    presets : CameraPresetController
        固定視点の巡回状態。
    orbit_enabled : bool
        オービット操作の有効/無効。
    toggle_key, cycle_key : str
        オービット切替/視点切替に割り当てたキー名（小文字で比較）。
    """

    scene: Node
    camera: PerspectiveCamera
    orbit: OrbitControls
    presets: CameraPresetController
    orbit_enabled: bool = True
    toggle_key: str = "o"
    cycle_key: str = "c"

    def __post_init__(self) -> None:
        self.orbit.enabled = bool(self.orbit_enabled)


def create_context(
    scene: Node,
    camera: PerspectiveCamera,
    *,
    presets: CameraPresetController | None = None,
    orbit: OrbitControls | None = None,
    orbit_enabled: bool = True,
    toggle_key: str = "o",
    cycle_key: str = "c",
) -> ViewerContext:
    """初期視点（プリセット 0）を適用済みのコンテキストを作る。"""
    presets = presets if presets is not None else CameraPresetController()
    orbit = orbit if orbit is not None else OrbitControls(camera)
    presets.apply(camera, orbit)
    return ViewerContext(
        scene=scene,
        camera=camera,
        orbit=orbit,
        presets=presets,
        orbit_enabled=orbit_enabled,
        toggle_key=toggle_key.lower(),
        cycle_key=cycle_key.lower(),
    )


def toggle_orbit(ctx: ViewerContext) -> ViewerContext:
    ctx.orbit_enabled = not ctx.orbit_enabled
    ctx.orbit.enabled = ctx.orbit_enabled
    logger.debug("orbit %s", "enabled" if ctx.orbit_enabled else "disabled")
    return ctx


def advance_preset(ctx: ViewerContext) -> ViewerContext:
    """次の視点へ進めてカメラとオービットの注視点へ適用する。"""
    ctx.presets.cycle(ctx.camera, ctx.orbit)
    return ctx


def handle_key(ctx: ViewerContext, key_name: str) -> ViewerContext:
    """キー名で状態を更新する。割り当てのないキーは無視。"""
    name = key_name.lower()
    if name == ctx.toggle_key:
        return toggle_orbit(ctx)
    if name == ctx.cycle_key:
        return advance_preset(ctx)
    return ctx


def update_frame(ctx: ViewerContext, dt: float) -> ViewerContext:
    # オービット無効時はカメラを動かさない（OrbitControls 側で no-op）
    ctx.orbit.update()
    return ctx


def resize(ctx: ViewerContext, width: int, height: int) -> bool:
    """ウィンドウサイズ変化をカメラのアスペクト比へ反映する。

    最小化などで幅か高さが 0 のときは何もせず False を返す。
    """
    if width <= 0 or height <= 0:
        return False
    ctx.camera.set_aspect(width / height)
    return True


def status_text(ctx: ViewerContext) -> str:
    preset = ctx.presets.current
    label = preset.name or f"#{ctx.presets.index}"
    orbit = "ON" if ctx.orbit_enabled else "OFF"
    return f"View {ctx.presets.index + 1}/{len(ctx.presets)}: {label}  |  Orbit: {orbit}"


__all__ = [
    "ViewerContext",
    "advance_preset",
    "create_context",
    "handle_key",
    "resize",
    "status_text",
    "toggle_orbit",
    "update_frame",
]
