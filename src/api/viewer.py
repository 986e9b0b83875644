"""
どこで: `api.viewer`（実行ランナー/エントリポイント）。
何を: コートシーンを一度だけ組み、pyglet ウィンドウ上で ModernGL により描画し続ける。
      キー入力（オービット切替/視点切替/ESC）とマウス操作（回転/ズーム）を配線する。
なぜ: シーン構築・状態遷移・描画の各層を 1 つの実行導線に束ねるため。

補足:
- 重い依存（pyglet/ModernGL）は関数内で遅延 import する（`init_only=True` でウィンドウを作らずに検証できる）。
- 状態遷移は `api.viewer_state` の関数に委譲し、ここではイベントを翻訳するだけにする。
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from common import settings
from common.logging import setup_default_logging
from court import compose_scene, load_court_config
from engine.core.frame_clock import FrameClock
from engine.core.tickable import Tickable
from engine.io.textures import TextureProvider
from engine.render.camera import PerspectiveCamera
from util.utils import config_section, load_config, resolve_asset_dir

from .viewer_runner.utils import (
    help_lines,
    resolve_fps,
    resolve_keys,
    resolve_line_thickness,
    resolve_window_size,
)
from .viewer_state import (
    ViewerContext,
    create_context,
    handle_key,
    resize,
    status_text,
    update_frame,
)

logger = logging.getLogger(__name__)

SCORE_TEXT = "Score: 0 – 0"


def run_viewer(
    *,
    window_size: tuple[int, int] | None = None,
    fps: int | None = None,
    background: str | Sequence[float] | None = None,
    line_thickness: float | None = None,
    textures: bool | None = None,
    court_overrides: dict[str, Any] | None = None,
    init_only: bool = False,
) -> ViewerContext | None:
    """コートビューアを起動する。

    Parameters
    ----------
    window_size : tuple[int, int] | None, default None
        ウィンドウサイズ [px]。None で `canvas.window_size`（既定 1280x720）。
    fps : int | None, default None
        フレームクロックの周期。None で `viewer.fps`（既定 60）。
    background : str | Sequence[float] | None, default None
        背景色（Hex 文字列/RGBA）。None で `canvas.background_color`。
    line_thickness : float | None, default None
        線幅 [px]。None で環境変数 `CRT_LINE_THICKNESS` → `viewer.line_thickness`。
    textures : bool | None, default None
        テクスチャ読み込みの有効/無効。None で環境変数 `CRT_TEXTURES_ENABLED`。
        無効時は全マテリアルが単色で描かれる。
    court_overrides : dict | None, default None
        `CourtConfig` への上書き（節名 → {キー: 値}）。None で設定ファイルの `court:` 節。
    init_only : bool, default False
        True の場合はシーンと状態を組んで `ViewerContext` を返し、ウィンドウを開かない。

    Returns
    -------
    ViewerContext | None
        `init_only=True` のときのみコンテキストを返す。

    Notes
    -----
    - `ESC` で終了し、テクスチャワーカ停止・GL リソース解放を行う。
    - `CRT_RENDER_DEBUG=1` で `engine.render` のレイヤー転送ログ（DEBUG）を出す。
    - ヘッドレス環境ではウィンドウ生成に失敗する（例外はそのまま伝播する）。
    """
    setup_default_logging()
    if settings.get().RENDER_DEBUG:
        logging.getLogger("engine.render").setLevel(logging.DEBUG)

    # ---- ① 設定の解決 ---------------------------------------------
    cfg_all = load_config()
    canvas_cfg = config_section("canvas", cfg_all)
    viewer_cfg = config_section("viewer", cfg_all)
    controls_cfg = config_section("controls", cfg_all)

    fps = resolve_fps(fps, viewer_cfg)
    window_width, window_height = resolve_window_size(window_size, canvas_cfg)
    thickness = resolve_line_thickness(line_thickness, viewer_cfg)
    toggle_key, cycle_key = resolve_keys(controls_cfg)
    if background is None:
        background = canvas_cfg.get("background_color")

    # ---- ② シーン構築（テクスチャは要求だけ出して待たない） ----------
    court_cfg = load_court_config(
        court_overrides if court_overrides is not None else config_section("court", cfg_all)
    )
    use_textures = settings.get().TEXTURES_ENABLED if textures is None else bool(textures)
    provider = TextureProvider(
        resolve_asset_dir(cfg_all),
        queue_size=settings.get().TEXTURE_QUEUE_SIZE,
        enabled=use_textures,
    )
    scene_root = compose_scene(court_cfg, provider)

    # ---- ③ カメラと状態 -------------------------------------------
    camera = PerspectiveCamera(
        float(viewer_cfg.get("fov", 75.0)),
        window_width / window_height,
        float(viewer_cfg.get("near", 0.1)),
        float(viewer_cfg.get("far", 1000.0)),
    )
    ctx = create_context(
        scene_root,
        camera,
        orbit_enabled=bool(viewer_cfg.get("orbit_enabled", True)),
        toggle_key=toggle_key,
        cycle_key=cycle_key,
    )

    if init_only:
        provider.close()
        return ctx

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key, mouse

    from engine.ui.overlay import ControlsOverlay

    from .viewer_runner.render import create_window_and_renderer

    # ---- ④ Window & ModernGL --------------------------------------
    rendering_window, _mgl_ctx, scene_renderer, _bg_rgba = create_window_and_renderer(
        window_width,
        window_height,
        scene_root=scene_root,
        camera=camera,
        background=background,
        line_thickness=thickness,
    )
    overlay = ControlsOverlay(
        rendering_window,
        help_lines(toggle_key, cycle_key),
        score_text=SCORE_TEXT,
        color=canvas_cfg.get("text_color", "#ffffffe6"),
        status_provider=lambda: status_text(ctx),
    )

    def _draw_main() -> None:
        scene_renderer.draw()
        overlay.draw()

    rendering_window.add_draw_callback(_draw_main)

    def _on_resize(width: int, height: int) -> None:
        if not resize(ctx, width, height):
            return
        fb_w, fb_h = rendering_window.get_framebuffer_size()
        scene_renderer.set_viewport(fb_w, fb_h)

    rendering_window.add_resize_callback(_on_resize)

    # ---- ⑤ FrameClock ---------------------------------------------
    class _ViewerTick(Tickable):
        def tick(self, dt: float) -> None:
            update_frame(ctx, dt)

    tickables: list[Tickable] = [provider, _ViewerTick(), overlay]
    frame_clock = FrameClock(tickables)
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps)

    # ---- ⑥ pyglet イベント -----------------------------------------
    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            rendering_window.dispatch_event("on_close")
            return pyglet.event.EVENT_HANDLED
        handle_key(ctx, key.symbol_string(sym))
        return None

    @rendering_window.event
    def on_mouse_drag(x, y, dx, dy, buttons, modifiers):  # noqa: ANN001
        if buttons & mouse.LEFT:
            ctx.orbit.rotate(dx, dy)

    @rendering_window.event
    def on_mouse_scroll(x, y, scroll_x, scroll_y):  # noqa: ANN001
        ctx.orbit.zoom(scroll_y)

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        pyglet.clock.unschedule(frame_clock.tick)
        provider.close()
        scene_renderer.release()
        setattr(on_close, "_closed", True)
        logger.debug(
            "viewer closed after %d frames (%.1f fps)", frame_clock.frames, frame_clock.fps
        )
        pyglet.app.exit()

    logger.info(
        "viewer started: %dx%d @ %d fps, textures=%s", window_width, window_height, fps, use_textures
    )
    pyglet.app.run()
    return None


__all__ = ["SCORE_TEXT", "run_viewer"]
