"""
どこで: `api.viewer_runner.render`
何を: RenderWindow/ModernGL/SceneRenderer の初期化と背景色の決定。
なぜ: `api.viewer` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

from typing import Any

import moderngl

from engine.core.node import Node
from engine.render.camera import PerspectiveCamera


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    *,
    scene_root: Node,
    camera: PerspectiveCamera,
    background: Any,
    line_thickness: float,
    caption: str = "Court",
):
    """ウィンドウ/ModernGL/SceneRenderer を生成する。

    Returns
    -------
    (rendering_window, mgl_ctx, scene_renderer, bg_rgba)
    """
    from engine.core.render_window import RenderWindow
    from engine.render.renderer import SceneRenderer
    from util.color import normalize_color as _normalize_color

    bg_rgba = _normalize_color(background if background is not None else (0.0, 0.0, 0.0, 1.0))
    rendering_window = RenderWindow(
        window_width, window_height, caption=caption, bg_color=bg_rgba
    )  # type: ignore[abstract]

    # ModernGL コンテキスト（半透明のバックボード用にブレンド、前後関係に深度）
    mgl_ctx: moderngl.Context = moderngl.create_context()
    mgl_ctx.enable(moderngl.BLEND | moderngl.DEPTH_TEST)
    mgl_ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    fb_w, fb_h = rendering_window.get_framebuffer_size()
    scene_renderer = SceneRenderer(
        mgl_ctx,
        scene_root,
        camera,
        line_thickness=line_thickness,
        viewport=(fb_w, fb_h),
    )
    return rendering_window, mgl_ctx, scene_renderer, bg_rgba


__all__ = ["create_window_and_renderer"]
