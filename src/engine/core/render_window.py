"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: pyglet Window（MSAA/深度/背景クリア）と描画・リサイズコールバック登録を提供。
なぜ: レンダラやビューア状態から GUI 依存を切り離し、最小インターフェイスで扱うため。

使用例:
    win = RenderWindow(1280, 720, caption="Court", bg_color=(0.1, 0.1, 0.1, 1.0))
    win.add_draw_callback(renderer.draw)
    win.add_resize_callback(lambda w, h: camera.set_aspect(w / h))
    pyglet.app.run()
"""

from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        caption: str = "Court",
        bg_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            caption: タイトルバー文字列。
            bg_color: 背景色 RGBA（0.0〜1.0）。
        """
        # 線の縁を滑らかにするため MSAA、前後関係のため深度バッファを要求
        config = Config(double_buffer=True, sample_buffers=1, samples=4, depth_size=24, vsync=True)
        super().__init__(width=width, height=height, caption=caption, config=config, resizable=True)
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """`on_draw` 中に呼ぶ描画関数を登録する（登録順に呼ぶ）。"""
        self._draw_callbacks.append(func)

    def add_resize_callback(self, func: Callable[[int, int], None]) -> None:
        """ウィンドウサイズ変更時に `(width, height)` で呼ぶ関数を登録する。"""
        self._resize_callbacks.append(func)

    def on_draw(self):  # pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    def on_resize(self, width, height):
        result = super().on_resize(width, height)
        if width > 0 and height > 0:
            for cb in self._resize_callbacks:
                cb(width, height)
        return result

    def set_background_color(self, rgba: tuple[float, float, float, float]) -> None:
        """背景色 RGBA(0–1) を更新する。次フレームから反映。"""
        r, g, b, a = rgba
        self._bg_color = (float(r), float(g), float(b), float(a))
