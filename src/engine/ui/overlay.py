"""
どこで: `engine.ui.overlay`。
何を: 操作ヘルプ・スコア表示・現在の視点/オービット状態を pyglet の Label で重ね描きする。
なぜ: 3D シーンの上に、キー操作の案内と状態を常に見える形で出すため。

左上にヘルプ行、その下に状態行、上端中央にスコアを置く。状態行の文字列は
`status_provider()` から毎フレーム取り直す。
"""

from __future__ import annotations

from typing import Callable, Sequence

import pyglet
from pyglet.window import Window

from util.color import to_u8_rgba

from ..core.tickable import Tickable


class ControlsOverlay(Tickable):
    """固定ヘルプ行 + 動的な状態行 + スコアを描く。"""

    def __init__(
        self,
        window: Window,
        help_lines: Sequence[str],
        *,
        score_text: str = "",
        status_provider: Callable[[], str] | None = None,
        font_size: int = 12,
        color: object = "#ffffffe6",
        margin_px: int = 12,
    ):
        self.window = window
        rgba = to_u8_rgba(color)
        self._status_provider = status_provider
        self._margin = int(margin_px)
        self._line_h = int(font_size * 1.6)
        self._help_labels = [
            pyglet.text.Label(
                text=line,
                x=self._margin,
                y=0,
                anchor_x="left",
                anchor_y="top",
                font_size=font_size,
                color=rgba,
            )
            for line in help_lines
        ]
        self._status_label = pyglet.text.Label(
            text="",
            x=self._margin,
            y=0,
            anchor_x="left",
            anchor_y="top",
            font_size=font_size,
            color=rgba,
        )
        self._score_label = pyglet.text.Label(
            text=score_text,
            x=0,
            y=0,
            anchor_x="center",
            anchor_y="top",
            font_size=int(font_size * 1.5),
            color=rgba,
        )
        self._layout()

    def _layout(self) -> None:
        top = self.window.height - self._margin
        for i, lab in enumerate(self._help_labels):
            lab.y = top - i * self._line_h
        self._status_label.y = top - len(self._help_labels) * self._line_h
        self._score_label.x = self.window.width // 2
        self._score_label.y = top

    # -------- Tickable --------
    def tick(self, dt: float) -> None:
        if self._status_provider is not None:
            text = self._status_provider()
            if text != self._status_label.text:
                self._status_label.text = text
        self._layout()

    # -------- draw --------
    def draw(self) -> None:
        for lab in self._help_labels:
            lab.draw()
        self._status_label.draw()
        if self._score_label.text:
            self._score_label.draw()


__all__ = ["ControlsOverlay"]
