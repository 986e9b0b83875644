"""
どこで: `engine.core.material`。
何を: 描画スタイル `Material` と、非同期に画素が届くテクスチャ参照 `TextureHandle`。
なぜ: シーン構築（court）とテクスチャ読み込み（engine.io）と描画（engine.render）の間で、
      読み込み完了を待たずに束縛できる不透明ハンドルを共有するため。

線描画レンダラは面を塗らないため、テクスチャは「平均色」として線色へ反映する。
未解決/失敗のテクスチャはベース色（単色）へフォールバックする。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from common.types import RGBA

TextureState = Literal["pending", "ready", "failed"]


class TextureHandle:
    """名前付きテクスチャへの不透明ハンドル。

    - 生成直後は `pending`。`bind()` で `ready`、`fail()` で `failed` に一度だけ遷移する。
    - 画素は `(H, W)`/`(H, W, 3)`/`(H, W, 4)` を受理し、0–1 の float32 RGBA に正規化して保持。
    """

    __slots__ = ("name", "_state", "_pixels", "_mean", "error")

    def __init__(self, name: str) -> None:
        self.name = name
        self._state: TextureState = "pending"
        self._pixels: np.ndarray | None = None
        self._mean: RGBA | None = None
        self.error: str | None = None

    @property
    def state(self) -> TextureState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == "ready"

    @property
    def pixels(self) -> np.ndarray | None:
        return self._pixels

    def bind(self, pixels: np.ndarray) -> None:
        """デコード済み画素を束縛する（主スレッドから呼ぶ）。"""
        if self._state != "pending":
            raise RuntimeError(f"texture '{self.name}' is already {self._state}")
        self._pixels = _normalize_pixels(pixels)
        self._mean = _mean_color(self._pixels)
        self._state = "ready"

    def fail(self, error: str) -> None:
        if self._state != "pending":
            raise RuntimeError(f"texture '{self.name}' is already {self._state}")
        self.error = error
        self._state = "failed"

    def mean_color(self) -> RGBA | None:
        """アルファ加重の平均色（未解決なら None）。"""
        return self._mean

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"TextureHandle({self.name!r}, {self._state})"


def _normalize_pixels(pixels: np.ndarray) -> np.ndarray:
    arr = np.asarray(pixels)
    if arr.ndim == 2:
        arr = np.repeat(arr[:, :, None], 3, axis=2)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4) or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"unsupported texture shape: {arr.shape}")
    if np.issubdtype(arr.dtype, np.integer):
        maxv = float(np.iinfo(arr.dtype).max)
        out = arr.astype(np.float32) / maxv
    else:
        out = np.clip(arr.astype(np.float32), 0.0, 1.0)
    if out.shape[2] == 3:
        alpha = np.ones(out.shape[:2] + (1,), dtype=np.float32)
        out = np.concatenate([out, alpha], axis=2)
    return np.ascontiguousarray(out)


def _mean_color(rgba: np.ndarray) -> RGBA:
    alpha = rgba[:, :, 3]
    total = float(alpha.sum())
    if total <= 0.0:
        return (0.0, 0.0, 0.0, 0.0)
    rgb = (rgba[:, :, :3] * alpha[:, :, None]).sum(axis=(0, 1)) / total
    return (float(rgb[0]), float(rgb[1]), float(rgb[2]), float(alpha.mean()))


@dataclass
class Material:
    """線色の決定規則を持つマテリアル。

    Parameters
    ----------
    color : RGBA
        ベース色。テクスチャ未解決/失敗時はこの色で描く。
    texture : TextureHandle | None
        拡散テクスチャ。解決後は平均色で置き換える（アルファはベースとの積）。
    bump_texture : TextureHandle | None
        バンプマップ。平均輝度が低いほど `bump_scale` に比例して暗くする。
    opacity : float
        不透明度（0–1）。
    """

    color: RGBA = (1.0, 1.0, 1.0, 1.0)
    texture: TextureHandle | None = None
    bump_texture: TextureHandle | None = None
    bump_scale: float = 0.0
    opacity: float = 1.0
    name: str = field(default="material")

    def effective_color(self) -> RGBA:
        r, g, b, a = self.color
        if self.texture is not None:
            tex = self.texture.mean_color()
            if tex is not None:
                r, g, b, a = tex[0], tex[1], tex[2], a * tex[3]
        if self.bump_texture is not None and self.bump_scale > 0.0:
            bump = self.bump_texture.mean_color()
            if bump is not None:
                luma = 0.2126 * bump[0] + 0.7152 * bump[1] + 0.0722 * bump[2]
                k = max(0.0, 1.0 - self.bump_scale * (1.0 - luma))
                r, g, b = r * k, g * k, b * k
        return (float(r), float(g), float(b), float(a) * float(self.opacity))

    def textures(self) -> list[TextureHandle]:
        return [t for t in (self.texture, self.bump_texture) if t is not None]


__all__ = ["Material", "TextureHandle", "TextureState"]
