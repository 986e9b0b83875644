"""
どこで: `engine.core` サブパッケージ。
何を: Geometry・Node/Mesh・Material/TextureHandle・フレーム駆動（Tickable/FrameClock）・変換ユーティリティを提供。
なぜ: シーン構築と描画の基盤を構成し、上位層（shapes/court/render/ui/api）から再利用するため。

注意: `render_window` は pyglet に依存するため、ここでは再エクスポートしない。
"""

from .frame_clock import FrameClock
from .geometry import Geometry
from .material import Material, TextureHandle
from .node import Mesh, Node
from .tickable import Tickable

__all__ = ["FrameClock", "Geometry", "Material", "Mesh", "Node", "TextureHandle", "Tickable"]
