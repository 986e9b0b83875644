"""
どこで: `engine.render` 型定義。
何を: マテリアル単位にまとめた描画レイヤー `Layer`。
なぜ: シーン内で色の異なるメッシュ群を、マテリアルごとに 1 回のドローで描くため。
"""

from __future__ import annotations

from dataclasses import dataclass

from engine.core.geometry import Geometry
from engine.core.material import Material


@dataclass(frozen=True)
class Layer:
    """同一マテリアルを共有するワールド座標ジオメトリの束。"""

    geometry: Geometry
    material: Material
    name: str | None = None


__all__ = ["Layer"]
