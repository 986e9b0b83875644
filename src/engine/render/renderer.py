"""
どこで: `engine.render` の高レベル描画。
何を: シーングラフを平坦化してマテリアル別レイヤーにまとめ、ModernGL で線として描く `SceneRenderer`。
なぜ: 構築済みの静的シーンを一度だけ転送し、毎フレームはカメラ行列と色の更新だけで描くため。

フレームごとの処理:
- `mvp`/`viewport`/`line_thickness` を書き込む。
- 各レイヤーの色を `Material.effective_color()` から求める（テクスチャが後から届けば色が変わる）。
- 不透明度 0 のレイヤーは描かない。
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import moderngl as mgl
import numpy as np

from engine.core.geometry import Geometry
from engine.core.material import Material
from engine.core.node import Node
from util.constants import PRIMITIVE_RESTART_INDEX

from .camera import PerspectiveCamera
from .types import Layer

logger = logging.getLogger(__name__)


def build_layers(root: Node) -> list[Layer]:
    """シーンをワールド座標へ平坦化し、マテリアル（同一オブジェクト）ごとに連結する。

    レイヤー順は各マテリアルの初出順（シーンの前順走査）に従う。
    """
    groups: dict[int, tuple[Material, list[Geometry]]] = {}
    for geometry, material in root.flatten():
        if geometry.is_empty:
            continue
        entry = groups.setdefault(id(material), (material, []))
        entry[1].append(geometry)
    return [
        Layer(geometry=Geometry.concat_all(parts), material=material, name=material.name)
        for material, parts in groups.values()
    ]


class SceneRenderer:
    """
    シーンルートとカメラを受け取り、毎フレーム描画する。
    GPU への転送は生成時に一度だけ行う。
    """

    def __init__(
        self,
        mgl_context: Any,
        scene_root: Node,
        camera: PerspectiveCamera,
        *,
        line_thickness: float = 1.5,
        viewport: tuple[int, int] = (1280, 720),
    ):
        self.ctx = mgl_context
        self.scene_root = scene_root
        self.camera = camera
        self.viewport = (int(viewport[0]), int(viewport[1]))

        # 遅延 import（GL なしでも build_layers を使えるようにする）
        from .line_mesh import LineMesh
        from .shader import Shader

        self.line_program = Shader.create_shader(mgl_context)
        self._line_thickness = float(line_thickness)

        self.layers = build_layers(scene_root)
        self._meshes: list[tuple[Layer, LineMesh]] = []
        total_verts = 0
        for layer in self.layers:
            verts, inds = _geometry_to_vertices_indices(layer.geometry, PRIMITIVE_RESTART_INDEX)
            self._meshes.append(
                (
                    layer,
                    LineMesh(
                        mgl_context,
                        self.line_program,
                        verts,
                        inds,
                        primitive_restart_index=PRIMITIVE_RESTART_INDEX,
                    ),
                )
            )
            total_verts += len(verts)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Uploaded layer %s: verts=%d (%.1f KB), inds=%d",
                    layer.name,
                    len(verts),
                    verts.nbytes / 1024.0,
                    len(inds),
                )
        logger.debug("SceneRenderer ready: layers=%d, verts=%d", len(self._meshes), total_verts)

        self.ctx.primitive_restart = True  # type: ignore[attr-defined]
        self.ctx.primitive_restart_index = PRIMITIVE_RESTART_INDEX  # type: ignore[attr-defined]

    # ---- 設定 ----
    def set_viewport(self, width: int, height: int) -> None:
        self.viewport = (int(width), int(height))

    def set_line_thickness(self, value: float) -> None:
        self._line_thickness = float(value)

    def clear(self, color: Sequence[float]) -> None:
        self.ctx.clear(*color)  # type: ignore[misc]

    # ---- 描画 ----
    def draw(self) -> None:
        mvp = self.camera.view_projection().astype(np.float32)
        self.line_program["mvp"].write(mvp.T.tobytes())
        self.line_program["viewport"].value = (float(self.viewport[0]), float(self.viewport[1]))
        self.line_program["line_thickness"].value = self._line_thickness
        for layer, mesh in self._meshes:
            color = layer.material.effective_color()
            if color[3] <= 0.0:
                continue
            self.line_program["color"].value = color
            mesh.render(mgl.LINE_STRIP)

    def get_counts(self) -> tuple[int, int]:
        """(頂点数, ポリライン数) の合計。"""
        verts = sum(layer.geometry.n_vertices for layer in self.layers)
        lines = sum(layer.geometry.n_lines for layer in self.layers)
        return verts, lines

    def release(self) -> None:
        """GPU リソースを解放。"""
        for _, mesh in self._meshes:
            mesh.release()
        self._meshes = []


# ---------- utility -------------------------------------------------------- #
def _geometry_to_vertices_indices(
    geometry: Geometry,
    primitive_restart_index: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Geometry を VBO/IBO 用の配列に変換する。
    各ポリラインの末尾に再始動インデックスを挟み、1 回の LINE_STRIP で全線を描けるようにする。
    """
    coords = geometry.coords
    offsets = geometry.offsets

    num_lines = len(offsets) - 1
    total_verts = len(coords)
    total_inds = total_verts + num_lines

    indices = np.empty(total_inds, dtype=np.uint32)
    # 再始動位置（各ライン終端の直後）: offsets[1:] + 行番号
    restart_pos = offsets[1:].astype(np.int64) + np.arange(num_lines, dtype=np.int64)
    mask = np.zeros(total_inds, dtype=bool)
    mask[restart_pos] = True
    indices[~mask] = np.arange(total_verts, dtype=np.uint32)
    indices[mask] = np.uint32(primitive_restart_index)
    return coords, indices


__all__ = ["SceneRenderer", "build_layers"]
