"""
どこで: `engine.render` の低レベルメッシュ層。
何を: 1 レイヤー分の VBO/IBO/VAO を確保・転送・解放する `LineMesh`。
なぜ: GPU 転送の詳細をレンダラから切り離し、解放漏れを一箇所で防ぐため。
"""

from __future__ import annotations

from typing import Any

import numpy as np


class LineMesh:
    """
    頂点（float32 xyz）とインデックス（uint32, 再始動インデックス入り）を GPU に置く。
    シーンは静的なので、転送は生成時の 1 回だけ。
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        vertices: np.ndarray,
        indices: np.ndarray,
        primitive_restart_index: int = 0xFFFFFFFF,
    ):
        """
        ctx: ModernGL コンテキスト
        program: 線描画用シェーダープログラム（入力属性 `in_vert`）
        vertices: (N, 3) float32
        indices: (K,) uint32
        """
        self.ctx = ctx
        self.program = program
        self.primitive_restart_index = primitive_restart_index

        self.vbo = ctx.buffer(np.ascontiguousarray(vertices, dtype=np.float32).tobytes())
        self.ibo = ctx.buffer(np.ascontiguousarray(indices, dtype=np.uint32).tobytes())
        self.vao = ctx.simple_vertex_array(program, self.vbo, "in_vert", index_buffer=self.ibo)
        self.index_count: int = int(len(indices))
        self._released = False

    def render(self, mode: int) -> None:
        if self.index_count > 0 and not self._released:
            self.vao.render(mode, self.index_count)

    def release(self) -> None:
        """GPU メモリを解放する（二重呼び出しは無視）。"""
        if self._released:
            return
        self._released = True
        self.vao.release()
        self.vbo.release()
        self.ibo.release()
