"""
どこで: `engine.core.geometry`。
何を: シーン中のすべての線（ライン/ゴール/ネット/ボール/ロゴ枠）を表すポリライン集合 `Geometry`。
なぜ: 形状生成（shapes）→ ノード配置（engine.core.node）→ GPU 転送（engine.render）を
      1 種類の配列表現で通し、層ごとの変換を不要にするため。

表現:
- `coords`: float32 `(N, 3)`。全ポリラインの頂点を連結したもの。
- `offsets`: int32 `(M + 1,)`。`offsets[0] == 0`、`offsets[-1] == N`、単調非減少。
- i 本目は `coords[offsets[i]:offsets[i + 1]]`。空は `(0, 3)` と `[0]`。

例（3 点の線と 2 点の線）:

    coords  = [[0,0,0], [1,0,0], [1,1,0], [2,2,0], [3,2,0]]
    offsets = [0, 3, 5]

操作は全て新しい `Geometry` を返し、元の配列には触れない。
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

LineLike = np.ndarray | Sequence[Sequence[float]]


def _as_line(line: LineLike) -> np.ndarray:
    arr = np.asarray(line, dtype=np.float32)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise ValueError(f"ポリラインは (K, 2) か (K, 3) である必要があります: {arr.shape}")
    if arr.shape[1] == 2:
        # XY 平面上の入力は z=0 で持ち上げる
        arr = np.column_stack([arr, np.zeros(len(arr), dtype=np.float32)])
    return arr


class Geometry:
    """ポリライン集合（`coords` + `offsets`）。"""

    __slots__ = ("coords", "offsets")

    coords: np.ndarray
    offsets: np.ndarray

    def __init__(self, coords: np.ndarray, offsets: np.ndarray) -> None:
        c = np.ascontiguousarray(coords, dtype=np.float32)
        o = np.ascontiguousarray(offsets, dtype=np.int32)
        if c.ndim != 2 or c.shape[1] != 3:
            raise ValueError(f"coords は (N, 3) である必要があります: {c.shape}")
        if o.ndim != 1 or o.size == 0:
            raise ValueError("offsets は 1 要素以上の 1 次元配列である必要があります")
        if o[0] != 0 or o[-1] != len(c):
            raise ValueError(f"offsets の両端は 0 と N={len(c)} である必要があります: {o.tolist()}")
        if np.any(np.diff(o) < 0):
            raise ValueError("offsets は単調非減少である必要があります")
        self.coords = c
        self.offsets = o

    @classmethod
    def from_lines(cls, lines: Iterable[LineLike]) -> "Geometry":
        """点列の列から作る。2D 点列は z=0 を補う。"""
        arrs = [_as_line(line) for line in lines]
        if not arrs:
            return cls.empty()
        offsets = np.zeros(len(arrs) + 1, dtype=np.int32)
        offsets[1:] = np.cumsum([len(a) for a in arrs])
        return cls(np.concatenate(arrs, axis=0), offsets)

    @classmethod
    def empty(cls) -> "Geometry":
        return cls(np.empty((0, 3), dtype=np.float32), np.zeros(1, dtype=np.int32))

    def lines(self) -> list[np.ndarray]:
        """各ポリラインの座標ビュー。"""
        return [self.coords[a:b] for a, b in zip(self.offsets[:-1], self.offsets[1:])]

    @property
    def is_empty(self) -> bool:
        return self.coords.size == 0

    def transform(self, matrix: np.ndarray) -> "Geometry":
        """4x4 同次行列（列ベクトル規約 `p' = M @ p`）を全頂点へ適用する。"""
        m = np.asarray(matrix, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"matrix は (4, 4) である必要があります: {m.shape}")
        if self.is_empty:
            return Geometry.empty()
        pts = self.coords.astype(np.float64) @ m[:3, :3].T + m[:3, 3]
        return Geometry(pts, self.offsets.copy())

    def concat(self, other: "Geometry") -> "Geometry":
        return Geometry.concat_all((self, other))

    @staticmethod
    def concat_all(items: Iterable["Geometry"]) -> "Geometry":
        """まとめて 1 回で連結する。空の要素は読み飛ばす。"""
        parts = [g for g in items if not g.is_empty]
        if not parts:
            return Geometry.empty()
        counts = np.array([len(g.coords) for g in parts], dtype=np.int32)
        shifts = np.concatenate([[0], np.cumsum(counts)[:-1]]).astype(np.int32)
        offsets = [np.zeros(1, dtype=np.int32)]
        offsets += [g.offsets[1:] + s for g, s in zip(parts, shifts)]
        return Geometry(np.concatenate([g.coords for g in parts]), np.concatenate(offsets))

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """`(min_xyz, max_xyz)`。空なら `ValueError`。"""
        if self.is_empty:
            raise ValueError("空ジオメトリには境界がありません")
        return self.coords.min(axis=0), self.coords.max(axis=0)

    def __add__(self, other: "Geometry") -> "Geometry":
        return self.concat(other)

    def __len__(self) -> int:
        return int(self.offsets.size - 1)

    @property
    def n_vertices(self) -> int:
        return int(len(self.coords))

    @property
    def n_lines(self) -> int:
        return len(self)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Geometry(N={self.n_vertices}, M={self.n_lines})"


__all__ = ["Geometry", "LineLike"]
