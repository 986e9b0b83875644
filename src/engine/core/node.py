"""
どこで: `engine.core.node`。
何を: シーングラフの最小単位 `Node`（位置/回転/拡縮 + 所有する子 + 任意の `Mesh`）。
なぜ: コート/ゴール/ネットを「入れ子で組んでから回す・動かす」構築法で表現するため。

規約:
- ローカル行列は `T @ R @ S`（回転は X→Y→Z、ラジアン）。ワールド行列は祖先の積。
- 子は 1 つの親だけが所有する。親への逆参照は持たず、ワールド変換は根から辿って求める。
- 既に所有されたノードの追加、循環を作る追加は `ValueError`。
- 構築後は静的（再親付け・削除 API は提供しない）。

使用例:
    arm = Node("arm", rotation=(0.0, 0.0, math.radians(25)), mesh=Mesh(g, mat))
    support = Node("support", position=(-15.5, 0.0, 0.0)).add(arm)
    for node, world in support.walk():
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

import numpy as np

from common.types import Vec3, as_vec3

from .geometry import Geometry
from .material import Material
from .transform_utils import compose_trs, transform_point


@dataclass(frozen=True)
class Mesh:
    """ノードが持つ描画ペイロード（ローカル座標の形状 + マテリアル）。"""

    geometry: Geometry
    material: Material


class Node:
    """位置/回転/拡縮と、所有する子ノード列を持つ変換コンテナ。"""

    __slots__ = ("name", "_position", "_rotation", "_scale", "mesh", "_children", "_owned")

    def __init__(
        self,
        name: str = "node",
        *,
        position: Vec3 = (0.0, 0.0, 0.0),
        rotation: Vec3 = (0.0, 0.0, 0.0),
        scale: Vec3 = (1.0, 1.0, 1.0),
        mesh: Mesh | None = None,
    ) -> None:
        self.name = name
        self._position = as_vec3(position)
        self._rotation = as_vec3(rotation)
        self._scale = as_vec3(scale)
        self.mesh = mesh
        self._children: list[Node] = []
        self._owned = False

    # ---- 変換 ----
    @property
    def position(self) -> Vec3:
        return self._position

    @position.setter
    def position(self, value: Vec3) -> None:
        self._position = as_vec3(value)

    @property
    def rotation(self) -> Vec3:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Vec3) -> None:
        self._rotation = as_vec3(value)

    @property
    def scale(self) -> Vec3:
        return self._scale

    @scale.setter
    def scale(self, value: Vec3) -> None:
        self._scale = as_vec3(value)

    def local_matrix(self) -> np.ndarray:
        return compose_trs(self._position, self._rotation, self._scale)

    # ---- 階層 ----
    @property
    def children(self) -> tuple["Node", ...]:
        return tuple(self._children)

    def add(self, *nodes: "Node") -> "Node":
        """子を追加して自身を返す（連鎖可能）。"""
        for node in nodes:
            if not isinstance(node, Node):
                raise TypeError(f"Node が必要です: {node!r}")
            if node._owned:
                raise ValueError(f"'{node.name}' は既に別の親に所有されています")
            if node is self or node.contains(self):
                raise ValueError(f"'{node.name}' を '{self.name}' に追加すると循環します")
            node._owned = True
            self._children.append(node)
        return self

    def contains(self, other: "Node") -> bool:
        """`other` が自身の子孫（自身を除く）かを返す。"""
        return any(child is other or child.contains(other) for child in self._children)

    def iter_nodes(self) -> Iterator["Node"]:
        """深さ優先（前順）で自身と子孫を列挙する。"""
        yield self
        for child in self._children:
            yield from child.iter_nodes()

    def walk(self, parent_matrix: np.ndarray | None = None) -> Iterator[tuple["Node", np.ndarray]]:
        """`(node, world_matrix)` を深さ優先で列挙する。"""
        world = self.local_matrix() if parent_matrix is None else parent_matrix @ self.local_matrix()
        yield self, world
        for child in self._children:
            yield from child.walk(world)

    def find(self, name: str) -> "Node | None":
        """名前が一致する最初のノード（前順）を返す。"""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def find_all(self, predicate: Callable[["Node"], bool]) -> list["Node"]:
        return [n for n in self.iter_nodes() if predicate(n)]

    def world_matrix_of(self, target: "Node") -> np.ndarray:
        """自身を根としたときの `target` のワールド行列。見つからなければ `KeyError`。"""
        for node, world in self.walk():
            if node is target:
                return world
        raise KeyError(f"'{target.name}' は '{self.name}' の子孫ではありません")

    def world_position_of(self, target: "Node") -> np.ndarray:
        return transform_point(self.world_matrix_of(target), (0.0, 0.0, 0.0))

    # ---- 描画用 ----
    def iter_meshes(self) -> Iterator[tuple[Mesh, np.ndarray]]:
        for node, world in self.walk():
            if node.mesh is not None:
                yield node.mesh, world

    def flatten(self) -> list[tuple[Geometry, Material]]:
        """全メッシュをワールド座標の `Geometry` に変換して返す（描画順 = 前順）。"""
        return [(mesh.geometry.transform(world), mesh.material) for mesh, world in self.iter_meshes()]

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Node({self.name!r}, children={len(self._children)}, mesh={self.mesh is not None})"


__all__ = ["Node", "Mesh"]
