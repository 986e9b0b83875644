"""
どこで: `shapes.registry`。
何を: 形状関数（キーワード引数 → 原点基準の `Geometry`）の登録表と `@shape` デコレータ。
なぜ: ゴールやラインのビルダが `get_shape("box")` のように名前で形状を引けるようにするため。

    @shape
    def box(*, width=1.0, height=1.0, depth=1.0) -> Geometry: ...

    @shape("rim-ring")   # 明示名（キーは "rim_ring"）
    def _ring(...): ...
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from common.base_registry import BaseRegistry
from engine.core.geometry import Geometry

ShapeFn = Callable[..., Geometry]

_registry = BaseRegistry("shape")


def _checked(fn: Any, name: str | None) -> ShapeFn:
    if not inspect.isfunction(fn):
        raise TypeError(f"@shape は関数にだけ付けられます: {fn!r}")
    return _registry.register(name)(fn)


def shape(arg: Any = None, /, name: str | None = None) -> Any:
    """`@shape` / `@shape()` / `@shape("name")` / `@shape(name="name")`。"""
    if inspect.isfunction(arg) and name is None:
        return _checked(arg, None)
    explicit = arg if isinstance(arg, str) else name
    return lambda fn: _checked(fn, explicit)


def get_shape(name: str) -> ShapeFn:
    """登録済みの形状関数。未登録は `KeyError`。"""
    return _registry.get(name)


def list_shapes() -> list[str]:
    return _registry.names()


def is_shape_registered(name: str) -> bool:
    return name in _registry


def unregister(name: str) -> None:
    _registry.unregister(name)


__all__ = ["ShapeFn", "get_shape", "is_shape_registered", "list_shapes", "shape", "unregister"]
