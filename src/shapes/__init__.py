"""
どこで: `shapes` パッケージ（関数登録）。
何を: 組み込み形状（box/plane/ring/torus/sphere/segment/tube）を import 副作用で登録する。
なぜ: コート/ゴール構築から形状を名前で解決できるよう、生成関数を一箇所に集約するため。
"""

from . import box as _register_box  # noqa: F401
from . import plane as _register_plane  # noqa: F401
from . import ring as _register_ring  # noqa: F401
from . import segment as _register_segment  # noqa: F401
from . import sphere as _register_sphere  # noqa: F401
from . import torus as _register_torus  # noqa: F401
from . import tube as _register_tube  # noqa: F401
from .registry import get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "get_shape",
    "list_shapes",
    "is_shape_registered",
]
