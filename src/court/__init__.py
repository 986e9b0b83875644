"""
どこで: `court` パッケージ。
何を: コート寸法（CourtConfig）から、ライン/ゴール/ネット/ボール/ロゴを持つシーングラフを組み立てる。
なぜ: 数値パラメータ → ビルダ → ノード木 → レンダラ、の一方向の流れをこの層に閉じ込めるため。
"""

from .config import CourtConfig, load_court_config
from .hoop import build_hoop, rim_position
from .markings import build_court_markings
from .net import NetSpec, build_net
from .scene import compose_scene

__all__ = [
    "CourtConfig",
    "NetSpec",
    "build_court_markings",
    "build_hoop",
    "build_net",
    "compose_scene",
    "load_court_config",
    "rim_position",
]
