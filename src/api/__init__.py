"""
どこで: `api` 入口（高レベル公開 API）。
何を: ビューア起動 `run_viewer`、シーン構築 `compose_scene`、ビューア状態の操作関数を再輸出。
なぜ: 利用者が単一名前空間からシーン構築→状態操作→実行まで完結できるようにするため。

Usage:
    from api import run

    run()  # 設定ファイル（configs/default.yaml）に従って起動

    from api import compose_scene, create_context, handle_key
    from engine.render.camera import PerspectiveCamera

    ctx = create_context(compose_scene(), PerspectiveCamera())
    handle_key(ctx, "c")  # 次の視点へ
"""

from court import CourtConfig, compose_scene, load_court_config
from engine.core.node import Node

from .viewer import run_viewer as run
from .viewer import run_viewer as run_viewer
from .viewer_state import (
    ViewerContext,
    advance_preset,
    create_context,
    handle_key,
    status_text,
    toggle_orbit,
    update_frame,
)

__all__ = [
    # 実行
    "run_viewer",
    "run",
    # シーン
    "compose_scene",
    "load_court_config",
    "CourtConfig",
    "Node",
    # 状態
    "ViewerContext",
    "create_context",
    "toggle_orbit",
    "advance_preset",
    "handle_key",
    "update_frame",
    "status_text",
]

__version__ = "2025.10"
