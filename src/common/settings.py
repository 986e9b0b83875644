"""
どこで: `common.settings`
何を: ビューアの環境変数スイッチを型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int


@dataclass
class _Settings:
    # Textures
    TEXTURES_ENABLED: bool = True
    TEXTURE_QUEUE_SIZE: int = 16

    # Renderer
    RENDER_DEBUG: bool = False
    LINE_THICKNESS: float | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、float は `env_float` を使用。
    - キュー長は 1 未満に丸めない（下限 1）。
    """
    _settings.TEXTURES_ENABLED = env_bool("CRT_TEXTURES_ENABLED", True)
    _settings.TEXTURE_QUEUE_SIZE = env_int("CRT_TEXTURE_QUEUE_SIZE", 16, min_value=1) or 16

    _settings.RENDER_DEBUG = env_bool("CRT_RENDER_DEBUG", False)
    _settings.LINE_THICKNESS = env_float("CRT_LINE_THICKNESS", None, min_value=0.0)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
