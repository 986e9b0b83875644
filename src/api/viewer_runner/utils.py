"""
どこで: `api.viewer_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS・ウィンドウサイズ・線幅・キー割り当て・ヘルプ行を設定ファイルと引数から解決する。
なぜ: `api.viewer` を薄く保ち、ウィンドウなしで解決規則をテストできるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common import settings
from util.constants import DEFAULT_FPS, DEFAULT_WINDOW_SIZE

logger = logging.getLogger(__name__)

DEFAULT_LINE_THICKNESS = 1.5


def resolve_fps(requested_fps: int | None, viewer_cfg: Mapping[str, Any]) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先。
    - それ以外は `viewer.fps`、数値化できなければ既定値。
    """
    raw = requested_fps if requested_fps is not None else viewer_cfg.get("fps", DEFAULT_FPS)
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        logger.warning("invalid fps %r; using %d", raw, DEFAULT_FPS)
        return DEFAULT_FPS


def resolve_window_size(
    window_size: tuple[int, int] | None, canvas_cfg: Mapping[str, Any]
) -> tuple[int, int]:
    """ウィンドウサイズ [px] を解決する。不正値は `ValueError`。"""
    raw = window_size
    if raw is None:
        raw = canvas_cfg.get("window_size", DEFAULT_WINDOW_SIZE)
    try:
        w, h = int(raw[0]), int(raw[1])  # type: ignore[index]
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"invalid window_size: {raw!r}") from e
    if w <= 0 or h <= 0:
        raise ValueError(f"window_size must be positive, got: {(w, h)}")
    return w, h


def resolve_line_thickness(requested: float | None, viewer_cfg: Mapping[str, Any]) -> float:
    """線幅 [px]。優先順位は「引数 > 環境変数 CRT_LINE_THICKNESS > viewer.line_thickness > 既定」。"""
    if requested is not None:
        value: Any = requested
    elif settings.get().LINE_THICKNESS is not None:
        value = settings.get().LINE_THICKNESS
    else:
        value = viewer_cfg.get("line_thickness", DEFAULT_LINE_THICKNESS)
    try:
        thickness = float(value)
    except (TypeError, ValueError):
        logger.warning("invalid line_thickness %r; using %s", value, DEFAULT_LINE_THICKNESS)
        return DEFAULT_LINE_THICKNESS
    if thickness <= 0.0:
        logger.warning("line_thickness must be > 0, got %s; using default", thickness)
        return DEFAULT_LINE_THICKNESS
    return thickness


def resolve_keys(controls_cfg: Mapping[str, Any]) -> tuple[str, str]:
    """(オービット切替キー, 視点切替キー) を小文字で返す。"""
    toggle = str(controls_cfg.get("toggle_orbit", "o")).strip().lower() or "o"
    cycle = str(controls_cfg.get("cycle_camera", "c")).strip().lower() or "c"
    if toggle == cycle:
        raise ValueError(f"toggle_orbit and cycle_camera share the same key: {toggle!r}")
    return toggle, cycle


def help_lines(toggle_key: str, cycle_key: str) -> list[str]:
    return [
        f"{toggle_key.upper()} - Toggle orbit camera",
        f"{cycle_key.upper()} - Toggle cameras",
    ]


__all__ = [
    "DEFAULT_LINE_THICKNESS",
    "help_lines",
    "resolve_fps",
    "resolve_keys",
    "resolve_line_thickness",
    "resolve_window_size",
]
