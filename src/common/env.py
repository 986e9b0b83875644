"""
どこで: `common.env`。
何を: `CRT_*` 環境変数を int/float/bool として読むヘルパ。
なぜ: 未設定・不正値・下限の扱いを `common.settings` の全項目で揃えるため。

いずれも未設定や解釈できない値は `default` を返し、例外は出さない。
"""

from __future__ import annotations

import math
import os
from typing import Callable, TypeVar

T = TypeVar("T", int, float)

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def _read_number(
    name: str, parse: Callable[[str], T], default: T | None, min_value: T | None
) -> T | None:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = parse(raw.strip())
    except ValueError:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    if min_value is not None and value < min_value:
        return min_value
    return value


def env_int(name: str, default: int | None = None, *, min_value: int | None = None) -> int | None:
    """整数。`min_value` を下回る値は下限に丸める。"""
    return _read_number(name, int, default, min_value)


def env_float(
    name: str, default: float | None = None, *, min_value: float | None = None
) -> float | None:
    """浮動小数。NaN は不正値として扱う。"""
    return _read_number(name, float, default, min_value)


def env_bool(name: str, default: bool = False) -> bool:
    """真偽値。数値文字列は 0 以外を真とする。"""
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    try:
        return int(s) != 0
    except ValueError:
        return bool(default)


__all__ = ["env_bool", "env_float", "env_int"]
