"""
どこで: `court.config`。
何を: コート/ライン/キー/ゴール/ネット/ボール/ロゴ/配色の寸法定数を凍結データクラスで集約し、
      設定ファイルの `court:` 節から部分上書きできるようにする。
なぜ: 形状生成コードに数値を散らさず、組み立て規則（派生値）だけをビルダ側に残すため。

上書き例（config.yaml）:
    court:
      hoop:
        arm_angle_deg: 30
      colors:
        apron: "#1d428a"

未知の節/キーと型の合わない値は警告して無視する（既定値のまま）。配列は tuple に、整数は float 欄なら float に変換する。
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from common.types import RGBA
from util.color import normalize_color
from util.utils import config_section

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SurfaceConfig:
    length: float = 30.0
    width: float = 15.0
    thickness: float = 0.1
    apron_length: float = 34.0
    apron_width: float = 19.0
    apron_y: float = -0.05
    floor_divisions: int = 13
    wood_texture: str = "wood.jpg"


@dataclass(frozen=True)
class MarkingConfig:
    y: float = 0.06
    line_width: float = 0.1
    line_height: float = 0.01
    center_inner_radius: float = 1.9
    center_outer_radius: float = 2.0
    center_segments: int = 64
    three_point_radius: float = 6.75
    three_point_center: float = 13.5
    # 左側の角度範囲（度）。右側は符号を反転した範囲を使う。
    three_point_angles: tuple[float, float] = (-13.0, 193.0)
    three_point_segments: int = 64
    three_point_y: float = 0.02
    three_point_tube_radius: float = 0.05


@dataclass(frozen=True)
class KeyConfig:
    center: float = 12.0
    width: float = 4.9
    height: float = 5.8
    free_throw_extra: float = 0.1
    free_throw_radius: float = 1.8
    free_throw_angles: tuple[float, float] = (0.0, 180.0)
    free_throw_segments: int = 64
    hash_offsets: tuple[float, ...] = (-0.85, 0.0, 0.85, 1.75)
    hash_gap: float = 0.1
    hash_length: float = 0.2
    hash_depth: float = 0.05


@dataclass(frozen=True)
class HoopConfig:
    support_offset: float = 15.5
    base_width: float = 1.0
    base_height: float = 0.25
    base_depth: float = 1.8
    base_offset: float = -0.5
    base_clearance: float = 0.06
    pole_width: float = 0.4
    pole_height: float = 2.2
    arm_length: float = 1.8
    arm_height: float = 0.2
    arm_depth: float = 0.4
    arm_angle_deg: float = 25.0
    arm_nudge: tuple[float, float] = (-0.15, -0.09)
    backboard_width: float = 1.8
    backboard_height: float = 1.05
    backboard_offset: float = 0.15
    backboard_opacity: float = 0.3
    connector_extra: float = 0.03
    connector_shift: tuple[float, float] = (-0.05, -0.011)
    frame_thickness: float = 0.03
    frame_margin: float = 0.06
    square_width: float = 0.6
    square_height: float = 0.45
    square_offset: float = 0.2
    rim_radius: float = 0.23
    rim_tube: float = 0.02
    rim_offset: float = 0.25


@dataclass(frozen=True)
class NetConfig:
    strand_count: int = 16
    ring_count: int = 2
    shrink: float = 0.8
    length: float = 0.5
    ring_tube: float = 0.005


@dataclass(frozen=True)
class BallConfig:
    radius: float = 0.22
    lift: float = 0.07
    width_segments: int = 24
    height_segments: int = 16
    texture: str = "basketball.png"
    bump_texture: str = "basketballBump.png"
    bump_scale: float = 0.04


@dataclass(frozen=True)
class LogoConfig:
    texture: str = "Laker.PNG"
    width: float = 4.0
    height: float = 3.0
    y: float = 0.07
    offset: tuple[float, float] = (5.0, 4.0)


@dataclass(frozen=True)
class ColorConfig:
    apron: str = "#552583"
    wood: str = "#c19a6b"
    lines: str = "#ffffff"
    base: str = "#4169e1"
    steel: str = "#0044aa"
    backboard: str = "#000000"
    frame: str = "#ffffff"
    rim: str = "#d35400"
    net: str = "#ffffff"
    ball: str = "#e67e22"
    logo: str = "#fdb927"


@dataclass(frozen=True)
class CourtConfig:
    surface: SurfaceConfig = field(default_factory=SurfaceConfig)
    markings: MarkingConfig = field(default_factory=MarkingConfig)
    key: KeyConfig = field(default_factory=KeyConfig)
    hoop: HoopConfig = field(default_factory=HoopConfig)
    net: NetConfig = field(default_factory=NetConfig)
    ball: BallConfig = field(default_factory=BallConfig)
    logo: LogoConfig = field(default_factory=LogoConfig)
    colors: ColorConfig = field(default_factory=ColorConfig)

    def color(self, name: str) -> RGBA:
        """配色名を RGBA(0–1) で返す。未知の名前は `KeyError`。"""
        try:
            raw = getattr(self.colors, name)
        except AttributeError as e:
            raise KeyError(f"unknown color '{name}'") from e
        return normalize_color(raw)


_INVALID = object()


def _coerce(value: Any, current: Any) -> Any:
    """`current` と同じ型へ寄せる。寄せられない値は `_INVALID`。"""
    if isinstance(current, tuple):
        if not isinstance(value, (list, tuple)):
            return _INVALID
        if not current:
            return tuple(value)
        items = tuple(_coerce(v, current[min(i, len(current) - 1)]) for i, v in enumerate(value))
        return _INVALID if any(v is _INVALID for v in items) else items
    if isinstance(current, float) and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, bool) != isinstance(current, bool) or not isinstance(value, type(current)):
        return _INVALID
    return value


def _apply_section(section: Any, overrides: Mapping[str, Any], section_name: str) -> Any:
    names = {f.name for f in dataclasses.fields(section)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in names:
            logger.warning("ignoring unknown court.%s key '%s'", section_name, key)
            continue
        current = getattr(section, key)
        coerced = _coerce(value, current)
        if coerced is _INVALID:
            logger.warning(
                "invalid court.%s.%s=%r (expected %s); keeping default %r",
                section_name,
                key,
                value,
                type(current).__name__,
                current,
            )
            continue
        changes[key] = coerced
    return dataclasses.replace(section, **changes) if changes else section


def load_court_config(overrides: Mapping[str, Any] | None = None) -> CourtConfig:
    """既定値に `overrides`（節名 → {キー: 値}）を重ねた `CourtConfig` を返す。

    `overrides` 省略時は設定ファイルの `court:` 節を使う。
    """
    if overrides is None:
        overrides = config_section("court")
    cfg = CourtConfig()
    sections = {f.name for f in dataclasses.fields(cfg)}
    changes: dict[str, Any] = {}
    for name, values in overrides.items():
        if name not in sections:
            logger.warning("ignoring unknown court section '%s'", name)
            continue
        if not isinstance(values, Mapping):
            logger.warning("court section '%s' must be a mapping; got %r", name, type(values))
            continue
        changes[name] = _apply_section(getattr(cfg, name), values, name)
    cfg = dataclasses.replace(cfg, **changes) if changes else cfg
    # 配色は読み込み時に検証しておく
    for f in dataclasses.fields(cfg.colors):
        cfg.color(f.name)
    return cfg


__all__ = [
    "BallConfig",
    "ColorConfig",
    "CourtConfig",
    "HoopConfig",
    "KeyConfig",
    "LogoConfig",
    "MarkingConfig",
    "NetConfig",
    "SurfaceConfig",
    "load_court_config",
]
