"""共通フィクスチャ。

- 乱数シード固定
- 小さな Geometry 試料
- 既定のコート設定
- 環境変数スイッチの隔離
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from common import settings
from court.config import CourtConfig
from engine.core.geometry import Geometry


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def geom_line2() -> Geometry:
    pts = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    return Geometry.from_lines([pts])


@pytest.fixture()
def geom_two_lines() -> Geometry:
    a = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    b = np.array([[0.0, 1.0, 0.0], [1.0, 1.0, 0.0], [2.0, 1.0, 0.0]], dtype=np.float32)
    return Geometry.from_lines([a, b])


@pytest.fixture()
def court_cfg() -> CourtConfig:
    return CourtConfig()


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """CRT_* を未設定にして設定を再読込し、終了時にも戻す。"""
    for name in (
        "CRT_TEXTURES_ENABLED",
        "CRT_TEXTURE_QUEUE_SIZE",
        "CRT_RENDER_DEBUG",
        "CRT_LINE_THICKNESS",
    ):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    monkeypatch.undo()
    settings.reload_from_env()
