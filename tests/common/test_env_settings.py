from __future__ import annotations

import pytest

from common import settings
from common.env import env_bool, env_float, env_int


def test_env_int_parses_and_clamps(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRT_TEST_INT", "-3")
    assert env_int("CRT_TEST_INT", 5, min_value=1) == 1
    monkeypatch.setenv("CRT_TEST_INT", "abc")
    assert env_int("CRT_TEST_INT", 5) == 5
    monkeypatch.delenv("CRT_TEST_INT")
    assert env_int("CRT_TEST_INT", None) is None


def test_env_float_rejects_nan(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRT_TEST_FLOAT", "nan")
    assert env_float("CRT_TEST_FLOAT", 1.5) == 1.5
    monkeypatch.setenv("CRT_TEST_FLOAT", "2.25")
    assert env_float("CRT_TEST_FLOAT", 1.5) == 2.25


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("0", False), ("yes", True), ("off", False), ("maybe", True)],
)
def test_env_bool_variants(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("CRT_TEST_BOOL", raw)
    # 不明な文字列は既定値（True）
    assert env_bool("CRT_TEST_BOOL", True) is expected


def test_settings_defaults(clean_env: None) -> None:
    s = settings.get()
    assert s.TEXTURES_ENABLED is True
    assert s.TEXTURE_QUEUE_SIZE == 16
    assert s.RENDER_DEBUG is False
    assert s.LINE_THICKNESS is None


def test_settings_reload_reads_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRT_TEXTURES_ENABLED", "false")
    monkeypatch.setenv("CRT_TEXTURE_QUEUE_SIZE", "0")
    monkeypatch.setenv("CRT_LINE_THICKNESS", "2.5")
    settings.reload_from_env()
    s = settings.get()
    assert s.TEXTURES_ENABLED is False
    assert s.TEXTURE_QUEUE_SIZE == 1
    assert s.LINE_THICKNESS == 2.5
