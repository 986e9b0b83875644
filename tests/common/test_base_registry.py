from __future__ import annotations

import pytest

from common.base_registry import BaseRegistry


def test_register_uses_function_name_and_normalizes_lookups() -> None:
    reg = BaseRegistry("shape")

    @reg.register()
    def torus_ring():
        return 1

    assert "Torus-Ring" in reg
    assert reg.get(" TORUS RING ") is torus_ring
    assert reg.names() == ["torus_ring"]
    assert len(reg) == 1


def test_duplicate_name_raises_and_unregister_is_lenient() -> None:
    reg = BaseRegistry()

    @reg.register()
    def box():
        return 1

    with pytest.raises(ValueError):
        reg.register("box")(lambda: 2)

    reg.unregister("Box")
    assert "box" not in reg
    reg.unregister("nonexistent")


def test_reregistering_same_object_is_allowed() -> None:
    reg = BaseRegistry()

    def plane():
        return 0

    reg.register()(plane)
    reg.register()(plane)
    assert reg.names() == ["plane"]


def test_missing_and_invalid_keys() -> None:
    reg = BaseRegistry("shape")
    reg.register("ring")(lambda: 0)
    with pytest.raises(KeyError, match="ring"):
        reg.get("missing")
    with pytest.raises(ValueError):
        reg.normalize("  ")
    with pytest.raises(TypeError):
        reg.normalize(3)  # type: ignore[arg-type]
    assert 3 not in reg
