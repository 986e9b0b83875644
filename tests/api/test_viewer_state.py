from __future__ import annotations

import math

import pytest

from api import compose_scene, create_context, handle_key, status_text, update_frame
from api.viewer_state import advance_preset, resize, toggle_orbit
from engine.render.camera import PerspectiveCamera
from engine.ui.camera_presets import DEFAULT_PRESETS


@pytest.fixture(scope="module")
def scene():
    return compose_scene()


@pytest.fixture()
def ctx(scene):
    return create_context(scene, PerspectiveCamera())


def test_initial_view_is_first_preset(ctx) -> None:
    assert ctx.presets.index == 0
    assert ctx.camera.position == DEFAULT_PRESETS[0].eye
    assert ctx.camera.target == DEFAULT_PRESETS[0].look_at
    assert ctx.orbit_enabled and ctx.orbit.enabled
    assert status_text(ctx) == "View 1/4: overview  |  Orbit: ON"


def test_toggle_key_flips_orbit_and_is_case_insensitive(ctx) -> None:
    handle_key(ctx, "O")
    assert ctx.orbit_enabled is False
    assert ctx.orbit.enabled is False
    assert status_text(ctx).endswith("Orbit: OFF")
    handle_key(ctx, "o")
    assert ctx.orbit_enabled is True


def test_cycle_key_visits_every_preset_and_wraps(ctx) -> None:
    seen = []
    for _ in range(len(DEFAULT_PRESETS)):
        handle_key(ctx, "C")
        seen.append(ctx.camera.position)
    assert seen[-1] == DEFAULT_PRESETS[0].eye
    assert seen[:-1] == [p.eye for p in DEFAULT_PRESETS[1:]]
    assert ctx.orbit.target == DEFAULT_PRESETS[0].look_at


def test_unbound_keys_are_ignored(ctx) -> None:
    before = (ctx.presets.index, ctx.orbit_enabled, ctx.camera.position)
    assert handle_key(ctx, "X") is ctx
    assert (ctx.presets.index, ctx.orbit_enabled, ctx.camera.position) == before


def test_cycling_still_works_while_orbit_is_off(ctx) -> None:
    toggle_orbit(ctx)
    advance_preset(ctx)
    assert ctx.presets.index == 1
    assert ctx.camera.position == DEFAULT_PRESETS[1].eye


def test_update_frame_moves_camera_only_when_orbit_is_on(ctx) -> None:
    start = ctx.camera.position
    ctx.orbit.rotate(50, 0)
    toggle_orbit(ctx)
    update_frame(ctx, 1 / 60)
    assert ctx.camera.position == start
    toggle_orbit(ctx)
    update_frame(ctx, 1 / 60)
    assert ctx.camera.position != start
    assert ctx.camera.target == DEFAULT_PRESETS[0].look_at


def test_custom_keys(scene) -> None:
    ctx = create_context(scene, PerspectiveCamera(), toggle_key="T", cycle_key="N")
    handle_key(ctx, "t")
    handle_key(ctx, "n")
    assert ctx.orbit_enabled is False
    assert ctx.presets.index == 1


def test_orbit_pivots_around_target_of_cycled_view(ctx) -> None:
    advance_preset(ctx)
    advance_preset(ctx)
    look_at = DEFAULT_PRESETS[2].look_at
    before = math.dist(ctx.camera.position, look_at)
    ctx.orbit.rotate(30, 10)
    update_frame(ctx, 1 / 60)
    assert ctx.camera.target == pytest.approx(look_at)
    assert ctx.orbit.target == pytest.approx((-15.5, 3.0, 0.0))
    assert ctx.camera.position != DEFAULT_PRESETS[2].eye
    assert math.dist(ctx.camera.position, look_at) == pytest.approx(before)


def test_resize_updates_aspect_and_ignores_zero_sizes(ctx) -> None:
    assert resize(ctx, 800, 400) is True
    assert ctx.camera.aspect == pytest.approx(2.0)
    assert resize(ctx, 800, 0) is False
    assert resize(ctx, 0, 600) is False
    assert ctx.camera.aspect == pytest.approx(2.0)
