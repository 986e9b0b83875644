from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry
from engine.core.material import Material
from engine.core.node import Mesh, Node
from engine.render.renderer import _geometry_to_vertices_indices, build_layers
from util.constants import PRIMITIVE_RESTART_INDEX


def _segment(x: float) -> Geometry:
    return Geometry.from_lines([np.array([[x, 0.0, 0.0], [x, 1.0, 0.0]], dtype=np.float32)])


def test_layers_group_by_material_in_first_seen_order() -> None:
    red = Material((1.0, 0.0, 0.0, 1.0), name="red")
    blue = Material((0.0, 0.0, 1.0, 1.0), name="blue")
    root = Node("root").add(
        Node("a", mesh=Mesh(_segment(0.0), blue)),
        Node("b", position=(5.0, 0.0, 0.0), mesh=Mesh(_segment(0.0), red)),
        Node("c", mesh=Mesh(_segment(2.0), blue)),
    )
    layers = build_layers(root)
    assert [layer.name for layer in layers] == ["blue", "red"]
    assert layers[0].geometry.n_lines == 2
    # ワールド座標へ変換済み
    assert np.allclose(layers[1].geometry.coords[:, 0], 5.0)


def test_equal_but_distinct_materials_stay_separate() -> None:
    root = Node("root").add(
        Node("a", mesh=Mesh(_segment(0.0), Material(name="m"))),
        Node("b", mesh=Mesh(_segment(1.0), Material(name="m"))),
    )
    assert len(build_layers(root)) == 2


def test_empty_geometries_are_skipped() -> None:
    root = Node("root", mesh=Mesh(Geometry.empty(), Material()))
    assert build_layers(root) == []


def test_vertices_and_restart_indices(geom_two_lines: Geometry) -> None:
    verts, inds = _geometry_to_vertices_indices(geom_two_lines, PRIMITIVE_RESTART_INDEX)
    assert verts.shape == (5, 3)
    n0 = int(geom_two_lines.offsets[1])
    assert len(inds) == 5 + 2
    assert inds[n0] == PRIMITIVE_RESTART_INDEX
    assert inds[-1] == PRIMITIVE_RESTART_INDEX
    body = inds[inds != PRIMITIVE_RESTART_INDEX]
    assert body.tolist() == list(range(5))


def test_whole_court_fits_in_few_layers() -> None:
    from court import compose_scene

    layers = build_layers(compose_scene())
    names = [layer.name for layer in layers]
    assert len(names) == len(set(id(layer.material) for layer in layers))
    assert "lines" in names and "net" in names
