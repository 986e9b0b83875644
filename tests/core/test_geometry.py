from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.geometry import Geometry
from engine.core.transform_utils import compose_trs


def test_from_lines_normalizes_2d_and_offsets() -> None:
    xy = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]], dtype=np.float32)
    g = Geometry.from_lines([xy])
    assert g.coords.shape == (3, 3)
    assert g.offsets.tolist() == [0, 3]
    assert np.allclose(g.coords[:, 2], 0.0)


def test_constructor_normalizes_dtype_and_contiguity() -> None:
    coords = np.asfortranarray(np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]], dtype=np.float64))
    offsets = np.array([0, 2], dtype=np.int64)
    g = Geometry(coords, offsets)
    assert g.coords.dtype == np.float32
    assert g.offsets.dtype == np.int32
    assert g.coords.flags.c_contiguous is True
    assert np.allclose(g.coords, coords)


def test_constructor_invalid_inputs_raise() -> None:
    with pytest.raises(ValueError):
        Geometry(np.zeros((2, 2), dtype=np.float32), np.array([0, 2], dtype=np.int32))
    with pytest.raises(ValueError):
        Geometry(np.zeros((2, 3), dtype=np.float32), np.array([0, 1], dtype=np.int32))


def test_empty_geometry_properties() -> None:
    g = Geometry.from_lines([])
    assert g.is_empty
    assert g.coords.shape == (0, 3)
    assert g.offsets.tolist() == [0]
    with pytest.raises(ValueError):
        g.bounds()


def test_len_and_counts(geom_two_lines: Geometry) -> None:
    assert len(geom_two_lines) == 2
    assert geom_two_lines.n_lines == 2
    assert geom_two_lines.n_vertices == 5


def test_transform_is_pure_and_applies_translation(geom_line2: Geometry) -> None:
    g1 = geom_line2.transform(compose_trs(position=(1.0, 2.0, 3.0)))
    assert g1 is not geom_line2
    assert np.allclose(g1.coords, geom_line2.coords + np.array([1.0, 2.0, 3.0]))
    assert np.allclose(geom_line2.coords[0], (0.0, 0.0, 0.0))
    assert np.array_equal(g1.offsets, geom_line2.offsets)


def test_transform_quarter_turn_about_y_maps_x_to_minus_z(geom_line2: Geometry) -> None:
    g = geom_line2.transform(compose_trs(rotation=(0.0, math.pi / 2, 0.0)))
    assert np.allclose(g.coords[1], (0.0, 0.0, -1.0), atol=1e-6)


def test_from_lines_rejects_four_component_points() -> None:
    with pytest.raises(ValueError):
        Geometry.from_lines([[(0.0, 0.0, 0.0, 1.0)]])


def test_transform_rejects_bad_matrix(geom_line2: Geometry) -> None:
    with pytest.raises(ValueError):
        geom_line2.transform(np.eye(3))


def test_concat_all_matches_sequential_concat(geom_line2: Geometry, geom_two_lines: Geometry) -> None:
    seq = geom_line2.concat(geom_two_lines) + geom_line2
    bulk = Geometry.concat_all([geom_line2, Geometry.empty(), geom_two_lines, geom_line2])
    assert np.array_equal(seq.coords, bulk.coords)
    assert np.array_equal(seq.offsets, bulk.offsets)
    assert Geometry.concat_all([]).is_empty


def test_lines_roundtrip(geom_two_lines: Geometry) -> None:
    lines = geom_two_lines.lines()
    assert [len(line) for line in lines] == [2, 3]
