from __future__ import annotations

import pytest

from modelgen.errors import TransformError
from modelgen.transforms import Rotate, Scale, Translate

from .helpers import assert_all_close, assert_vec_close, length, normals, positions


@pytest.mark.parametrize("s", [0.5, 1.0, 2.0, 7.25])
def test_uniform_scale_multiplies_positions_and_keeps_unit_normals(unit_cube, s):
    before = positions(unit_cube)
    unit_cube.apply(Scale.uniform(s))
    for after, orig in zip(positions(unit_cube), before):
        assert_vec_close(after, (orig[0] * s, orig[1] * s, orig[2] * s))
    for n in normals(unit_cube):
        assert length(n) == pytest.approx(1.0)


@pytest.mark.parametrize("factors", [(0, 1, 1), (1, 0, 2), (2, 2, 0)])
def test_non_uniform_zero_scale_fails_and_leaves_mesh_alone(unit_cube, factors):
    before = positions(unit_cube)
    with pytest.raises(TransformError):
        unit_cube.apply(Scale(*factors))
    assert positions(unit_cube) == before


def test_uniform_zero_scale_is_allowed(unit_cube):
    unit_cube.apply(Scale.uniform(0.0))
    assert all(p == (0.0, 0.0, 0.0) for p in positions(unit_cube))


def test_non_uniform_scale_uses_inverse_factors_for_normals(unit_cube):
    nx, ny, nz = unit_cube.mesh.vertices[2].normal
    unit_cube.apply(Scale(2.0, 1.0, 4.0))
    corner = unit_cube.mesh.vertices[2]
    assert_vec_close(corner.position, (1.0, 0.5, 2.0))
    expected = (nx / 2.0, ny, nz / 4.0)
    l = length(expected)
    assert_vec_close(corner.normal, tuple(c / l for c in expected))


def test_translate_inverse(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Translate(1.5, -2.0, 3.25)).apply(Translate(-1.5, 2.0, -3.25))
    assert_all_close(positions(unit_cube), before)


def test_translate_leaves_normals(unit_cube):
    before = normals(unit_cube)
    unit_cube.apply(Translate(4, 5, 6))
    assert normals(unit_cube) == before


@pytest.mark.parametrize("axis", [(1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 2, 3)])
@pytest.mark.parametrize("angle", [30.0, 90.0, 270.0])
def test_rotate_then_reverse_is_identity(unit_cube, axis, angle):
    before = positions(unit_cube)
    unit_cube.apply(Rotate(axis, angle)).apply(Rotate(axis, -angle))
    assert_all_close(positions(unit_cube), before)


def test_rotate_around_z_quarter_turn():
    from modelgen.types import Model, Vertex

    model = Model()
    model.mesh.add_vertex(Vertex((1.0, 0.0, 0.0), (1.0, 0.0, 0.0)))
    model.apply(Rotate.around_z(90))
    assert_vec_close(model.mesh.vertices[0].position, (0.0, 1.0, 0.0))
    assert_vec_close(model.mesh.vertices[0].normal, (0.0, 1.0, 0.0))


def test_rotate_normalizes_axis():
    r = Rotate((0, 0, 5), 45)
    assert r.axis == (0.0, 0.0, 1.0)


def test_rotate_rejects_zero_axis():
    with pytest.raises(TransformError):
        Rotate((0, 0, 0), 45)
