from __future__ import annotations

import math
from dataclasses import FrozenInstanceError

import pytest

from modelgen.errors import InvalidModelError
from modelgen.linalg import v_cross, v_dot, v_sub
from modelgen.primitives import Cube, CubeConfig, Cylinder, Sphere
from modelgen.types import Model

from .helpers import length, normals, positions


def _assert_outward(model: Model, center=(0.0, 0.0, 0.0)) -> None:
    verts = model.mesh.vertices
    for face in model.mesh.faces:
        a, b, c = (verts[i].position for i in face.indices[:3])
        n = v_cross(v_sub(b, a), v_sub(c, a))
        centroid = tuple((a[k] + b[k] + c[k]) / 3.0 for k in range(3))
        assert v_dot(n, v_sub(centroid, center)) > 0.0


def test_cube_shape():
    model = Cube().build()
    assert model.name == "Cube"
    assert len(model.mesh.vertices) == 8
    assert len(model.mesh.faces) == 12
    assert all(len(f) == 3 for f in model.mesh.faces)
    assert sorted(set(c for p in positions(model) for c in p)) == [-0.5, 0.5]
    for n in normals(model):
        assert length(n) == pytest.approx(1.0)
    _assert_outward(model)
    model.mesh.validate()


def test_cube_size_center_and_uvs():
    model = Cube().size(4.0).center(1.0, 2.0, 3.0).with_uvs(False).build()
    lo, hi = model.mesh.bounds()
    assert lo == (-1.0, 0.0, 1.0)
    assert hi == (3.0, 4.0, 5.0)
    assert not model.mesh.has_tex_coords()
    _assert_outward(model, (1.0, 2.0, 3.0))


def test_cube_has_uvs_by_default():
    model = Cube().build()
    assert all(v.tex_coords is not None for v in model.mesh.vertices)


def test_builders_are_immutable():
    base = Sphere().radius(2.0)
    coarse = base.segments(8)
    assert base.config.segments == 32
    assert coarse.config.segments == 8
    assert coarse.config.radius == 2.0
    with pytest.raises(FrozenInstanceError):
        CubeConfig().size = 3.0


def test_sphere_counts_and_radius():
    segments, rings = 8, 4
    model = Sphere().radius(2.0).segments(segments).rings(rings).build()
    assert model.name == "Sphere"
    assert len(model.mesh.vertices) == 2 + (rings - 1) * segments
    assert len(model.mesh.faces) == 2 * segments + 2 * segments * (rings - 2)
    for v in model.mesh.vertices:
        assert length(v.position) == pytest.approx(2.0)
        assert length(v.normal) == pytest.approx(1.0)
        # analytic normal points straight out
        assert v.normal == pytest.approx(tuple(c / 2.0 for c in v.position))
    _assert_outward(model)
    model.mesh.validate()


def test_sphere_minimum_rings():
    model = Sphere().segments(3).rings(2).build()
    assert len(model.mesh.vertices) == 5
    assert len(model.mesh.faces) == 6
    _assert_outward(model)


def test_sphere_center():
    model = Sphere().center(0.0, 5.0, 0.0).segments(6).rings(3).build()
    lo, hi = model.mesh.bounds()
    assert lo[1] == pytest.approx(4.0)
    assert hi[1] == pytest.approx(6.0)
    _assert_outward(model, (0.0, 5.0, 0.0))


def test_cylinder_with_caps():
    segments = 10
    model = Cylinder().radius(0.5).height(3.0).segments(segments).build()
    assert model.name == "Cylinder"
    assert len(model.mesh.vertices) == 2 * segments + 2
    assert len(model.mesh.faces) == 4 * segments
    lo, hi = model.mesh.bounds()
    assert lo[1] == pytest.approx(-1.5)
    assert hi[1] == pytest.approx(1.5)
    for v in model.mesh.vertices[:2 * segments]:
        x, _, z = v.position
        assert math.hypot(x, z) == pytest.approx(0.5)
        assert v.normal[1] == 0.0
    _assert_outward(model)
    model.mesh.validate()


def test_cylinder_without_caps():
    model = Cylinder().segments(6).caps(False).build()
    assert len(model.mesh.vertices) == 12
    assert len(model.mesh.faces) == 12


@pytest.mark.parametrize("builder", [
    Cube().size(0.0),
    Cube().size(-1.0),
    Sphere().radius(0.0),
    Sphere().segments(2),
    Sphere().rings(1),
    Cylinder().radius(-0.5),
    Cylinder().height(0.0),
    Cylinder().segments(2),
])
def test_invalid_parameters_fail_at_build(builder):
    with pytest.raises(InvalidModelError):
        builder.build()
