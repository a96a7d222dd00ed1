from __future__ import annotations

import math

import pytest

from modelgen.errors import TransformError
from modelgen.transforms import Bend, Taper, Twist
from modelgen.types import Model, Vertex

from .helpers import assert_vec_close, length, normals, positions


# -----
# Bend
# -----

def test_bend_leaves_vertices_below_region_untouched(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Bend.x_axis(90.0, 0.0, 0.5))
    for after, orig in zip(positions(unit_cube), before):
        if orig[1] < 0.0:
            assert after == orig


def test_bend_leaves_vertices_above_region_untouched(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Bend.x_axis(45.0, -0.6, 0.2))
    for after, orig in zip(positions(unit_cube), before):
        if orig[1] > 0.2:
            assert after == orig


def test_bend_moves_vertices_at_end_of_region(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Bend.x_axis(90.0, 0.0, 0.5))
    radius = 0.5 / (math.pi / 2)
    for after, (x, y, z) in zip(positions(unit_cube), before):
        if y > 0.0:
            # full quarter turn about X, lifted along the arc
            assert_vec_close(after, (x, -z + radius, radius), tol=1e-9)
    for n in normals(unit_cube):
        assert length(n) == pytest.approx(1.0)


def test_bend_with_empty_region_is_noop(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Bend.y_axis(60.0, 0.25, 0.25))
    assert positions(unit_cube) == before


def test_bend_arc_radius():
    assert Bend.arc_radius(1.0, math.pi / 2) == pytest.approx(2 / math.pi)
    assert Bend.arc_radius(1.0, 1e-7) == 1000.0


def test_bend_rejects_zero_axis():
    with pytest.raises(TransformError):
        Bend((0, 0, 0), 30.0, (0.0, 1.0), (0, 1, 0))


# ------
# Twist
# ------

def test_twist_turns_top_and_bottom_differently(unit_cube):
    unit_cube.apply(Twist.around_y(90.0))
    top = [p for p in positions(unit_cube) if p[1] > 0.4]
    bottom = [p for p in positions(unit_cube) if p[1] < -0.4]
    # corner (0.5, +-0.5, 0.5) turns by +-45 degrees about Y
    top_corner = min(top, key=lambda p: abs(p[0] - math.sqrt(0.5)))
    bottom_corner = min(bottom, key=lambda p: abs(p[0]))
    assert top_corner[0] == pytest.approx(math.sqrt(0.5))
    assert bottom_corner[0] == pytest.approx(0.0, abs=1e-12)
    assert abs(top_corner[0] - bottom_corner[0]) > 0.1


def test_twist_corner_values():
    model = Model()
    model.mesh.add_vertex(Vertex((0.5, 0.5, 0.5), (0.0, 0.0, 1.0)))
    model.mesh.add_vertex(Vertex((0.5, -0.5, 0.5), (0.0, 0.0, 1.0)))
    model.apply(Twist.around_y(90.0))
    top, bottom = positions(model)
    assert_vec_close(top, (math.sqrt(0.5), 0.5, 0.0), tol=1e-12)
    assert_vec_close(bottom, (0.0, -0.5, math.sqrt(0.5)), tol=1e-12)
    n_top, n_bottom = normals(model)
    assert_vec_close(n_top, (math.sqrt(0.5), 0.0, math.sqrt(0.5)), tol=1e-12)
    assert_vec_close(n_bottom, (-math.sqrt(0.5), 0.0, math.sqrt(0.5)), tol=1e-12)


def test_twist_keeps_height_and_radius(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Twist.around_y(33.0))
    for (x, y, z), (ox, oy, oz) in zip(positions(unit_cube), before):
        assert y == pytest.approx(oy)
        assert math.hypot(x, z) == pytest.approx(math.hypot(ox, oz))


def test_twist_flat_model_is_identity():
    model = Model()
    for p in [(1, 0, 0), (0, 0, 1), (-1, 0, 0)]:
        model.mesh.add_vertex(Vertex.with_position(*p))
    before = positions(model)
    model.apply(Twist.around_y(90.0))
    assert positions(model) == before


def test_twist_about_offset_center():
    model = Model()
    model.mesh.add_vertex(Vertex.with_position(3.0, 1.0, 0.0))
    model.mesh.add_vertex(Vertex.with_position(3.0, -1.0, 0.0))
    model.apply(Twist.around_y(90.0, center_x=2.0))
    top, bottom = positions(model)
    assert_vec_close(top, (2.0, 1.0, -1.0), tol=1e-12)
    assert_vec_close(bottom, (2.0, -1.0, 1.0), tol=1e-12)


# ------
# Taper
# ------

def _width_x(points):
    xs = [p[0] for p in points]
    return max(xs) - min(xs)


def test_taper_narrows_top(unit_cube):
    unit_cube.apply(Taper.y_axis((1.0, 1.0), (0.1, 0.1), (-0.5, 0.5)))
    pts = positions(unit_cube)
    top = _width_x([p for p in pts if p[1] > 0.4])
    bottom = _width_x([p for p in pts if p[1] < -0.4])
    assert top / bottom == pytest.approx(0.1, rel=0.05)


def test_taper_only_scales_cross_section(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Taper.y_axis((2.0, 3.0), (2.0, 3.0), (-0.5, 0.5)))
    for (x, y, z), (ox, oy, oz) in zip(positions(unit_cube), before):
        assert (x, y, z) == pytest.approx((ox * 2.0, oy, oz * 3.0))


def test_taper_skips_vertices_outside_bounds(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Taper.z_axis((0.5, 0.5), (0.1, 0.1), (0.0, 1.0)))
    for after, orig in zip(positions(unit_cube), before):
        if orig[2] < 0.0:
            assert after == orig


def test_taper_zero_bounds_is_noop(unit_cube):
    before = positions(unit_cube)
    unit_cube.apply(Taper.x_axis((0.5, 0.5), (0.1, 0.1), (0.3, 0.3)))
    assert positions(unit_cube) == before


def test_taper_normals_stay_unit_even_with_zero_scale(unit_cube):
    unit_cube.apply(Taper.y_axis((1.0, 1.0), (0.0, 0.0), (-0.5, 0.5)))
    for n in normals(unit_cube):
        assert length(n) == pytest.approx(1.0)
