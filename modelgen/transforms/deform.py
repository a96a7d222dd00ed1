"""
Non-rigid deformations: Bend, Twist and Taper.

Each deformation varies along one axis. Normals are corrected with a first
order approximation (rotate with the local rotation, or divide by the local
scale) and renormalized; they are not derived from the exact Jacobian.
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple

from ..config import REGION_EPSILON, SMALL_ANGLE, STRAIGHT_BEND_RADIUS
from ..linalg import (
    X_AXIS, Y_AXIS, Z_AXIS, apply_mat3, cardinal_axis_index, perpendicular_pair, rotation_matrix,
    v_add, v_cross, v_dot, v_len, v_lerp, v_norm, v_scale, v_sub, vec3,
)
from ..types import Model
from .base import Transform, unit_axis


# -----
# Bend
# -----

class Bend(Transform):
    """Bend the part of a model lying in ``bend_region`` around ``bend_axis``.

    ``bend_region`` is an interval measured along ``direction_axis``. A vertex
    at fraction ``t`` of the region is swung through ``t * bend_angle`` on a
    circular arc pivoting at ``direction_axis * start``. Vertices outside the
    region are left exactly as they were.
    """

    def __init__(self, bend_axis: Sequence[float], bend_angle: float,
                 bend_region: Tuple[float, float], direction_axis: Sequence[float]):
        self.bend_axis = unit_axis(bend_axis, "bend axis")
        self.bend_angle = math.radians(bend_angle)
        self.bend_region = (float(bend_region[0]), float(bend_region[1]))
        self.direction_axis = unit_axis(direction_axis, "direction axis")

    @classmethod
    def x_axis(cls, bend_angle: float, y_min: float, y_max: float) -> "Bend":
        """Bend around X over a region measured along Y."""
        return cls(X_AXIS, bend_angle, (y_min, y_max), Y_AXIS)

    @classmethod
    def y_axis(cls, bend_angle: float, x_min: float, x_max: float) -> "Bend":
        """Bend around Y over a region measured along X."""
        return cls(Y_AXIS, bend_angle, (x_min, x_max), X_AXIS)

    @classmethod
    def z_axis(cls, bend_angle: float, x_min: float, x_max: float) -> "Bend":
        """Bend around Z over a region measured along X."""
        return cls(Z_AXIS, bend_angle, (x_min, x_max), X_AXIS)

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        start, end = self.bend_region
        length = end - start
        if abs(length) < REGION_EPSILON:
            return

        direction = self.direction_axis
        offset_axis = v_norm(v_cross(self.bend_axis, direction))
        pivot = v_scale(direction, start)

        for vertex in model.mesh.vertices:
            pos = vertex.position
            along = v_dot(pos, direction)
            if along < start or along > end:
                continue

            t = (along - start) / length
            angle = self.bend_angle * t
            rot = rotation_matrix(self.bend_axis, angle)

            rel = v_sub(pos, pivot)
            distance = v_dot(rel, direction)
            proj_dir = v_scale(direction, distance)
            perp = v_sub(rel, proj_dir)
            rotated_perp = apply_mat3(rot, perp)

            if abs(angle) < SMALL_ANGLE:
                # effectively straight
                new_pos = v_add(v_add(pivot, proj_dir), rotated_perp)
            else:
                radius = self.arc_radius(distance, angle)
                new_pos = v_add(pivot, rotated_perp)
                new_pos = v_add(new_pos, v_scale(direction, radius * (1.0 - math.cos(angle))))
                new_pos = v_add(new_pos, v_scale(offset_axis, radius * math.sin(angle)))

            vertex.position = new_pos
            vertex.normal = v_norm(apply_mat3(rot, vertex.normal))

    @staticmethod
    def arc_radius(distance: float, angle: float) -> float:
        """Radius of the arc a point ``distance`` along the region is mapped onto."""
        if abs(angle) < SMALL_ANGLE:
            return STRAIGHT_BEND_RADIUS
        return distance / angle


# ------
# Twist
# ------

class Twist(Transform):
    """Rotate each vertex about ``axis`` by an angle proportional to its
    signed distance from ``center`` along the axis."""

    def __init__(self, axis: Sequence[float], angle_per_unit: float, center: Sequence[float] = (0.0, 0.0, 0.0)):
        self.axis = unit_axis(axis)
        self.angle_per_unit = math.radians(angle_per_unit)
        self.center = vec3(center)

    @classmethod
    def around_x(cls, angle_per_unit: float, center_y: float = 0.0, center_z: float = 0.0) -> "Twist":
        return cls(X_AXIS, angle_per_unit, (0.0, center_y, center_z))

    @classmethod
    def around_y(cls, angle_per_unit: float, center_x: float = 0.0, center_z: float = 0.0) -> "Twist":
        return cls(Y_AXIS, angle_per_unit, (center_x, 0.0, center_z))

    @classmethod
    def around_z(cls, angle_per_unit: float, center_x: float = 0.0, center_y: float = 0.0) -> "Twist":
        return cls(Z_AXIS, angle_per_unit, (center_x, center_y, 0.0))

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        vertices = model.mesh.vertices
        if not vertices:
            return
        axis, center = self.axis, self.center

        heights = [v_dot(v_sub(v.position, center), axis) for v in vertices]
        if max(heights) - min(heights) < REGION_EPSILON:
            # no extent along the axis: every angle would be the same constant
            return

        for vertex, d in zip(vertices, heights):
            rel = v_sub(vertex.position, center)
            along = v_scale(axis, d)
            perp = v_sub(rel, along)
            rot = rotation_matrix(axis, d * self.angle_per_unit)
            vertex.position = v_add(v_add(along, apply_mat3(rot, perp)), center)

            n = vertex.normal
            n_along = v_scale(axis, v_dot(n, axis))
            n_perp = v_sub(n, n_along)
            vertex.normal = v_norm(v_add(n_along, apply_mat3(rot, n_perp)))


# ------
# Taper
# ------

class Taper(Transform):
    """Scale the cross-section perpendicular to ``axis`` by a factor that
    varies linearly from ``start_scale`` to ``end_scale`` across ``bounds``.

    Scales are 3-vectors in world x, y, z order; the component belonging to
    the taper axis itself is ignored. Vertices outside ``bounds`` are skipped.
    """

    def __init__(self, axis: Sequence[float], start_scale: Sequence[float],
                 end_scale: Sequence[float], bounds: Tuple[float, float]):
        self.axis = unit_axis(axis)
        self.start_scale = vec3(start_scale)
        self.end_scale = vec3(end_scale)
        self.bounds = (float(bounds[0]), float(bounds[1]))

    @classmethod
    def x_axis(cls, start_scale: Tuple[float, float], end_scale: Tuple[float, float],
               x_range: Tuple[float, float]) -> "Taper":
        """Taper along X; the pairs scale (y, z)."""
        return cls(X_AXIS, (1.0, start_scale[0], start_scale[1]),
                   (1.0, end_scale[0], end_scale[1]), x_range)

    @classmethod
    def y_axis(cls, start_scale: Tuple[float, float], end_scale: Tuple[float, float],
               y_range: Tuple[float, float]) -> "Taper":
        """Taper along Y; the pairs scale (x, z)."""
        return cls(Y_AXIS, (start_scale[0], 1.0, start_scale[1]),
                   (end_scale[0], 1.0, end_scale[1]), y_range)

    @classmethod
    def z_axis(cls, start_scale: Tuple[float, float], end_scale: Tuple[float, float],
               z_range: Tuple[float, float]) -> "Taper":
        """Taper along Z; the pairs scale (x, y)."""
        return cls(Z_AXIS, (start_scale[0], start_scale[1], 1.0),
                   (end_scale[0], end_scale[1], 1.0), z_range)

    def _perp_scale_indices(self) -> Tuple[int, int]:
        # which world scale components apply to perp1 / perp2
        main = cardinal_axis_index(self.axis)
        if main == 0:
            return 1, 2
        if main == 1:
            return 0, 2
        return 0, 1

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        lo, hi = self.bounds
        length = hi - lo
        if abs(length) < REGION_EPSILON:
            return

        axis = self.axis
        perp1, perp2 = perpendicular_pair(axis)
        i1, i2 = self._perp_scale_indices()

        for vertex in model.mesh.vertices:
            pos = vertex.position
            h = v_dot(pos, axis)
            if h < lo or h > hi:
                continue

            t = (h - lo) / length
            scale = v_lerp(self.start_scale, self.end_scale, t)
            s1, s2 = scale[i1], scale[i2]

            axis_point = v_scale(axis, h)
            from_axis = v_sub(pos, axis_point)
            c1 = v_scale(perp1, v_dot(from_axis, perp1) * s1)
            c2 = v_scale(perp2, v_dot(from_axis, perp2) * s2)
            vertex.position = v_add(v_add(axis_point, c1), c2)

            n = vertex.normal
            n_along = v_scale(axis, v_dot(n, axis))
            n1 = v_scale(perp1, v_dot(n, perp1))
            n2 = v_scale(perp2, v_dot(n, perp2))
            if s1 != 0.0:
                n1 = v_scale(n1, 1.0 / s1)
            if s2 != 0.0:
                n2 = v_scale(n2, 1.0 / s2)
            n = v_add(v_add(n_along, n1), n2)
            if v_len(n) > 0.0:
                n = v_norm(n)
            vertex.normal = n
