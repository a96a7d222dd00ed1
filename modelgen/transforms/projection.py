"""
Projections: Perspective, Orthographic and Cylindrical.

These are lossy. They flatten a model onto a plane or snap it onto a
cylinder, and the normals they write are conventions for the projected
result rather than true surface normals.
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple

from ..config import AXIS_EPSILON, NORMAL_EPSILON, PERSPECTIVE_MIN_DEPTH
from ..errors import TransformError
from ..linalg import (
    Vec3, X_AXIS, Y_AXIS, Z_AXIS, perpendicular_pair, v_add, v_cross, v_dot, v_len, v_neg, v_norm, v_scale,
    v_sub, vec3,
)
from ..types import Model
from .base import Transform, unit_axis


class Perspective(Transform):
    """Pinhole projection from ``eye`` along the Z axis.

    Lateral offsets are scaled by ``focal_length / depth``. Points at or
    behind the eye are clamped to a small positive depth instead of failing.
    Without ``preserve_z`` the z coordinate becomes the distance from the eye.
    """

    def __init__(self, eye: Sequence[float], focal_length: float, preserve_z: bool = False,
                 look_negative_z: bool = False):
        self.eye = vec3(eye)
        self.focal_length = float(focal_length)
        self.preserve_z = preserve_z
        self.forward = -1.0 if look_negative_z else 1.0

    @classmethod
    def z_positive(cls, eye_x: float, eye_y: float, eye_z: float, focal_length: float) -> "Perspective":
        return cls((eye_x, eye_y, eye_z), focal_length)

    @classmethod
    def z_negative(cls, eye_x: float, eye_y: float, eye_z: float, focal_length: float) -> "Perspective":
        return cls((eye_x, eye_y, eye_z), focal_length, look_negative_z=True)

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        ex, ey, _ = self.eye
        for vertex in model.mesh.vertices:
            dx, dy, dz = v_sub(vertex.position, self.eye)
            depth = dz * self.forward
            if depth <= 0.0:
                depth = PERSPECTIVE_MIN_DEPTH
                dz = depth * self.forward
            s = self.focal_length / depth

            eye_to_vertex = (dx, dy, dz)
            z = vertex.position[2] if self.preserve_z else v_len(eye_to_vertex)
            vertex.position = (ex + dx * s, ey + dy * s, z)
            vertex.normal = v_neg(v_norm(eye_to_vertex))


class Orthographic(Transform):
    """Parallel projection along ``direction`` onto the plane through the origin.

    With ``preserve_z`` the depth along ``direction`` is kept, so only the
    normals are flattened.
    """

    def __init__(self, direction: Sequence[float], preserve_z: bool = False):
        self.direction = unit_axis(direction, "projection direction")
        self.preserve_z = preserve_z

    @classmethod
    def onto_xy(cls) -> "Orthographic":
        return cls(Z_AXIS)

    @classmethod
    def onto_xz(cls) -> "Orthographic":
        return cls(Y_AXIS)

    @classmethod
    def onto_yz(cls) -> "Orthographic":
        return cls(X_AXIS)

    def basis(self) -> Tuple[Vec3, Vec3]:
        d = self.direction
        helper = Y_AXIS if abs(d[0]) > 0.9 else X_AXIS
        u = v_norm(v_cross(d, helper))
        v = v_norm(v_cross(d, u))
        return u, v

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        d = self.direction
        u, v = self.basis()
        for vertex in model.mesh.vertices:
            pos = vertex.position
            new_pos = v_add(v_scale(u, v_dot(u, pos)), v_scale(v, v_dot(v, pos)))
            if self.preserve_z:
                new_pos = v_add(new_pos, v_scale(d, v_dot(d, pos)))
            vertex.position = new_pos

            n = v_sub(vertex.normal, v_scale(d, v_dot(vertex.normal, d)))
            vertex.normal = v_norm(n) if v_len(n) > NORMAL_EPSILON else d


class Cylindrical(Transform):
    """Map vertices onto a cylinder around ``axis`` through ``center``.

    Height along the axis is kept. Without ``preserve_radius`` every vertex
    lands on the surface at ``radius`` with an outward normal; with it, the
    original distance from the axis is kept and the normal's perpendicular
    part is turned by the vertex's angle around the axis, on top of its own
    direction. Vertices on the axis itself have no defined angle and are
    skipped.
    """

    def __init__(self, axis: Sequence[float], center: Sequence[float], radius: float,
                 preserve_radius: bool = False):
        self.axis = unit_axis(axis, "cylinder axis")
        self.center = vec3(center)
        self.radius = float(radius)
        self.preserve_radius = preserve_radius
        if not preserve_radius and self.radius <= 0.0:
            raise TransformError(f"cylinder radius must be positive, got {radius}")

    @classmethod
    def x_axis(cls, center_y: float, center_z: float, radius: float) -> "Cylindrical":
        return cls(X_AXIS, (0.0, center_y, center_z), radius)

    @classmethod
    def y_axis(cls, center_x: float, center_z: float, radius: float) -> "Cylindrical":
        return cls(Y_AXIS, (center_x, 0.0, center_z), radius)

    @classmethod
    def z_axis(cls, center_x: float, center_y: float, radius: float) -> "Cylindrical":
        return cls(Z_AXIS, (center_x, center_y, 0.0), radius)

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        axis, center = self.axis, self.center
        perp1, perp2 = perpendicular_pair(axis)

        for vertex in model.mesh.vertices:
            rel = v_sub(vertex.position, center)
            height = v_scale(axis, v_dot(rel, axis))
            radial = v_sub(rel, height)
            dist = v_len(radial)
            if dist < AXIS_EPSILON:
                continue

            angle = math.atan2(v_dot(radial, perp2), v_dot(radial, perp1))
            r = dist if self.preserve_radius else self.radius
            new_radial = v_add(v_scale(perp1, r * math.cos(angle)), v_scale(perp2, r * math.sin(angle)))
            vertex.position = v_add(v_add(center, height), new_radial)

            if not self.preserve_radius:
                vertex.normal = v_norm(new_radial)
                continue

            n = vertex.normal
            n_axis = v_scale(axis, v_dot(n, axis))
            n_perp = v_sub(n, n_axis)
            mag = v_len(n_perp)
            if mag > AXIS_EPSILON:
                # turn the normal's own angle by the vertex angle, keep its length
                n_angle = math.atan2(v_dot(n_perp, perp2), v_dot(n_perp, perp1))
                turned = angle + n_angle
                n_perp = v_add(v_scale(perp1, mag * math.cos(turned)), v_scale(perp2, mag * math.sin(turned)))
                n = v_add(n_axis, n_perp)
            if v_len(n) > 0.0:
                n = v_norm(n)
            vertex.normal = n
