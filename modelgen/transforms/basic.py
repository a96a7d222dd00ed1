"""Rigid and scaling transforms: Scale, Translate and Rotate."""
from __future__ import annotations

import math
from typing import Sequence

from ..errors import TransformError
from ..linalg import X_AXIS, Y_AXIS, Z_AXIS, apply_mat3, rotation_matrix, v_norm
from ..types import Model
from .base import Transform, unit_axis


class Scale(Transform):
    def __init__(self, x: float, y: float, z: float):
        self.x, self.y, self.z = float(x), float(y), float(z)

    @classmethod
    def uniform(cls, s: float) -> "Scale":
        return cls(s, s, s)

    @property
    def is_uniform(self) -> bool:
        return self.x == self.y == self.z

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        sx, sy, sz = self.x, self.y, self.z
        uniform = self.is_uniform
        if not uniform and 0.0 in (sx, sy, sz):
            raise TransformError(f"cannot scale by zero in any dimension: ({sx}, {sy}, {sz})")

        for vertex in model.mesh.vertices:
            x, y, z = vertex.position
            vertex.position = (x * sx, y * sy, z * sz)
            nx, ny, nz = vertex.normal
            if uniform:
                vertex.normal = v_norm((nx, ny, nz))
            else:
                # inverse transpose of a diagonal matrix is 1/scale per axis
                vertex.normal = v_norm((nx / sx, ny / sy, nz / sz))

    def __repr__(self) -> str:
        return f"Scale({self.x}, {self.y}, {self.z})"


class Translate(Transform):
    def __init__(self, x: float, y: float, z: float):
        self.x, self.y, self.z = float(x), float(y), float(z)

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        for vertex in model.mesh.vertices:
            x, y, z = vertex.position
            vertex.position = (x + self.x, y + self.y, z + self.z)

    def __repr__(self) -> str:
        return f"Translate({self.x}, {self.y}, {self.z})"


class Rotate(Transform):
    """Rotation about an axis through the origin, angle in degrees."""

    def __init__(self, axis: Sequence[float], angle_degrees: float):
        self.axis = unit_axis(axis)
        self.angle_rad = math.radians(angle_degrees)

    @classmethod
    def around_x(cls, angle_degrees: float) -> "Rotate":
        return cls(X_AXIS, angle_degrees)

    @classmethod
    def around_y(cls, angle_degrees: float) -> "Rotate":
        return cls(Y_AXIS, angle_degrees)

    @classmethod
    def around_z(cls, angle_degrees: float) -> "Rotate":
        return cls(Z_AXIS, angle_degrees)

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        r = rotation_matrix(self.axis, self.angle_rad)
        for vertex in model.mesh.vertices:
            vertex.position = apply_mat3(r, vertex.position)
            vertex.normal = apply_mat3(r, vertex.normal)

    def __repr__(self) -> str:
        return f"Rotate({self.axis}, {math.degrees(self.angle_rad)})"
