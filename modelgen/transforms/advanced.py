"""Matrix, mirror and quaternion transforms."""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

import numpy as np

from ..config import PARALLEL_EPSILON
from ..errors import TransformError
from ..linalg import (
    Vec3, X_AXIS, Y_AXIS, Z_AXIS, apply_mat3, mat4_from_mat3, mat_scale, mat_translate,
    rotation_matrix, v_cross, v_dot, v_len, v_norm,
)
from ..types import Model
from .base import Transform, unit_axis

MatrixLike = Union[np.ndarray, Sequence[Sequence[float]]]


class Matrix(Transform):
    """General 4x4 homogeneous transform.

    Positions go through ``M @ [x, y, z, 1]`` followed by the homogeneous
    divide; normals through the inverse transpose of ``M`` (identity when
    ``M`` is singular) and are renormalized.
    """

    def __init__(self, matrix: MatrixLike):
        m = np.asarray(matrix, dtype=float)
        if m.shape != (4, 4):
            raise TransformError(f"matrix must be 4x4, got shape {m.shape}")
        self.matrix = m
        try:
            inv = np.linalg.inv(m)
        except np.linalg.LinAlgError:
            inv = np.eye(4)
        self.normal_matrix = inv.T

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> "Matrix":
        return cls(mat_translate(x, y, z))

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> "Matrix":
        return cls(mat_scale(x, y, z))

    @classmethod
    def rotation(cls, axis: Sequence[float], angle_degrees: float) -> "Matrix":
        return cls(mat4_from_mat3(rotation_matrix(unit_axis(axis), math.radians(angle_degrees))))

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        m, nm = self.matrix, self.normal_matrix
        # compute everything first so a point at infinity leaves the mesh untouched
        results: List[Tuple[Vec3, Vec3]] = []
        for i, vertex in enumerate(model.mesh.vertices):
            x, y, z = vertex.position
            hx, hy, hz, hw = m @ np.array([x, y, z, 1.0])
            if hw == 0.0:
                raise TransformError(f"matrix maps vertex {i} to a point at infinity (w == 0)")
            position = (float(hx / hw), float(hy / hw), float(hz / hw))

            nx, ny, nz = vertex.normal
            tn = nm @ np.array([nx, ny, nz, 0.0])
            normal = (float(tn[0]), float(tn[1]), float(tn[2]))
            if v_len(normal) > 0.0:
                normal = v_norm(normal)
            results.append((position, normal))

        for vertex, (position, normal) in zip(model.mesh.vertices, results):
            vertex.position = position
            vertex.normal = normal


class Mirror(Transform):
    """Reflection across any combination of the YZ, XZ and XY planes.

    An odd number of reflections flips handedness, so face winding is
    reversed to keep faces pointing outward.
    """

    def __init__(self, x: bool, y: bool, z: bool):
        self.x, self.y, self.z = bool(x), bool(y), bool(z)

    @classmethod
    def flip_x(cls) -> "Mirror":
        return cls(True, False, False)

    @classmethod
    def flip_y(cls) -> "Mirror":
        return cls(False, True, False)

    @classmethod
    def flip_z(cls) -> "Mirror":
        return cls(False, False, True)

    @property
    def reflection_count(self) -> int:
        return int(self.x) + int(self.y) + int(self.z)

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        fx = -1.0 if self.x else 1.0
        fy = -1.0 if self.y else 1.0
        fz = -1.0 if self.z else 1.0
        for vertex in model.mesh.vertices:
            x, y, z = vertex.position
            vertex.position = (x * fx, y * fy, z * fz)
            nx, ny, nz = vertex.normal
            vertex.normal = (nx * fx, ny * fy, nz * fz)

        if self.reflection_count % 2 == 1:
            for face in model.mesh.faces:
                face.reverse()

    def __repr__(self) -> str:
        return f"Mirror(x={self.x}, y={self.y}, z={self.z})"


class Quaternion(Transform):
    """Rotation stored as a unit quaternion ``(w, x, y, z)``."""

    def __init__(self, q: Sequence[float] = (1.0, 0.0, 0.0, 0.0)):
        arr = np.asarray(q, dtype=float)
        if arr.shape != (4,):
            raise TransformError("quaternion needs 4 components (w, x, y, z)")
        norm = float(np.linalg.norm(arr))
        if norm == 0.0:
            raise TransformError("quaternion must be non-zero")
        self.q = arr / norm

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls((1.0, 0.0, 0.0, 0.0))

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float], angle_degrees: float) -> "Quaternion":
        return cls._from_axis_radians(unit_axis(axis), math.radians(angle_degrees))

    @classmethod
    def _from_axis_radians(cls, axis: Vec3, angle: float) -> "Quaternion":
        s = math.sin(angle / 2.0)
        return cls((math.cos(angle / 2.0), axis[0] * s, axis[1] * s, axis[2] * s))

    @classmethod
    def from_euler_angles(cls, roll: float, pitch: float, yaw: float) -> "Quaternion":
        """Roll about X, then pitch about Y, then yaw about Z (degrees)."""
        cr, sr = math.cos(math.radians(roll) / 2.0), math.sin(math.radians(roll) / 2.0)
        cp, sp = math.cos(math.radians(pitch) / 2.0), math.sin(math.radians(pitch) / 2.0)
        cy, sy = math.cos(math.radians(yaw) / 2.0), math.sin(math.radians(yaw) / 2.0)
        return cls((
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ))

    @classmethod
    def from_directions(cls, from_dir: Sequence[float], to_dir: Sequence[float]) -> "Quaternion":
        """Shortest rotation taking ``from_dir`` onto ``to_dir``."""
        f = unit_axis(from_dir, "from direction")
        t = unit_axis(to_dir, "to direction")
        dot = max(-1.0, min(1.0, v_dot(f, t)))

        if abs(dot - 1.0) < PARALLEL_EPSILON:
            return cls.identity()
        if abs(dot + 1.0) < PARALLEL_EPSILON:
            # any perpendicular works; cross with the least aligned cardinal axis
            mags = [abs(c) for c in f]
            helper = (X_AXIS, Y_AXIS, Z_AXIS)[mags.index(min(mags))]
            return cls._from_axis_radians(v_norm(v_cross(helper, f)), math.pi)
        return cls._from_axis_radians(v_norm(v_cross(f, t)), math.acos(dot))

    # ---- algebra ----
    def multiply(self, other: "Quaternion") -> "Quaternion":
        """Hamilton product; the result applies ``other`` first, then ``self``."""
        w1, x1, y1, z1 = self.q
        w2, x2, y2, z2 = other.q
        return Quaternion((
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ))

    __mul__ = multiply

    def conjugate(self) -> "Quaternion":
        w, x, y, z = self.q
        return Quaternion((w, -x, -y, -z))

    def as_matrix(self) -> np.ndarray:
        w, x, y, z = self.q
        return np.array([
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ])

    def rotate(self, v: Sequence[float]) -> Vec3:
        return apply_mat3(self.as_matrix(), (v[0], v[1], v[2]))

    def apply(self, model: Model) -> None:
        self._log_apply(model)
        r = self.as_matrix()
        for vertex in model.mesh.vertices:
            vertex.position = apply_mat3(r, vertex.position)
            vertex.normal = apply_mat3(r, vertex.normal)

    def __repr__(self) -> str:
        w, x, y, z = (float(c) for c in self.q)
        return f"Quaternion(w={w:.6f}, x={x:.6f}, y={y:.6f}, z={z:.6f})"
