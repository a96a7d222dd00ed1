"""Small vector/matrix utilities shared by the mesh, transforms and exporters.

Vectors are plain tuples of floats; matrices are numpy arrays. Helpers that
return vectors always hand back Python floats so vertex data stays plain.
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]
Tri = Tuple[int, int, int]

X_AXIS: Vec3 = (1.0, 0.0, 0.0)
Y_AXIS: Vec3 = (0.0, 1.0, 0.0)
Z_AXIS: Vec3 = (0.0, 0.0, 1.0)


# -----------------------------
# Vector utilities
# -----------------------------

def vec3(v: Sequence[float]) -> Vec3:
    if len(v) != 3:
        raise ValueError(f"expected 3 components, got {len(v)}")
    return (float(v[0]), float(v[1]), float(v[2]))


def v_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def v_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def v_scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def v_neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def v_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def v_cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def v_len(a: Vec3) -> float:
    return math.sqrt(v_dot(a, a))


def v_norm(a: Vec3) -> Vec3:
    """Unit vector in the direction of ``a``; the zero vector maps to itself."""
    l = v_len(a)
    if l == 0:
        return (0.0, 0.0, 0.0)
    return (a[0] / l, a[1] / l, a[2] / l)


def v_project(a: Vec3, unit_axis: Vec3) -> Vec3:
    """Component of ``a`` along ``unit_axis``."""
    return v_scale(unit_axis, v_dot(a, unit_axis))


def v_reject(a: Vec3, unit_axis: Vec3) -> Vec3:
    """Component of ``a`` perpendicular to ``unit_axis``."""
    return v_sub(a, v_project(a, unit_axis))


def v_lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    return (
        a[0] * (1.0 - t) + b[0] * t,
        a[1] * (1.0 - t) + b[1] * t,
        a[2] * (1.0 - t) + b[2] * t,
    )


# -----------------------------
# Matrix utilities (numpy)
# -----------------------------

def mat_identity() -> np.ndarray:
    return np.eye(4, dtype=float)


def mat_translate(dx: float, dy: float, dz: float) -> np.ndarray:
    m = mat_identity()
    m[0, 3], m[1, 3], m[2, 3] = dx, dy, dz
    return m


def mat_scale(sx: float, sy: float, sz: float) -> np.ndarray:
    return np.diag([sx, sy, sz, 1.0]).astype(float)


def rotation_matrix(axis: Vec3, angle: float) -> np.ndarray:
    """3x3 rotation about a unit ``axis`` by ``angle`` radians (Rodrigues)."""
    x, y, z = axis
    c, s = math.cos(angle), math.sin(angle)
    k = np.array([
        [0.0, -z, y],
        [z, 0.0, -x],
        [-y, x, 0.0],
    ])
    return np.eye(3) * c + s * k + (1.0 - c) * np.outer(axis, axis)


def mat4_from_mat3(m3: np.ndarray) -> np.ndarray:
    m = mat_identity()
    m[:3, :3] = m3
    return m


def apply_mat3(m: np.ndarray, v: Vec3) -> Vec3:
    """``m @ v`` for a 3x3 matrix."""
    r = m @ np.asarray(v, dtype=float)
    return (float(r[0]), float(r[1]), float(r[2]))


def cardinal_axis_index(axis: Vec3) -> int:
    """Index (0, 1, 2) of the cardinal axis most aligned with ``axis``."""
    mags = [abs(c) for c in axis]
    return mags.index(max(mags))


def perpendicular_pair(axis: Vec3) -> Tuple[Vec3, Vec3]:
    """Two unit vectors completing a unit ``axis`` to a right-handed basis."""
    p = X_AXIS if abs(axis[0]) < 0.9 else Y_AXIS
    perp1 = v_norm(v_reject(p, axis))
    perp2 = v_norm(v_cross(axis, perp1))
    return perp1, perp2
