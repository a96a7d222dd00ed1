from __future__ import annotations

import math

import pytest

from modelgen.types import Model


def positions(model: Model):
    return [v.position for v in model.mesh.vertices]


def normals(model: Model):
    return [v.normal for v in model.mesh.vertices]


def length(v) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def assert_vec_close(a, b, tol: float = 1e-9) -> None:
    assert a == pytest.approx(b, abs=tol)


def assert_all_close(xs, ys, tol: float = 1e-9) -> None:
    assert len(xs) == len(ys)
    for a, b in zip(xs, ys):
        assert_vec_close(a, b, tol)
