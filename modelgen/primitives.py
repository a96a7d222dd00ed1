"""
Procedural primitives: Cube, Sphere and Cylinder.

Each primitive is a small builder around a frozen config. Setters return a
new builder, so a half-configured builder can be shared and specialised:

    base = Sphere().radius(2.0)
    coarse = base.segments(8).rings(4).build()
    fine = base.segments(64).rings(32).build()

``build()`` validates the config and raises :class:`InvalidModelError` for
parameters that cannot produce a mesh. All faces are wound counter-clockwise
seen from outside.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List

from .config import DEFAULT_RINGS, DEFAULT_SEGMENTS, MIN_RINGS, MIN_SEGMENTS
from .errors import InvalidModelError
from .linalg import Vec3
from .types import Face, Model, Vertex

logger = logging.getLogger(__name__)


def _require_positive(what: str, value: float) -> None:
    if not value > 0.0:
        raise InvalidModelError(f"{what} must be positive, got {value}")


def _require_segments(value: int) -> None:
    if value < MIN_SEGMENTS:
        raise InvalidModelError(f"segments must be at least {MIN_SEGMENTS}, got {value}")


# -----
# Cube
# -----

@dataclass(frozen=True)
class CubeConfig:
    size: float = 1.0
    center: Vec3 = (0.0, 0.0, 0.0)
    with_uvs: bool = True

    def validate(self) -> None:
        _require_positive("cube size", self.size)


class Cube:
    """Axis-aligned cube with 8 shared corners and 12 triangles."""

    def __init__(self, config: CubeConfig = CubeConfig()):
        self.config = config

    def size(self, size: float) -> "Cube":
        return Cube(replace(self.config, size=float(size)))

    def center(self, x: float, y: float, z: float) -> "Cube":
        return Cube(replace(self.config, center=(float(x), float(y), float(z))))

    def with_uvs(self, with_uvs: bool) -> "Cube":
        return Cube(replace(self.config, with_uvs=bool(with_uvs)))

    def build(self) -> Model:
        cfg = self.config
        cfg.validate()
        model = Model("Cube")
        mesh = model.mesh
        h = cfg.size / 2.0
        cx, cy, cz = cfg.center

        # (x sign, y sign, z sign, uv)
        corners = [
            (-1, -1, +1, (0.0, 0.0)),
            (+1, -1, +1, (1.0, 0.0)),
            (+1, +1, +1, (1.0, 1.0)),
            (-1, +1, +1, (0.0, 1.0)),
            (-1, -1, -1, (0.0, 0.0)),
            (-1, +1, -1, (0.0, 1.0)),
            (+1, +1, -1, (1.0, 1.0)),
            (+1, -1, -1, (1.0, 0.0)),
        ]
        for sx, sy, sz, uv in corners:
            mesh.add_vertex(Vertex(
                (cx + sx * h, cy + sy * h, cz + sz * h),
                tex_coords=uv if cfg.with_uvs else None,
            ))

        tris = [
            (0, 1, 2), (0, 2, 3),  # +z
            (4, 5, 6), (4, 6, 7),  # -z
            (3, 2, 6), (3, 6, 5),  # +y
            (0, 4, 7), (0, 7, 1),  # -y
            (1, 7, 6), (1, 6, 2),  # +x
            (0, 3, 5), (0, 5, 4),  # -x
        ]
        for a, b, c in tris:
            mesh.add_face(Face.triangle(a, b, c))

        mesh.compute_normals()
        logger.debug("built cube size=%s", cfg.size)
        return model


# -------
# Sphere
# -------

@dataclass(frozen=True)
class SphereConfig:
    radius: float = 1.0
    center: Vec3 = (0.0, 0.0, 0.0)
    segments: int = DEFAULT_SEGMENTS
    rings: int = DEFAULT_RINGS
    with_uvs: bool = True

    def validate(self) -> None:
        _require_positive("sphere radius", self.radius)
        _require_segments(self.segments)
        if self.rings < MIN_RINGS:
            raise InvalidModelError(f"rings must be at least {MIN_RINGS}, got {self.rings}")


class Sphere:
    """UV sphere around the Y axis: two poles plus ``rings - 1`` latitude rings."""

    def __init__(self, config: SphereConfig = SphereConfig()):
        self.config = config

    def radius(self, radius: float) -> "Sphere":
        return Sphere(replace(self.config, radius=float(radius)))

    def center(self, x: float, y: float, z: float) -> "Sphere":
        return Sphere(replace(self.config, center=(float(x), float(y), float(z))))

    def segments(self, segments: int) -> "Sphere":
        return Sphere(replace(self.config, segments=int(segments)))

    def rings(self, rings: int) -> "Sphere":
        return Sphere(replace(self.config, rings=int(rings)))

    def with_uvs(self, with_uvs: bool) -> "Sphere":
        return Sphere(replace(self.config, with_uvs=bool(with_uvs)))

    def build(self) -> Model:
        cfg = self.config
        cfg.validate()
        model = Model("Sphere")
        mesh = model.mesh
        r, segs, rings = cfg.radius, cfg.segments, cfg.rings
        cx, cy, cz = cfg.center
        uvs = cfg.with_uvs

        top = mesh.add_vertex(Vertex((cx, cy + r, cz), (0.0, 1.0, 0.0), (0.5, 1.0) if uvs else None))
        bottom = mesh.add_vertex(Vertex((cx, cy - r, cz), (0.0, -1.0, 0.0), (0.5, 0.0) if uvs else None))

        ring_indices: List[List[int]] = []
        for i in range(rings - 1):
            phi = math.pi * (i + 1) / rings
            cp, sp = math.cos(phi), math.sin(phi)
            ring = []
            for j in range(segs):
                theta = 2.0 * math.pi * j / segs
                ct, st = math.cos(theta), math.sin(theta)
                normal = (sp * ct, cp, sp * st)
                uv = (j / segs, 1.0 - (i + 1) / rings) if uvs else None
                ring.append(mesh.add_vertex(Vertex(
                    (cx + r * normal[0], cy + r * normal[1], cz + r * normal[2]), normal, uv,
                )))
            ring_indices.append(ring)

        first, last = ring_indices[0], ring_indices[-1]
        for j in range(segs):
            nj = (j + 1) % segs
            mesh.add_face(Face.triangle(top, first[nj], first[j]))

        for upper, lower in zip(ring_indices, ring_indices[1:]):
            for j in range(segs):
                nj = (j + 1) % segs
                mesh.add_face(Face.triangle(upper[j], upper[nj], lower[j]))
                mesh.add_face(Face.triangle(upper[nj], lower[nj], lower[j]))

        for j in range(segs):
            nj = (j + 1) % segs
            mesh.add_face(Face.triangle(bottom, last[j], last[nj]))

        logger.debug("built sphere radius=%s segments=%d rings=%d", r, segs, rings)
        return model


# ---------
# Cylinder
# ---------

@dataclass(frozen=True)
class CylinderConfig:
    radius: float = 1.0
    height: float = 2.0
    center: Vec3 = (0.0, 0.0, 0.0)
    segments: int = DEFAULT_SEGMENTS
    caps: bool = True
    with_uvs: bool = True

    def validate(self) -> None:
        _require_positive("cylinder radius", self.radius)
        _require_positive("cylinder height", self.height)
        _require_segments(self.segments)


class Cylinder:
    """Y-aligned cylinder with radial side normals and optional flat caps."""

    def __init__(self, config: CylinderConfig = CylinderConfig()):
        self.config = config

    def radius(self, radius: float) -> "Cylinder":
        return Cylinder(replace(self.config, radius=float(radius)))

    def height(self, height: float) -> "Cylinder":
        return Cylinder(replace(self.config, height=float(height)))

    def center(self, x: float, y: float, z: float) -> "Cylinder":
        return Cylinder(replace(self.config, center=(float(x), float(y), float(z))))

    def segments(self, segments: int) -> "Cylinder":
        return Cylinder(replace(self.config, segments=int(segments)))

    def caps(self, caps: bool) -> "Cylinder":
        return Cylinder(replace(self.config, caps=bool(caps)))

    def with_uvs(self, with_uvs: bool) -> "Cylinder":
        return Cylinder(replace(self.config, with_uvs=bool(with_uvs)))

    def build(self) -> Model:
        cfg = self.config
        cfg.validate()
        model = Model("Cylinder")
        mesh = model.mesh
        r, segs = cfg.radius, cfg.segments
        cx, cy, cz = cfg.center
        half = cfg.height / 2.0
        uvs = cfg.with_uvs

        top_ring: List[int] = []
        bottom_ring: List[int] = []
        for i in range(segs):
            theta = 2.0 * math.pi * i / segs
            ct, st = math.cos(theta), math.sin(theta)
            normal = (ct, 0.0, st)
            u = i / segs
            top_ring.append(mesh.add_vertex(Vertex(
                (cx + r * ct, cy + half, cz + r * st), normal, (u, 1.0) if uvs else None,
            )))
            bottom_ring.append(mesh.add_vertex(Vertex(
                (cx + r * ct, cy - half, cz + r * st), normal, (u, 0.0) if uvs else None,
            )))

        for i in range(segs):
            ni = (i + 1) % segs
            mesh.add_face(Face.triangle(bottom_ring[i], top_ring[i], top_ring[ni]))
            mesh.add_face(Face.triangle(bottom_ring[i], top_ring[ni], bottom_ring[ni]))

        if cfg.caps:
            centre_uv = (0.5, 0.5) if uvs else None
            top_c = mesh.add_vertex(Vertex((cx, cy + half, cz), (0.0, 1.0, 0.0), centre_uv))
            bottom_c = mesh.add_vertex(Vertex((cx, cy - half, cz), (0.0, -1.0, 0.0), centre_uv))
            for i in range(segs):
                ni = (i + 1) % segs
                mesh.add_face(Face.triangle(top_c, top_ring[ni], top_ring[i]))
            for i in range(segs):
                ni = (i + 1) % segs
                mesh.add_face(Face.triangle(bottom_c, bottom_ring[i], bottom_ring[ni]))

        logger.debug("built cylinder radius=%s height=%s segments=%d", r, cfg.height, segs)
        return model


__all__ = ["Cube", "CubeConfig", "Sphere", "SphereConfig", "Cylinder", "CylinderConfig"]
