"""STL export, binary (default) or ASCII. Normals are per facet (flat)."""
from __future__ import annotations

import logging
import struct
from typing import Iterator, Tuple

from ..config import GENERATOR_NAME
from ..linalg import Vec3, v_cross, v_norm, v_sub
from ..types import Model, PathLike
from .base import check_exportable, open_output

logger = logging.getLogger(__name__)

Facet = Tuple[Vec3, Vec3, Vec3, Vec3]


def _facets(model: Model) -> Iterator[Facet]:
    verts = model.mesh.vertices
    for a, b, c in model.mesh.triangles():
        va, vb, vc = verts[a].position, verts[b].position, verts[c].position
        n = v_norm(v_cross(v_sub(vb, va), v_sub(vc, va)))
        yield n, va, vb, vc


def save_stl_binary(path: PathLike, model: Model) -> None:
    """Write a binary STL: 80-byte header, facet count, 50 bytes per facet."""
    check_exportable(model)
    facets = list(_facets(model))
    header = f"{GENERATOR_NAME} STL export: {model.name}".encode("utf-8")[:80]
    with open_output(path, "wb") as f:
        f.write(header + bytes(80 - len(header)))
        f.write(struct.pack("<I", len(facets)))
        for n, va, vb, vc in facets:
            f.write(struct.pack("<12fH", *n, *va, *vb, *vc, 0))
    logger.info("wrote binary STL %s (%d facets)", path, len(facets))


def save_stl_ascii(path: PathLike, model: Model) -> None:
    check_exportable(model)
    name = model.name.replace(" ", "_") or "model"
    count = 0
    with open_output(path) as f:
        f.write(f"solid {name}\n")
        for n, va, vb, vc in _facets(model):
            f.write("  facet normal {:e} {:e} {:e}\n".format(*n))
            f.write("    outer loop\n")
            for x, y, z in (va, vb, vc):
                f.write(f"      vertex {x:e} {y:e} {z:e}\n")
            f.write("    endloop\n")
            f.write("  endfacet\n")
            count += 1
        f.write(f"endsolid {name}\n")
    logger.info("wrote ASCII STL %s (%d facets)", path, count)


def save_stl(path: PathLike, model: Model, binary: bool = True) -> None:
    if binary:
        save_stl_binary(path, model)
    else:
        save_stl_ascii(path, model)
