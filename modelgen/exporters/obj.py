"""
Wavefront OBJ export (with an MTL material library) and a small OBJ reader.

Vertex position, texture coordinate and normal share one index per vertex,
so faces are written as ``v/vt/vn`` or ``v//vn``. The reader accepts all of
``v``, ``v/vt``, ``v//vn`` and ``v/vt/vn`` including negative indices, and
re-splits vertices whose corners pair different attribute indices.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..config import GENERATOR_NAME
from ..errors import ModelImportError, ModelIOError
from ..linalg import Vec2, Vec3
from ..types import Face, Material, Model, PathLike, TextureType, Vertex
from .base import check_exportable, open_output

logger = logging.getLogger(__name__)

_MTL_MAPS = (
    (TextureType.DIFFUSE, "map_Kd"),
    (TextureType.NORMAL, "map_Bump"),
    (TextureType.SPECULAR, "map_Ks"),
)

# usemtl name that switches back to no material
NO_MATERIAL = "(null)"


def _fmt(x: float) -> str:
    return f"{x:.6f}"


# ---------------
# Export
# ---------------

def save_obj(path: PathLike, model: Model) -> None:
    """Save OBJ; a sibling ``<stem>.mtl`` is written when the mesh has materials."""
    check_exportable(model)
    path = Path(path)
    mesh = model.mesh

    mtl_name: Optional[str] = None
    if mesh.materials:
        mtl_name = path.stem + ".mtl"
        save_mtl(path.with_name(mtl_name), model)

    use_vt = mesh.has_tex_coords()
    with open_output(path) as f:
        f.write(f"# OBJ file generated by {GENERATOR_NAME}\n")
        f.write(f"# Model name: {model.name}\n\n")
        if mtl_name:
            f.write(f"mtllib {mtl_name}\n")
        f.write(f"o {model.name}\n")

        for v in mesh.vertices:
            x, y, z = v.position
            f.write(f"v {_fmt(x)} {_fmt(y)} {_fmt(z)}\n")
        if use_vt:
            for v in mesh.vertices:
                tu, tv = v.tex_coords if v.tex_coords is not None else (0.0, 0.0)
                f.write(f"vt {_fmt(tu)} {_fmt(tv)}\n")
        for v in mesh.vertices:
            nx, ny, nz = v.normal
            f.write(f"vn {_fmt(nx)} {_fmt(ny)} {_fmt(nz)}\n")

        current: Optional[str] = None
        for face, material in zip(mesh.faces, mesh.face_materials):
            if material != current:
                f.write(f"usemtl {material if material is not None else NO_MATERIAL}\n")
                current = material
            if use_vt:
                refs = [f"{i + 1}/{i + 1}/{i + 1}" for i in face.indices]
            else:
                refs = [f"{i + 1}//{i + 1}" for i in face.indices]
            f.write("f " + " ".join(refs) + "\n")

    logger.info("wrote OBJ %s (%d vertices, %d faces)", path, len(mesh.vertices), len(mesh.faces))


def save_mtl(path: PathLike, model: Model) -> None:
    with open_output(path) as f:
        f.write(f"# MTL file generated by {GENERATOR_NAME}\n")
        f.write(f"# Model name: {model.name}\n\n")
        for name, m in model.mesh.materials.items():
            f.write(f"newmtl {name}\n")
            f.write("Ka {} {} {}\n".format(*(_fmt(c) for c in m.ambient[:3])))
            f.write("Kd {} {} {}\n".format(*(_fmt(c) for c in m.diffuse[:3])))
            f.write("Ks {} {} {}\n".format(*(_fmt(c) for c in m.specular[:3])))
            f.write(f"d {_fmt(m.diffuse[3])}\n")
            f.write(f"Ns {_fmt(m.shininess)}\n")
            f.write("illum 2\n")
            for tex_type, key in _MTL_MAPS:
                if tex_type in m.textures:
                    f.write(f"{key} {m.textures[tex_type]}\n")
            f.write("\n")


# ---------------
# Import
# ---------------

def _floats(parts: List[str], n: int, lineno: int) -> Tuple[float, ...]:
    if len(parts) < n:
        raise ModelImportError(f"line {lineno}: expected {n} numbers, got {len(parts)}")
    try:
        return tuple(float(p) for p in parts[:n])
    except ValueError as e:
        raise ModelImportError(f"line {lineno}: {e}") from e


def _resolve(raw: str, count: int, lineno: int) -> int:
    try:
        i = int(raw)
    except ValueError as e:
        raise ModelImportError(f"line {lineno}: bad index {raw!r}") from e
    if i == 0:
        raise ModelImportError(f"line {lineno}: OBJ indices start at 1")
    idx = i - 1 if i > 0 else count + i
    if not 0 <= idx < count:
        raise ModelImportError(f"line {lineno}: index {i} out of range")
    return idx


def load_obj(path: PathLike) -> Model:
    """Read an OBJ file into a Model.

    Materials are registered by name from ``usemtl`` only; the MTL library
    itself is not parsed. ``usemtl (null)`` returns to faces without a material.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ModelIOError(f"cannot read {path}: {e}") from e

    positions: List[Vec3] = []
    uvs: List[Vec2] = []
    normals: List[Vec3] = []
    model = Model(Path(path).stem)
    mesh = model.mesh
    corner_cache: Dict[Tuple[int, Optional[int], Optional[int]], int] = {}
    material: Optional[str] = None

    for lineno, line in enumerate(text.splitlines(), 1):
        parts = line.split()
        if not parts or parts[0].startswith("#"):
            continue
        tag, args = parts[0], parts[1:]

        if tag == "o" and args:
            model.name = " ".join(args)
        elif tag == "v":
            positions.append(_floats(args, 3, lineno))
        elif tag == "vt":
            u = _floats(args, 1, lineno)[0]
            v = _floats(args[1:], 1, lineno)[0] if len(args) > 1 else 0.0
            uvs.append((u, v))
        elif tag == "vn":
            normals.append(_floats(args, 3, lineno))
        elif tag == "usemtl":
            if not args:
                raise ModelImportError(f"line {lineno}: usemtl needs a name")
            material = args[0] if args[0] != NO_MATERIAL else None
            if material is not None and material not in mesh.materials:
                mesh.add_material(Material(material))
        elif tag == "f":
            if len(args) < 3:
                raise ModelImportError(f"line {lineno}: face needs at least 3 vertices")
            indices = []
            for ref in args:
                fields = ref.split("/")
                if len(fields) > 3:
                    raise ModelImportError(f"line {lineno}: bad face vertex {ref!r}")
                vi = _resolve(fields[0], len(positions), lineno)
                ti = _resolve(fields[1], len(uvs), lineno) if len(fields) > 1 and fields[1] else None
                ni = _resolve(fields[2], len(normals), lineno) if len(fields) > 2 and fields[2] else None
                key = (vi, ti, ni)
                if key not in corner_cache:
                    corner_cache[key] = mesh.add_vertex(Vertex(
                        positions[vi],
                        normals[ni] if ni is not None else (0.0, 0.0, 0.0),
                        uvs[ti] if ti is not None else None,
                    ))
                indices.append(corner_cache[key])
            mesh.add_face(Face(indices), material)
        # mtllib, g, s and anything else are ignored

    logger.info("read OBJ %s (%d vertices, %d faces)", path, len(mesh.vertices), len(mesh.faces))
    return model
