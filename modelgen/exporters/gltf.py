"""
glTF 2.0 export: ``.gltf`` with a sibling ``.bin`` (default), ``.gltf`` with
an embedded base64 buffer, or a single binary ``.glb``.

One mesh with one triangle primitive per material group. Attributes are
POSITION (with min/max), NORMAL and, when any vertex has UVs, TEXCOORD_0.
Polygons are fan-triangulated.
"""
from __future__ import annotations

import base64
import json
import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..config import GENERATOR_NAME
from ..linalg import Vec2, Vec3
from ..types import Material, Model, PathLike
from .base import check_exportable, open_output

logger = logging.getLogger(__name__)

ARRAY_BUFFER = 34962
ELEMENT_ARRAY_BUFFER = 34963
FLOAT = 5126
UNSIGNED_SHORT = 5123
UNSIGNED_INT = 5125
TRIANGLES = 4


@dataclass
class _GltfBuffers:
    bin: bytearray = field(default_factory=bytearray)
    views: List[Dict[str, Any]] = field(default_factory=list)
    accessors: List[Dict[str, Any]] = field(default_factory=list)


def _pad4(n: int) -> int:
    return (n + 3) & ~3


def _pack_f32(xs: List[float]) -> bytes:
    return struct.pack("<" + "f" * len(xs), *xs)


def _pack_u16(xs: List[int]) -> bytes:
    return struct.pack("<" + "H" * len(xs), *xs)


def _pack_u32(xs: List[int]) -> bytes:
    return struct.pack("<" + "I" * len(xs), *xs)


def _flatten(vs: List[Tuple[float, ...]]) -> List[float]:
    out: List[float] = []
    for v in vs:
        out.extend(v)
    return out


def _minmax_vec3(vs: List[Vec3]) -> Tuple[List[float], List[float]]:
    xs = [v[0] for v in vs]
    ys = [v[1] for v in vs]
    zs = [v[2] for v in vs]
    return [min(xs), min(ys), min(zs)], [max(xs), max(ys), max(zs)]


def _add_buffer_view(buffers: _GltfBuffers, blob: bytes, target: int) -> int:
    offset = len(buffers.bin)
    buffers.bin.extend(blob)
    pad = _pad4(len(buffers.bin)) - len(buffers.bin)
    if pad:
        buffers.bin.extend(b"\x00" * pad)

    view_i = len(buffers.views)
    buffers.views.append({
        "buffer": 0,
        "byteOffset": offset,
        "byteLength": len(blob),
        "target": target,
    })
    return view_i


def _add_accessor(buffers: _GltfBuffers, view_index: int, component_type: int, count: int,
                  type_str: str, *, minv: Optional[List[float]] = None, maxv: Optional[List[float]] = None) -> int:
    acc: Dict[str, Any] = {
        "bufferView": view_index,
        "componentType": component_type,
        "count": count,
        "type": type_str,
    }
    if minv is not None:
        acc["min"] = minv
    if maxv is not None:
        acc["max"] = maxv
    i = len(buffers.accessors)
    buffers.accessors.append(acc)
    return i


def _index_accessor(buffers: _GltfBuffers, idx: List[int], vertex_count: int) -> int:
    if vertex_count <= 65536:
        blob, comp = _pack_u16(idx), UNSIGNED_SHORT
    else:
        blob, comp = _pack_u32(idx), UNSIGNED_INT
    view = _add_buffer_view(buffers, blob, ELEMENT_ARRAY_BUFFER)
    return _add_accessor(buffers, view, comp, len(idx), "SCALAR")


def _gltf_material(m: Material) -> Dict[str, Any]:
    return {
        "name": m.name,
        "pbrMetallicRoughness": {
            "baseColorFactor": list(m.diffuse),
            "metallicFactor": 0.0,
            # Phong exponent 0..1000 mapped onto roughness 1..0
            "roughnessFactor": max(0.0, min(1.0, 1.0 - m.shininess / 1000.0)),
        },
    }


def _build_document(model: Model) -> Tuple[Dict[str, Any], bytearray]:
    mesh = model.mesh
    buffers = _GltfBuffers()
    n = len(mesh.vertices)

    positions = [v.position for v in mesh.vertices]
    pos_view = _add_buffer_view(buffers, _pack_f32(_flatten(positions)), ARRAY_BUFFER)
    pos_min, pos_max = _minmax_vec3(positions)
    attrs: Dict[str, int] = {
        "POSITION": _add_accessor(buffers, pos_view, FLOAT, n, "VEC3", minv=pos_min, maxv=pos_max),
    }

    normals = [v.normal for v in mesh.vertices]
    nrm_view = _add_buffer_view(buffers, _pack_f32(_flatten(normals)), ARRAY_BUFFER)
    attrs["NORMAL"] = _add_accessor(buffers, nrm_view, FLOAT, n, "VEC3")

    if mesh.has_tex_coords():
        uvs: List[Vec2] = [v.tex_coords if v.tex_coords is not None else (0.0, 0.0) for v in mesh.vertices]
        uv_view = _add_buffer_view(buffers, _pack_f32(_flatten(uvs)), ARRAY_BUFFER)
        attrs["TEXCOORD_0"] = _add_accessor(buffers, uv_view, FLOAT, n, "VEC2")

    # group triangles by material, keeping first-seen order
    groups: Dict[Optional[str], List[int]] = {}
    for face, material in zip(mesh.faces, mesh.face_materials):
        bucket = groups.setdefault(material, [])
        for tri in face.triangles():
            bucket.extend(tri)

    material_names = list(mesh.materials)
    primitives = []
    for material, idx in groups.items():
        prim: Dict[str, Any] = {
            "attributes": attrs,
            "indices": _index_accessor(buffers, idx, n),
            "mode": TRIANGLES,
        }
        if material is not None:
            prim["material"] = material_names.index(material)
        primitives.append(prim)

    gltf: Dict[str, Any] = {
        "asset": {"version": "2.0", "generator": GENERATOR_NAME},
        "scene": 0,
        "scenes": [{"nodes": [0]}],
        "nodes": [{"mesh": 0, "name": model.name}],
        "meshes": [{"name": model.name, "primitives": primitives}],
        "buffers": [{"byteLength": len(buffers.bin)}],
        "bufferViews": buffers.views,
        "accessors": buffers.accessors,
    }
    if material_names:
        gltf["materials"] = [_gltf_material(mesh.materials[name]) for name in material_names]
    return gltf, buffers.bin


def save_gltf(path: PathLike, model: Model, *, embed_buffer: bool = False) -> None:
    """
    Save glTF 2.0 .gltf.
    - embed_buffer=False => writes sibling .bin
    - embed_buffer=True => one .gltf file with base64 buffer
    """
    check_exportable(model)
    path = Path(path)
    gltf, blob = _build_document(model)

    if embed_buffer:
        uri = "data:application/octet-stream;base64," + base64.b64encode(bytes(blob)).decode("ascii")
        gltf["buffers"][0]["uri"] = uri
    else:
        bin_path = path.with_suffix(".bin")
        gltf["buffers"][0]["uri"] = bin_path.name
        with open_output(bin_path, "wb") as bf:
            bf.write(bytes(blob))

    with open_output(path) as f:
        json.dump(gltf, f, ensure_ascii=False, indent=2)
    logger.info("wrote glTF %s (%d vertices, %d bytes of buffer)", path, len(model.mesh.vertices), len(blob))


def save_glb(path: PathLike, model: Model) -> None:
    """Save GLB (binary glTF 2.0) in one file."""
    check_exportable(model)
    gltf, blob = _build_document(model)

    json_bytes = json.dumps(gltf, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    json_chunk = json_bytes + b" " * (_pad4(len(json_bytes)) - len(json_bytes))

    bin_bytes = bytes(blob)
    bin_chunk = bin_bytes + b"\x00" * (_pad4(len(bin_bytes)) - len(bin_bytes))

    total_len = 12 + 8 + len(json_chunk) + 8 + len(bin_chunk)

    with open_output(path, "wb") as f:
        f.write(b"glTF")
        f.write(struct.pack("<I", 2))
        f.write(struct.pack("<I", total_len))

        f.write(struct.pack("<I", len(json_chunk)))
        f.write(b"JSON")
        f.write(json_chunk)

        f.write(struct.pack("<I", len(bin_chunk)))
        f.write(b"BIN\x00")
        f.write(bin_chunk)
    logger.info("wrote GLB %s (%d bytes)", path, total_len)
