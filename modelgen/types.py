"""Core geometric types: vertices, faces, meshes, materials and models."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .errors import InvalidModelError
from .linalg import Vec2, Vec3, Tri, v_add, v_cross, v_len, v_norm, v_sub

if TYPE_CHECKING:
    from .transforms.base import Transform

PathLike = Union[str, Path]
RGBA = Tuple[float, float, float, float]


@dataclass
class Vertex:
    position: Vec3
    normal: Vec3 = (0.0, 0.0, 0.0)
    tex_coords: Optional[Vec2] = None

    @classmethod
    def with_position(cls, x: float, y: float, z: float) -> "Vertex":
        return cls((float(x), float(y), float(z)))


@dataclass
class Face:
    indices: List[int]

    @classmethod
    def triangle(cls, a: int, b: int, c: int) -> "Face":
        return cls([a, b, c])

    @classmethod
    def quad(cls, a: int, b: int, c: int, d: int) -> "Face":
        return cls([a, b, c, d])

    def reverse(self) -> None:
        self.indices.reverse()

    def triangles(self) -> Iterator[Tri]:
        """Fan triangulation around the first index."""
        idx = self.indices
        for k in range(1, len(idx) - 1):
            yield (idx[0], idx[k], idx[k + 1])

    def __len__(self) -> int:
        return len(self.indices)


class TextureType(Enum):
    DIFFUSE = "diffuse"
    NORMAL = "normal"
    SPECULAR = "specular"
    ROUGHNESS = "roughness"
    METALLIC = "metallic"
    EMISSION = "emission"
    OCCLUSION = "occlusion"


@dataclass
class Material:
    name: str
    ambient: RGBA = (0.2, 0.2, 0.2, 1.0)
    diffuse: RGBA = (0.8, 0.8, 0.8, 1.0)
    specular: RGBA = (1.0, 1.0, 1.0, 1.0)
    shininess: float = 32.0
    textures: Dict[TextureType, str] = field(default_factory=dict)


# --------------
# Mesh container
# --------------

@dataclass
class Mesh:
    vertices: List[Vertex] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)
    materials: Dict[str, Material] = field(default_factory=dict)
    face_materials: List[Optional[str]] = field(default_factory=list)  # aligned 1:1 with faces

    def add_vertex(self, vertex: Vertex) -> int:
        self.vertices.append(vertex)
        return len(self.vertices) - 1

    def add_face(self, face: Face, material: Optional[str] = None) -> int:
        self.faces.append(face)
        self.face_materials.append(material)
        return len(self.faces) - 1

    def add_material(self, material: Material) -> None:
        self.materials[material.name] = material

    def copy(self) -> "Mesh":
        return copy.deepcopy(self)

    # ---- analysis ----
    def bounds(self) -> Tuple[Vec3, Vec3]:
        if not self.vertices:
            raise InvalidModelError("cannot compute bounds of an empty mesh")
        xs = [v.position[0] for v in self.vertices]
        ys = [v.position[1] for v in self.vertices]
        zs = [v.position[2] for v in self.vertices]
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))

    def triangles(self) -> Iterable[Tri]:
        for face in self.faces:
            yield from face.triangles()

    def has_tex_coords(self) -> bool:
        return any(v.tex_coords is not None for v in self.vertices)

    def validate(self) -> None:
        n = len(self.vertices)
        if len(self.face_materials) != len(self.faces):
            raise InvalidModelError(
                f"face_materials has {len(self.face_materials)} entries for {len(self.faces)} faces"
            )
        for fi, face in enumerate(self.faces):
            if len(face.indices) < 3:
                raise InvalidModelError(f"face {fi} has fewer than 3 vertices")
            for idx in face.indices:
                if idx < 0 or idx >= n:
                    raise InvalidModelError(f"face {fi} index out of range: {idx}")
        for name in self.face_materials:
            if name is not None and name not in self.materials:
                raise InvalidModelError(f"face references unknown material {name!r}")

    # ---- shading ----
    def compute_normals(self) -> "Mesh":
        """Smooth normals: average adjacent face normals per vertex."""
        normals: List[Vec3] = [(0.0, 0.0, 0.0) for _ in self.vertices]
        for face in self.faces:
            if len(face.indices) < 3:
                continue
            a, b, c = face.indices[:3]
            va, vb, vc = self.vertices[a].position, self.vertices[b].position, self.vertices[c].position
            n = v_norm(v_cross(v_sub(vb, va), v_sub(vc, va)))
            for i in face.indices:
                normals[i] = v_add(normals[i], n)
        for vertex, n in zip(self.vertices, normals):
            # isolated or degenerate vertices fall back to +Y
            vertex.normal = v_norm(n) if v_len(n) > 0.0 else (0.0, 1.0, 0.0)
        return self


# -----
# Model
# -----

@dataclass
class Model:
    name: str = "model"
    mesh: Mesh = field(default_factory=Mesh)

    def apply(self, transform: "Transform") -> "Model":
        """Apply one transform in place. Errors propagate to the caller."""
        transform.apply(self)
        return self

    def apply_all(self, transforms: Iterable["Transform"]) -> "Model":
        """Apply transforms in order, stopping at the first failure."""
        for transform in transforms:
            transform.apply(self)
        return self

    def copy(self) -> "Model":
        return Model(self.name, self.mesh.copy())

    def export_obj(self, path: PathLike) -> None:
        from .exporters.obj import save_obj
        save_obj(path, self)

    def export_stl(self, path: PathLike, binary: bool = True) -> None:
        from .exporters.stl import save_stl
        save_stl(path, self, binary=binary)

    def export_gltf(self, path: PathLike, embed_buffer: bool = False) -> None:
        from .exporters.gltf import save_gltf
        save_gltf(path, self, embed_buffer=embed_buffer)
