from .gltf import save_glb, save_gltf
from .obj import load_obj, save_mtl, save_obj
from .stl import save_stl, save_stl_ascii, save_stl_binary

__all__ = [
    "save_obj", "save_mtl", "load_obj",
    "save_stl", "save_stl_binary", "save_stl_ascii",
    "save_gltf", "save_glb",
]
