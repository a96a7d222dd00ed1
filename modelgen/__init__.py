"""
modelgen: build, transform and export 3D meshes.

    from modelgen import Cube, Twist, Scale

    model = Cube().size(2.0).build()
    model.apply(Scale(1.0, 3.0, 1.0)).apply(Twist.around_y(30.0))
    model.export_gltf("twisted.gltf")
"""
from .errors import (
    ExportError, InvalidModelError, ModelGeneratorError, ModelImportError, ModelIOError, PluginError,
    TransformError,
)
from .plugin import CompositePlugin, Plugin, PluginRegistry, SmoothNormalsPlugin, TransformPlugin
from .primitives import Cube, Cylinder, Sphere
from .transforms import (
    Bend, Cylindrical, Matrix, Mirror, Orthographic, Perspective, Quaternion, Rotate, Scale, Taper,
    Transform, Translate, Twist,
)
from .types import Face, Material, Mesh, Model, TextureType, Vertex

__version__ = "0.1.0"

__all__ = [
    "Vertex", "Face", "Material", "TextureType", "Mesh", "Model",
    "Transform", "Scale", "Translate", "Rotate", "Matrix", "Mirror", "Quaternion",
    "Bend", "Twist", "Taper", "Perspective", "Orthographic", "Cylindrical",
    "Cube", "Sphere", "Cylinder",
    "Plugin", "PluginRegistry", "TransformPlugin", "CompositePlugin", "SmoothNormalsPlugin",
    "ModelGeneratorError", "ModelIOError", "InvalidModelError", "ExportError", "ModelImportError",
    "TransformError", "PluginError",
]
