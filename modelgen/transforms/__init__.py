from .base import Transform
from .basic import Rotate, Scale, Translate
from .advanced import Matrix, Mirror, Quaternion
from .deform import Bend, Taper, Twist
from .projection import Cylindrical, Orthographic, Perspective

__all__ = [
    "Transform",
    "Scale", "Translate", "Rotate",
    "Matrix", "Mirror", "Quaternion",
    "Bend", "Twist", "Taper",
    "Perspective", "Orthographic", "Cylindrical",
]
