"""
Global constants for modelgen.

Numeric tolerances shared by the transforms, primitive defaults and the
settings read from the environment live here so they are not scattered as
magic numbers across modules.

Environment:
    MODELGEN_LOG_LEVEL: default log level name for the CLI (e.g. "DEBUG").
"""
import os

# Transform tolerances
REGION_EPSILON: float = 1e-5         # minimum length of a bend/taper interval
AXIS_EPSILON: float = 1e-6           # distance below which a point is "on" an axis
PARALLEL_EPSILON: float = 1e-6       # |dot -/+ 1| below which directions are (anti)parallel
SMALL_ANGLE: float = 1e-5            # radians; bend treats smaller angles as straight
STRAIGHT_BEND_RADIUS: float = 1000.0
PERSPECTIVE_MIN_DEPTH: float = 0.01  # depth used for points at or behind the eye
NORMAL_EPSILON: float = 1e-6

# Primitive defaults
DEFAULT_SEGMENTS: int = 32
DEFAULT_RINGS: int = 16
MIN_SEGMENTS: int = 3
MIN_RINGS: int = 2

# Export
GENERATOR_NAME: str = "modelgen"

DEFAULT_LOG_LEVEL: str = os.environ.get("MODELGEN_LOG_LEVEL", "WARNING").upper()
