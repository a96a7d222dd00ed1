"""Command-line front end: build a primitive, transform it, write it out."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_LOG_LEVEL, DEFAULT_RINGS, DEFAULT_SEGMENTS
from .errors import ExportError, ModelGeneratorError
from .exporters import save_glb, save_gltf, save_obj, save_stl
from .logging_config import setup_logging
from .primitives import Cube, Cylinder, Sphere
from .transforms import Rotate, Scale, Transform, Translate
from .types import Model

logger = logging.getLogger(__name__)

_DEF_HELP = """
Examples:
  modelgen cube --size 2 cube.obj
  modelgen sphere --radius 1 --segments 48 --rings 24 sphere.gltf
  modelgen cylinder --radius 0.5 --height 3 --no-caps tube.stl
  modelgen cube --scale 1,2,1 --rotate y,45 --translate 0,1,0 box.glb

Transforms run in the order scale, rotate, translate.
Output format is chosen by extension: .obj .stl .gltf .glb
"""

SUPPORTED_EXTENSIONS = (".obj", ".stl", ".gltf", ".glb")


def _parse_triplet(text: str, what: str) -> Tuple[float, float, float]:
    parts = text.split(",")
    if len(parts) != 3:
        raise ValueError(f"{what} expects X,Y,Z, got {text!r}")
    try:
        x, y, z = (float(p) for p in parts)
    except ValueError:
        raise ValueError(f"{what} expects numbers, got {text!r}") from None
    return x, y, z


def _parse_rotation(text: str) -> Tuple[str, float]:
    parts = text.split(",")
    if len(parts) != 2 or parts[0].strip().lower() not in ("x", "y", "z"):
        raise ValueError(f"--rotate expects AXIS,DEGREES with AXIS one of x, y, z; got {text!r}")
    try:
        return parts[0].strip().lower(), float(parts[1])
    except ValueError:
        raise ValueError(f"--rotate expects a numeric angle, got {parts[1]!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--center", default="0,0,0", help="Center position X,Y,Z")
    common.add_argument("--scale", help="Scale factors X,Y,Z")
    common.add_argument("--rotate", help="Rotation AXIS,DEGREES (e.g. y,45)")
    common.add_argument("--translate", help="Translation X,Y,Z")
    common.add_argument("--ascii-stl", action="store_true", help="Write ASCII instead of binary STL")
    common.add_argument("--embed", action="store_true", help="Embed the glTF buffer as base64")
    common.add_argument("--log-level", default=DEFAULT_LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    common.add_argument("output", help="Output path (.obj/.stl/.gltf/.glb)")

    p = argparse.ArgumentParser(prog="modelgen", description="modelgen: procedural 3D model generator",
                                epilog=_DEF_HELP, formatter_class=argparse.RawTextHelpFormatter)
    shapes = p.add_subparsers(dest="shape", metavar="SHAPE")
    shapes.required = True

    cube = shapes.add_parser("cube", parents=[common], help="Generate a cube")
    cube.add_argument("--size", type=float, default=1.0)

    sphere = shapes.add_parser("sphere", parents=[common], help="Generate a sphere")
    sphere.add_argument("--radius", type=float, default=1.0)
    sphere.add_argument("--segments", type=int, default=DEFAULT_SEGMENTS)
    sphere.add_argument("--rings", type=int, default=DEFAULT_RINGS)

    cyl = shapes.add_parser("cylinder", parents=[common], help="Generate a cylinder")
    cyl.add_argument("--radius", type=float, default=1.0)
    cyl.add_argument("--height", type=float, default=2.0)
    cyl.add_argument("--segments", type=int, default=DEFAULT_SEGMENTS)
    cyl.add_argument("--no-caps", action="store_true", help="Leave the ends open")
    return p


def build_model(args: argparse.Namespace) -> Model:
    center = _parse_triplet(args.center, "--center")
    if args.shape == "cube":
        return Cube().size(args.size).center(*center).build()
    if args.shape == "sphere":
        return Sphere().radius(args.radius).segments(args.segments).rings(args.rings).center(*center).build()
    return (Cylinder().radius(args.radius).height(args.height).segments(args.segments)
            .caps(not args.no_caps).center(*center).build())


def build_transforms(args: argparse.Namespace) -> List[Transform]:
    transforms: List[Transform] = []
    if args.scale:
        transforms.append(Scale(*_parse_triplet(args.scale, "--scale")))
    if args.rotate:
        axis, degrees = _parse_rotation(args.rotate)
        transforms.append({"x": Rotate.around_x, "y": Rotate.around_y, "z": Rotate.around_z}[axis](degrees))
    if args.translate:
        transforms.append(Translate(*_parse_triplet(args.translate, "--translate")))
    return transforms


def export(model: Model, output: str, ascii_stl: bool = False, embed: bool = False) -> None:
    ext = Path(output).suffix.lower()
    if ext == ".obj":
        save_obj(output, model)
    elif ext == ".stl":
        save_stl(output, model, binary=not ascii_stl)
    elif ext == ".gltf":
        save_gltf(output, model, embed_buffer=embed)
    elif ext == ".glb":
        save_glb(output, model)
    else:
        raise ExportError(f"unsupported output format {ext or output!r}; use one of {', '.join(SUPPORTED_EXTENSIONS)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help exits 0; usage errors are reported as failures
        return 0 if not e.code else 1

    setup_logging(args.log_level)
    try:
        model = build_model(args)
        transforms = build_transforms(args)
        logger.debug("applying %s to %s", transforms, model.name)
        model.apply_all(transforms)
        export(model, args.output, ascii_stl=args.ascii_stl, embed=args.embed)
    except (ModelGeneratorError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Model saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
