"""Shared checks and file handling for the exporters."""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from ..errors import ExportError, ModelIOError
from ..types import Model, PathLike


def check_exportable(model: Model) -> None:
    """Validate the mesh and refuse to write a file with no geometry."""
    mesh = model.mesh
    if not mesh.vertices or not mesh.faces:
        raise ExportError(f"model {model.name!r} has no geometry to export")
    mesh.validate()


@contextmanager
def open_output(path: PathLike, mode: str = "w") -> Iterator[IO]:
    """Open ``path`` for writing; any OS failure surfaces as ModelIOError."""
    kwargs = {} if "b" in mode else {"encoding": "utf-8", "newline": "\n"}
    try:
        with open(Path(path), mode, **kwargs) as f:
            yield f
    except OSError as e:
        raise ModelIOError(f"cannot write {path}: {e}") from e
