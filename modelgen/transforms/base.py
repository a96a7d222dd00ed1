from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ..errors import TransformError
from ..linalg import Vec3, v_len, v_norm, vec3
from ..types import Model

logger = logging.getLogger(__name__)


class Transform(ABC):
    """An in-place operation on a model's vertex positions, normals and winding.

    ``apply`` rewrites every vertex of ``model.mesh`` and returns ``None``;
    it raises :class:`TransformError` when its parameters cannot be applied.
    Vertex and face counts are never changed.
    """

    @abstractmethod
    def apply(self, model: Model) -> None:
        raise NotImplementedError

    def _log_apply(self, model: Model) -> None:
        logger.debug("%s on %r (%d vertices)", type(self).__name__, model.name, len(model.mesh.vertices))


def unit_axis(axis: Sequence[float], what: str = "axis") -> Vec3:
    """Normalize an axis given by the caller; a zero-length axis is rejected."""
    v = vec3(axis)
    if v_len(v) == 0.0:
        raise TransformError(f"{what} must be a non-zero vector")
    return v_norm(v)
