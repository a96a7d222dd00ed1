from __future__ import annotations

import pytest

from modelgen.primitives import Cube
from modelgen.types import Model


@pytest.fixture
def unit_cube() -> Model:
    """Unit cube centred on the origin: 8 shared corners, 12 triangles."""
    return Cube().build()
