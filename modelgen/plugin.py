"""
Named, reusable model operations.

A plugin wraps a transform (or a sequence of other plugins) under a name so
callers can look it up from a registry and run it against any model.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .errors import PluginError
from .transforms.base import Transform
from .types import Model

logger = logging.getLogger(__name__)


class Plugin(ABC):
    name: str
    description: str

    @abstractmethod
    def process(self, model: Model) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PluginRegistry:
    def __init__(self):
        self._plugins: Dict[str, Plugin] = {}

    def register(self, plugin: Plugin) -> None:
        """Add ``plugin``; a plugin already registered under the same name is replaced."""
        if plugin.name in self._plugins:
            logger.debug("replacing plugin %r", plugin.name)
        self._plugins[plugin.name] = plugin

    def get(self, name: str) -> Optional[Plugin]:
        return self._plugins.get(name)

    def list(self) -> List[Tuple[str, str]]:
        return [(p.name, p.description) for p in self._plugins.values()]

    def process(self, name: str, model: Model) -> None:
        plugin = self.get(name)
        if plugin is None:
            raise PluginError(f"no plugin named {name!r}")
        logger.debug("running plugin %r on %r", name, model.name)
        plugin.process(model)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)


class TransformPlugin(Plugin):
    def __init__(self, name: str, description: str, transform: Transform):
        self.name = name
        self.description = description
        self.transform = transform

    def process(self, model: Model) -> None:
        self.transform.apply(model)


class CompositePlugin(Plugin):
    """Runs child plugins in order; the first failure stops the sequence."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.plugins: List[Plugin] = []

    def add(self, plugin: Plugin) -> "CompositePlugin":
        self.plugins.append(plugin)
        return self

    def process(self, model: Model) -> None:
        for plugin in self.plugins:
            plugin.process(model)


class SmoothNormalsPlugin(Plugin):
    name = "smooth_normals"
    description = "Smooths vertex normals by averaging face normals"

    def process(self, model: Model) -> None:
        model.mesh.compute_normals()
