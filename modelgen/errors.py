"""Exception types raised by modelgen.

Every failure derives from :class:`ModelGeneratorError`, so callers that only
want to report and stop can catch that one type.
"""
from __future__ import annotations


class ModelGeneratorError(Exception):
    """Base class for all modelgen errors."""


class ModelIOError(ModelGeneratorError):
    """Reading or writing a file failed."""


class InvalidModelError(ModelGeneratorError):
    """Model data or builder parameters are inconsistent."""


class ExportError(ModelGeneratorError):
    """A model could not be serialized."""


class ModelImportError(ModelGeneratorError):
    """A file could not be parsed into a model."""


class TransformError(ModelGeneratorError):
    """A transform cannot be applied with its parameters."""


class PluginError(ModelGeneratorError):
    """A plugin lookup or plugin run failed."""


__all__ = [
    "ModelGeneratorError",
    "ModelIOError",
    "InvalidModelError",
    "ExportError",
    "ModelImportError",
    "TransformError",
    "PluginError",
]
