"""
typeweave - declaration generator for object-oriented type models.

Renders a pre-built type model (modules, classes, enums, properties,
collections, generics) into TypeScript or C# declaration source through a
pluggable pipeline of formatters and convertors.
"""

from __future__ import annotations

from ._version import get_version
from .core import model
from .core.errors import ConfigError, ModelError, RenderError, TypeweaveError
from .generator import DeclarationGenerator, EnumMode, GenerationMode, OutputMode

__version__ = get_version()

__all__ = [
    "__version__",
    "model",
    "DeclarationGenerator",
    "OutputMode",
    "GenerationMode",
    "EnumMode",
    "TypeweaveError",
    "ModelError",
    "RenderError",
    "ConfigError",
]
