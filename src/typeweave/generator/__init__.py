"""
Declaration generation.

Provides:
- DeclarationGenerator: renders a TypeModel to declaration source
- TypeNameResolver: short and module-qualified type names
- Formatter and convertor registries
- ScriptBuilder: text accumulation with scoped indentation
- Documentation and log hooks
"""

from ..core.config import EnumMode, GenerationMode, GeneratorConfig, OutputMode
from .docs import CommentDocAppender, DocAppender, NullDocAppender
from .formatters import TypeConvertorRegistry, TypeFormatterRegistry
from .log import FileRenderLog, LoggerRenderLog, RenderLog
from .renderer import DeclarationGenerator
from .resolver import TypeNameResolver
from .result import GeneratorResult
from .script_builder import ScriptBuilder

__all__ = [
    "DeclarationGenerator",
    "GeneratorConfig",
    "GeneratorResult",
    "OutputMode",
    "GenerationMode",
    "EnumMode",
    "TypeNameResolver",
    "TypeFormatterRegistry",
    "TypeConvertorRegistry",
    "ScriptBuilder",
    "DocAppender",
    "NullDocAppender",
    "CommentDocAppender",
    "RenderLog",
    "LoggerRenderLog",
    "FileRenderLog",
]
