"""
Formatter and convertor registries.

Two independent extension points decide how a type node becomes text:

- Convertors, keyed by host type identity, replace the rendered name
  outright and switch off module qualification for that type.
- Formatters, keyed by ``TypeKind``, compute the short name of a node.

Both are plain mappings: registering a key again replaces the previous entry.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..core.model import (
    ClassRef,
    CollectionType,
    EnumRef,
    GenericParameter,
    PropertySpec,
    SystemType,
    TypeKind,
    TypeRef,
)

if TYPE_CHECKING:
    from ..core.model import ClassSpec, ModuleSpec
    from .resolver import TypeNameResolver

TypeFormatter = Callable[[TypeRef, "TypeNameResolver"], str]
TypeConvertor = Callable[[TypeRef], str]
MemberIdentifierFormatter = Callable[[PropertySpec], str]
MemberTypeFormatter = Callable[[PropertySpec, str], str]
TypeVisibilityFormatter = Callable[["ClassSpec", str], bool]
ModuleNameFormatter = Callable[["ModuleSpec", "TypeRef | None"], str]


# =============================================================================
# Registries
# =============================================================================


class TypeFormatterRegistry:
    """Short-name formatters per node kind."""

    def __init__(self) -> None:
        self._formatters: dict[TypeKind, TypeFormatter] = {}

    def register(self, kind: TypeKind | str, formatter: TypeFormatter) -> None:
        """Register (or replace) the formatter for a node kind."""
        self._formatters[TypeKind(kind)] = formatter

    def get(self, kind: TypeKind | str) -> TypeFormatter | None:
        return self._formatters.get(TypeKind(kind))

    def format(self, node: TypeRef, resolver: TypeNameResolver) -> str:
        formatter = self._formatters.get(TypeKind(node.kind))
        if formatter is None:
            raise KeyError(f"No formatter registered for {node.kind} types")
        return formatter(node, resolver)

    def as_mapping(self) -> Mapping[TypeKind, TypeFormatter]:
        """Read-only view of the registered formatters."""
        return MappingProxyType(self._formatters)


class TypeConvertorRegistry:
    """Literal overrides per host type identity."""

    def __init__(self) -> None:
        self._convertors: dict[str, TypeConvertor] = {}

    def register(self, host_type: str, convertor: TypeConvertor | str) -> None:
        """
        Register (or replace) the convertor for a host type.

        Args:
            host_type: Host identity (class/enum full name or system host type)
            convertor: Function of the node, or the literal text to emit
        """
        if isinstance(convertor, str):
            text = convertor
            convertor = lambda _node: text  # noqa: E731
        self._convertors[host_type] = convertor

    def unregister(self, host_type: str) -> None:
        self._convertors.pop(host_type, None)

    def is_registered(self, host_type: str | None) -> bool:
        return host_type is not None and host_type in self._convertors

    def convert(self, host_type: str, node: TypeRef) -> str:
        return self._convertors[host_type](node)

    def __len__(self) -> int:
        return len(self._convertors)


# =============================================================================
# Default type formatters
# =============================================================================


def array_rank(node: TypeRef, convertors: TypeConvertorRegistry | None = None) -> int:
    """
    Array rank rendered for a node.

    Counting stops at the first collection level that has a convertor; the
    convertor text covers that level and every level below it.
    """
    rank = 0
    while isinstance(node, CollectionType):
        if convertors is not None and convertors.is_registered(node.host_type):
            break
        rank += node.dimension
        node = node.items
    return rank


def array_suffix(node: TypeRef, convertors: TypeConvertorRegistry | None = None) -> str:
    """One ``[]`` per rendered array rank when the node is a collection."""
    return "[]" * array_rank(node, convertors)


def format_system_type(node: SystemType, resolver: TypeNameResolver) -> str:
    return node.system_kind.keyword


def format_class(node: ClassRef, resolver: TypeNameResolver) -> str:
    name = resolver.model.get_class(node.name).name
    if not node.generic_arguments:
        return name
    arguments = ", ".join(
        resolver.qualified_type_name(argument) + array_suffix(argument, resolver.convertors)
        for argument in node.generic_arguments
    )
    return f"{name}<{arguments}>"


def format_collection(node: CollectionType, resolver: TypeNameResolver) -> str:
    # The array suffix belongs to the member type formatter
    return resolver.type_name(node.items)


def format_enum(node: EnumRef, resolver: TypeNameResolver) -> str:
    return resolver.model.get_enum(node.name).name


def format_generic_parameter(node: GenericParameter, resolver: TypeNameResolver) -> str:
    return node.name


def default_type_formatters() -> TypeFormatterRegistry:
    registry = TypeFormatterRegistry()
    registry.register(TypeKind.SYSTEM, format_system_type)
    registry.register(TypeKind.CLASS, format_class)
    registry.register(TypeKind.COLLECTION, format_collection)
    registry.register(TypeKind.ENUM, format_enum)
    registry.register(TypeKind.GENERIC_PARAMETER, format_generic_parameter)
    return registry


# =============================================================================
# Default member formatters
# =============================================================================


def default_member_identifier(prop: PropertySpec) -> str:
    return prop.name


def default_member_type(convertors: TypeConvertorRegistry) -> MemberTypeFormatter:
    """Member type formatter appending the array suffix of the property type."""

    def format_member_type(prop: PropertySpec, type_name: str) -> str:
        return type_name + array_suffix(prop.type, convertors)

    return format_member_type


def default_type_visibility(cls: ClassSpec, type_name: str) -> bool:
    return True


def default_module_name(module: ModuleSpec, node: TypeRef | None = None) -> str:
    return module.name
