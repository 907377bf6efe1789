"""
Type naming and module qualification.
"""

from __future__ import annotations

from ..core.model import (
    ClassRef,
    CollectionType,
    EnumRef,
    GenericParameter,
    ModuleSpec,
    SystemType,
    TypeModel,
    TypeRef,
)
from .formatters import ModuleNameFormatter, TypeConvertorRegistry, TypeFormatterRegistry


class TypeNameResolver:
    """
    Computes short and fully-qualified names of type nodes.

    The resolver is bound to one model and one render pass; the registries
    are shared with the generator that created it.

    Attributes:
        model: Model the references resolve against
        formatters: Short-name formatters per node kind
        convertors: Literal overrides per host type
        module_name_formatter: Maps a module to its emitted name
        host_names: Render system types by their host type name (C# output)
    """

    def __init__(
        self,
        model: TypeModel,
        formatters: TypeFormatterRegistry,
        convertors: TypeConvertorRegistry,
        module_name_formatter: ModuleNameFormatter,
        host_names: bool = False,
    ):
        self.model = model
        self.formatters = formatters
        self.convertors = convertors
        self.module_name_formatter = module_name_formatter
        self.host_names = host_names

    @staticmethod
    def host_type_of(node: TypeRef) -> str | None:
        """Host identity key a convertor would be registered under."""
        if isinstance(node, (ClassRef, EnumRef)):
            return node.name
        if isinstance(node, (SystemType, CollectionType)):
            return node.host_type
        return None

    def has_convertor(self, node: TypeRef) -> bool:
        return self.convertors.is_registered(self.host_type_of(node))

    def type_name(self, node: TypeRef) -> str:
        """Short name of a type: convertor text, or the formatter for its kind."""
        if self.host_names and isinstance(node, SystemType) and node.host_type:
            return node.host_type.rsplit(".", 1)[-1]

        host_type = self.host_type_of(node)
        if self.convertors.is_registered(host_type):
            return self.convertors.convert(host_type, node)

        return self.formatters.format(node, self)

    def qualified_type_name(self, node: TypeRef) -> str:
        """Short name prefixed with the owning module's name, when there is one."""
        if isinstance(node, GenericParameter):
            return self.type_name(node)

        module_name = ""
        if isinstance(node, (ClassRef, EnumRef)) and not self.has_convertor(node):
            module = self.model.module_of(node)
            if module is not None:
                module_name = self.module_name(module, node)
        elif isinstance(node, CollectionType) and not self.has_convertor(node):
            module_name = self.collection_module_name(node)

        name = self.type_name(node)
        if module_name:
            return f"{module_name}.{name}"
        return name

    def collection_module_name(self, collection: CollectionType) -> str:
        """
        Module of the innermost item type, piercing every nesting level.

        A nested collection with a convertor is never qualified.
        """
        leaf: TypeRef = collection
        while isinstance(leaf, CollectionType):
            if self.has_convertor(leaf):
                return ""
            leaf = leaf.items
        if isinstance(leaf, (ClassRef, EnumRef)) and not self.has_convertor(leaf):
            module = self.model.module_of(leaf)
            if module is not None:
                return self.module_name(module, leaf)
        return ""

    def module_name(self, module: ModuleSpec, node: TypeRef | None = None) -> str:
        return self.module_name_formatter(module, node)
