"""
typeweave type model.

Immutable graph of modules, classes, enums, members and type references
consumed by the declaration generator. All types are re-exported here.
"""

from .declarations import (
    ClassSpec,
    EnumSpec,
    EnumValueSpec,
    PropertySpec,
)
from .module import ModuleSpec
from .typemodel import TypeModel, load_model
from .types import (
    ClassRef,
    CollectionType,
    EnumRef,
    GenericParameter,
    SystemType,
    SystemTypeKind,
    TypeKind,
    TypeRef,
    walk_type,
)

__all__ = [
    "TypeKind",
    "SystemTypeKind",
    "SystemType",
    "GenericParameter",
    "EnumRef",
    "ClassRef",
    "CollectionType",
    "TypeRef",
    "walk_type",
    "PropertySpec",
    "ClassSpec",
    "EnumValueSpec",
    "EnumSpec",
    "ModuleSpec",
    "TypeModel",
    "load_model",
]
