"""
Type reference nodes for the typeweave model.

Every place the model points at a type (property types, collection items,
generic arguments, base classes, interfaces) holds one of these nodes.
Classes and enums are referenced by their ``full_name`` and looked up through
the ``TypeModel`` index, so references are never copies of the declaration.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TypeKind(StrEnum):
    """Variant tag of a type node; key of the formatter table."""

    CLASS = "class"
    ENUM = "enum"
    COLLECTION = "collection"
    SYSTEM = "system"
    GENERIC_PARAMETER = "generic_parameter"


class SystemTypeKind(StrEnum):
    """Primitive kinds with a fixed declaration keyword."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ANY = "any"
    VOID = "void"

    @property
    def keyword(self) -> str:
        """TypeScript keyword for this kind."""
        if self is SystemTypeKind.DATE:
            return "Date"
        return self.value


class SystemType(BaseModel):
    """
    Primitive leaf type.

    Attributes:
        system_kind: Which primitive this is
        host_type: Host identity (e.g. "System.Int32"), used for convertor
            lookup and for C# output
    """

    kind: Literal["system"] = "system"
    system_kind: SystemTypeKind
    host_type: str | None = None

    model_config = ConfigDict(frozen=True)


class GenericParameter(BaseModel):
    """Generic type parameter; never qualified with a module."""

    kind: Literal["generic_parameter"] = "generic_parameter"
    name: str

    model_config = ConfigDict(frozen=True)


class EnumRef(BaseModel):
    """Reference to a declared enum by full name."""

    kind: Literal["enum"] = "enum"
    name: str

    model_config = ConfigDict(frozen=True)


class ClassRef(BaseModel):
    """
    Reference to a declared class by full name.

    Attributes:
        name: Full name of the referenced class
        generic_arguments: Type arguments of a closed generic reference;
            empty for non-generic references
    """

    kind: Literal["class"] = "class"
    name: str
    generic_arguments: list[TypeRef] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class CollectionType(BaseModel):
    """
    Array/sequence of another type.

    Attributes:
        items: Wrapped item type (may itself be a collection)
        dimension: Array rank contributed by this level (>= 1)
        host_type: Host identity of the collection type, if any
    """

    kind: Literal["collection"] = "collection"
    items: TypeRef
    dimension: int = Field(default=1, ge=1)
    host_type: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def rank(self) -> int:
        """Total array rank through all nested collection levels."""
        rank = self.dimension
        items = self.items
        while isinstance(items, CollectionType):
            rank += items.dimension
            items = items.items
        return rank

    @property
    def leaf(self) -> TypeRef:
        """Innermost non-collection item type."""
        items = self.items
        while isinstance(items, CollectionType):
            items = items.items
        return items


TypeRef = Annotated[
    Union[SystemType, GenericParameter, EnumRef, ClassRef, CollectionType],
    Field(discriminator="kind"),
]

ClassRef.model_rebuild()
CollectionType.model_rebuild()


def walk_type(node: TypeRef):
    """Yield ``node`` and every type nested in it (collection items, generic arguments)."""
    yield node
    if isinstance(node, CollectionType):
        yield from walk_type(node.items)
    elif isinstance(node, ClassRef):
        for argument in node.generic_arguments:
            yield from walk_type(argument)
