"""
Declaration types for the typeweave model.

This module contains class, enum and member declarations. A declaration
belongs to the module that lists it; references to it elsewhere in the model
go through ``ClassRef``/``EnumRef`` by ``full_name``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .types import ClassRef, EnumRef, GenericParameter, TypeRef


class PropertySpec(BaseModel):
    """
    A property, field or constant of a class.

    Attributes:
        name: Member identifier
        type: Referenced type
        is_optional: Render with the optionality marker
        is_ignored: Skip when rendering
        is_constant: Member is a constant (carries ``constant_value``)
        constant_value: Literal value of a constant
        doc: Documentation text
    """

    name: str
    type: TypeRef
    is_optional: bool = False
    is_ignored: bool = False
    is_constant: bool = False
    constant_value: str | int | float | bool | None = None
    doc: str | None = None

    model_config = ConfigDict(frozen=True)


class ClassSpec(BaseModel):
    """
    A class or contract (interface-like class) declaration.

    Attributes:
        name: Short declaration name
        full_name: Host identity, unique across the model
        base: Base class, if any
        interfaces: Implemented (or, for contracts, extended) contracts
        properties: Declared properties
        fields: Declared fields
        constants: Declared constants
        generic_parameters: Generic parameters of the declaration
        is_interface: Declaration is a contract
        is_ignored: Skip when rendering
        doc: Documentation text
    """

    name: str
    full_name: str
    base: ClassRef | None = None
    interfaces: list[ClassRef] = Field(default_factory=list)
    properties: list[PropertySpec] = Field(default_factory=list)
    fields: list[PropertySpec] = Field(default_factory=list)
    constants: list[PropertySpec] = Field(default_factory=list)
    generic_parameters: list[GenericParameter] = Field(default_factory=list)
    is_interface: bool = False
    is_ignored: bool = False
    doc: str | None = None

    model_config = ConfigDict(frozen=True)

    def as_ref(self) -> ClassRef:
        """Reference to this class parameterized by its own generic parameters."""
        return ClassRef(name=self.full_name, generic_arguments=list(self.generic_parameters))

    @property
    def members(self) -> list[PropertySpec]:
        """All properties, fields and constants in declaration order."""
        return [*self.properties, *self.fields, *self.constants]

    @property
    def has_members(self) -> bool:
        """Whether any property or field is left once ignored members are dropped."""
        return any(not p.is_ignored for p in (*self.properties, *self.fields))


class EnumValueSpec(BaseModel):
    """A single enum value: name plus numeric or string literal."""

    name: str
    value: int | str
    doc: str | None = None

    model_config = ConfigDict(frozen=True)


class EnumSpec(BaseModel):
    """
    An enum declaration.

    Attributes:
        name: Short declaration name
        full_name: Host identity, unique across the model
        values: Ordered enum values
        emit_const: Render as ``const enum`` unless overridden globally
        is_ignored: Skip when rendering
        doc: Documentation text
    """

    name: str
    full_name: str
    values: list[EnumValueSpec] = Field(default_factory=list)
    emit_const: bool = True
    is_ignored: bool = False
    doc: str | None = None

    model_config = ConfigDict(frozen=True)

    def as_ref(self) -> EnumRef:
        return EnumRef(name=self.full_name)
