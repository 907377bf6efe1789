"""
Module-level types for the typeweave model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .declarations import ClassSpec, EnumSpec


class ModuleSpec(BaseModel):
    """
    A namespace container of classes and enums.

    Attributes:
        name: Namespace name; empty means declarations are emitted at top level
        sort_order: Primary output ordering key
        classes: Member classes
        enums: Member enums
        references: External declaration files this module depends on
    """

    name: str = ""
    sort_order: int = 0
    classes: list[ClassSpec] = Field(default_factory=list)
    enums: list[EnumSpec] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
