"""
Documentation hooks for generated declarations.

The generator calls a ``DocAppender`` right before it writes a class, an
enum, a member, an enum value or a constant. The default appender writes
nothing; ``CommentDocAppender`` turns the model's ``doc`` text into
``/** ... */`` blocks, which both TypeScript and C# accept.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.model import ClassSpec, EnumSpec, EnumValueSpec, PropertySpec
from .script_builder import ScriptBuilder

# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class DocAppender(Protocol):
    """Writes documentation ahead of generated declarations."""

    def append_class_doc(self, sb: ScriptBuilder, cls: ClassSpec, type_name: str) -> None: ...

    def append_enum_doc(self, sb: ScriptBuilder, enum: EnumSpec, type_name: str) -> None: ...

    def append_property_doc(
        self, sb: ScriptBuilder, prop: PropertySpec, name: str, type_name: str
    ) -> None: ...

    def append_enum_value_doc(self, sb: ScriptBuilder, value: EnumValueSpec) -> None: ...

    def append_constant_doc(
        self, sb: ScriptBuilder, prop: PropertySpec, name: str, type_name: str
    ) -> None: ...


# =============================================================================
# Implementations
# =============================================================================


class NullDocAppender:
    """Appends no documentation."""

    def append_class_doc(self, sb: ScriptBuilder, cls: ClassSpec, type_name: str) -> None:
        pass

    def append_enum_doc(self, sb: ScriptBuilder, enum: EnumSpec, type_name: str) -> None:
        pass

    def append_property_doc(
        self, sb: ScriptBuilder, prop: PropertySpec, name: str, type_name: str
    ) -> None:
        pass

    def append_enum_value_doc(self, sb: ScriptBuilder, value: EnumValueSpec) -> None:
        pass

    def append_constant_doc(
        self, sb: ScriptBuilder, prop: PropertySpec, name: str, type_name: str
    ) -> None:
        pass


class CommentDocAppender:
    """Writes ``doc`` text from the model as block comments."""

    def _append(self, sb: ScriptBuilder, doc: str | None) -> None:
        if not doc or not doc.strip():
            return
        lines = doc.strip().splitlines()
        if len(lines) == 1:
            sb.append_line_indented(f"/** {lines[0].strip()} */")
            return
        sb.append_line_indented("/**")
        for line in lines:
            text = line.rstrip()
            sb.append_line_indented(f" * {text}" if text else " *")
        sb.append_line_indented(" */")

    def append_class_doc(self, sb: ScriptBuilder, cls: ClassSpec, type_name: str) -> None:
        self._append(sb, cls.doc)

    def append_enum_doc(self, sb: ScriptBuilder, enum: EnumSpec, type_name: str) -> None:
        self._append(sb, enum.doc)

    def append_property_doc(
        self, sb: ScriptBuilder, prop: PropertySpec, name: str, type_name: str
    ) -> None:
        self._append(sb, prop.doc)

    def append_enum_value_doc(self, sb: ScriptBuilder, value: EnumValueSpec) -> None:
        self._append(sb, value.doc)

    def append_constant_doc(
        self, sb: ScriptBuilder, prop: PropertySpec, name: str, type_name: str
    ) -> None:
        self._append(sb, prop.doc)
