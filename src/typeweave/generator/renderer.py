"""
Declaration generator.

Walks a ``TypeModel`` and renders TypeScript declarations (interfaces and
namespaces, or classes and modules) or C# declarations, depending on the
generation mode and the output flags of the call.

Rendering is a pure in-memory transform: every ``generate`` call builds its
own resolver and text builder, so calls with different output modes against
the same model are independent.
"""

from __future__ import annotations

import json
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path

from ..core.config import (
    DEFAULT_OUTPUT,
    EnumMode,
    GenerationMode,
    GeneratorConfig,
    OutputMode,
)
from ..core.errors import ErrorContext, RenderError
from ..core.model import (
    ClassRef,
    ClassSpec,
    EnumSpec,
    EnumValueSpec,
    ModuleSpec,
    PropertySpec,
    SystemType,
    SystemTypeKind,
    TypeKind,
    TypeModel,
    TypeRef,
)
from .docs import DocAppender, NullDocAppender
from .formatters import (
    MemberIdentifierFormatter,
    MemberTypeFormatter,
    ModuleNameFormatter,
    TypeConvertor,
    TypeConvertorRegistry,
    TypeFormatter,
    TypeVisibilityFormatter,
    default_member_identifier,
    default_member_type,
    default_module_name,
    default_type_formatters,
    default_type_visibility,
)
from .log import FileRenderLog, LoggerRenderLog, RenderLog
from .resolver import TypeNameResolver
from .result import GeneratorResult
from .script_builder import ScriptBuilder

logger = logging.getLogger(__name__)

CLASS_OUTPUT = OutputMode.PROPERTIES | OutputMode.FIELDS

# Type names C# output cannot use for a member
UNTYPED_CSHARP_NAMES = frozenset({"any", "number"})

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass
class RenderContext:
    """State of a single render pass."""

    model: TypeModel
    output: OutputMode
    resolver: TypeNameResolver
    sb: ScriptBuilder
    result: GeneratorResult = field(default_factory=GeneratorResult)
    module: ModuleSpec | None = None

    @property
    def csharp(self) -> bool:
        return bool(self.output & OutputMode.CSHARP)

    @property
    def classes(self) -> bool:
        return bool(self.output & CLASS_OUTPUT)

    @property
    def constant_blocks(self) -> bool:
        """Constant namespaces are written for CONSTANTS without class output (TS only)."""
        return bool(self.output & OutputMode.CONSTANTS) and not self.csharp and not self.classes


class DeclarationGenerator:
    """
    Generates declarations from the type model.

    Example:
        generator = DeclarationGenerator()
        generator.register_type_convertor("System.Guid", "string")
        text = generator.generate(model, OutputMode.PROPERTIES | OutputMode.ENUMS)

    Attributes:
        indentation: String for a single indentation level
        mode: Declaration-only or implementation classes
        enum_mode: Numeric or string enum values
        const_enums: Global ``const enum`` override; None lets each enum decide
        default_output: Output used when ``generate`` is called without one
        log: Sink for skip and conflict messages
    """

    def __init__(
        self,
        *,
        indentation: str = "\t",
        mode: GenerationMode = GenerationMode.DEFINITIONS,
        enum_mode: EnumMode = EnumMode.NUMBER,
        const_enums: bool | None = None,
        default_output: OutputMode = DEFAULT_OUTPUT,
        log: RenderLog | None = None,
    ):
        self.indentation = indentation
        self.mode = mode
        self.enum_mode = enum_mode
        self.const_enums = const_enums
        self.default_output = default_output
        self.log: RenderLog = log or LoggerRenderLog()

        self._type_formatters = default_type_formatters()
        self._type_convertors = TypeConvertorRegistry()
        self._member_formatter: MemberIdentifierFormatter = default_member_identifier
        self._member_type_formatter: MemberTypeFormatter = default_member_type(self._type_convertors)
        self._type_visibility_formatter: TypeVisibilityFormatter = default_type_visibility
        self._module_name_formatter: ModuleNameFormatter = default_module_name
        self._doc_appender: DocAppender = NullDocAppender()
        self._references: list[str] = []

    @classmethod
    def from_config(cls, config: GeneratorConfig, log: RenderLog | None = None) -> DeclarationGenerator:
        """Create a generator configured from ``GeneratorConfig``."""
        if log is None and config.log_file is not None:
            log = FileRenderLog(config.log_file)
        generator = cls(
            indentation=config.indentation,
            mode=config.mode,
            enum_mode=config.enum_mode,
            const_enums=config.const_enums,
            default_output=config.output,
            log=log,
        )
        for host_type, text in config.convertors.items():
            generator.register_type_convertor(host_type, text)
        for reference in config.references:
            generator.add_reference(reference)
        return generator

    # =========================================================================
    # Extension points
    # =========================================================================

    @property
    def formatters(self):
        """Read-only view of the type formatters per node kind."""
        return self._type_formatters.as_mapping()

    @property
    def references(self) -> list[str]:
        return list(self._references)

    def register_type_formatter(self, kind: TypeKind | str, formatter: TypeFormatter) -> None:
        """
        Register the formatter for a node kind.

        If a formatter for the kind is already registered, it is replaced.
        """
        self._type_formatters.register(kind, formatter)

    def register_type_convertor(self, host_type: str, convertor: TypeConvertor | str) -> None:
        """
        Register a convertor for a host type.

        The convertor's text is used verbatim and the type is never
        qualified with a module. Declarations with a convertor are not emitted.
        If a convertor for the host type is already registered, it is replaced.
        """
        self._type_convertors.register(host_type, convertor)

    def set_identifier_formatter(self, formatter: MemberIdentifierFormatter) -> None:
        self._member_formatter = formatter

    def set_member_type_formatter(self, formatter: MemberTypeFormatter) -> None:
        self._member_type_formatter = formatter

    def set_type_visibility_formatter(self, formatter: TypeVisibilityFormatter) -> None:
        self._type_visibility_formatter = formatter

    def set_module_name_formatter(self, formatter: ModuleNameFormatter) -> None:
        self._module_name_formatter = formatter

    def set_doc_appender(self, appender: DocAppender) -> None:
        self._doc_appender = appender

    def add_reference(self, reference: str) -> None:
        """Add a declaration file to reference at the top of the output."""
        self._references.append(reference)

    # =========================================================================
    # Entry points
    # =========================================================================

    def resolver(self, model: TypeModel, output: OutputMode | None = None) -> TypeNameResolver:
        """Name resolver bound to a model with this generator's registries."""
        output = self.default_output if output is None else output
        return TypeNameResolver(
            model,
            self._type_formatters,
            self._type_convertors,
            self._module_name_formatter,
            host_names=bool(output & OutputMode.CSHARP),
        )

    def generate(self, model: TypeModel, output: OutputMode | None = None) -> str:
        """
        Generate declarations for classes and/or enums in the model.

        Args:
            model: The type model to render
            output: Which declarations to emit; defaults to ``default_output``

        Returns:
            Declaration source

        Raises:
            RenderError: If a member cannot be rendered in the requested output
        """
        return self.render(model, output).text

    def render(self, model: TypeModel, output: OutputMode | None = None) -> GeneratorResult:
        """Like ``generate``, returning the text together with warnings."""
        output = self.default_output if output is None else OutputMode(output)
        ctx = RenderContext(
            model=model,
            output=output,
            resolver=self.resolver(model, output),
            sb=ScriptBuilder(self.indentation),
        )

        if output & OutputMode.CONSTANTS and ctx.classes:
            # Declaration files cannot carry values; tolerated, constant blocks are left out
            warning = "Constants requested together with properties or fields; constant blocks are skipped"
            logger.warning(warning)
            self.log(warning)
            ctx.result.add_warning(warning)

        if not ctx.csharp and ctx.classes:
            references = self._collect_references(model)
            for reference in references:
                self.append_reference(ctx, reference)
            if references:
                ctx.sb.append_line()

        # A module name formatter can rename modules, so order by the emitted name
        modules = sorted(
            model.modules,
            key=lambda m: (m.sort_order, ctx.resolver.module_name(m)),
        )
        for module in modules:
            ctx.module = module
            self.append_module(ctx, module)
        ctx.module = None

        ctx.result.text = ctx.sb.to_string()
        return ctx.result

    def generate_file(
        self, model: TypeModel, path: Path, output: OutputMode | None = None
    ) -> GeneratorResult:
        """Render the model and write it to ``path``."""
        result = self.render(model, output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result.text, encoding="utf-8")
        result.add_file(path)
        self.log(f"Wrote {path}")
        return result

    # =========================================================================
    # Document and modules
    # =========================================================================

    def _collect_references(self, model: TypeModel) -> list[str]:
        references = [*self._references, *model.references]
        for module in model.modules:
            references.extend(module.references)
        return list(dict.fromkeys(references))

    def append_reference(self, ctx: RenderContext, reference: str) -> None:
        ctx.sb.append_line(f'/// <reference path="{reference}" />')

    def append_module(self, ctx: RenderContext, module: ModuleSpec) -> None:
        resolver = ctx.resolver
        sb = ctx.sb
        module_name = resolver.module_name(module)

        classes = []
        for cls in module.classes:
            if cls.is_ignored:
                self.log(f"Skipping ignored class {cls.full_name}")
            elif not self._type_convertors.is_registered(cls.full_name):
                classes.append(cls)
        classes.sort(key=lambda c: resolver.type_name(c.as_ref()))

        enums = []
        for enum in module.enums:
            if enum.is_ignored:
                self.log(f"Skipping ignored enum {enum.full_name}")
            elif not self._type_convertors.is_registered(enum.full_name):
                enums.append(enum)
        enums.sort(key=lambda e: resolver.type_name(e.as_ref()))

        if not self._module_contributes(ctx, classes, enums):
            self.log(f"Skipping module '{module_name}': nothing to emit for {ctx.output!r}")
            return

        has_header = module_name != ""
        if has_header:
            if ctx.csharp:
                sb.append_line_indented(f"namespace {module_name}")
                sb.append_line_indented("{")
            else:
                keyword = "namespace" if self.mode is GenerationMode.DEFINITIONS else "module"
                sb.append_line_indented(f"export {keyword} {module_name} {{")

        with sb.indent() if has_header else nullcontext():
            if ctx.output & OutputMode.ENUMS:
                for enum in enums:
                    self.append_enum(ctx, enum)

            if ctx.classes:
                base_classes, derived_classes = self._order_classes(ctx.model, classes)
                for cls in base_classes:
                    self.append_class(ctx, cls)
                for cls in derived_classes:
                    self.append_class(ctx, cls)

            if ctx.constant_blocks:
                for cls in classes:
                    self.append_constant_module(ctx, cls)

        if has_header:
            sb.append_line_indented("}")

    def _module_contributes(
        self, ctx: RenderContext, classes: list[ClassSpec], enums: list[EnumSpec]
    ) -> bool:
        output = ctx.output
        emits_enums = bool(output & OutputMode.ENUMS) and bool(enums)
        emits_classes = ctx.classes and bool(classes)
        if output == OutputMode.PROPERTIES:
            emits_classes = any(cls.has_members for cls in classes)
        emits_constants = ctx.constant_blocks and any(
            not c.is_ignored for cls in classes for c in cls.constants
        )
        return emits_enums or emits_classes or emits_constants

    def _order_classes(
        self, model: TypeModel, classes: list[ClassSpec]
    ) -> tuple[list[ClassSpec], list[ClassSpec]]:
        """
        Split classes into bases (of another class in the list) and the rest.

        Bases are ordered by inheritance depth so every base precedes the
        classes derived from it; both lists keep name order otherwise.
        """
        base_names = {cls.base.name for cls in classes if cls.base is not None}
        bases = [cls for cls in classes if cls.full_name in base_names]
        others = [cls for cls in classes if cls.full_name not in base_names]
        bases.sort(key=lambda cls: self._inheritance_depth(model, cls))
        return bases, others

    @staticmethod
    def _inheritance_depth(model: TypeModel, cls: ClassSpec) -> int:
        depth = 0
        while cls.base is not None:
            cls = model.get_class(cls.base.name)
            depth += 1
        return depth

    # =========================================================================
    # Classes
    # =========================================================================

    def append_class(self, ctx: RenderContext, cls: ClassSpec) -> None:
        """Render a class or contract declaration with its members."""
        sb = ctx.sb
        type_name = ctx.resolver.type_name(cls.as_ref())

        if ctx.csharp:
            visibility = "public "
            noun = "interface" if cls.is_interface else "class"
        else:
            visibility = "export " if self._type_visibility_formatter(cls, type_name) else ""
            noun = "interface" if self.mode is GenerationMode.DEFINITIONS else "class"

        self._doc_appender.append_class_doc(sb, cls, type_name)
        header = f"{visibility}{noun} {type_name}{self._heritage_clause(ctx, cls)}"
        if ctx.csharp:
            sb.append_line_indented(header)
            sb.append_line_indented("{")
        else:
            sb.append_line_indented(header + " {")

        members = self._class_members(ctx, cls)
        with sb.indent():
            if ctx.csharp:
                self._append_inline_constants(ctx, cls)

            for prop in members:
                name = self.get_property_name(prop, ctx.csharp)
                prop_type = self.get_property_type(ctx, prop)
                self._doc_appender.append_property_doc(sb, prop, name, prop_type)
                if ctx.csharp:
                    if prop_type in UNTYPED_CSHARP_NAMES:
                        raise RenderError(
                            f"Member type '{prop_type}' cannot be declared in C#",
                            ErrorContext(
                                module=ctx.module.name if ctx.module else None,
                                type_name=cls.full_name,
                                member=prop.name,
                            ),
                        )
                    modifier = "public " if noun == "class" else ""
                    optional = "?" if prop.is_optional else ""
                    sb.append_line_indented(f"{modifier}{prop_type}{optional} {name} {{ get; set; }}")
                else:
                    sb.append_line_indented(f"{name}: {prop_type};")

        sb.append_line_indented("}")

    def _heritage_clause(self, ctx: RenderContext, cls: ClassSpec) -> str:
        keyword = ":" if ctx.csharp else "extends"
        qualify = ctx.resolver.qualified_type_name
        contracts = [qualify(ref) for ref in cls.interfaces]

        if cls.is_interface:
            parents = [qualify(cls.base)] if cls.base is not None else []
            parents.extend(contracts)
            return f" {keyword} {', '.join(parents)}" if parents else ""

        clause = ""
        if cls.base is not None:
            clause = f" {keyword} {qualify(cls.base)}"
        if contracts:
            separator = ", " if cls.base is not None else f" {keyword} "
            clause += separator + ", ".join(contracts)
        return clause

    def _class_members(self, ctx: RenderContext, cls: ClassSpec) -> list[PropertySpec]:
        candidates: list[PropertySpec] = []
        if ctx.csharp and not cls.is_interface:
            candidates.extend(self._inherited_contract_properties(ctx.model, cls))
        if ctx.output & OutputMode.PROPERTIES:
            candidates.extend(cls.properties)
        if ctx.output & OutputMode.FIELDS:
            candidates.extend(cls.fields)

        # Declared members replace same-named inherited ones
        members: dict[str, PropertySpec] = {}
        for prop in candidates:
            if not prop.is_ignored:
                members[prop.name] = prop
        return sorted(members.values(), key=lambda p: self.get_property_name(p, ctx.csharp))

    def _inherited_contract_properties(self, model: TypeModel, cls: ClassSpec) -> list[PropertySpec]:
        """
        Properties of contracts a class implements that its base chain does not.

        Contracts already in the closure of the base class chain are skipped,
        so their members are not declared twice.
        """
        implied: set[str] = set()
        base = cls.base
        while base is not None:
            base_cls = model.get_class(base.name)
            for ref in base_cls.interfaces:
                self._contract_closure(model, ref, implied)
            base = base_cls.base

        properties: list[PropertySpec] = []
        visited = set(implied)

        def visit(ref: ClassRef) -> None:
            if ref.name in visited:
                return
            visited.add(ref.name)
            contract = model.get_class(ref.name)
            for parent in contract.interfaces:
                visit(parent)
            if contract.base is not None:
                visit(contract.base)
            properties.extend(contract.properties)

        for ref in cls.interfaces:
            visit(ref)
        return properties

    def _contract_closure(self, model: TypeModel, ref: ClassRef, closure: set[str]) -> None:
        if ref.name in closure:
            return
        closure.add(ref.name)
        contract = model.get_class(ref.name)
        for parent in contract.interfaces:
            self._contract_closure(model, parent, closure)
        if contract.base is not None:
            self._contract_closure(model, contract.base, closure)

    def _append_inline_constants(self, ctx: RenderContext, cls: ClassSpec) -> None:
        sb = ctx.sb
        for prop in cls.constants:
            if prop.is_ignored:
                continue
            name = self._member_formatter(prop)
            if name == "namespace":
                continue
            prop_type = self.get_property_type(ctx, prop)
            self._doc_appender.append_property_doc(sb, prop, name, prop_type)
            sb.append_line_indented(
                f"public const {prop_type} {name} = {self.get_constant_value(prop)};"
            )

    def append_constant_module(self, ctx: RenderContext, cls: ClassSpec) -> None:
        """Render a class's constants as a sibling ``export namespace`` block."""
        constants = [prop for prop in cls.constants if not prop.is_ignored]
        if not constants:
            return

        sb = ctx.sb
        type_name = ctx.resolver.type_name(cls.as_ref())
        sb.append_line_indented(f"export namespace {type_name} {{")
        with sb.indent():
            for prop in constants:
                name = self._member_formatter(prop)
                prop_type = self.get_property_type(ctx, prop)
                self._doc_appender.append_constant_doc(sb, prop, name, prop_type)
                annotation = f": {prop_type}" if prop.constant_value is None else ""
                sb.append_line_indented(
                    f"export const {name}{annotation} = {self.get_constant_value(prop)};"
                )
        sb.append_line_indented("}")

    # =========================================================================
    # Enums
    # =========================================================================

    def append_enum(self, ctx: RenderContext, enum: EnumSpec) -> None:
        """Render an enum declaration."""
        sb = ctx.sb
        type_name = ctx.resolver.type_name(enum.as_ref())

        self._doc_appender.append_enum_doc(sb, enum, type_name)
        if ctx.csharp:
            header = f"public enum {type_name}"
            if any(self._is_wide_value(value.value) for value in enum.values):
                header += " : long"
            sb.append_line_indented(header)
            sb.append_line_indented("{")
        else:
            exported = ctx.output & (OutputMode.ENUMS | OutputMode.CONSTANTS)
            visibility = "export " if exported else ""
            emit_const = self.const_enums if self.const_enums is not None else enum.emit_const
            const = "const " if emit_const else ""
            sb.append_line_indented(f"{visibility}{const}enum {type_name} {{")

        with sb.indent():
            last = len(enum.values) - 1
            for index, value in enumerate(enum.values):
                self._doc_appender.append_enum_value_doc(sb, value)
                literal = self.get_enum_value(ctx, enum, value)
                separator = "," if index < last else ""
                sb.append_line_indented(f"{value.name} = {literal}{separator}")

        sb.append_line_indented("}")

    @staticmethod
    def _is_wide_value(value: int | str) -> bool:
        """Whether a value falls outside the signed 32-bit range."""
        if isinstance(value, str):
            try:
                value = int(value)
            except ValueError:
                return False
        return not INT32_MIN <= value <= INT32_MAX

    # =========================================================================
    # Names
    # =========================================================================

    def get_type_name(self, model: TypeModel, node: TypeRef) -> str:
        """Short name of a type in the default output."""
        return self.resolver(model).type_name(node)

    def get_fully_qualified_type_name(self, model: TypeModel, node: TypeRef) -> str:
        """Module-qualified name of a type in the default output."""
        return self.resolver(model).qualified_type_name(node)

    def get_property_name(self, prop: PropertySpec, csharp: bool = False) -> str:
        """Member identifier, with ``?`` for optional members in TypeScript."""
        name = self._member_formatter(prop)
        if prop.is_optional and not csharp:
            name += "?"
        return name

    def get_property_type(self, ctx: RenderContext, prop: PropertySpec) -> str:
        qualified = ctx.resolver.qualified_type_name(prop.type)
        return self._member_type_formatter(prop, qualified)

    def get_enum_value(self, ctx: RenderContext, enum: EnumSpec, value: EnumValueSpec) -> str:
        """
        Enum value literal.

        String mode writes the quoted value name. Otherwise the underlying
        value is written: integers (and integer strings) as numbers, other
        strings quoted. C# enums only take integers.

        Raises:
            RenderError: If a C# enum value is not an integer
        """
        if self.enum_mode is EnumMode.STRING and not ctx.csharp:
            return json.dumps(value.name)

        literal = value.value
        if isinstance(literal, str):
            try:
                literal = int(literal)
            except ValueError:
                if ctx.csharp:
                    raise RenderError(
                        f"Enum value '{literal}' is not an integer",
                        ErrorContext(
                            module=ctx.module.name if ctx.module else None,
                            type_name=enum.full_name,
                            member=value.name,
                        ),
                    ) from None
                return json.dumps(literal)
        return str(literal)

    def get_constant_value(self, prop: PropertySpec) -> str:
        """Constant literal: strings quoted, booleans lower-case, missing values as null."""
        value = prop.constant_value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(prop.type, SystemType) and prop.type.system_kind is SystemTypeKind.STRING:
            return json.dumps(str(value))
        return str(value)
