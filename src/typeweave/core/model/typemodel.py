"""
The root of the typeweave model.

A ``TypeModel`` is built once (by an external builder or ``load_model``),
validated on construction and then only read. It indexes every class and
enum declaration by ``full_name`` so references can be resolved without
copying declarations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from ..errors import ErrorContext, ModelError
from .declarations import ClassSpec, EnumSpec
from .module import ModuleSpec
from .types import ClassRef, EnumRef, TypeRef, walk_type

logger = logging.getLogger(__name__)


class TypeModel(BaseModel):
    """
    Complete type model handed to the renderer.

    Attributes:
        modules: Namespace containers in declaration order
        references: External declaration files referenced by the whole model
    """

    modules: list[ModuleSpec] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    _classes: dict[str, tuple[ClassSpec, ModuleSpec]] = PrivateAttr(default_factory=dict)
    _enums: dict[str, tuple[EnumSpec, ModuleSpec]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._build_index()
        self._validate_references()
        self._validate_inheritance()

    # =========================================================================
    # Lookup
    # =========================================================================

    @property
    def classes(self) -> list[ClassSpec]:
        return [cls for cls, _ in self._classes.values()]

    @property
    def enums(self) -> list[EnumSpec]:
        return [enum for enum, _ in self._enums.values()]

    def get_class(self, name: str) -> ClassSpec:
        """Get a class declaration by full name."""
        try:
            return self._classes[name][0]
        except KeyError:
            raise ModelError(f"Unknown class '{name}'") from None

    def get_enum(self, name: str) -> EnumSpec:
        """Get an enum declaration by full name."""
        try:
            return self._enums[name][0]
        except KeyError:
            raise ModelError(f"Unknown enum '{name}'") from None

    def module_of(self, item: ClassSpec | EnumSpec | ClassRef | EnumRef) -> ModuleSpec | None:
        """Get the module that declares a class or enum (or the target of a reference)."""
        if isinstance(item, (ClassSpec, ClassRef)):
            entry = self._classes.get(item.full_name if isinstance(item, ClassSpec) else item.name)
        else:
            entry = self._enums.get(item.full_name if isinstance(item, EnumSpec) else item.name)
        return entry[1] if entry else None

    def referenced_types(self, cls: ClassSpec) -> Iterator[TypeRef]:
        """
        Yield every type node a class refers to.

        Walks member types, base, interfaces and generic arguments, piercing
        nested collections.
        """
        roots: list[TypeRef] = [member.type for member in cls.members]
        if cls.base is not None:
            roots.append(cls.base)
        roots.extend(cls.interfaces)
        for root in roots:
            yield from walk_type(root)

    def reachable_enums(self) -> list[EnumSpec]:
        """Enums referenced by any non-ignored class, in first-reference order."""
        seen: dict[str, EnumSpec] = {}
        for cls in self.classes:
            if cls.is_ignored:
                continue
            for node in self.referenced_types(cls):
                if isinstance(node, EnumRef) and node.name not in seen:
                    seen[node.name] = self.get_enum(node.name)
        return list(seen.values())

    # =========================================================================
    # Validation
    # =========================================================================

    def _build_index(self) -> None:
        module_names: set[str] = set()
        for module in self.modules:
            if module.name in module_names:
                raise ModelError(f"Duplicate module '{module.name}'")
            module_names.add(module.name)

            for cls in module.classes:
                if cls.full_name in self._classes or cls.full_name in self._enums:
                    raise ModelError(
                        "Duplicate declaration",
                        ErrorContext(module=module.name, type_name=cls.full_name),
                    )
                self._classes[cls.full_name] = (cls, module)

            for enum in module.enums:
                if enum.full_name in self._classes or enum.full_name in self._enums:
                    raise ModelError(
                        "Duplicate declaration",
                        ErrorContext(module=module.name, type_name=enum.full_name),
                    )
                names = [value.name for value in enum.values]
                if len(names) != len(set(names)):
                    raise ModelError(
                        "Duplicate enum value names",
                        ErrorContext(module=module.name, type_name=enum.full_name),
                    )
                self._enums[enum.full_name] = (enum, module)

    def _validate_references(self) -> None:
        for cls, module in self._classes.values():
            interface_names = [ref.name for ref in cls.interfaces]
            if len(interface_names) != len(set(interface_names)):
                raise ModelError(
                    "Duplicate interfaces",
                    ErrorContext(module=module.name, type_name=cls.full_name),
                )

            for node in self.referenced_types(cls):
                if isinstance(node, ClassRef) and node.name not in self._classes:
                    raise ModelError(
                        f"Reference to undeclared class '{node.name}'",
                        ErrorContext(module=module.name, type_name=cls.full_name),
                    )
                if isinstance(node, EnumRef) and node.name not in self._enums:
                    raise ModelError(
                        f"Reference to undeclared enum '{node.name}'",
                        ErrorContext(module=module.name, type_name=cls.full_name),
                    )

    def _validate_inheritance(self) -> None:
        """Reject classes that inherit from themselves through base or interfaces."""
        done: set[str] = set()

        for start in self._classes:
            if start in done:
                continue
            path: list[str] = []
            on_path: set[str] = set()
            stack: list[tuple[str, Iterator[str]]] = [(start, self._parents(start))]
            path.append(start)
            on_path.add(start)

            while stack:
                name, parents = stack[-1]
                parent = next(parents, None)
                if parent is None:
                    stack.pop()
                    path.pop()
                    on_path.discard(name)
                    done.add(name)
                    continue
                if parent in on_path:
                    cycle = " -> ".join([*path[path.index(parent) :], parent])
                    raise ModelError(
                        f"Inheritance cycle: {cycle}",
                        ErrorContext(type_name=parent),
                    )
                if parent in done:
                    continue
                stack.append((parent, self._parents(parent)))
                path.append(parent)
                on_path.add(parent)

    def _parents(self, name: str) -> Iterator[str]:
        cls = self._classes[name][0]
        if cls.base is not None:
            yield cls.base.name
        for ref in cls.interfaces:
            yield ref.name


def load_model(path: Path) -> TypeModel:
    """
    Load a type model from a JSON document.

    Args:
        path: JSON file matching the ``TypeModel`` schema

    Returns:
        Validated TypeModel

    Raises:
        ModelError: If the document is malformed or the model is invalid
    """
    try:
        model = TypeModel.model_validate_json(path.read_text(encoding="utf-8"))
    except PydanticValidationError as e:
        raise ModelError(f"Invalid model document {path}: {e}") from e
    logger.debug(
        "Loaded model from %s: %d modules, %d classes, %d enums",
        path,
        len(model.modules),
        len(model.classes),
        len(model.enums),
    )
    return model
