"""
Text accumulation with scoped indentation.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class ScriptBuilder:
    """
    Accumulates generated source text.

    Indentation is only changed through ``indent()``, which restores the
    previous level when the block exits, including on exceptions and early
    returns.

    Example:
        sb = ScriptBuilder("  ")
        sb.append_line_indented("namespace A {")
        with sb.indent():
            sb.append_line_indented("interface B {}")
        sb.append_line_indented("}")
    """

    def __init__(self, indentation: str = "\t"):
        self.indentation = indentation
        self._parts: list[str] = []
        self._level = 0

    @property
    def level(self) -> int:
        """Current indentation depth."""
        return self._level

    @contextmanager
    def indent(self) -> Iterator[None]:
        """Increase indentation for the duration of the block."""
        self._level += 1
        try:
            yield
        finally:
            self._level -= 1

    def append(self, text: str) -> None:
        self._parts.append(text)

    def append_line(self, text: str = "") -> None:
        self._parts.append(text)
        self._parts.append("\n")

    def append_indented(self, text: str) -> None:
        """Append text prefixed with the current indentation."""
        self._parts.append(self.indentation * self._level)
        self._parts.append(text)

    def append_line_indented(self, text: str) -> None:
        self.append_indented(text)
        self._parts.append("\n")

    def to_string(self) -> str:
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.to_string()
