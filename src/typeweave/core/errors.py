"""
Error types for typeweave model loading, configuration and rendering.
"""

from dataclasses import dataclass
from typing import Optional


class TypeweaveError(Exception):
    """Base exception for all typeweave errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ModelError(TypeweaveError):
    """
    Raised when a type model violates its structural invariants.

    Examples:
    - Inheritance cycle
    - Reference to an undeclared class or enum
    - Duplicate module, declaration or enum value names
    - Duplicate interfaces on a class
    """

    pass


class RenderError(TypeweaveError):
    """
    Raised when the renderer reaches a state it cannot emit.

    Examples:
    - A C# member whose type resolves to an untyped (``any``) or
      numeric-only (``number``) placeholder
    """

    pass


class ConfigError(TypeweaveError):
    """
    Raised when generator configuration cannot be applied.

    Examples:
    - Unknown output flag or generation mode name
    - Malformed configuration file
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the type model.

    Attributes:
        module: Module name being rendered
        type_name: Class or enum full name
        member: Property, field or constant name
    """

    module: str | None = None
    type_name: str | None = None
    member: str | None = None

    def format(self) -> str:
        """
        Format the location as a dotted path.

        Returns:
            String like: "module Shop: Shop.Order.total"
        """
        parts = [p for p in (self.type_name, self.member) if p]
        location = ".".join(parts)
        if self.module:
            prefix = f"module {self.module}"
            return f"{prefix}: {location}" if location else prefix
        return location or "<model>"
