"""
Generator options and the ``typeweave.toml`` loader.

Example ``typeweave.toml``:

    [generator]
    indentation = "    "
    mode = "definitions"          # definitions | classes
    enum_mode = "string"          # number | string
    const_enums = false           # omit to let each enum decide
    output = ["properties", "enums"]
    references = ["jquery.d.ts"]
    log_file = "typeweave.log"

    [generator.convertors]
    "System.Guid" = "string"
"""

import tomllib
from dataclasses import dataclass, field
from enum import IntFlag, StrEnum
from pathlib import Path

from .errors import ConfigError


class OutputMode(IntFlag):
    """Which member categories and which declaration variant to emit."""

    PROPERTIES = 1
    ENUMS = 2
    FIELDS = 4
    CONSTANTS = 8
    CSHARP = 16  # C# declarations instead of TypeScript

    @classmethod
    def parse(cls, names: list[str]) -> "OutputMode":
        """Combine flag names (case-insensitive) into one mode."""
        if not names:
            raise ConfigError("At least one output flag is required")
        mode = cls(0)
        for name in names:
            try:
                mode |= cls[name.strip().upper()]
            except KeyError:
                valid = ", ".join(flag.name.lower() for flag in cls)
                raise ConfigError(f"Unknown output flag '{name}' (expected one of: {valid})") from None
        return mode


class GenerationMode(StrEnum):
    """Declaration-only output or implementation classes."""

    DEFINITIONS = "definitions"
    CLASSES = "classes"


class EnumMode(StrEnum):
    """How enum values are written."""

    NUMBER = "number"
    STRING = "string"


DEFAULT_OUTPUT = OutputMode.PROPERTIES | OutputMode.ENUMS


@dataclass
class GeneratorConfig:
    """
    Options for ``DeclarationGenerator``.

    Attributes:
        indentation: String for a single indentation level
        mode: Generation variant
        enum_mode: Enum value style
        const_enums: Global const-enum override; None lets each enum decide
        output: Output mode flags
        references: External declaration files to reference
        convertors: Host type identity -> literal type text
        log_file: Optional file receiving render log messages
    """

    indentation: str = "\t"
    mode: GenerationMode = GenerationMode.DEFINITIONS
    enum_mode: EnumMode = EnumMode.NUMBER
    const_enums: bool | None = None
    output: OutputMode = DEFAULT_OUTPUT
    references: list[str] = field(default_factory=list)
    convertors: dict[str, str] = field(default_factory=dict)
    log_file: Path | None = None


def _parse_choice(enum_cls: type[StrEnum], value: str, key: str) -> StrEnum:
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {key} '{value}' (expected one of: {valid})") from None


def load_config(path: Path) -> GeneratorConfig:
    """
    Load generator options from the ``[generator]`` table of a TOML file.

    Args:
        path: Path to typeweave.toml

    Returns:
        GeneratorConfig with defaults for missing keys

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    generator = data.get("generator", {})
    if not isinstance(generator, dict):
        raise ConfigError(f"{path}: [generator] must be a table")

    const_enums = generator.get("const_enums")
    if const_enums is not None and not isinstance(const_enums, bool):
        raise ConfigError(f"{path}: const_enums must be true or false")

    output = generator.get("output")
    log_file = generator.get("log_file")

    return GeneratorConfig(
        indentation=generator.get("indentation", "\t"),
        mode=_parse_choice(GenerationMode, generator.get("mode", "definitions"), "mode"),
        enum_mode=_parse_choice(EnumMode, generator.get("enum_mode", "number"), "enum_mode"),
        const_enums=const_enums,
        output=OutputMode.parse(output) if output is not None else DEFAULT_OUTPUT,
        references=list(generator.get("references", [])),
        convertors=dict(generator.get("convertors", {})),
        log_file=Path(log_file) if log_file else None,
    )
