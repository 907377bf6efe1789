"""
Result of a declaration render.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        text: Rendered declaration source
        files_created: Files written with the rendered source
        warnings: Tolerated configuration conflicts and similar notices
    """

    text: str = ""
    files_created: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_file(self, path: Path) -> None:
        """Record a file that was written."""
        self.files_created.append(path)

    def add_warning(self, warning: str) -> None:
        """Record a warning."""
        self.warnings.append(warning)
