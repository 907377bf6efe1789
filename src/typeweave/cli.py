"""
typeweave CLI.

Commands:
- generate: Render a JSON type model to declaration source
- inspect: Show the modules, classes and enums of a type model
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typeweave._version import get_version
from typeweave.core.config import (
    EnumMode,
    GenerationMode,
    GeneratorConfig,
    OutputMode,
    load_config,
)
from typeweave.core.errors import TypeweaveError
from typeweave.core.model import load_model
from typeweave.generator import CommentDocAppender, DeclarationGenerator, FileRenderLog

console = Console(stderr=True)

app = typer.Typer(
    help="typeweave – render type models to TypeScript and C# declarations",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"typeweave {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log render decisions"),
) -> None:
    """typeweave CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("generate")
def generate_command(
    model_path: Path = typer.Argument(..., help="JSON type model", exists=True, dir_okay=False),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="typeweave.toml with a [generator] table"
    ),
    output_path: Path | None = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout"
    ),
    mode: GenerationMode | None = typer.Option(None, "--mode", "-m", help="definitions or classes"),
    enum_mode: EnumMode | None = typer.Option(None, "--enum-mode", help="number or string"),
    flags: list[str] = typer.Option(
        [], "--output-flag", "-f", help="Output flag (properties, fields, enums, constants, csharp)"
    ),
    const_enums: bool | None = typer.Option(
        None, "--const-enums/--no-const-enums", help="Force const enums on or off"
    ),
    references: list[str] = typer.Option([], "--reference", "-r", help="Declaration file to reference"),
    docs: bool = typer.Option(False, "--docs", help="Emit doc comments from the model"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write render log to a file"),
) -> None:
    """
    Render declarations for a type model.

    Options given on the command line override the config file.
    """
    try:
        config = load_config(config_path) if config_path else GeneratorConfig()
        if mode is not None:
            config.mode = mode
        if enum_mode is not None:
            config.enum_mode = enum_mode
        if flags:
            config.output = OutputMode.parse(flags)
        if const_enums is not None:
            config.const_enums = const_enums
        config.references.extend(references)
        if log_file is not None:
            config.log_file = log_file

        model = load_model(model_path)
        generator = DeclarationGenerator.from_config(config)
        if docs:
            generator.set_doc_appender(CommentDocAppender())

        try:
            if output_path is not None:
                result = generator.generate_file(model, output_path)
                console.print(f"[green]Wrote {output_path}[/green]")
            else:
                result = generator.render(model)
                sys.stdout.write(result.text)
        finally:
            if isinstance(generator.log, FileRenderLog):
                generator.log.close()
    except TypeweaveError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")


@app.command("inspect")
def inspect_command(
    model_path: Path = typer.Argument(..., help="JSON type model", exists=True, dir_okay=False),
) -> None:
    """Show modules with their classes and enums."""
    try:
        model = load_model(model_path)
    except TypeweaveError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    table = Table(title=f"Type model: {model_path.name}")
    table.add_column("Module")
    table.add_column("Sort", justify="right")
    table.add_column("Classes", justify="right")
    table.add_column("Enums", justify="right")
    table.add_column("Ignored", justify="right")

    for module in sorted(model.modules, key=lambda m: (m.sort_order, m.name)):
        ignored = sum(1 for c in module.classes if c.is_ignored) + sum(
            1 for e in module.enums if e.is_ignored
        )
        table.add_row(
            module.name or "(top level)",
            str(module.sort_order),
            str(len(module.classes)),
            str(len(module.enums)),
            str(ignored),
        )

    Console().print(table)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
