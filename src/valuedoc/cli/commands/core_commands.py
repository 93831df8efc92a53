"""
Core CLI commands for the valuedoc application.
"""

import logging
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from ...core.config import DEFAULT_INPUT
from ...core.config_loader import load_config_with_pydantic
from ...core.exceptions import ValueDocError
from ...core.parser import load_document
from ...core.render import inject, render
from ..utils import display_document, display_document_json, setup_logging

console = Console()


def generate(
    input: Optional[str] = typer.Argument(None, help="Annotated values file"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="File to inject the documentation into"
    ),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template file or built-in template name"
    ),
    header: Optional[str] = typer.Option(
        None, "--header", help="Regex marking the start of the generated block"
    ),
    footer: Optional[str] = typer.Option(
        None, "--footer", help="Regex marking the end of the generated block"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Generate documentation for an annotated values file."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        loaded_config = load_config_with_pydantic(
            config,
            overrides={
                "input": input,
                "output": output,
                "template": template,
                "header_pattern": header,
                "footer_pattern": footer,
                "logging": {"verbose": verbose or None},
            },
        )
        setup_logging(loaded_config.logging.verbose, loaded_config.logging.log_file)

        document = load_document(loaded_config.input)
        logger.info(
            f"Found {len(document.properties)} properties in {len(document.sections)} sections"
        )

        if loaded_config.output is None:
            typer.echo(render(loaded_config.template, document))
            return

        header_pattern, footer_pattern = loaded_config.compile_patterns()
        inject(
            loaded_config.output,
            loaded_config.template,
            document,
            header_pattern,
            footer_pattern,
        )
        console.print(
            f"[green]Documentation written to {loaded_config.output}[/green]"
        )

    except (ValueDocError, yaml.YAMLError, OSError, ValueError) as e:
        console.print(f"[red]Error generating documentation: {escape(str(e))}[/red]")
        logger.error(f"Generation failed: {e}")
        raise typer.Exit(1)


def inspect(
    input: str = typer.Argument(DEFAULT_INPUT, help="Annotated values file"),
    as_json: bool = typer.Option(False, "--json", help="Print the document as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Show the sections and properties found in a values file."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        document = load_document(input)
    except (ValueDocError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]Error reading {escape(input)}: {escape(str(e))}[/red]")
        logger.error(f"Inspection failed: {e}")
        raise typer.Exit(1)

    if as_json:
        display_document_json(document)
    else:
        display_document(document)
