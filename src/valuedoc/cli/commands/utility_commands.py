"""
Utility commands.
"""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.config_loader import create_default_config
from ...core.exceptions import PathSyntaxError
from ...core.parser import parse_path
from ...core.render import TEMPLATES_DIR, builtin_templates
from ..utils import display_path, setup_logging

app = typer.Typer(name="utils", help="Utility commands")
console = Console()


@app.command()
def info():
    """Display version and template information."""
    from ... import __version__

    table = Table(title="valuedoc Information")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("valuedoc Version", __version__)
    table.add_row("Python Version", sys.version.split()[0])
    table.add_row("Templates Directory", str(TEMPLATES_DIR))
    table.add_row("Built-in Templates", ", ".join(builtin_templates()))

    console.print(table)


@app.command()
def check_path(
    path: str = typer.Argument(..., help="Path expression, e.g. foo.bar[0].baz"),
):
    """Parse a path expression and show its components."""
    try:
        parsed = parse_path(path)
    except PathSyntaxError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        if e.partial:
            console.print(f"Matched prefix: [yellow]{escape(str(e.partial))}[/yellow]")
        raise typer.Exit(1)

    display_path(parsed)


@app.command()
def init_config(
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Where to write the configuration file"
    ),
):
    """Write a default configuration file."""
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        written = create_default_config(output)
    except OSError as e:
        console.print(f"[red]Could not write configuration: {escape(str(e))}[/red]")
        logger.error(f"Writing configuration failed: {e}")
        raise typer.Exit(1)

    typer.secho(f"Configuration written to '{written}'.", fg=typer.colors.GREEN)
