"""
Command Line Interface for valuedoc using Typer.

This module provides a modular CLI structure with commands organized by functionality.
"""

import importlib.metadata

import typer
from rich.console import Console

from .commands import core_commands, utility_commands

# Create Typer app
app = typer.Typer(
    name="valuedoc",
    help="valuedoc - Reference documentation from annotated YAML values files",
    add_completion=False,
)

# Create console for rich output
console = Console()

# Get version from package metadata
try:
    __version__ = importlib.metadata.version("valuedoc")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.1"


def raise_exit():
    """Raise typer exit."""
    raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=lambda value: (
            print(f"valuedoc version: {__version__}") or raise_exit()
        )
        if value
        else None,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """valuedoc - Reference documentation from annotated YAML values files"""
    pass


# Register commands
app.command()(core_commands.generate)
app.command()(core_commands.inspect)
app.add_typer(utility_commands.app, name="utils", help="Utility commands")

if __name__ == "__main__":
    app()
