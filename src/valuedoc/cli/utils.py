"""
CLI utilities and helper functions.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.parser import Document, IndexStep, Path as ValuePath

console = Console()


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [
        logging.StreamHandler(sys.stderr),
    ]
    if isinstance(log_file, str):
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def display_document(document: Document):
    """Display the sections and properties of a document."""
    if not document.properties and len(document.sections) == 1:
        console.print("[yellow]No documented properties found[/yellow]")
        return

    for section in document.sections:
        if not section.name and not section.properties:
            continue

        table = Table(title=escape(section.name) or "(root)")
        table.add_column("Property", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("Default", style="yellow")
        table.add_column("Description")

        for prop in section.properties:
            table.add_row(
                escape(prop.name),
                escape(prop.type),
                escape(prop.default),
                escape(str(prop.description)),
            )

        console.print(table)

    # Summary
    console.print(f"\n[bold green]Summary:[/bold green]")
    console.print(f"  Sections: {len(document.sections)}")
    console.print(f"  Properties: {len(document.properties)}")


def display_document_json(document: Document):
    """Print a document as JSON."""
    console.print_json(json.dumps(document.to_dict()))


def display_path(path: ValuePath):
    """Display the components of a parsed path."""
    table = Table(title=escape(str(path)) or "(root)")
    table.add_column("#", style="cyan")
    table.add_column("Kind", style="green")
    table.add_column("Value", style="yellow")

    for i, component in enumerate(path):
        if isinstance(component, IndexStep):
            table.add_row(str(i), "index", str(component.index))
        else:
            table.add_row(str(i), "property", escape(component.name))

    console.print(table)
