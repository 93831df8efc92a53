"""
Rendering of a documentation model and injection into an existing file.
"""

import logging
import re
from pathlib import Path
from typing import Union

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from ..exceptions import InjectionError, RenderError
from ..parser.document import Document

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".md.j2"


def _create_env(search_path: Union[str, Path]) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(search_path)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def builtin_templates() -> list:
    """Names of the templates shipped with valuedoc."""
    return sorted(
        p.name[: -len(TEMPLATE_SUFFIX)] for p in TEMPLATES_DIR.glob(f"*{TEMPLATE_SUFFIX}")
    )


def render(template_name: str, document: Document) -> str:
    """
    Render a document with a template.

    Args:
        template_name: Path of a template file, or the name of a built-in
            template such as ``markdown-table``
        document: Documentation model to render

    Returns:
        Rendered text

    Raises:
        RenderError: If the template cannot be found or fails to render
    """
    template_path = Path(template_name)
    try:
        if template_path.is_file():
            env = _create_env(template_path.parent)
            template = env.get_template(template_path.name)
        else:
            env = _create_env(TEMPLATES_DIR)
            template = env.get_template(template_name + TEMPLATE_SUFFIX)
        return template.render(document=document, sections=document.sections)
    except TemplateNotFound as e:
        raise RenderError(
            f"Template not found: {template_name}", template=template_name
        ) from e
    except TemplateError as e:
        raise RenderError(
            f"Could not render documentation from template {template_name}: {e}",
            template=template_name,
        ) from e


def inject(
    path: Union[str, Path],
    template_name: str,
    document: Document,
    header: "re.Pattern[str]",
    footer: "re.Pattern[str]",
) -> None:
    """
    Replace the text between two markers of a file with the rendered document.

    Everything up to the end of the first ``header`` match and everything
    from the first ``footer`` match after it is kept. Without a footer match
    the rendered document runs to the end of the file.

    Raises:
        InjectionError: If the header marker is not found
        RenderError: If the document cannot be rendered
    """
    path = Path(path)
    contents = path.read_text(encoding="utf-8")

    header_match = header.search(contents)
    if header_match is None:
        raise InjectionError(
            f"Could not find header marker {header.pattern!r} in {path}",
            file_name=str(path),
        )
    start = header_match.end()

    footer_match = footer.search(contents, start)
    end = footer_match.start() if footer_match else len(contents)

    rendered = render(template_name, document)
    path.write_text(contents[:start] + rendered + "\n" + contents[end:], encoding="utf-8")
    logger.info(f"Injected documentation into {path}")
