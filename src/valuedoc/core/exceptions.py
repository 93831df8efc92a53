"""
Custom valuedoc exceptions.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .parser.path import Path


class ValueDocError(Exception):
    """Base exception for valuedoc."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PathSyntaxError(ValueDocError):
    """A path expression could not be parsed.

    The components matched before the offending character are kept in
    ``partial`` so callers can report what did parse.
    """

    def __init__(self, text: str, position: int, partial: "Path"):
        self.text = text
        self.position = position
        self.partial = partial
        super().__init__(
            f"invalid path {text!r}: unexpected {text[position]!r} at position {position}",
            details={"text": text, "position": position, "partial": str(partial)},
        )


class StructuralError(ValueDocError):
    """The values tree cannot be walked, e.g. an alias refers back to itself."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        details = {"path": path} if path is not None else {}
        super().__init__(message, details=details)


class RenderError(ValueDocError):
    """A template could not be found or failed to render."""

    def __init__(self, message: str, template: Optional[str] = None):
        details = {"template": template} if template else {}
        super().__init__(message, details=details)


class InjectionError(ValueDocError):
    """Rendered documentation could not be spliced into the target file."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        details = {"file_name": file_name} if file_name else {}
        super().__init__(message, details=details)
