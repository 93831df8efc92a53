"""
Path expressions locating a node inside a values tree, e.g. ``foo.bar[0].baz``.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Union

from ..exceptions import PathSyntaxError

_NAME_RE = re.compile(r"[a-zA-Z0-9_-]+")
_INDEX_RE = re.compile(r"\[(\d+)\]")


@dataclass(frozen=True)
class PropertyStep:
    """Step into a mapping by key."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IndexStep:
    """Step into a sequence by position."""

    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


PathComponent = Union[PropertyStep, IndexStep]


class Path(tuple):
    """Immutable sequence of path components from the root to a node.

    The empty path is the root of the tree.
    """

    def __new__(cls, components: Iterable[PathComponent] = ()):
        return super().__new__(cls, components)

    def with_property(self, name: str) -> "Path":
        return Path((*self, PropertyStep(name)))

    def with_index(self, index: int) -> "Path":
        return Path((*self, IndexStep(index)))

    def parent(self) -> "Path":
        return Path(self[:-1])

    def __str__(self) -> str:
        parts = []
        for i, component in enumerate(self):
            if isinstance(component, PropertyStep) and i > 0:
                parts.append(".")
            parts.append(str(component))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"


def parse_path(text: str) -> Path:
    """
    Parse a path expression into a Path.

    Property names may only be used without a leading dot as the first
    segment; index segments are never dot-prefixed.

    Args:
        text: Path expression such as ``foo.bar[0].baz``

    Returns:
        Parsed path, empty for an empty string

    Raises:
        PathSyntaxError: If a character matches no segment. The error keeps
            the components parsed up to that point.
    """
    components = []
    pos = 0
    while pos < len(text):
        match = _INDEX_RE.match(text, pos)
        if match:
            components.append(IndexStep(int(match.group(1))))
            pos = match.end()
            continue

        dotted = text.startswith(".", pos)
        if dotted or not components:
            match = _NAME_RE.match(text, pos + 1 if dotted else pos)
            if match:
                components.append(PropertyStep(match.group(0)))
                pos = match.end()
                continue

        raise PathSyntaxError(text, pos, Path(components))

    return Path(components)
