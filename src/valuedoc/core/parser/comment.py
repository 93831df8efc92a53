"""
Comment model and parser.

A comment block is split into directive tags (``+docs:section=Global``,
``+docs:ignore``...) and content segments. Content is either prose or a
fenced code block; segment order is kept so the description can be
rendered back as written.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Dict, Iterator, List, Tuple

from ..config import DirectiveTag

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"^\+?(docs:[A-Za-z]+)(?:=(.*))?$")
_FENCE = "```"


class CommentSegmentKind(StrEnum):
    """Kinds of content found in a comment."""

    TEXT = "text"
    CODE = "code"


@dataclass(frozen=True)
class CommentSegment:
    """A run of prose lines or the body of one fenced code block."""

    kind: CommentSegmentKind
    content: str
    language: str = ""  # info string of the opening fence

    def __str__(self) -> str:
        if self.kind == CommentSegmentKind.CODE:
            return f"{_FENCE}{self.language}\n{self.content}\n{_FENCE}"
        return self.content


class Tags(Dict[DirectiveTag, str]):
    """Directive values keyed by tag; an empty value means the tag is set."""

    def get_bool(self, tag: DirectiveTag) -> bool:
        return tag in self and self[tag].strip().lower() != "false"

    def get_string(self, tag: DirectiveTag) -> str:
        return self.get(tag, "").strip()


@dataclass(frozen=True)
class Comment:
    """One comment block: directive tags plus ordered content segments."""

    tags: Tags = field(default_factory=Tags)
    segments: Tuple[CommentSegment, ...] = ()

    def without_segment(self, index: int) -> "Comment":
        """Return a copy of this comment with one segment removed."""
        segments = self.segments[:index] + self.segments[index + 1 :]
        return replace(self, segments=segments)

    def __str__(self) -> str:
        return "\n".join(str(segment) for segment in self.segments)


class Comments(List[Comment]):
    """Comment blocks in source order."""

    def pop_first(self) -> Comment:
        """Remove and return the first comment, or an empty one if there are none."""
        if not self:
            return Comment()
        return self.pop(0)


def parse_comment(text: str) -> Comments:
    """
    Parse comment text into comment blocks.

    Lines may still carry their ``#`` marker. Blocks are separated by fully
    blank lines; an empty ``#`` line belongs to the block around it.

    Args:
        text: Raw comment text, one source line per line

    Returns:
        Parsed comments in source order
    """
    return Comments(_parse_block(lines) for lines in _split_blocks(text))


def _strip_marker(line: str) -> str:
    stripped = line.lstrip()
    if not stripped.startswith("#"):
        return line.rstrip()
    stripped = stripped[1:]
    if stripped.startswith(" "):
        stripped = stripped[1:]
    return stripped.rstrip()


def _split_blocks(text: str) -> Iterator[List[str]]:
    block: List[str] = []
    for line in text.splitlines():
        if not line.strip():
            if block:
                yield block
                block = []
            continue
        block.append(_strip_marker(line))
    if block:
        yield block


def _text_segment(lines: List[str]) -> List[CommentSegment]:
    content = "\n".join(lines).strip("\n")
    if not content.strip():
        return []
    return [CommentSegment(CommentSegmentKind.TEXT, content)]


def _parse_block(lines: List[str]) -> Comment:
    tags = Tags()
    segments: List[CommentSegment] = []
    text_lines: List[str] = []
    code_lines = None
    language = ""

    for line in lines:
        stripped = line.strip()

        if code_lines is not None:
            if stripped.startswith(_FENCE):
                segments.append(
                    CommentSegment(
                        CommentSegmentKind.CODE, "\n".join(code_lines), language
                    )
                )
                code_lines = None
            else:
                code_lines.append(line)
            continue

        if stripped.startswith(_FENCE):
            segments.extend(_text_segment(text_lines))
            text_lines = []
            code_lines = []
            language = stripped[len(_FENCE) :].strip()
            continue

        match = _DIRECTIVE_RE.match(stripped)
        if match:
            name, value = match.group(1), match.group(2)
            try:
                tag = DirectiveTag(name)
            except ValueError:
                logger.warning(f"Ignoring unknown directive: {name}")
                continue
            tags[tag] = (value or "").strip()
            continue

        text_lines.append(line)

    if code_lines is not None:
        logger.debug("Unterminated code block in comment, closing at end of block")
        segments.append(
            CommentSegment(CommentSegmentKind.CODE, "\n".join(code_lines), language)
        )
    segments.extend(_text_segment(text_lines))

    return Comment(tags=tags, segments=tuple(segments))
