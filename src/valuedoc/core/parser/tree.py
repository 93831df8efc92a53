"""
Decoding of a values file into an annotated tree.

PyYAML drops comments while parsing, so the tree is composed with PyYAML
and full-line comments are attached afterwards from the source lines, using
the node positions recorded by the composer:

- a comment block directly above a mapping key or sequence item is that
  entry's head comment;
- a block followed by a blank line is a foot comment of the nearest
  preceding entry at the same or a lower indentation;
- blocks in front of the first top-level entry belong to the document.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

import yaml

from ..config import NodeKind

logger = logging.getLogger(__name__)

_YAML_TAG_PREFIX = "tag:yaml.org,2002:"

_KINDS = {
    yaml.ScalarNode: NodeKind.SCALAR,
    yaml.SequenceNode: NodeKind.SEQUENCE,
    yaml.MappingNode: NodeKind.MAPPING,
}


@dataclass(eq=False)
class TreeNode:
    """A node of the decoded values tree.

    Mapping content alternates key and value nodes. Comments are raw text
    with their ``#`` markers; blocks sharing a slot are separated by a
    blank line.
    """

    kind: NodeKind
    tag: str = ""
    value: str = ""
    content: List["TreeNode"] = field(default_factory=list)
    head_comment: str = ""
    foot_comment: str = ""
    alias: Optional["TreeNode"] = field(default=None, repr=False)
    line: int = 0
    column: int = 0
    yaml_node: Optional[yaml.Node] = field(default=None, repr=False)

    @property
    def short_tag(self) -> str:
        if self.tag.startswith(_YAML_TAG_PREFIX):
            return "!!" + self.tag[len(_YAML_TAG_PREFIX) :]
        return self.tag

    def pairs(self) -> List[Tuple["TreeNode", "TreeNode"]]:
        """Key/value pairs of a mapping node."""
        return list(zip(self.content[0::2], self.content[1::2]))

    def resolve(self) -> "TreeNode":
        """Follow an alias to the node it refers to."""
        node = self
        while node.kind == NodeKind.ALIAS and node.alias is not None:
            node = node.alias
        return node


def _site(parent: yaml.Node, index: Union[int, yaml.Node]) -> Tuple:
    if isinstance(index, int):
        return (id(parent), "index", index)
    return (id(parent), "key", id(index))


class TreeLoader(yaml.SafeLoader):
    """Safe loader that remembers where aliases were used.

    PyYAML replaces an alias by the anchored node itself, which loses the
    distinction between the anchor and its references.
    It also keeps the mark where the first document ends, so comments of
    later documents can be left out.
    """

    def __init__(self, stream):
        super().__init__(stream)
        self.alias_marks: Dict[Tuple, yaml.Mark] = {}
        self.document_end: Optional[yaml.Mark] = None

    def compose_node(self, parent, index):
        if parent is not None and index is not None and self.check_event(
            yaml.AliasEvent
        ):
            mark = self.peek_event().start_mark
            node = super().compose_node(parent, index)
            self.alias_marks[_site(parent, index)] = mark
            return node
        return super().compose_node(parent, index)

    def compose_document(self):
        self.get_event()
        node = self.compose_node(None, None)
        # Starts at the next "---", "..." or the end of the stream
        self.document_end = self.get_event().start_mark
        self.anchors = {}
        return node


@dataclass(eq=False)
class _Entry:
    """A position that can carry comments: a mapping key or a sequence item."""

    line: int
    column: int
    parent: Optional["_Entry"]
    node: Optional[TreeNode] = None

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def is_within(self, other: "_Entry") -> bool:
        entry = self.parent
        while entry is not None:
            if entry is other:
                return True
            entry = entry.parent
        return False


@dataclass
class _Block:
    start: int
    end: int
    column: int
    lines: List[str]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _append_comment(node: TreeNode, attribute: str, text: str) -> None:
    existing = getattr(node, attribute)
    setattr(node, attribute, f"{existing}\n\n{text}" if existing else text)


class _TreeBuilder:
    def __init__(self, lines: List[str], alias_marks: Dict[Tuple, yaml.Mark]):
        self._lines = lines
        self._alias_marks = alias_marks
        self._converted: Dict[int, TreeNode] = {}
        self._entries: List[_Entry] = []
        self._scalar_lines: Set[int] = set()

    def build(self, root: Optional[yaml.Node]) -> TreeNode:
        document = TreeNode(NodeKind.DOCUMENT)
        if root is not None:
            document.line = root.start_mark.line
            document.column = root.start_mark.column
            document.content.append(self._convert(root, None))
        self._attach_comments(document, root)
        return document

    def _convert(self, node: yaml.Node, entry: Optional[_Entry]) -> TreeNode:
        tree_node = TreeNode(
            kind=_KINDS[type(node)],
            tag=node.tag,
            line=node.start_mark.line,
            column=node.start_mark.column,
            yaml_node=node,
        )
        # Registered before the children so recursive anchors resolve
        self._converted[id(node)] = tree_node

        if isinstance(node, yaml.ScalarNode):
            tree_node.value = node.value
            self._mark_scalar_lines(node)
        elif isinstance(node, yaml.SequenceNode):
            for index, item in enumerate(node.value):
                mark = self._alias_marks.get(_site(node, index))
                line = mark.line if mark else item.start_mark.line
                if node.flow_style:
                    column = mark.column if mark else item.start_mark.column
                else:
                    column = node.start_mark.column
                child_entry = self._add_entry(line, column, entry)
                child = self._alias(item, mark) if mark else self._convert(item, child_entry)
                child_entry.node = child
                tree_node.content.append(child)
        elif isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                child_entry = self._add_entry(
                    key_node.start_mark.line, key_node.start_mark.column, entry
                )
                key = self._convert(key_node, child_entry)
                child_entry.node = key
                mark = self._alias_marks.get(_site(node, key_node))
                if mark:
                    value = self._alias(value_node, mark)
                else:
                    value = self._convert(value_node, child_entry)
                tree_node.content.extend((key, value))

        return tree_node

    def _alias(self, target: yaml.Node, mark: yaml.Mark) -> TreeNode:
        resolved = self._converted.get(id(target))
        if resolved is None:
            resolved = self._convert(target, None)
        return TreeNode(
            kind=NodeKind.ALIAS,
            tag=target.tag,
            alias=resolved,
            line=mark.line,
            column=mark.column,
            yaml_node=target,
        )

    def _add_entry(self, line: int, column: int, parent: Optional[_Entry]) -> _Entry:
        entry = _Entry(line, column, parent)
        self._entries.append(entry)
        return entry

    def _mark_scalar_lines(self, node: yaml.ScalarNode) -> None:
        start, end = node.start_mark.line, node.end_mark.line
        if end > start:
            last = end if node.end_mark.column > 0 else end - 1
            self._scalar_lines.update(range(start + 1, last + 1))

    def _comment_blocks(self) -> Iterator[_Block]:
        block = None
        for number, line in enumerate(self._lines):
            stripped = line.strip()
            if not stripped.startswith("#") or number in self._scalar_lines:
                continue
            if block is not None and block.end == number - 1:
                block.lines.append(stripped)
                block.end = number
                continue
            if block is not None:
                yield block
            block = _Block(number, number, len(line) - len(line.lstrip()), [stripped])
        if block is not None:
            yield block

    def _attach_comments(self, document: TreeNode, root: Optional[yaml.Node]) -> None:
        entries = sorted(self._entries, key=lambda e: (e.line, e.depth))

        for block in self._comment_blocks():
            following = next((e for e in entries if e.line > block.end), None)
            if following is not None and following.line == block.end + 1:
                _append_comment(following.node, "head_comment", block.text)
                continue

            preceding = next(
                (
                    e
                    for e in reversed(entries)
                    if e.line < block.start and e.column <= block.column
                ),
                None,
            )
            if preceding is not None and not (
                following is not None and following.is_within(preceding)
            ):
                _append_comment(preceding.node, "foot_comment", block.text)
            elif following is not None and following.parent is not None:
                _append_comment(following.node, "head_comment", block.text)
            elif root is None or following is not None or block.start < root.start_mark.line:
                _append_comment(document, "head_comment", block.text)
            else:
                _append_comment(document, "foot_comment", block.text)


def load_tree(text: str) -> TreeNode:
    """
    Decode YAML text into an annotated tree.

    Only the first document of a multi-document stream is decoded.

    Args:
        text: YAML source

    Returns:
        Document node of the tree

    Raises:
        yaml.YAMLError: If the text is not valid YAML
    """
    loader = TreeLoader(text)
    try:
        root = loader.get_node() if loader.check_node() else None
        alias_marks = loader.alias_marks
        end = loader.document_end
    finally:
        loader.dispose()

    lines = text.splitlines()
    if end is not None:
        lines = lines[: end.line if end.column == 0 else end.line + 1]
    return _TreeBuilder(lines, alias_marks).build(root)


def read_tree(filename: Union[str, Path]) -> TreeNode:
    """Read a values file and decode it into an annotated tree."""
    logger.debug(f"Reading values file: {filename}")
    return load_tree(Path(filename).read_text(encoding="utf-8"))
