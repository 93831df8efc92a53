"""
Depth-first walk over an annotated values tree.

The walker only knows how to reach children; what happens at each node is
decided by a visitor, which keeps the traversal independent from the
document being assembled.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Protocol, Set

from ..config import DirectiveTag, NodeKind
from ..exceptions import StructuralError
from .comment import Comment, Comments, parse_comment
from .path import Path
from .tree import TreeNode

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """A tree node together with its location and the comments attached to it."""

    path: Path
    head_comments: Comments
    foot_comments: Comments
    raw_node: TreeNode


class Visitor(Protocol):
    def enter(self, node: Node) -> bool:
        """Handle a node; return True to skip its children."""
        ...

    def leave(self, node: Node) -> None:
        """Called once the node and everything below it has been visited."""
        ...


def walk(root: Node, visitor: Visitor) -> None:
    """
    Walk the tree below ``root`` in pre-order.

    Raises:
        StructuralError: If an alias resolves to a node that is still being
            walked, i.e. the tree is cyclic
    """
    _walk(root, visitor, set())


def _walk(node: Node, visitor: Visitor, chain: Set[int]) -> None:
    stop = visitor.enter(node)
    if not stop:
        raw = node.raw_node
        chain.add(id(raw))
        try:
            for child in _children(node, chain):
                _walk(child, visitor, chain)
        finally:
            chain.discard(id(raw))
    visitor.leave(node)


def _children(node: Node, chain: Set[int]) -> Iterator[Node]:
    raw = node.raw_node
    if raw.kind == NodeKind.SEQUENCE:
        for index, item in enumerate(raw.content):
            yield Node(
                path=node.path.with_index(index),
                head_comments=parse_comment(item.head_comment),
                foot_comments=parse_comment(item.foot_comment),
                raw_node=item,
            )
    elif raw.kind == NodeKind.MAPPING:
        for key, value in raw.pairs():
            yield Node(
                path=node.path.with_property(key.value),
                head_comments=parse_comment(key.head_comment),
                foot_comments=parse_comment(key.foot_comment),
                raw_node=value,
            )
    elif raw.kind == NodeKind.DOCUMENT:
        for child in raw.content:
            yield Node(
                path=node.path,
                head_comments=parse_comment(child.head_comment),
                foot_comments=parse_comment(child.foot_comment),
                raw_node=child,
            )
    elif raw.kind == NodeKind.ALIAS:
        target = raw.alias
        if target is None:
            return
        if id(target) in chain:
            raise StructuralError(
                f"alias at line {raw.line + 1} refers to one of its own ancestors",
                path=str(node.path),
            )
        # The alias occurrence's comments were handled on the alias itself
        yield Node(
            path=node.path,
            head_comments=Comments(),
            foot_comments=Comments(),
            raw_node=target,
        )


def is_end_node(node: Node, comment: Comment) -> bool:
    """
    Whether a node is documented as a single property.

    Scalars always are; maps and sequences only when empty or when their
    comment carries ``docs:property``. A document never is.
    """
    kind = node.raw_node.kind
    if kind == NodeKind.DOCUMENT:
        return False
    if kind == NodeKind.SCALAR:
        return True
    if comment.tags.get_bool(DirectiveTag.PROPERTY):
        return True
    if kind in (NodeKind.MAPPING, NodeKind.SEQUENCE):
        return not node.raw_node.content
    return False
