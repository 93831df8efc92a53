"""
Extraction of the documentation model from an annotated values file.
"""

from .comment import (
    Comment,
    Comments,
    CommentSegment,
    CommentSegmentKind,
    Tags,
    parse_comment,
)
from .document import (
    Document,
    DocumentAssembler,
    Property,
    Section,
    build_document,
    load_document,
    loads_document,
)
from .path import IndexStep, Path, PathComponent, PropertyStep, parse_path
from .tree import TreeNode, load_tree, read_tree
from .walker import Node, is_end_node, walk

__all__ = [
    "Comment",
    "Comments",
    "CommentSegment",
    "CommentSegmentKind",
    "Document",
    "DocumentAssembler",
    "IndexStep",
    "Node",
    "Path",
    "PathComponent",
    "Property",
    "PropertyStep",
    "Section",
    "Tags",
    "TreeNode",
    "build_document",
    "is_end_node",
    "load_document",
    "load_tree",
    "loads_document",
    "parse_comment",
    "parse_path",
    "read_tree",
    "walk",
]
