"""
Type and default value inference for documented properties.
"""

import logging
from typing import Any, Optional

import yaml
from yaml.constructor import ConstructorError

from ..config import TYPE_NAMES, UNKNOWN_TYPE, DirectiveTag
from .comment import Comment
from .tree import TreeNode

logger = logging.getLogger(__name__)

_DOCUMENT_END = "\n..."


def get_type_of(raw_node: Optional[TreeNode], comment: Comment) -> str:
    """Documented type of a node; an explicit ``docs:type`` always wins."""
    explicit = comment.tags.get_string(DirectiveTag.TYPE)
    if explicit:
        return explicit

    if raw_node is None:
        return UNKNOWN_TYPE

    return TYPE_NAMES.get(raw_node.resolve().short_tag, UNKNOWN_TYPE)


def get_default_value(raw_node: Optional[TreeNode], comment: Comment) -> str:
    """
    Documented default of a node; an explicit ``docs:default`` always wins.

    The value is decoded and dumped again so formatting-only differences
    in the source (quoting, flow style, spacing) do not show up in the
    documentation.
    """
    explicit = comment.tags.get_string(DirectiveTag.DEFAULT)
    if explicit:
        return explicit

    if raw_node is None or raw_node.yaml_node is None:
        return ""

    node = raw_node.resolve().yaml_node
    try:
        value = _decode(node)
    except ConstructorError as e:
        # Tags without a safe constructor (local tags) are dumped as written
        logger.debug(f"Cannot decode {node.tag} value, keeping its source form: {e}")
        text = yaml.serialize(
            node, Dumper=yaml.SafeDumper, indent=2, allow_unicode=True
        ).strip()
    else:
        text = yaml.safe_dump(
            value,
            indent=2,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        ).strip()
    # Bare scalars are dumped with an explicit document end marker
    if text.endswith(_DOCUMENT_END):
        text = text[: -len(_DOCUMENT_END)].rstrip()
    return text


def _decode(node: yaml.Node) -> Any:
    constructor = yaml.SafeLoader("")
    try:
        return constructor.construct_document(node)
    finally:
        constructor.dispose()
