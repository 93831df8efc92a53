"""
Configuration constants for valuedoc.
"""

import logging
from enum import StrEnum

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "valuedoc.yaml"

DEFAULT_INPUT = "values.yaml"
DEFAULT_TEMPLATE = "markdown-table"
DEFAULT_HEADER_PATTERN = r"^<!-- AUTO-GENERATED -->"
DEFAULT_FOOTER_PATTERN = r"^<!-- /AUTO-GENERATED -->"

# Default reported for properties that only exist in comments
UNDEFINED_DEFAULT = "undefined"
UNKNOWN_TYPE = "unknown"


class DirectiveTag(StrEnum):
    """Directives recognised in values file comments."""

    SECTION = "docs:section"
    IGNORE = "docs:ignore"
    TYPE = "docs:type"
    DEFAULT = "docs:default"
    PROPERTY = "docs:property"


class NodeKind(StrEnum):
    """Kinds of nodes in a decoded values tree."""

    DOCUMENT = "document"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"
    ALIAS = "alias"


# Short YAML tag -> documented type name
TYPE_NAMES = {
    "!!bool": "bool",
    "!!str": "string",
    "!!int": "number",
    "!!float": "number",
    "!!timestamp": "timestamp",
    "!!seq": "array",
    "!!map": "object",
}
