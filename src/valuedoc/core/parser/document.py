"""
Documentation model assembled from an annotated values tree.

The ``DocumentAssembler`` is the walker's visitor: for every node it decides
whether the node is a documented property, a container to descend into, or
something to skip, and it turns comments that annotate containers into
sections and documentation-only properties.
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path as FilePath
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..config import UNDEFINED_DEFAULT, DirectiveTag, NodeKind
from .comment import Comment, Comments, CommentSegmentKind, parse_comment
from .inference import get_default_value, get_type_of
from .path import Path
from .tree import TreeNode, load_tree, read_tree
from .walker import Node, is_end_node, walk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Property:
    """A documented value of the values file."""

    name: str
    description: Comment
    type: str
    default: str


@dataclass
class Section:
    """A named group of properties; the first section of a document is unnamed."""

    name: str = ""
    description: str = ""
    properties: List[Property] = field(default_factory=list)


@dataclass
class Document:
    """Sections in the order they were opened."""

    sections: List[Section] = field(default_factory=lambda: [Section()])

    @property
    def properties(self) -> List[Property]:
        return [prop for section in self.sections for prop in section.properties]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the document to a JSON friendly dictionary."""
        d = asdict(self)
        for section, section_dict in zip(self.sections, d["sections"]):
            for prop, prop_dict in zip(section.properties, section_dict["properties"]):
                prop_dict["description"] = str(prop.description)
        return d


class DocumentAssembler:
    """Builds a Document while the tree is walked."""

    def __init__(self):
        self.document = Document()

    @property
    def current_section(self) -> Section:
        return self.document.sections[-1]

    def open_section(self, name: str, description: str) -> None:
        self.document.sections.append(Section(name=name, description=description))
        logger.debug(f"Opened section: {name}")

    def append_property(self, section: Section, prop: Property) -> None:
        section.properties.append(prop)

    def enter(self, node: Node) -> bool:
        comment = node.head_comments.pop_first()
        parent = node.path.parent()

        self.add_comments(parent, node.head_comments)

        if comment.tags.get_bool(DirectiveTag.IGNORE):
            logger.debug(f"Ignoring {node.path}")
            return True

        if not is_end_node(node, comment):
            self.add_comments(parent, Comments([comment]))
            return False

        self.append_property(
            self.current_section,
            Property(
                name=str(node.path),
                description=comment,
                type=get_type_of(node.raw_node, comment),
                default=get_default_value(node.raw_node, comment),
            ),
        )
        return True

    def leave(self, node: Node) -> None:
        self.add_comments(node.path.parent(), node.foot_comments)

    def add_comments(self, path: Path, comments: Comments) -> None:
        """Apply comments that annotate the container at ``path``."""
        for comment in comments:
            if comment.tags.get_bool(DirectiveTag.SECTION):
                self.open_section(comment.tags.get_string(DirectiveTag.SECTION), str(comment))
            elif comment.tags.get_bool(DirectiveTag.PROPERTY):
                prop = self._undefined_property(path, comment)
                if prop is not None:
                    self.append_property(self.current_section, prop)

    def _undefined_property(self, path: Path, comment: Comment) -> Optional[Property]:
        """Property declared only in a comment, optionally with an example block."""
        raw_node = None
        example_path = None

        code_index = next(
            (
                i
                for i, segment in enumerate(comment.segments)
                if segment.kind == CommentSegmentKind.CODE
            ),
            None,
        )
        if code_index is not None:
            example = _parse_example(comment.segments[code_index].content)
            if example is not None:
                key, raw_node = example
                example_path = path.with_property(key)
                comment = comment.without_segment(code_index)

        name = comment.tags.get_string(DirectiveTag.PROPERTY)
        if not name and example_path is not None:
            name = str(example_path)
        if not name:
            logger.warning(
                f"Could not determine the name of a property declared under '{path}', skipping it"
            )
            return None

        return Property(
            name=name,
            description=comment,
            type=get_type_of(raw_node, comment),
            default=UNDEFINED_DEFAULT,
        )


def _parse_example(text: str) -> Optional[Tuple[str, TreeNode]]:
    """Key and value of a single-key mapping example, if the text is one."""
    try:
        tree = load_tree(text)
    except yaml.YAMLError as e:
        logger.debug(f"Example block is not valid YAML: {e}")
        return None

    if not tree.content or tree.content[0].kind != NodeKind.MAPPING:
        return None
    pairs = tree.content[0].pairs()
    if len(pairs) != 1:
        return None
    key, value = pairs[0]
    return key.value, value


def build_document(tree: TreeNode) -> Document:
    """
    Build the documentation model of a decoded values tree.

    Raises:
        StructuralError: If the tree contains an alias cycle
    """
    assembler = DocumentAssembler()
    root = Node(
        path=Path(),
        head_comments=parse_comment(tree.head_comment),
        foot_comments=parse_comment(tree.foot_comment),
        raw_node=tree,
    )
    walk(root, assembler)
    return assembler.document


def loads_document(text: str) -> Document:
    """Build the documentation model of YAML text."""
    return build_document(load_tree(text))


def load_document(filename: Union[str, FilePath]) -> Document:
    """Build the documentation model of a values file."""
    return build_document(read_tree(filename))
