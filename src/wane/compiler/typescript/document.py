"""
Tree-sitter TypeScript document.
Parses component sources and exposes char-based ranges for the range editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Any, Iterator, List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Tree

from wane.compiler.typescript.range_edits import RangeEditor

CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration", "class")
IDENTIFIER_NODE_TYPES = (
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "type_identifier",
)


@lru_cache(maxsize=1)
def get_language() -> Language:
    import tree_sitter_typescript as tsts
    return Language(tsts.language_typescript())


@dataclass(frozen=True)
class TemplateSource:
    """A template string literal found in a component source."""
    text: str
    line: int


class TypeScriptDocument:
    """
    Wrapper for a tree-sitter parsed TypeScript source.

    The tree always describes the original text; rewrites are planned on
    `editor` and materialized by `apply_edits`.
    """

    def __init__(self, text: str, file_path: str = ""):
        self.text = text
        self.file_path = file_path
        self._text_bytes = text.encode("utf-8")
        self.tree: Tree = Parser(get_language()).parse(self._text_bytes)
        self.editor = RangeEditor(text)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        return self.root_node.has_error

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8")

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        return self.byte_to_char_position(node.start_byte), self.byte_to_char_position(node.end_byte)

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Convert a byte position to a character position.
        A position inside a multi-byte character maps to the start of that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            return len(self.text)
        return len(self._text_bytes[:byte_pos].decode("utf-8", errors="ignore"))

    def line_indent(self, char_offset: int) -> str:
        """Leading whitespace of the line containing char_offset."""
        line_start = self.text.rfind("\n", 0, char_offset) + 1
        end = line_start
        while end < len(self.text) and self.text[end] in " \t":
            end += 1
        return self.text[line_start:end]

    def node_indent(self, node: Node) -> str:
        return self.line_indent(self.get_node_range(node)[0])

    def find_nodes_by_type(self, node_type: str, start_node: Optional[Node] = None) -> List[Node]:
        """Find all nodes of a specific type, in document order."""
        return [node for node in self.walk_tree(start_node) if node.type == node_type]

    def walk_tree(self, start_node: Optional[Node] = None) -> Iterator[Node]:
        """
        Walk the tree using TreeCursor for efficient traversal.

        Yields:
            Node objects in depth-first order
        """
        if start_node is None:
            start_node = self.root_node

        cursor = start_node.walk()
        visited_children = False

        while True:
            if not visited_children:
                yield cursor.node

                if not cursor.goto_first_child():
                    visited_children = True
            elif cursor.goto_next_sibling():
                visited_children = False
            elif not cursor.goto_parent():
                break
            else:
                visited_children = True

    def find_classes(self) -> List[Node]:
        """Class declarations and class expressions, outermost first."""
        return [node for node in self.walk_tree() if node.is_named and node.type in CLASS_NODE_TYPES]

    def class_name(self, class_node: Node) -> str:
        name = class_node.child_by_field_name("name")
        return self.get_node_text(name) if name is not None else "<anonymous>"

    def identifiers(self, start_node: Optional[Node] = None) -> Iterator[Tuple[Node, str]]:
        for node in self.walk_tree(start_node):
            if node.type in IDENTIFIER_NODE_TYPES:
                yield node, self.get_node_text(node)

    @staticmethod
    def named_children(node: Node) -> List[Node]:
        """Named children, comments excluded."""
        return [child for child in node.named_children if child.type != "comment"]

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """Rewritten text and edit statistics; the document itself is unchanged."""
        return self.editor.apply_edits()


def extract_templates(doc: TypeScriptDocument, decorator_name: str = "Template") -> List[TemplateSource]:
    """String arguments of @Template(...) decorators."""
    templates = []
    for decorator in doc.find_nodes_by_type("decorator"):
        call = next((child for child in decorator.named_children if child.type == "call_expression"), None)
        if call is None:
            continue
        function = call.child_by_field_name("function")
        if function is None or doc.get_node_text(function) != decorator_name:
            continue

        arguments = call.child_by_field_name("arguments")
        for argument in doc.named_children(arguments) if arguments is not None else []:
            if argument.type == "string" or (
                argument.type == "template_string"
                and not any(child.type == "template_substitution" for child in argument.named_children)
            ):
                templates.append(TemplateSource(doc.get_node_text(argument)[1:-1], argument.start_point[0] + 1))
    return templates
