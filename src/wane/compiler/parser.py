"""Template parser orchestrator."""
import logging
from pathlib import Path
from typing import List, Optional, Union

from wane.compiler.attributes import (
    AttributeParser,
    ElementRole,
    classify_attribute,
    default_attribute_parsers,
)
from wane.compiler.directives import ConditionalDirectiveParser, DirectiveParser, LoopDirectiveParser
from wane.compiler.exceptions import TemplateParseError
from wane.compiler.interpolation import HandlebarsInterpolationParser
from wane.compiler.markup import RawComment, RawElement, RawNode, RawText, parse_markup
from wane.compiler.syntax import is_component, is_directive
from wane.compiler.template_nodes import (
    ComponentNode,
    Forest,
    HtmlElementNode,
    TemplateNodeValue,
    TreeNode,
)
from wane.compiler.view_bindings import ViewBinding

logger = logging.getLogger(__name__)


class TemplateParser:
    """Turns a template into a forest of view nodes."""

    def __init__(self):
        # Directive registry
        self.directive_parsers: List[DirectiveParser] = [
            ConditionalDirectiveParser(),
            LoopDirectiveParser(),
        ]

        # Attribute parser chain, highest priority first
        self.attribute_parsers: List[AttributeParser] = default_attribute_parsers()

        self.interpolation_parser = HandlebarsInterpolationParser()

    def parse_file(self, file_path: Union[str, Path]) -> Forest:
        """Parse a template file."""
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()

        return self.parse(content, str(file_path))

    def parse(self, content: str, file_path: str = "") -> Forest:
        """Parse template content."""
        try:
            return Forest(self._handle_nodes(parse_markup(content)))
        except TemplateParseError as e:
            if file_path and not e.file_path:
                e.file_path = file_path
            logger.error("Failed to parse template: %s", e)
            raise

    def _handle_nodes(self, nodes: List[RawNode]) -> List[TreeNode]:
        trees: List[TreeNode] = []
        for node in nodes:
            if isinstance(node, RawComment):
                continue
            if isinstance(node, RawText):
                trees.extend(TreeNode(value) for value in self.interpolation_parser.parse(node))
                continue
            trees.append(self._handle_element(node))
        return trees

    def _handle_element(self, element: RawElement) -> TreeNode:
        if is_directive(element.tag):
            value = self._handle_directive(element)
        elif is_component(element.tag):
            value = self._handle_component(element)
        else:
            value = self._handle_html_element(element)
        return TreeNode(value, self._handle_nodes(element.children))

    def _handle_directive(self, element: RawElement) -> TemplateNodeValue:
        for parser in self.directive_parsers:
            if parser.can_parse(element.tag):
                return parser.parse(element)
        raise TemplateParseError.at(element.position, f"Unsupported directive <{element.tag}>.")

    def _handle_component(self, element: RawElement) -> ComponentNode:
        bindings = self._classify_attributes(element, ElementRole.COMPONENT)
        return self._attach(ComponentNode(element.tag, original_node=element), element, bindings)

    def _handle_html_element(self, element: RawElement) -> HtmlElementNode:
        bindings = self._classify_attributes(element, ElementRole.ELEMENT)
        return self._attach(HtmlElementNode(element.tag, original_node=element), element, bindings)

    def _classify_attributes(self, element: RawElement, role: ElementRole) -> List[ViewBinding]:
        return [
            classify_attribute(attr.key, attr.value, role, element.position, self.attribute_parsers)
            for attr in element.attributes
        ]

    @staticmethod
    def _attach(node: TemplateNodeValue, element: RawElement, bindings: List[ViewBinding]):
        """Add bindings one by one so a duplicate is reported at the element."""
        for binding in bindings:
            try:
                node.view_bindings.add(binding)
            except ValueError as e:
                raise TemplateParseError.at(element.position, f"{e} on <{element.tag}>.") from e
        return node


def parse_template(content: str, file_path: Optional[str] = None) -> Forest:
    """Parse a template string with the default parser."""
    return TemplateParser().parse(content, file_path or "")
