"""<w:if> directive."""
from wane.compiler.directives.base import DirectiveParser
from wane.compiler.exceptions import TemplateParseError
from wane.compiler.expressions import is_just_property_access, resolve_binding
from wane.compiler.markup import RawElement
from wane.compiler.template_nodes import ConditionalNode
from wane.compiler.view_bindings import ConditionalBinding


class ConditionalDirectiveParser(DirectiveParser):
    """Parses <w:if isShown> and <w:if !isHidden>."""

    NAME = "if"

    def parse(self, element: RawElement) -> ConditionalNode:
        if not element.attributes:
            raise TemplateParseError.at(element.position, "Must specify the condition in w:if.")

        # The condition arrives as attribute keys, e.g. <w:if !user.isAdmin>.
        path = " ".join(
            attr.key if attr.value is None else f"{attr.key} = {attr.value}"
            for attr in element.attributes
        )
        if not is_just_property_access(path):
            raise TemplateParseError.at(
                element.position, "The conditional for w:if must be a property name."
            )

        is_negated = path.startswith("!")
        if is_negated:
            path = path[1:]

        binding = ConditionalBinding(resolve_binding(path), is_negated)
        return ConditionalNode(binding, element)
