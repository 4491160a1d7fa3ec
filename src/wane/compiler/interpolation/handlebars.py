"""{{ expr }} interpolation."""
import re
from typing import List

from wane.compiler.bound_values import ViewBoundConstant
from wane.compiler.expressions import resolve_binding
from wane.compiler.interpolation.base import InterpolationParser
from wane.compiler.markup import RawText
from wane.compiler.syntax import INTERPOLATION_DELIMS, quote_constant
from wane.compiler.template_nodes import InterpolationNode, TemplateNodeValue, TextNode
from wane.compiler.view_bindings import InterpolationBinding, TextBinding

HANDLEBARS_REGEX = re.compile(
    rf"{re.escape(INTERPOLATION_DELIMS[0])}\s*([^{{}}]+?)\s*{re.escape(INTERPOLATION_DELIMS[1])}"
)


class HandlebarsInterpolationParser(InterpolationParser):
    """Splits text on {{ ... }}; even chunks are literal text, odd chunks are bound."""

    def parse(self, text: RawText) -> List[TemplateNodeValue]:
        chunks = HANDLEBARS_REGEX.split(text.content)
        last = len(chunks) - 1
        nodes: List[TemplateNodeValue] = []

        for index, chunk in enumerate(chunks):
            # "{{ foo }}" splits into ['', 'foo', '']; the boundary blanks are not text.
            if index in (0, last) and chunk == "":
                continue

            if index % 2 == 0:
                binding = TextBinding(ViewBoundConstant(quote_constant(chunk)))
                nodes.append(TextNode(binding, text))
            else:
                nodes.append(InterpolationNode(InterpolationBinding(resolve_binding(chunk)), text))

        return nodes
