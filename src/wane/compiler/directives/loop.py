"""<w:for> directive."""
import re
from typing import Optional, Tuple

from wane.compiler.directives.base import DirectiveParser
from wane.compiler.exceptions import TemplateParseError
from wane.compiler.expressions import is_just_property_access, resolve_binding
from wane.compiler.markup import RawElement
from wane.compiler.preprocessor import Position
from wane.compiler.template_nodes import RepeatingNode
from wane.compiler.view_bindings import RepeatingBinding

_OF_TOKEN = re.compile(r"\s+of\s+|^of\s+|\s+of$")
_NAME = re.compile(r"^[A-Za-z_$][\w$]*$")


class LoopDirectiveParser(DirectiveParser):
    """Parses <w:for (item, i) of items; key: item.id>."""

    NAME = "for"

    def parse(self, element: RawElement) -> RepeatingNode:
        definition = " ".join(attr.key.strip() for attr in element.attributes).strip()
        iteration, _, key_clause = definition.partition(";")

        item_name, index_name, source = self._parse_iteration(iteration.strip(), element.position)
        key_path = None
        if key_clause.strip():
            key_path = self._parse_key(key_clause.strip(), element.position)

        binding = RepeatingBinding(resolve_binding(source), item_name, index_name, key_path)
        return RepeatingNode(binding, element)

    def _parse_iteration(self, clause: str,
                         position: Optional[Position]) -> Tuple[str, Optional[str], str]:
        parts = _OF_TOKEN.split(clause, maxsplit=1)
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise TemplateParseError.at(position, "Expected '<item> of <items>' in w:for.")
        binder, source = parts[0].strip(), parts[1].strip()

        index_name = None
        if binder.startswith("(") and binder.endswith(")"):
            names = [name.strip() for name in binder[1:-1].split(",")]
            if len(names) > 2:
                raise TemplateParseError.at(position, "Expected '(item, index)' in w:for.")
            item_name = names[0]
            if len(names) == 2:
                index_name = names[1]
        else:
            item_name = binder

        for name in (item_name, index_name):
            if name is not None and not _NAME.match(name):
                raise TemplateParseError.at(position, f"Invalid variable name '{name}' in w:for.")

        return item_name, index_name, source

    def _parse_key(self, clause: str, position: Optional[Position]) -> str:
        left, colon, right = clause.partition(":")
        left, right = left.strip(), right.strip()
        if not colon or not right:
            raise TemplateParseError.at(position, 'Bad format after ";" in w:for.')
        if left != "key":
            raise TemplateParseError.at(position, f'Key "{left}" not supported in w:for.')
        if not is_just_property_access(right, disallow_negation=True):
            raise TemplateParseError.at(position, "The key must be simple property access.")
        return right
