"""[attr.name] attribute bindings."""
from typing import Optional

from wane.compiler.attributes.base import AttributeParser, ElementRole
from wane.compiler.expressions import resolve_binding
from wane.compiler.preprocessor import Position
from wane.compiler.syntax import is_wrapped_in_explicit_attr_delims, strip_explicit_attr_delims
from wane.compiler.view_bindings import AttributeBinding


class ExplicitAttributeParser(AttributeParser):
    """Parses [attr.aria-label]="label" into an attribute binding."""

    def can_parse(self, key: str) -> bool:
        return is_wrapped_in_explicit_attr_delims(key)

    def parse(self, key: str, value: Optional[str], role: ElementRole,
              position: Optional[Position] = None) -> AttributeBinding:
        value = self.require_value(key, value, position)
        return AttributeBinding(strip_explicit_attr_delims(key), resolve_binding(value))
