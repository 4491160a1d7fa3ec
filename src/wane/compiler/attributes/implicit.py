"""Dashed keys are attributes, never properties."""
from typing import Optional

from wane.compiler.attributes.base import AttributeParser, ElementRole
from wane.compiler.expressions import resolve_binding
from wane.compiler.preprocessor import Position
from wane.compiler.syntax import (
    COMPONENT_SEPARATOR,
    is_wrapped_in_explicit_attr_delims,
    is_wrapped_in_method_binding_delims,
    is_wrapped_in_prop_binding_delims,
    quote_constant,
    strip_prop_binding_delims,
)
from wane.compiler.bound_values import ViewBoundConstant
from wane.compiler.view_bindings import AttributeBinding


class ImplicitAttributeParser(AttributeParser):
    """Parses data-id="1" and [aria-label]="label"."""

    def can_parse(self, key: str) -> bool:
        return (
            COMPONENT_SEPARATOR in key
            and not is_wrapped_in_explicit_attr_delims(key)
            and not is_wrapped_in_method_binding_delims(key)
        )

    def parse(self, key: str, value: Optional[str], role: ElementRole,
              position: Optional[Position] = None) -> AttributeBinding:
        if is_wrapped_in_prop_binding_delims(key):
            value = self.require_value(key, value, position)
            return AttributeBinding(strip_prop_binding_delims(key), resolve_binding(value))

        return AttributeBinding(key, ViewBoundConstant(quote_constant(value or "")))
