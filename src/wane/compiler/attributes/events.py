"""(event) bindings."""
from typing import Optional

from wane.compiler.attributes.base import AttributeParser, ElementRole
from wane.compiler.expressions import parse_method_call
from wane.compiler.preprocessor import Position
from wane.compiler.syntax import is_wrapped_in_method_binding_delims, strip_method_binding_delims
from wane.compiler.view_bindings import ComponentOutputBinding, HtmlElementEventBinding, ViewBinding


class EventBindingParser(AttributeParser):
    """Parses (click)="inc()" and (valueChange)="onChange(#)"."""

    def can_parse(self, key: str) -> bool:
        return is_wrapped_in_method_binding_delims(key)

    def parse(self, key: str, value: Optional[str], role: ElementRole,
              position: Optional[Position] = None) -> ViewBinding:
        value = self.require_value(key, value, position)
        name = strip_method_binding_delims(key)
        handler = parse_method_call(value, position)
        if role is ElementRole.COMPONENT:
            return ComponentOutputBinding(name, handler)
        return HtmlElementEventBinding(name, handler)
