"""[name] property and input bindings."""
from typing import Optional

from wane.compiler.attributes.base import AttributeParser, ElementRole
from wane.compiler.expressions import resolve_binding
from wane.compiler.preprocessor import Position
from wane.compiler.syntax import is_wrapped_in_prop_binding_delims, strip_prop_binding_delims
from wane.compiler.view_bindings import ComponentInputBinding, HtmlElementPropBinding, ViewBinding


class PropertyBindingParser(AttributeParser):
    """Parses [value]="answer"; an input binding when placed on a component."""

    def can_parse(self, key: str) -> bool:
        return is_wrapped_in_prop_binding_delims(key)

    def parse(self, key: str, value: Optional[str], role: ElementRole,
              position: Optional[Position] = None) -> ViewBinding:
        value = self.require_value(key, value, position)
        name = strip_prop_binding_delims(key)
        bound = resolve_binding(value)
        if role is ElementRole.COMPONENT:
            return ComponentInputBinding(name, bound)
        return HtmlElementPropBinding(name, bound)
