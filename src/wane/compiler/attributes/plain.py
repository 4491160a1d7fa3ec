"""Fallback for plain attributes."""
from typing import Optional

from wane.compiler.attributes.base import AttributeParser, ElementRole
from wane.compiler.bound_values import ViewBoundConstant
from wane.compiler.preprocessor import Position
from wane.compiler.syntax import quote_constant
from wane.compiler.view_bindings import (
    AttributeBinding,
    ComponentInputBinding,
    HtmlElementPropBinding,
    ViewBinding,
)


class PlainAttributeParser(AttributeParser):
    """type="text" sets a property; a bare key such as `disabled` is an attribute."""

    def can_parse(self, key: str) -> bool:
        return True

    def parse(self, key: str, value: Optional[str], role: ElementRole,
              position: Optional[Position] = None) -> ViewBinding:
        if value is None:
            return AttributeBinding(key, ViewBoundConstant(quote_constant("")))

        constant = ViewBoundConstant(quote_constant(value))
        if role is ElementRole.COMPONENT:
            return ComponentInputBinding(key, constant)
        return HtmlElementPropBinding(key, constant)
