"""Attribute parsers."""
from typing import List, Optional

from wane.compiler.attributes.base import AttributeParser, ElementRole
from wane.compiler.attributes.events import EventBindingParser
from wane.compiler.attributes.explicit import ExplicitAttributeParser
from wane.compiler.attributes.implicit import ImplicitAttributeParser
from wane.compiler.attributes.plain import PlainAttributeParser
from wane.compiler.attributes.property import PropertyBindingParser
from wane.compiler.preprocessor import Position
from wane.compiler.view_bindings import ViewBinding


def default_attribute_parsers() -> List[AttributeParser]:
    """Classifier chain, highest priority first."""
    return [
        ExplicitAttributeParser(),
        ImplicitAttributeParser(),
        PropertyBindingParser(),
        EventBindingParser(),
        PlainAttributeParser(),
    ]


def classify_attribute(key: str, value: Optional[str], role: ElementRole,
                       position: Optional[Position] = None,
                       parsers: Optional[List[AttributeParser]] = None) -> ViewBinding:
    for parser in parsers if parsers is not None else default_attribute_parsers():
        if parser.can_parse(key):
            return parser.parse(key, value, role, position)
    raise LookupError(f"No attribute parser accepts '{key}'")


__all__ = [
    "AttributeParser",
    "ElementRole",
    "EventBindingParser",
    "ExplicitAttributeParser",
    "ImplicitAttributeParser",
    "PlainAttributeParser",
    "PropertyBindingParser",
    "classify_attribute",
    "default_attribute_parsers",
]
