"""Base directive parser."""
from abc import ABC, abstractmethod

from wane.compiler.markup import RawElement
from wane.compiler.syntax import DIRECTIVE_PREFIX
from wane.compiler.template_nodes import TemplateNodeValue


class DirectiveParser(ABC):
    """Base class for <w:NAME> pseudo-elements."""

    NAME = ""

    def can_parse(self, tag_name: str) -> bool:
        """Check if the tag is this directive (prefix and name are case-insensitive)."""
        return tag_name.lower() == f"{DIRECTIVE_PREFIX}{self.NAME}"

    @abstractmethod
    def parse(self, element: RawElement) -> TemplateNodeValue:
        """Build the view node wrapping the directive's children."""
        pass
