"""Base attribute parser."""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from wane.compiler.exceptions import TemplateParseError
from wane.compiler.preprocessor import Position
from wane.compiler.view_bindings import ViewBinding


class ElementRole(str, Enum):
    """What kind of tag carries the attribute being classified."""
    ELEMENT = "element"
    COMPONENT = "component"


class AttributeParser(ABC):
    """Base class for attribute classifiers, tried in priority order."""

    @abstractmethod
    def can_parse(self, key: str) -> bool:
        """Check if this parser handles the attribute key."""
        pass

    @abstractmethod
    def parse(self, key: str, value: Optional[str], role: ElementRole,
              position: Optional[Position] = None) -> ViewBinding:
        """Turn a raw attribute into a view binding."""
        pass

    @staticmethod
    def require_value(key: str, value: Optional[str], position: Optional[Position]) -> str:
        if value is None:
            raise TemplateParseError.at(position, f"Binding '{key}' requires a value.")
        return value
