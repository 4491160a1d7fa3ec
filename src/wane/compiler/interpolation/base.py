"""Base interpolation parser."""
from abc import ABC, abstractmethod
from typing import List

from wane.compiler.markup import RawText
from wane.compiler.template_nodes import TemplateNodeValue


class InterpolationParser(ABC):
    """Base class for splitting text content into text and interpolation nodes."""

    @abstractmethod
    def parse(self, text: RawText) -> List[TemplateNodeValue]:
        """
        Parse text with interpolations into ordered view nodes.
        'a{{ b }}c' -> [Text('a'), Interpolation(b), Text('c')]
        """
        pass
