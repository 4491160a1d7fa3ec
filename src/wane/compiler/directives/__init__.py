"""Directive parsers."""

from wane.compiler.directives.base import DirectiveParser
from wane.compiler.directives.conditional import ConditionalDirectiveParser
from wane.compiler.directives.loop import LoopDirectiveParser

__all__ = ["DirectiveParser", "ConditionalDirectiveParser", "LoopDirectiveParser"]
