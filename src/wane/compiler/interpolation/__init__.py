"""Interpolation parsers."""
from wane.compiler.interpolation.base import InterpolationParser
from wane.compiler.interpolation.handlebars import HANDLEBARS_REGEX, HandlebarsInterpolationParser

__all__ = ["InterpolationParser", "HandlebarsInterpolationParser", "HANDLEBARS_REGEX"]
