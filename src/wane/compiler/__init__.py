"""Compiler module."""

from wane.compiler.codegen.wrap_async_code import RewriteOptions, wrap_async_code, wrap_async_source
from wane.compiler.exceptions import RewriteError, TemplateParseError, WaneCompilerError
from wane.compiler.parser import TemplateParser, parse_template

__all__ = [
    "RewriteError",
    "RewriteOptions",
    "TemplateParseError",
    "TemplateParser",
    "WaneCompilerError",
    "parse_template",
    "wrap_async_code",
    "wrap_async_source",
]
