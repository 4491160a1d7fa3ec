"""Resolution of binding expressions into bound values."""
import re
from typing import List, Optional, Union

from wane.compiler.bound_values import (
    MethodArgument,
    ViewBoundConstant,
    ViewBoundMethodCall,
    ViewBoundPlaceholder,
    ViewBoundPropertyAccess,
)
from wane.compiler.exceptions import TemplateParseError
from wane.compiler.preprocessor import Position
from wane.compiler.syntax import PLACEHOLDER_TOKEN

_PROPERTY_ACCESS = re.compile(r"^!?[a-zA-Z.]*$")
_PROPERTY_ACCESS_NO_NEGATION = re.compile(r"^[a-zA-Z.]*$")

_KEYWORD_LITERALS = ("null", "undefined", "true", "false")
_OPENING = "([{"
_CLOSING = ")]}"
_QUOTES = "'\"`"


def is_just_property_access(text: str, disallow_negation: bool = False) -> bool:
    """Letters and dots only, optionally preceded by a single '!'."""
    pattern = _PROPERTY_ACCESS_NO_NEGATION if disallow_negation else _PROPERTY_ACCESS
    return pattern.match(text) is not None


def is_literal(text: str) -> bool:
    if text in _KEYWORD_LITERALS:
        return True
    if text.startswith(("'", '"', "`")):
        return True
    # Numbers: 42, 3.14, .5
    return bool(text) and (text[0].isdigit() or text.startswith("."))


def resolve_binding(text: str) -> Union[ViewBoundConstant, ViewBoundPropertyAccess]:
    text = text.strip()
    if is_literal(text):
        return ViewBoundConstant(text)
    return ViewBoundPropertyAccess(text)


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on separator, ignoring separators nested in brackets or string literals."""
    parts: List[str] = []
    depth = 0
    quote = None
    start = 0

    for i, char in enumerate(text):
        if quote:
            if char == quote and text[i - 1] != "\\":
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENING:
            depth += 1
        elif char in _CLOSING:
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1

    parts.append(text[start:])
    return parts


def parse_method_call(text: str, position: Optional[Position] = None) -> ViewBoundMethodCall:
    """
    Parse an event handler expression such as ``onSubmit(#, 'x', item.id)``.

    The outermost parenthesized group holds the arguments; ``#`` becomes a
    placeholder for the event object, anything else is resolved as a
    constant or a property path.
    """
    text = text.strip()
    open_index = text.find("(")

    if open_index <= 0 or not text.endswith(")"):
        raise TemplateParseError.at(position, "Invalid method invocation.")

    name = text[:open_index].strip()
    inner = text[open_index + 1:-1]
    if not name or _closing_index(text, open_index) != len(text) - 1:
        raise TemplateParseError.at(position, "Invalid method invocation.")

    if not inner.strip():
        return ViewBoundMethodCall(name, ())

    args: List[MethodArgument] = []
    for raw_arg in split_top_level(inner):
        arg = raw_arg.strip()
        if not arg:
            raise TemplateParseError.at(position, "Invalid method invocation.")
        if arg == PLACEHOLDER_TOKEN:
            args.append(ViewBoundPlaceholder())
        else:
            args.append(resolve_binding(arg))

    return ViewBoundMethodCall(name, tuple(args))


def _closing_index(text: str, open_index: int) -> int:
    """Index of the parenthesis closing the one at open_index, or -1."""
    depth = 0
    quote = None
    for i in range(open_index, len(text)):
        char = text[i]
        if quote:
            if char == quote and text[i - 1] != "\\":
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1
