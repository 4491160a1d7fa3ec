"""Template syntax constants and small predicates over tag names and attribute keys."""
from typing import Callable, Tuple

Delims = Tuple[str, str]

INTERPOLATION_DELIMS: Delims = ("{{", "}}")
PROP_BINDING_DELIMS: Delims = ("[", "]")
EXPLICIT_ATTR_DELIMS: Delims = ("[attr.", "]")
METHOD_BINDING_DELIMS: Delims = ("(", ")")

DIRECTIVE_PREFIX = "w:"
COMPONENT_SEPARATOR = "-"
PLACEHOLDER_TOKEN = "#"


def is_wrapped_in(delims: Delims) -> Callable[[str], bool]:
    def check(text: str) -> bool:
        return (
            len(text) >= len(delims[0]) + len(delims[1])
            and text.startswith(delims[0])
            and text.endswith(delims[1])
        )
    return check


def strip_wrapper(delims: Delims) -> Callable[[str], str]:
    def strip(text: str) -> str:
        return text[len(delims[0]):len(text) - len(delims[1])]
    return strip


is_wrapped_in_prop_binding_delims = is_wrapped_in(PROP_BINDING_DELIMS)
is_wrapped_in_explicit_attr_delims = is_wrapped_in(EXPLICIT_ATTR_DELIMS)
is_wrapped_in_method_binding_delims = is_wrapped_in(METHOD_BINDING_DELIMS)

strip_prop_binding_delims = strip_wrapper(PROP_BINDING_DELIMS)
strip_explicit_attr_delims = strip_wrapper(EXPLICIT_ATTR_DELIMS)
strip_method_binding_delims = strip_wrapper(METHOD_BINDING_DELIMS)


def is_directive(tag_name: str) -> bool:
    return tag_name.lower().startswith(DIRECTIVE_PREFIX)


def is_component(tag_name: str) -> bool:
    return COMPONENT_SEPARATOR in tag_name


def quote_constant(text: str) -> str:
    """Render text as a single-quoted literal usable as a ViewBoundConstant."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("'", "\\'")
        .replace('"', '\\"')
        .replace("`", "\\`")
    )
    return f"'{escaped}'"
