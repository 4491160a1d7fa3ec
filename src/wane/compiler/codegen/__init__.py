"""Source rewrites applied to component classes."""
from wane.compiler.codegen.wrap_async_code import (
    CallbackSlot,
    RewriteOptions,
    expand_arrow_function,
    expand_callback,
    inject_code_in_expanded_function,
    inject_constructor_param,
    process_class_declaration,
    statement_injector,
    wrap_async_code,
    wrap_async_source,
)

__all__ = [
    "CallbackSlot",
    "RewriteOptions",
    "expand_arrow_function",
    "expand_callback",
    "inject_code_in_expanded_function",
    "inject_constructor_param",
    "process_class_declaration",
    "statement_injector",
    "wrap_async_code",
    "wrap_async_source",
]
