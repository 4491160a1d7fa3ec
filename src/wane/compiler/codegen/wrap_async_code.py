"""
Instrumentation of promise callbacks in component classes.

Every `.then(cb)` / `.catch(cb)` argument of a class method is brought to a
block-bodied arrow and wrapped so that injected statements run after the
callback returns. A class with at least one instrumented callback receives
the collaborator constructor parameter the injected code relies on.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from tree_sitter import Node

from wane.compiler.exceptions import RewriteError
from wane.compiler.typescript import CodeWriter, TypeScriptDocument
from wane.compiler.typescript.document import CLASS_NODE_TYPES

logger = logging.getLogger(__name__)

RESERVED_PREFIX = "__wane__"
CALLBACK_METHODS = ("then", "catch")
DEFAULT_INJECT_STATEMENT = "this.__wane__factory.__wane__diff()"

InjectCode = Callable[[CodeWriter], None]


@dataclass
class RewriteOptions:
    indent_text: str = "  "
    args_name: str = "args"
    args_type: Optional[str] = "any[]"
    result_name: str = f"{RESERVED_PREFIX}result"
    factory_scope: Optional[str] = "private"
    factory_name: str = f"{RESERVED_PREFIX}factory"
    factory_type: str = "any"
    reserved_prefix: str = RESERVED_PREFIX

    @property
    def rest_parameter(self) -> str:
        """...args: any[]"""
        if self.args_type:
            return f"...{self.args_name}: {self.args_type}"
        return f"...{self.args_name}"

    @property
    def spread_arguments(self) -> str:
        return f"...{self.args_name}"


@dataclass(frozen=True)
class CallbackSlot:
    """The single argument of a `.then` / `.catch` call."""
    call: Node
    arguments: Node
    argument: Node
    callback_method: str

    @classmethod
    def from_call(cls, doc: TypeScriptDocument, call: Node,
                  class_name: Optional[str] = None, method_name: Optional[str] = None) -> "CallbackSlot":
        function = call.child_by_field_name("function")
        arguments = call.child_by_field_name("arguments")
        values = doc.named_children(arguments) if arguments is not None else []
        prop = function.child_by_field_name("property")
        callback_method = doc.get_node_text(prop if prop is not None else function)
        line = call.start_point[0] + 1

        if len(values) != 1:
            raise RewriteError(
                f"Expected exactly one argument to .{callback_method}() on line {line}, got {len(values)}.",
                class_name, method_name,
            )
        if values[0].type == "spread_element":
            raise RewriteError(
                f"Cannot instrument a spread argument to .{callback_method}() on line {line}.",
                class_name, method_name,
            )
        return cls(call, arguments, values[0], callback_method)


def dedent_continuation(text: str, base: str) -> str:
    """Strip `base` from every line after the first."""
    first, *rest = text.split("\n")
    lines = [first]
    for line in rest:
        lines.append(line[len(base):] if line.startswith(base) else line.lstrip(" \t"))
    return "\n".join(lines)


def indent_continuation(text: str, base: str) -> str:
    """Prefix every non-blank line after the first with `base`."""
    first, *rest = text.split("\n")
    return "\n".join([first] + [base + line if line else line for line in rest])


def expand_arrow_function(doc: TypeScriptDocument, arrow: Node,
                          options: Optional[RewriteOptions] = None) -> bool:
    """
    Give a concise arrow function a block body: `x => x * 2` becomes
    `x => {\\n  return x * 2\\n}`.

    Returns:
        True if the arrow was rewritten, False if it already has a block body
    """
    options = options or RewriteOptions()
    body = arrow.child_by_field_name("body")
    if body is None or body.type == "statement_block":
        return False

    start, end = doc.get_node_range(body)
    if doc.editor.has_edit(start, end, "expand-arrow"):
        return False

    # () => ({ a: 1 }) must return the object, not a parenthesized expression
    parenthesized = body.type == "parenthesized_expression"
    base = doc.line_indent(start)

    def render(current: str) -> str:
        value = current[1:-1].strip() if parenthesized else current
        writer = CodeWriter(options.indent_text)
        writer.write("{")
        with writer.indent_block():
            writer.write_line(f"return {dedent_continuation(value, base)}")
        writer.write("}")
        return indent_continuation(writer.to_string(), base)

    doc.editor.add_edit(start, end, render, "expand-arrow")
    return True


def expand_callback(doc: TypeScriptDocument, slot: CallbackSlot,
                    options: Optional[RewriteOptions] = None) -> bool:
    """
    Canonicalize a callback argument.

    References and calls (`handler`, `this.handler.bind(this)`) are wrapped in
    a rest-parameter arrow forwarding every argument. Arrow functions keep
    their own parameters and only get a block body. Function expressions and
    block-bodied arrows are left alone.
    """
    options = options or RewriteOptions()
    node = slot.argument

    if node.type == "arrow_function":
        return expand_arrow_function(doc, node, options)

    if node.type not in ("call_expression", "identifier"):
        return False

    start, end = doc.get_node_range(node)
    if doc.editor.has_edit(start, end, "expand-callback"):
        return False
    base = doc.line_indent(start)

    def render(current: str) -> str:
        writer = CodeWriter(options.indent_text)
        writer.write(f"({options.rest_parameter}) => {{")
        with writer.indent_block():
            writer.write_line(f"return {dedent_continuation(current, base)}({options.spread_arguments})")
        writer.write("}")
        return indent_continuation(writer.to_string(), base)

    doc.editor.add_edit(start, end, render, "expand-callback")
    return True


def inject_code_in_expanded_function(doc: TypeScriptDocument, slot: CallbackSlot, inject_code: InjectCode,
                                     options: Optional[RewriteOptions] = None) -> None:
    """
    Wrap the slot's callback so `inject_code` runs after it and its result is
    still returned:

        (...args: any[]) => {
          const __wane__result = (<callback>)(...args)
          <injected>
          return __wane__result
        }
    """
    options = options or RewriteOptions()
    start, end = doc.get_node_range(slot.argument)
    base = doc.line_indent(start)

    def render(current: str) -> str:
        writer = CodeWriter(options.indent_text)
        writer.write(f"({options.rest_parameter}) => {{")
        with writer.indent_block():
            writer.write_line(
                f"const {options.result_name} = "
                f"({dedent_continuation(current, base)})({options.spread_arguments})"
            )
            inject_code(writer)
            writer.write_line(f"return {options.result_name}")
        writer.write("}")
        return indent_continuation(writer.to_string(), base)

    doc.editor.add_edit(start, end, render, "inject-callback")


def find_constructor(doc: TypeScriptDocument, class_node: Node) -> Optional[Node]:
    """The constructor implementation. Overload signatures have no body and are not returned."""
    body = class_node.child_by_field_name("body")
    for member in doc.named_children(body):
        if member.type == "method_definition" and _method_name(doc, member) == "constructor" \
                and member.child_by_field_name("body") is not None:
            return member
    return None


def inject_constructor_param(doc: TypeScriptDocument, class_node: Node, scope: Optional[str],
                             name: str, type_: str, options: Optional[RewriteOptions] = None) -> None:
    """
    Add `scope name: type` as the last constructor parameter, synthesizing
    `constructor (scope name: type) { }` as the first member when the class
    has no constructor. Calling it twice adds the parameter twice.
    """
    options = options or RewriteOptions()
    param = f"{scope + ' ' if scope else ''}{name}: {type_}"
    constructor = find_constructor(doc, class_node)

    if constructor is not None:
        parameters = constructor.child_by_field_name("parameters")
        existing = doc.named_children(parameters)
        if existing:
            doc.editor.add_insertion(doc.get_node_range(existing[-1])[1], f", {param}", "constructor-param")
        else:
            start, end = doc.get_node_range(parameters)
            doc.editor.add_replacement(start + 1, end - 1, param, "constructor-param")
        logger.debug("Added %s to constructor of %s", name, doc.class_name(class_node))
        return

    body = class_node.child_by_field_name("body")
    body_start, _ = doc.get_node_range(body)
    members = doc.named_children(body)
    declaration = f"constructor ({param}) {{ }}"
    class_indent = doc.line_indent(body_start)

    if members and members[0].start_point[0] == body.start_point[0]:
        content = f" {declaration}"
    elif members:
        content = f"\n{doc.node_indent(members[0])}{declaration}"
    elif body.end_point[0] > body.start_point[0]:
        content = f"\n{class_indent}{options.indent_text}{declaration}"
    else:
        content = f"\n{class_indent}{options.indent_text}{declaration}\n{class_indent}"

    doc.editor.add_insertion(body_start + 1, content, "constructor")
    logger.debug("Synthesized constructor for %s", doc.class_name(class_node))


def iter_methods(doc: TypeScriptDocument, class_node: Node) -> Iterator[Node]:
    """Methods with a body; constructors and get/set accessors are not methods."""
    body = class_node.child_by_field_name("body")
    for member in doc.named_children(body):
        if member.type != "method_definition" or member.child_by_field_name("body") is None:
            continue
        if _method_name(doc, member) == "constructor":
            continue
        if any(child.type in ("get", "set") for child in member.children):
            continue
        yield member


def iter_call_sites(doc: TypeScriptDocument, node: Node) -> Iterator[Node]:
    """`.then(...)` / `.catch(...)` calls under node, not descending into nested classes."""
    for child in node.children:
        if child.is_named and child.type in CLASS_NODE_TYPES:
            continue
        if child.type == "member_expression" and _is_invoked_callback_access(doc, child):
            yield child.parent
        yield from iter_call_sites(doc, child)


def _is_invoked_callback_access(doc: TypeScriptDocument, member: Node) -> bool:
    prop = member.child_by_field_name("property")
    if prop is None or prop.type != "property_identifier":
        return False
    if doc.get_node_text(prop) not in CALLBACK_METHODS:
        return False
    parent = member.parent
    return (
        parent is not None
        and parent.type == "call_expression"
        and parent.child_by_field_name("function") == member
    )


def _method_name(doc: TypeScriptDocument, method: Node) -> str:
    name = method.child_by_field_name("name")
    return doc.get_node_text(name) if name is not None else ""


def _check_reserved_names(doc: TypeScriptDocument, class_node: Node, class_name: str,
                          options: RewriteOptions) -> None:
    for node, text in doc.identifiers(class_node):
        if text.startswith(options.reserved_prefix):
            raise RewriteError(
                f"Identifier '{text}' on line {node.start_point[0] + 1} uses the reserved "
                f"prefix '{options.reserved_prefix}'.",
                class_name,
            )


def process_class_declaration(doc: TypeScriptDocument, class_node: Node,
                              inject_code: Callable[[CallbackSlot], InjectCode],
                              options: Optional[RewriteOptions] = None) -> bool:
    """
    Instrument every callback site in the class's methods.

    Returns:
        True if the class was touched (and got the collaborator parameter)
    """
    options = options or RewriteOptions()
    class_name = doc.class_name(class_node)

    # Collect and validate first so a bad site leaves no edits behind.
    slots: List[CallbackSlot] = []
    for method in iter_methods(doc, class_node):
        method_name = _method_name(doc, method)
        for call in iter_call_sites(doc, method.child_by_field_name("body")):
            slots.append(CallbackSlot.from_call(doc, call, class_name, method_name))

    if not slots:
        return False

    _check_reserved_names(doc, class_node, class_name, options)

    for slot in slots:
        expand_callback(doc, slot, options)
        inject_code_in_expanded_function(doc, slot, inject_code(slot), options)
        logger.debug(
            "Instrumented .%s() in %s on line %d", slot.callback_method, class_name, slot.call.start_point[0] + 1
        )

    inject_constructor_param(
        doc, class_node, options.factory_scope, options.factory_name, options.factory_type, options
    )
    return True


def statement_injector(statement: str = DEFAULT_INJECT_STATEMENT) -> Callable[[CallbackSlot], InjectCode]:
    """Inject the same statement after every callback."""
    def for_slot(slot: CallbackSlot) -> InjectCode:
        return lambda writer: writer.write_line(statement)
    return for_slot


def wrap_async_source(text: str, inject_code: Callable[[CallbackSlot], InjectCode],
                      options: Optional[RewriteOptions] = None, file_path: str = "") -> str:
    """Instrument every class of one TypeScript source."""
    doc = TypeScriptDocument(text, file_path)
    touched = [process_class_declaration(doc, node, inject_code, options) for node in doc.find_classes()]
    if not any(touched):
        return text

    result, stats = doc.apply_edits()
    logger.debug("Instrumented %d class(es) in %s: %s", sum(touched), file_path or "<source>", stats)
    return result


def wrap_async_code(sources: Mapping[str, str], inject_code: Callable[[CallbackSlot], InjectCode],
                    options: Optional[RewriteOptions] = None) -> Dict[str, str]:
    """Instrument a set of sources keyed by file path."""
    results = {}
    for file_path, text in sources.items():
        try:
            results[file_path] = wrap_async_source(text, inject_code, options, file_path)
        except RewriteError as e:
            logger.error("Failed to instrument %s: %s", file_path, e)
            raise
    return results
