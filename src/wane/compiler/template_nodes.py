"""View node model: typed template nodes, their binding sets and the forest."""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from wane.compiler.markup import RawNode
from wane.compiler.view_bindings import (
    AttributeBinding,
    BindingKey,
    BindingKind,
    ComponentInputBinding,
    ComponentOutputBinding,
    ConditionalBinding,
    HtmlElementEventBinding,
    HtmlElementPropBinding,
    InterpolationBinding,
    RepeatingBinding,
    TextBinding,
    ViewBinding,
)


def pascal_case(text: str) -> str:
    """counter-cmp -> CounterCmp."""
    words = re.split(r"[^A-Za-z0-9]+", text)
    return "".join(word[:1].upper() + word[1:] for word in words if word)


def _with_bindings(header: str, bindings: "BindingSet") -> str:
    if not len(bindings):
        return header
    return f"{header} " + ", ".join(str(binding) for binding in bindings)


class BindingSet:
    """Bindings of one node, keyed by (kind, name). A key may appear only once."""

    def __init__(self, bindings: Iterable[ViewBinding] = ()):
        self._bindings: Dict[BindingKey, ViewBinding] = {}
        for binding in bindings:
            self.add(binding)

    def add(self, binding: ViewBinding) -> None:
        key = binding.key
        if key in self._bindings:
            kind, name = key
            label = f"{kind.value} '{name}'" if name is not None else kind.value
            raise ValueError(f"Duplicate {label} binding")
        self._bindings[key] = binding

    def get(self, kind: BindingKind, name: Optional[str] = None) -> Optional[ViewBinding]:
        return self._bindings.get((kind, name))

    def of_kind(self, kind: BindingKind) -> List[ViewBinding]:
        return [b for (k, _), b in self._bindings.items() if k == kind]

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __iter__(self) -> Iterator[ViewBinding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"BindingSet({list(self._bindings.values())!r})"


class TemplateNodeValue(ABC):
    """Base for view nodes. Structural children live in the forest, not here."""

    is_pure_dom: bool = True
    dom_nodes_count: int = 1

    def __init__(self, view_bindings: Iterable[ViewBinding], original_node: Optional[RawNode] = None):
        self.view_bindings = view_bindings if isinstance(view_bindings, BindingSet) else BindingSet(view_bindings)
        # Diagnostics only; never used for semantics.
        self.original_node = original_node

    def get_binding(self, kind: BindingKind, name: Optional[str] = None) -> Optional[ViewBinding]:
        return self.view_bindings.get(kind, name)

    def get_binding_or_fail(self, kind: BindingKind, name: Optional[str] = None) -> ViewBinding:
        binding = self.get_binding(kind, name)
        if binding is None:
            target = f" named '{name}'" if name is not None else ""
            raise KeyError(f"Cannot find {kind.value} binding{target} for {self}.")
        return binding

    @abstractmethod
    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        """Expressions creating the DOM nodes this view node materializes."""
        pass

    def describe(self) -> str:
        """One line for `Forest.pretty`."""
        return str(self)

    def __repr__(self) -> str:
        return str(self)


class HtmlElementNode(TemplateNodeValue):

    def __init__(self, tag_name: str,
                 attribute_bindings: Iterable[AttributeBinding] = (),
                 prop_bindings: Iterable[HtmlElementPropBinding] = (),
                 event_bindings: Iterable[HtmlElementEventBinding] = (),
                 original_node: Optional[RawNode] = None):
        super().__init__([*attribute_bindings, *prop_bindings, *event_bindings], original_node)
        self.tag_name = tag_name

    @property
    def attribute_bindings(self) -> List[ViewBinding]:
        return self.view_bindings.of_kind(BindingKind.ATTRIBUTE)

    @property
    def prop_bindings(self) -> List[ViewBinding]:
        return self.view_bindings.of_kind(BindingKind.HTML_ELEMENT_PROP)

    @property
    def event_bindings(self) -> List[ViewBinding]:
        return self.view_bindings.of_kind(BindingKind.HTML_ELEMENT_EVENT)

    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        return [f"util.__wane__createElement('{self.tag_name}')"]

    def describe(self) -> str:
        return _with_bindings(str(self), self.view_bindings)

    def __str__(self) -> str:
        return f"[Element] <{self.tag_name}>"


class ComponentNode(TemplateNodeValue):
    is_pure_dom = False

    def __init__(self, tag_name: str,
                 attribute_bindings: Iterable[AttributeBinding] = (),
                 input_bindings: Iterable[ComponentInputBinding] = (),
                 output_bindings: Iterable[ComponentOutputBinding] = (),
                 original_node: Optional[RawNode] = None):
        super().__init__([*attribute_bindings, *input_bindings, *output_bindings], original_node)
        self.tag_name = tag_name

    @property
    def component_class_name(self) -> str:
        return pascal_case(self.tag_name)

    @property
    def attribute_bindings(self) -> List[ViewBinding]:
        return self.view_bindings.of_kind(BindingKind.ATTRIBUTE)

    @property
    def input_bindings(self) -> List[ViewBinding]:
        return self.view_bindings.of_kind(BindingKind.COMPONENT_INPUT)

    @property
    def output_bindings(self) -> List[ViewBinding]:
        return self.view_bindings.of_kind(BindingKind.COMPONENT_OUTPUT)

    def get_attribute_binding_by_name_or_fail(self, name: str) -> AttributeBinding:
        return self.get_binding_or_fail(BindingKind.ATTRIBUTE, name)

    def get_input_binding_by_name_or_fail(self, name: str) -> ComponentInputBinding:
        return self.get_binding_or_fail(BindingKind.COMPONENT_INPUT, name)

    def get_output_binding_by_name_or_fail(self, name: str) -> ComponentOutputBinding:
        return self.get_binding_or_fail(BindingKind.COMPONENT_OUTPUT, name)

    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        # The analyzer is opaque here; the host element is the same for every component.
        return [f"util.__wane__createElement('{self.tag_name}')"]

    def describe(self) -> str:
        return _with_bindings(str(self), self.view_bindings)

    def __str__(self) -> str:
        return f"[Component] <{self.tag_name}>"


class ConditionalNode(TemplateNodeValue):
    # Opening and closing comment anchors.
    dom_nodes_count = 2

    def __init__(self, binding: ConditionalBinding, original_node: Optional[RawNode] = None):
        super().__init__([binding], original_node)
        self.binding = binding

    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        return ["util.__wane__createComment('w:if')", "util.__wane__createComment('/w:if')"]

    def __str__(self) -> str:
        negation = "!" if self.binding.is_negated else ""
        return f"[w:if] {negation}{self.binding.value}"


class RepeatingNode(TemplateNodeValue):
    dom_nodes_count = 2

    def __init__(self, binding: RepeatingBinding, original_node: Optional[RawNode] = None):
        super().__init__([binding], original_node)
        self.binding = binding

    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        return ["util.__wane__createComment('w:for')", "util.__wane__createComment('/w:for')"]

    def __str__(self) -> str:
        binder = self.binding.item_name
        if self.binding.index_name:
            binder = f"({binder}, {self.binding.index_name})"
        key = f"; key: {self.binding.key_path}" if self.binding.key_path else ""
        return f"[w:for] {binder} of {self.binding.value}{key}"


class InterpolationNode(TemplateNodeValue):

    def __init__(self, binding: InterpolationBinding, original_node: Optional[RawNode] = None):
        super().__init__([binding], original_node)
        self.binding = binding

    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        return ["util.__wane__createTextNode('')"]

    def __str__(self) -> str:
        return f"[Interpolation] {{{{ {self.binding.value} }}}}"


class TextNode(TemplateNodeValue):

    def __init__(self, binding: TextBinding, original_node: Optional[RawNode] = None):
        super().__init__([binding], original_node)
        self.binding = binding

    def print_dom_init(self, analyzer: Any = None) -> List[str]:
        return [f"util.__wane__createTextNode({self.binding.value.value})"]

    def __str__(self) -> str:
        return f"[Text] {self.binding.value.value}"


@dataclass(frozen=True)
class TreeNode:
    value: TemplateNodeValue
    children: Tuple["TreeNode", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def walk(self) -> Iterator["TreeNode"]:
        """Depth-first, pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class Forest:
    """Ordered node trees of one template, mirroring source order."""
    roots: Tuple[TreeNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "roots", tuple(self.roots))

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.roots)

    def __len__(self) -> int:
        return len(self.roots)

    def walk(self) -> Iterator[TreeNode]:
        for root in self.roots:
            yield from root.walk()

    def values(self) -> List[TemplateNodeValue]:
        return [tree_node.value for tree_node in self.walk()]

    def pretty(self, indent: str = "  ") -> str:
        lines: List[str] = []

        def visit(tree_node: TreeNode, depth: int) -> None:
            lines.append(f"{indent * depth}{tree_node.value.describe()}")
            for child in tree_node.children:
                visit(child, depth + 1)

        for root in self.roots:
            visit(root, 0)
        return "\n".join(lines)
