"""View bindings: one bound value tagged with its syntactic role."""
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple

from wane.compiler.bound_values import ViewBoundConstant, ViewBoundValue


class BindingKind(str, Enum):
    ATTRIBUTE = "attribute"
    HTML_ELEMENT_PROP = "html-element-prop"
    HTML_ELEMENT_EVENT = "html-element-event"
    COMPONENT_INPUT = "component-input"
    COMPONENT_OUTPUT = "component-output"
    CONDITIONAL = "conditional"
    REPEATING = "repeating"
    INTERPOLATION = "interpolation"
    TEXT = "text"


BindingKey = Tuple[BindingKind, Optional[str]]


@dataclass(frozen=True)
class ViewBinding:
    """Base for bindings. Subclasses declare `value` (and `name` where the kind is named)."""
    kind: ClassVar[BindingKind]

    @property
    def key(self) -> BindingKey:
        """Identity inside a node's binding set."""
        return self.kind, getattr(self, "name", None)


@dataclass(frozen=True)
class AttributeBinding(ViewBinding):
    """[attr.aria-label]="label" or data-id="1"."""
    kind: ClassVar[BindingKind] = BindingKind.ATTRIBUTE
    name: str
    value: ViewBoundValue

    def __str__(self) -> str:
        return f"AttributeBinding({self.name}={self.value})"


@dataclass(frozen=True)
class HtmlElementPropBinding(ViewBinding):
    """[value]="answer" on a plain element."""
    kind: ClassVar[BindingKind] = BindingKind.HTML_ELEMENT_PROP
    name: str
    value: ViewBoundValue

    def __str__(self) -> str:
        return f"HtmlElementPropBinding({self.name}={self.value})"


@dataclass(frozen=True)
class HtmlElementEventBinding(ViewBinding):
    """(click)="inc()" on a plain element."""
    kind: ClassVar[BindingKind] = BindingKind.HTML_ELEMENT_EVENT
    name: str
    value: ViewBoundValue

    def __str__(self) -> str:
        return f"HtmlElementEventBinding({self.name}={self.value})"


@dataclass(frozen=True)
class ComponentInputBinding(ViewBinding):
    """[value]="left" on a component tag."""
    kind: ClassVar[BindingKind] = BindingKind.COMPONENT_INPUT
    name: str
    value: ViewBoundValue

    def __str__(self) -> str:
        return f"ComponentInputBinding({self.name}={self.value})"


@dataclass(frozen=True)
class ComponentOutputBinding(ViewBinding):
    """(valueChange)="onLeftChange(#)" on a component tag."""
    kind: ClassVar[BindingKind] = BindingKind.COMPONENT_OUTPUT
    name: str
    value: ViewBoundValue

    def __str__(self) -> str:
        return f"ComponentOutputBinding({self.name}={self.value})"


@dataclass(frozen=True)
class ConditionalBinding(ViewBinding):
    """<w:if !isHidden>."""
    kind: ClassVar[BindingKind] = BindingKind.CONDITIONAL
    value: ViewBoundValue
    is_negated: bool = False

    def __str__(self) -> str:
        return f"ConditionalBinding({'!' if self.is_negated else ''}{self.value})"


@dataclass(frozen=True)
class RepeatingBinding(ViewBinding):
    """<w:for (item, i) of items; key: item.id>."""
    kind: ClassVar[BindingKind] = BindingKind.REPEATING
    value: ViewBoundValue
    item_name: str
    index_name: Optional[str] = None
    key_path: Optional[str] = None

    def __str__(self) -> str:
        return (
            f"RepeatingBinding(item={self.item_name}, index={self.index_name}, "
            f"of={self.value}, key={self.key_path})"
        )


@dataclass(frozen=True)
class InterpolationBinding(ViewBinding):
    """{{ answer }}."""
    kind: ClassVar[BindingKind] = BindingKind.INTERPOLATION
    value: ViewBoundValue

    def __str__(self) -> str:
        return f"InterpolationBinding({self.value})"


@dataclass(frozen=True)
class TextBinding(ViewBinding):
    kind: ClassVar[BindingKind] = BindingKind.TEXT
    value: ViewBoundConstant

    def __post_init__(self) -> None:
        if not isinstance(self.value, ViewBoundConstant):
            raise TypeError(f"TextBinding requires a constant value, got {self.value!r}")

    def __str__(self) -> str:
        return f"TextBinding({self.value})"
