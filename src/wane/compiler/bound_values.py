"""Values that a view binding can carry."""
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class ViewBoundValue:
    """Base for every resolved binding expression."""


@dataclass(frozen=True)
class ViewBoundConstant(ViewBoundValue):
    """A literal expression, copied verbatim ('hi', 42, true, null...)."""
    value: str

    def __str__(self) -> str:
        return f"Constant({self.value})"


@dataclass(frozen=True)
class ViewBoundPropertyAccess(ViewBoundValue):
    """A dotted member path on the component instance, e.g. foo.bar."""
    path: str

    def __str__(self) -> str:
        return f"PropertyAccess({self.path})"


@dataclass(frozen=True)
class ViewBoundPlaceholder(ViewBoundValue):
    """Stands for the event object; only valid as a method-call argument."""

    def __str__(self) -> str:
        return "Placeholder(#)"


MethodArgument = Union[ViewBoundConstant, ViewBoundPropertyAccess, ViewBoundPlaceholder]


@dataclass(frozen=True)
class ViewBoundMethodCall(ViewBoundValue):
    """onSubmit(#, 'x') - a method invoked with constant/path/placeholder arguments."""
    name: str
    args: Tuple[MethodArgument, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple so the value stays hashable.
        object.__setattr__(self, "args", tuple(self.args))
        for arg in self.args:
            if not isinstance(arg, (ViewBoundConstant, ViewBoundPropertyAccess, ViewBoundPlaceholder)):
                raise TypeError(f"Unsupported method call argument: {arg!r}")

    def __str__(self) -> str:
        return f"MethodCall({self.name}, [{', '.join(str(a) for a in self.args)}])"
