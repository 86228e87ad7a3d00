"""Domain models used throughout the container."""

import inspect
from dataclasses import dataclass, field
from typing import Any, Optional

from conjure.naming import normalize_class_name


@dataclass(frozen=True)
class BindingRecord:
    """The stored association between an alias and how to build it.

    Attributes:
        target: A class, a dotted class name, or a factory callable.
        alias: The normalised alias the binding was registered under.
        singleton: Whether at most one instance is built and cached for the alias.
        properties: Property overrides applied to every instance built from this binding.
    """

    target: Any
    alias: str
    singleton: bool = False
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def is_factory(self) -> bool:
        return not isinstance(self.target, str) and not inspect.isclass(self.target)

    @property
    def class_name(self) -> Optional[str]:
        """Canonical name of the bound class, or None for factory bindings."""
        if self.is_factory:
            return None
        return normalize_class_name(self.target)

    def to_descriptor(self) -> dict[str, Any]:
        return {"class": self.target, "singleton": self.singleton, **self.properties}


@dataclass(frozen=True)
class ParameterDescriptor:
    """A positional constructor parameter, as seen by the argument resolver.

    Attributes:
        position: Zero-based index of the parameter, not counting ``self``.
        name: The parameter name.
        type_hint: The class the parameter is annotated with, if it names one.
        has_default: Whether the parameter declares a default value.
        default: The declared default, or None.
        keyword: Whether the parameter may also be passed by name.
    """

    position: int
    name: str
    type_hint: Optional[type]
    has_default: bool
    default: Any = None
    keyword: bool = True


@dataclass
class ResolutionContext:
    """State owned by a single argument resolution.

    Attributes:
        supplied: The positional arguments supplied by the caller.
        path: Classes currently being built, outermost first.
        arguments: The argument list being filled, one slot per position. It starts
            as a copy of ``supplied``.
    """

    supplied: tuple
    path: tuple[type, ...] = ()
    arguments: list = field(init=False)

    def __post_init__(self):
        self.arguments = list(self.supplied)
