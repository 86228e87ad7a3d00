"""Filling constructor argument lists from supplied values, defaults and registered bindings."""

from typing import Any, Callable

from conjure.domain import ParameterDescriptor, ResolutionContext
from conjure.introspection import describe

__all__ = ["ArgumentResolver", "UNFILLED"]


class _Unfilled:
    def __repr__(self):
        return "UNFILLED"


# Placeholder for a position the resolver could not fill
UNFILLED = _Unfilled()


class ArgumentResolver:
    """Resolves the positional arguments of a constructor.

    Args:
        load_dependency: Called with a type hint and the current build path to
            obtain an instance for a typed parameter.
        can_provide: Whether a type hint is registered or constructible.
    """

    def __init__(
        self,
        load_dependency: Callable[[type, tuple[type, ...]], Any],
        can_provide: Callable[[type], bool],
    ):
        self._load_dependency = load_dependency
        self._can_provide = can_provide

    def resolve(self, cls: type, supplied: tuple = (), path: tuple[type, ...] = ()) -> list:
        """Return the argument list for constructing ``cls``.

        Each parameter is visited left to right and its position filled from,
        in order of preference: a supplied value that already satisfies its type
        hint; a dependency loaded for the type hint; any other supplied value;
        the declared default. Positions that none of these fill hold
        :data:`UNFILLED`. Supplied values past the last parameter are kept.

        Args:
            cls: The class whose constructor is being resolved.
            supplied: Positional arguments from the caller. ``None`` counts as empty.
            path: Classes already being built, ``cls`` included.
        """
        context = ResolutionContext(supplied, path)

        for parameter in describe(cls):
            self._fill(context, parameter)

        return context.arguments

    def _fill(self, context: ResolutionContext, parameter: ParameterDescriptor) -> None:
        position = parameter.position
        current = context.arguments[position] if position < len(context.arguments) else None
        if current is UNFILLED:
            current = None

        if parameter.type_hint is not None:
            if _satisfies(current, parameter.type_hint):
                return
            if (
                parameter.has_default
                and parameter.default is None
                and not self._can_provide(parameter.type_hint)
            ):
                _place(context.arguments, position, None)
                return
            _place(
                context.arguments,
                position,
                self._load_dependency(parameter.type_hint, context.path),
            )
            return

        if current is not None:
            return
        if parameter.has_default:
            _place(context.arguments, position, parameter.default)


def _satisfies(value: Any, hint: type) -> bool:
    if value is None:
        return False
    try:
        return isinstance(value, hint)
    except TypeError:
        # protocols without @runtime_checkable cannot be checked; trust the caller
        return True


def _place(arguments: list, position: int, value: Any) -> None:
    while len(arguments) <= position:
        arguments.append(UNFILLED)
    arguments[position] = value
