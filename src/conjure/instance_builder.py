"""Invoking constructors and factories, and applying property maps to the results."""

import logging
from typing import Any, Callable, Mapping, Sequence

from conjure.configurable import Configurable
from conjure.errors import ConstructionError, ContainerError
from conjure.introspection import configuration_parameter, describe, has_own_constructor
from conjure.naming import canonical_name
from conjure.resolver import UNFILLED

__all__ = ["InstanceBuilder", "apply_properties", "configure"]

logger = logging.getLogger(__name__)


def configure(instance: Configurable, properties: Mapping[str, Any]) -> None:
    """Run the configure step of an existing instance, wrapping failures like construction."""
    name = f"{canonical_name(type(instance))}.configure"
    _invoke(instance.configure, name, [dict(properties)], {})


def apply_properties(instance: Any, properties: Mapping[str, Any]) -> None:
    """Configure ``instance`` with ``properties`` if it supports the capability."""
    if isinstance(instance, Configurable):
        configure(instance, properties)
    elif properties:
        logger.warning(
            "Dropping properties %s: %s is not Configurable",
            sorted(properties),
            canonical_name(type(instance)),
        )


class InstanceBuilder:
    """Builds instances from resolved argument lists and factory callables."""

    def instantiate(
        self, cls: type, arguments: Sequence[Any], properties: Mapping[str, Any]
    ) -> Any:
        """Invoke the constructor of ``cls`` and configure the new instance.

        A class that takes a configuration payload receives ``properties`` through
        its constructor. Any other :class:`Configurable` instance is configured once
        it has been constructed, when there are properties to apply.

        Args:
            cls: The class to construct.
            arguments: Resolved positional arguments; may contain ``UNFILLED`` gaps.
            properties: The merged property overrides.

        Raises:
            ConstructionError: If the constructor, a property setter or ``init`` raises.
        """
        config_name = configuration_parameter(cls)
        if has_own_constructor(cls):
            args, kwargs = _call_arguments(cls, arguments)
        else:
            args, kwargs = [], {}
        if config_name is not None:
            kwargs[config_name] = dict(properties)

        logger.debug("Constructing %s", canonical_name(cls))
        instance = _invoke(cls, canonical_name(cls), args, kwargs)

        if config_name is None and properties:
            apply_properties(instance, properties)
        return instance

    def invoke_factory(
        self, factory: Callable, args: Sequence[Any], overrides: Mapping[str, Any]
    ) -> Any:
        """Call a factory binding with the caller's positional arguments and overrides."""
        name = getattr(factory, "__qualname__", repr(factory))
        logger.debug("Invoking factory %s", name)
        return _invoke(factory, name, list(args), dict(overrides))


def _invoke(target: Callable, name: str, args: list, kwargs: dict) -> Any:
    try:
        return target(*args, **kwargs)
    except ContainerError:
        raise
    except Exception as exc:
        raise ConstructionError(f"Failed to build {name}: {exc}") from exc


def _call_arguments(cls: type, arguments: Sequence[Any]) -> tuple[list, dict]:
    """Split an argument list into positional and keyword arguments.

    Trailing gaps are dropped. Values after an interior gap are passed by name,
    leaving the gap for the constructor to report as a missing argument.
    """
    parameters = describe(cls)
    args: list = []
    kwargs: dict = {}
    gap = False

    for position, value in enumerate(arguments):
        if value is UNFILLED:
            gap = True
        elif not gap:
            args.append(value)
        elif position < len(parameters) and parameters[position].keyword:
            kwargs[parameters[position].name] = value
        else:
            raise ConstructionError(
                f"Cannot bind argument {position} of {canonical_name(cls)}: "
                "an earlier argument is missing"
            )

    return args, kwargs
