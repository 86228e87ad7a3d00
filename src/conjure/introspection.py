"""Constructor introspection, memoised once per class for the life of the process."""

import inspect
import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Optional, Union, get_args, get_origin, get_type_hints

from conjure.configurable import Configurable
from conjure.domain import ParameterDescriptor

__all__ = ["describe", "configuration_parameter", "has_own_constructor"]

logger = logging.getLogger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_MAPPING_TYPES = (dict, Mapping, MutableMapping)


@dataclass(frozen=True)
class _Constructor:
    parameters: tuple[ParameterDescriptor, ...]
    configuration_parameter: Optional[str]


def describe(cls: type) -> tuple[ParameterDescriptor, ...]:
    """Return the positional constructor parameters of ``cls``.

    The configuration payload parameter of a :class:`Configurable` class is not
    included; see :func:`configuration_parameter`. A class without a constructor
    of its own has no parameters.

    Example:
        >>> class Mailer:
        ...     def __init__(self, transport: Transport, retries=3): ...
        >>> describe(Mailer)
        (ParameterDescriptor(position=0, name='transport', type_hint=Transport, has_default=False, ...),
         ParameterDescriptor(position=1, name='retries', type_hint=None, has_default=True, default=3, ...))
    """
    return _introspect(cls).parameters


def configuration_parameter(cls: type) -> Optional[str]:
    """Name of the parameter that receives the property map, if ``cls`` takes one."""
    return _introspect(cls).configuration_parameter


@lru_cache(maxsize=None)
def _introspect(cls: type) -> _Constructor:
    if not has_own_constructor(cls):
        return _Constructor((), None)

    try:
        signature = inspect.signature(cls.__init__)
    except (ValueError, TypeError):
        logger.debug("No introspectable signature for %s", cls.__qualname__)
        return _Constructor((), None)

    parameters = [
        param
        for param in list(signature.parameters.values())[1:]
        if param.kind not in _VARIADIC
    ]
    hints = _type_hints(cls)

    config_name = None
    if parameters and issubclass(cls, Configurable) and _is_config_parameter(
        parameters[-1], hints.get(parameters[-1].name)
    ):
        config_name = parameters.pop().name

    descriptors = tuple(
        _make_descriptor(position, param, hints.get(param.name))
        for position, param in enumerate(p for p in parameters if p.kind in _POSITIONAL)
    )
    logger.debug("Introspected %s: %d parameter(s)", cls.__qualname__, len(descriptors))
    return _Constructor(descriptors, config_name)


def has_own_constructor(cls: type) -> bool:
    return cls.__init__ is not object.__init__


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls.__init__, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug("Ignoring unresolvable type hints on %s: %s", cls.__qualname__, exc)
        return {}


def _make_descriptor(position: int, param: inspect.Parameter, annotation: Any) -> ParameterDescriptor:
    has_default = param.default is not inspect.Parameter.empty
    return ParameterDescriptor(
        position,
        param.name,
        _dependency_class(annotation),
        has_default,
        param.default if has_default else None,
        param.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )


def _unwrap(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and the ``None`` arm of ``Optional``."""
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if get_origin(annotation) is Union:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _unwrap(members[0])
    return annotation


def _dependency_class(annotation: Any) -> Optional[type]:
    """The class a parameter depends on, or None for builtins and non-class hints."""
    hint = _unwrap(annotation)
    if inspect.isclass(hint) and get_origin(hint) is None and hint.__module__ != "builtins":
        return hint
    return None


def _is_config_parameter(param: inspect.Parameter, annotation: Any) -> bool:
    default = param.default
    empty_mapping = isinstance(default, Mapping) and not default
    if default is not None and not empty_mapping:
        return False
    if annotation is None:
        # an unannotated None default is an ordinary optional argument
        return empty_mapping
    hint = _unwrap(annotation)
    return hint in _MAPPING_TYPES or get_origin(hint) in _MAPPING_TYPES
