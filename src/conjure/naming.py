"""Helpers for turning class identifiers into canonical names and back into classes."""

import inspect
import pkgutil
import re
from typing import Any, Optional, Union

__all__ = [
    "canonical_name",
    "normalize_class_name",
    "import_class",
    "is_constructible",
]

_SEPARATORS = re.compile(r"[\\/:]")


def canonical_name(cls: type) -> str:
    """Return the ``module.QualifiedName`` spelling of a class.

    Example:
        >>> canonical_name(collections.OrderedDict)  # "collections.OrderedDict"
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def normalize_class_name(identifier: Union[str, type]) -> str:
    """Normalise a class identifier or alias so that equivalent spellings compare equal.

    Backslashes, slashes and colons are treated as alternate separators for ``.``,
    and leading separators are stripped. Classes are replaced by their canonical name.

    Example:
        >>> normalize_class_name("app/services:Mailer")  # "app.services.Mailer"
    """
    if inspect.isclass(identifier):
        return canonical_name(identifier)
    if not isinstance(identifier, str):
        raise TypeError(f"{identifier!r} is not a class or class name")
    return _SEPARATORS.sub(".", identifier).lstrip(".")


def import_class(name: str) -> Optional[type]:
    """Import the class named by a dotted path, or return None if there is no such class."""
    try:
        target = pkgutil.resolve_name(name)
    except (ImportError, AttributeError, ValueError):
        return None
    return target if inspect.isclass(target) else None


def is_constructible(cls: Any) -> bool:
    """True for concrete classes; abstract classes and protocols cannot be built."""
    if not inspect.isclass(cls) or inspect.isabstract(cls):
        return False
    return not getattr(cls, "_is_protocol", False)
