"""Storage of binding records by canonical class name and by alias."""

import inspect
import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from conjure.domain import BindingRecord
from conjure.errors import ConfigurationError
from conjure.naming import normalize_class_name

__all__ = ["BindingRegistry", "split_descriptor"]

logger = logging.getLogger(__name__)


def split_descriptor(descriptor: Mapping[str, Any]) -> tuple[Any, bool, dict[str, Any]]:
    """Split a descriptor into its class, singleton flag and property overrides.

    Args:
        descriptor: A mapping with a required ``"class"`` entry (a class or a class
            name), an optional ``"singleton"`` flag, and any number of properties.

    Returns:
        A tuple of the class (a class object or a normalised name), the singleton
        flag, and a dictionary of the remaining entries.

    Raises:
        ConfigurationError: If the ``"class"`` entry is missing or is neither a
            class nor a string.

    Example:
        >>> split_descriptor({"class": "/app/Mailer", "singleton": True, "host": "smtp"})
        ('app.Mailer', True, {'host': 'smtp'})
    """
    properties = dict(descriptor)
    try:
        target = properties.pop("class")
    except KeyError:
        raise ConfigurationError(
            f"Object configuration must contain a 'class' element: {descriptor!r}"
        ) from None
    singleton = bool(properties.pop("singleton", False))

    if isinstance(target, str):
        target = normalize_class_name(target)
    elif not inspect.isclass(target):
        raise ConfigurationError(f"'class' must be a class or class name, got {target!r}")

    return target, singleton, properties


class BindingRegistry:
    """Registry of bindings, addressable by canonical class name or by alias."""

    def __init__(self):
        self._by_class: dict[str, BindingRecord] = {}
        self._by_alias: dict[str, BindingRecord] = {}

    def register(
        self, alias: Union[str, type], config: Union[Mapping[str, Any], type, Callable]
    ) -> BindingRecord:
        """Register a binding, replacing any previous binding for the alias.

        Args:
            alias: The name to register under. A class registers under its canonical name.
            config: A descriptor mapping, a class (shorthand for ``{"class": cls}``),
                or a factory callable.

        Returns:
            The stored record.

        Raises:
            ConfigurationError: If ``config`` is not a valid descriptor or callable.
        """
        try:
            alias = normalize_class_name(alias)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

        if inspect.isclass(config):
            config = {"class": config}

        if isinstance(config, Mapping):
            target, singleton, properties = split_descriptor(config)
            record = BindingRecord(target, alias, singleton, properties)
        elif callable(config):
            record = BindingRecord(config, alias)
        else:
            raise ConfigurationError(
                f"Configuration for '{alias}' must be a mapping, a class or a callable"
            )

        self._drop_class_entry(self._by_alias.get(alias))
        if record.class_name is not None:
            self._by_class[record.class_name] = record
        self._by_alias[alias] = record
        logger.debug("Registered %s as %r", alias, record.to_descriptor())
        return record

    def get(self, name: Union[str, type]) -> Optional[BindingRecord]:
        """Look up a record by alias first, then by class name.

        An alias registered under a class's canonical name rebinds that class, so it
        takes precedence over the class-name entry of a binding registered elsewhere.
        """
        name = normalize_class_name(name)
        return self._by_alias.get(name) or self._by_class.get(name)

    def exists(self, name: Union[str, type]) -> bool:
        return self.get(name) is not None

    def is_singleton(self, name: Union[str, type]) -> bool:
        record = self.get(name)
        return record is not None and record.singleton

    def count(self) -> int:
        """Number of distinct bindings, however many names each is stored under."""
        return len({id(record) for record in self._records()})

    def all(self, by_alias: bool = False) -> dict[str, BindingRecord]:
        return dict(self._by_alias if by_alias else self._by_class)

    def remove(self, name: Union[str, type]) -> list[str]:
        """Remove every entry for a binding, addressed by class name or alias.

        Returns:
            The names whose singleton slots should be dropped along with the binding.
        """
        name = normalize_class_name(name)
        removed = [
            record
            for record in (self._by_class.pop(name, None), self._by_alias.pop(name, None))
            if record is not None
        ]

        aliases = {name}
        for record in removed:
            self._drop_class_entry(record)
            for alias, aliased in list(self._by_alias.items()):
                if aliased is record:
                    del self._by_alias[alias]
                    aliases.add(alias)

        if removed:
            logger.debug("Removed %s (aliases %s)", name, sorted(aliases))
        return sorted(aliases)

    def clear(self) -> None:
        self._by_class.clear()
        self._by_alias.clear()

    def _drop_class_entry(self, record: Optional[BindingRecord]) -> None:
        """Forget the class-name entry of a record that is being replaced or removed."""
        if record is None or record.class_name is None:
            return
        if self._by_class.get(record.class_name) is record:
            del self._by_class[record.class_name]

    def _records(self) -> Iterable[BindingRecord]:
        yield from self._by_class.values()
        yield from self._by_alias.values()
