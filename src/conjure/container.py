"""
The container: the public entry point for registering bindings and loading objects.

A :class:`Container` maps aliases and class names to bindings, builds objects on
request, resolves typed constructor dependencies through its own bindings, and
caches singletons per alias. Each container is independent; an application
creates one in its composition root and passes it to whatever needs it.
"""

import inspect
import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

from conjure.configurable import Configurable
from conjure.domain import BindingRecord
from conjure.errors import (
    ConfigurationError,
    CyclicDependencyError,
    UnknownClassError,
)
from conjure.instance_builder import InstanceBuilder, configure
from conjure.naming import canonical_name, import_class, is_constructible, normalize_class_name
from conjure.registry import BindingRegistry, split_descriptor
from conjure.resolver import ArgumentResolver
from conjure.singletons import SingletonCache

__all__ = ["Container", "LoadConfig"]

logger = logging.getLogger(__name__)

LoadConfig = Union[str, type, Mapping[str, Any]]
Definition = Union[Mapping[str, Any], type, Callable]


class Container:
    """Inversion-of-control registry and object factory.

    Args:
        definitions: Optional bindings to register straight away, as accepted by
            :meth:`register_many`.

    Example:
        >>> container = Container({"mailer": {"class": "app.mail.Mailer", "singleton": True}})
        >>> mailer = container.load("mailer")
        >>> mailer is container.load("mailer")
        True
    """

    def __init__(self, definitions: Optional[Mapping[Union[str, type], Definition]] = None):
        self._registry = BindingRegistry()
        self._singletons = SingletonCache()
        self._builder = InstanceBuilder()
        self._resolver = ArgumentResolver(self._load_dependency, self._can_provide)
        if definitions:
            self.register_many(definitions)

    def load(
        self, config: LoadConfig, args: Sequence[Any] = (), throw_on_error: bool = True
    ) -> Optional[Any]:
        """Build, or fetch the cached singleton for, the object described by ``config``.

        Args:
            config: A class, a class name or alias, or a descriptor mapping with a
                ``"class"`` entry and property overrides.
            args: Positional constructor arguments. Positions left empty are
                filled from registered bindings or declared defaults.
            throw_on_error: If False, return None instead of raising when
                ``config`` names neither a binding nor a known class.

        Returns:
            The object, or None when it is unknown and ``throw_on_error`` is False.

        Raises:
            ConfigurationError: If a descriptor has no ``"class"`` entry.
            UnknownClassError: If the class, or one of its dependencies, is unknown.
            ConstructionError: If a constructor or factory raises.
            CyclicDependencyError: If a class depends on itself.
        """
        return self._load(config, tuple(args), throw_on_error, ())

    def register(self, alias: Union[str, type], config: Definition) -> None:
        """Register a binding under ``alias``, replacing any existing one.

        Any singleton already built for the alias is discarded, so the next load
        builds it from the new binding.

        Args:
            alias: The name to register under. A class registers under its
                canonical name, which binds dependencies hinted with that class.
            config: A descriptor mapping (``{"class": ..., "singleton": ..., **properties}``),
                a class, or a factory callable.

        Raises:
            ConfigurationError: If ``config`` is none of the above.
        """
        record = self._registry.register(alias, config)
        self._singletons.discard(record.alias)

    def register_many(self, definitions: Mapping[Union[str, type], Definition]) -> None:
        """Register several bindings, keeping those that succeed.

        Raises:
            ConfigurationError: After every definition has been tried, if any failed.
                Its ``errors`` attribute maps each failing alias to its error.
        """
        errors: dict[str, Exception] = {}
        for alias, config in definitions.items():
            try:
                self.register(alias, config)
            except ConfigurationError as exc:
                errors[str(alias)] = exc

        if errors:
            raise ConfigurationError(
                f"Failed to register {sorted(errors)}", errors=errors
            )

    def get(self, name: Union[str, type]) -> Optional[dict[str, Any]]:
        """Return the descriptor registered under a class name or alias, or None."""
        record = self._registry.get(name)
        return record.to_descriptor() if record else None

    def get_all(
        self,
        only: Iterable[Union[str, type]] = (),
        exclude: Iterable[Union[str, type]] = (),
        by_alias: bool = False,
    ) -> dict[str, dict[str, Any]]:
        """Return registered descriptors keyed by class name, or by alias.

        Args:
            only: If given, only these names are returned.
            exclude: Names to leave out.
            by_alias: Key by alias instead of class name. Factory bindings have no
                class name and only appear when keyed by alias.
        """
        only = {normalize_class_name(name) for name in only}
        exclude = {normalize_class_name(name) for name in exclude}
        return {
            name: record.to_descriptor()
            for name, record in self._registry.all(by_alias).items()
            if (not only or name in only) and name not in exclude
        }

    def exists(self, name: Union[str, type]) -> bool:
        return self._registry.exists(name)

    def is_singleton(self, name: Union[str, type]) -> bool:
        return self._registry.is_singleton(name)

    def count(self) -> int:
        return self._registry.count()

    def remove(self, name: Union[str, type]) -> None:
        """Remove a binding, by class name or alias, together with its singleton."""
        for alias in self._registry.remove(name):
            self._singletons.discard(alias)

    def remove_many(self, names: Iterable[Union[str, type]]) -> None:
        for name in names:
            self.remove(name)

    def remove_all(self) -> None:
        self._registry.clear()
        self._singletons.clear()
        logger.debug("Removed all bindings")

    def __contains__(self, name: Union[str, type]) -> bool:
        return self.exists(name)

    def __len__(self) -> int:
        return self.count()

    def _load(
        self, config: LoadConfig, args: tuple, throw_on_error: bool, path: tuple[type, ...]
    ) -> Optional[Any]:
        target, overrides = _parse_load_config(config)
        record = self._registry.get(target)

        if record is None:
            cls = target if inspect.isclass(target) else import_class(target)
            if not is_constructible(cls):
                if throw_on_error:
                    raise UnknownClassError(target)
                logger.debug("Unknown class %s, returning None", target)
                return None
            return self._build_class(cls, overrides, args, path)

        if record.singleton:
            return self._get_singleton(record, overrides, args, path)
        return self._build(record, overrides, args, path)

    def _get_singleton(
        self, record: BindingRecord, overrides: dict, args: tuple, path: tuple[type, ...]
    ) -> Any:
        if record.alias in self._singletons:
            instance = self._singletons[record.alias]
            logger.debug("Reusing singleton %s", record.alias)
            if isinstance(instance, Configurable):
                configure(instance, overrides or record.properties)
            return instance

        instance = self._build(record, overrides, args, path)
        self._singletons.store(record.alias, instance)
        return instance

    def _build(
        self, record: BindingRecord, overrides: dict, args: tuple, path: tuple[type, ...]
    ) -> Any:
        if not record.is_factory:
            cls = _class_for(record.target)
            return self._build_class(cls, {**record.properties, **overrides}, args, path)

        produced = self._builder.invoke_factory(record.target, args, overrides)
        if not isinstance(produced, Mapping):
            return produced

        target, _, properties = split_descriptor(produced)
        return self._build_class(_class_for(target), {**properties, **overrides}, args, path)

    def _build_class(
        self, cls: type, properties: dict, args: tuple, path: tuple[type, ...]
    ) -> Any:
        if cls in path:
            cycle = path[path.index(cls):] + (cls,)
            raise CyclicDependencyError([canonical_name(c) for c in cycle])

        arguments = self._resolver.resolve(cls, args, path + (cls,))
        return self._builder.instantiate(cls, arguments, properties)

    def _load_dependency(self, hint: type, path: tuple[type, ...]) -> Any:
        return self._load(hint, (), True, path)

    def _can_provide(self, hint: type) -> bool:
        return self._registry.exists(hint) or is_constructible(hint)


def _parse_load_config(config: LoadConfig) -> tuple[Union[str, type], dict[str, Any]]:
    if isinstance(config, str):
        return normalize_class_name(config), {}
    if inspect.isclass(config):
        return config, {}
    if isinstance(config, Mapping):
        target, _, properties = split_descriptor(config)
        return target, properties
    raise ConfigurationError(
        f"Object configuration must be a class, a class name or a mapping, got {config!r}"
    )


def _class_for(target: Union[str, type]) -> type:
    cls = target if inspect.isclass(target) else import_class(target)
    if not is_constructible(cls):
        raise UnknownClassError(target)
    return cls
