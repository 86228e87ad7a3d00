"""Conjure inversion-of-control container.

Conjure builds objects from class identifiers or aliases. Registered bindings
decide which class or factory an alias stands for, whether it is a singleton,
and which properties every instance receives. Constructor dependencies are
filled in automatically from their type hints, so a class only has to declare
what it needs.

Key Features:
    - Bindings by alias or canonical class name, with descriptor or factory targets
    - Lazily built singletons that are reconfigured, never rebuilt, on later loads
    - Constructor dependency resolution from standard type hints
    - Two-phase configuration (properties, then ``init()``) for Configurable objects
    - Fail-fast detection of cyclic dependencies

Basic Usage:
    >>> from typing import Optional
    >>> from conjure import Container, Configurable
    >>>
    >>> class Transport:
    ...     pass
    >>>
    >>> class Mailer(Configurable):
    ...     host = "localhost"
    ...
    ...     def __init__(self, transport: Transport, config: Optional[dict] = None):
    ...         self.transport = transport
    ...         super().__init__(config)
    >>>
    >>> container = Container()
    >>> container.register("mailer", {"class": Mailer, "singleton": True, "host": "smtp"})
    >>> mailer = container.load("mailer")
    >>> mailer.host, type(mailer.transport)
    ('smtp', <class 'Transport'>)

The package consists of several modules:
    - container: The Container entry point
    - registry: Binding storage by class name and alias
    - introspection: Memoised constructor introspection
    - resolver: Constructor argument resolution
    - instance_builder: Constructor and factory invocation
    - singletons: The per-alias singleton cache
    - configurable: The Configurable capability
    - domain: Core domain models (BindingRecord, ParameterDescriptor)
    - errors: Container-specific exceptions
"""

import logging

from conjure.configurable import Configurable
from conjure.container import Container
from conjure.domain import BindingRecord, ParameterDescriptor
from conjure.errors import (
    ConfigurationError,
    ConstructionError,
    ContainerError,
    CyclicDependencyError,
    UnknownClassError,
)
from conjure.introspection import configuration_parameter, describe
from conjure.naming import canonical_name, normalize_class_name

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Container",
    "Configurable",
    "BindingRecord",
    "ParameterDescriptor",
    "describe",
    "configuration_parameter",
    "canonical_name",
    "normalize_class_name",
    "ContainerError",
    "ConfigurationError",
    "UnknownClassError",
    "ConstructionError",
    "CyclicDependencyError",
]
