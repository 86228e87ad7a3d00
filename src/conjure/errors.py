from typing import Any, Optional

__all__ = [
    "ContainerError",
    "ConfigurationError",
    "UnknownClassError",
    "ConstructionError",
    "CyclicDependencyError",
]


class ContainerError(Exception):
    """Base class for every error raised by the container."""

    pass


class ConfigurationError(ContainerError):
    """Raised when a binding or load configuration is malformed.

    Attributes:
        errors: For batch registration, a mapping from each failing alias to the
            error it raised. Empty for single-entry failures.
    """

    def __init__(self, message: str, errors: Optional[dict[str, Exception]] = None):
        super().__init__(message)
        self.errors = errors or {}


class UnknownClassError(ContainerError):
    """Raised when an identifier has no binding and names no constructible class."""

    def __init__(self, class_name: Any):
        super().__init__(f"Unknown class: {class_name}")
        self.class_name = class_name


class ConstructionError(ContainerError):
    """Raised when a constructor or factory fails; the original error is the cause."""

    pass


class CyclicDependencyError(ContainerError):
    """Raised when a class depends, directly or transitively, on itself."""

    def __init__(self, chain: list[str]):
        super().__init__(f"Cyclic dependency: {' -> '.join(chain)}")
        self.chain = chain
